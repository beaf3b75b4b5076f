"""CLI command implementations for cookbook-cleaner.

This package contains the implementation of each CLI command,
separated from the CLI framework setup in cli.py.
"""

from .clean import clean
from .init import init

__all__ = [
    "clean",
    "init",
]
