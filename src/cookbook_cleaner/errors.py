"""Errors raised by cookbook-cleaner."""


class CleanerError(Exception):
    """Base exception for cookbook-cleaner errors."""


class ParseError(CleanerError, ValueError):
    """Raised when a version or constraint string cannot be parsed."""


class RegistryUnavailable(CleanerError):
    """Raised when the cookbook inventory or environment cannot be loaded."""


class DeletionFailed(CleanerError):
    """Raised when a single cookbook version cannot be deleted."""


class ConfigError(CleanerError):
    """Raised when the config file or client key is missing or invalid."""
