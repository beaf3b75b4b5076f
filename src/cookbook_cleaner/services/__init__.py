"""External service integrations for cookbook-cleaner.

This package provides the registry boundary and its Chef server
implementation:
- registry: ArtifactRegistryClient protocol consumed by the orchestrator
- chef: Signed Chef server REST client
- auth: Chef header authentication (protocol 1.3)
"""

from .auth import load_private_key, sign_request
from .chef import ChefServerClient
from .registry import ArtifactRegistryClient

__all__ = [
    "ArtifactRegistryClient",
    "ChefServerClient",
    "load_private_key",
    "sign_request",
]
