"""Registry boundary used by the cleanup orchestrator."""

from typing import Protocol

from ..models import Version


class ArtifactRegistryClient(Protocol):
    """Source of cookbook versions and environment pins.

    load_inventory and load_pinned_versions raise RegistryUnavailable on any
    failure; delete_version raises DeletionFailed.
    """

    def load_inventory(self) -> dict[str, list[str]]:
        """Return every cookbook name mapped to its raw version strings."""
        ...

    def load_pinned_versions(self, environment: str) -> dict[str, str]:
        """Return cookbook names mapped to the environment's raw constraints."""
        ...

    def delete_version(self, artifact: str, version: Version) -> None:
        """Delete one version of a cookbook."""
        ...
