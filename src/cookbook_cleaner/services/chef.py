"""Chef server API client.

Implements ArtifactRegistryClient against the Chef server REST API:
- GET /cookbooks?num_versions=all for the cookbook inventory
- GET /environments/<name> for pinned cookbook versions
- DELETE /cookbooks/<name>/<version> to retire a version
"""

import logging
from typing import Any
from urllib.parse import quote, urlsplit

import requests
from cryptography.hazmat.primitives.asymmetric import rsa

from .. import __version__
from ..config import ServerConfig
from ..constants import CHEF_CLIENT_VERSION
from ..errors import CleanerError, DeletionFailed, RegistryUnavailable
from ..models import Version
from .auth import load_private_key, sign_request

logger = logging.getLogger(__name__)


class ChefServerClient:
    """Signed HTTP client for one Chef server organization.

    Use as a context manager to close the underlying session.
    """

    def __init__(
        self,
        config: ServerConfig,
        key: rsa.RSAPrivateKey | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.config = config
        self.key = key if key is not None else load_private_key(config.client_key)
        self.session = session if session is not None else requests.Session()
        self.session.headers.update(
            {
                "Accept": "application/json",
                "X-Chef-Version": CHEF_CLIENT_VERSION,
                "User-Agent": f"cookbook-cleaner/{__version__}",
            }
        )
        self.session.verify = config.verify_ssl
        self._base_path = urlsplit(config.url).path

    def __enter__(self) -> "ChefServerClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP session."""
        self.session.close()

    def _request(
        self,
        method: str,
        endpoint: str,
        error_cls: type[CleanerError],
        params: dict[str, str] | None = None,
    ) -> Any:
        """Send a signed request and decode the JSON response.

        Args:
            method: HTTP method
            endpoint: Path relative to the organization URL
            error_cls: Exception raised on any failure
            params: Query parameters (not part of the signature)

        Returns:
            Decoded JSON body, or None for an empty body
        """
        url = f"{self.config.url}{endpoint}"
        headers = sign_request(
            self.key,
            method,
            f"{self._base_path}{endpoint}",
            self.config.client_name,
        )
        logger.debug("%s %s", method, url)
        try:
            response = self.session.request(
                method,
                url,
                params=params,
                headers=headers,
                timeout=self.config.timeout,
            )
        except requests.RequestException as e:
            raise error_cls(f"{method} {endpoint} failed: {e}") from e

        if not response.ok:
            raise error_cls(
                f"{method} {endpoint} returned {response.status_code}: {response.text[:200]}"
            )
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise error_cls(f"{method} {endpoint} returned invalid JSON") from e

    def load_inventory(self) -> dict[str, list[str]]:
        """Return every cookbook on the server mapped to its version strings.

        Raises:
            RegistryUnavailable: If the request fails or the body has an unexpected shape
        """
        data = self._request(
            "GET", "/cookbooks", RegistryUnavailable, params={"num_versions": "all"}
        )
        if not isinstance(data, dict):
            raise RegistryUnavailable("Unexpected cookbook list response")
        inventory = {}
        try:
            for name, info in data.items():
                inventory[name] = [entry["version"] for entry in info["versions"]]
        except (KeyError, TypeError) as e:
            raise RegistryUnavailable(f"Unexpected cookbook list response: {e!r}") from e
        logger.debug("Loaded %d cookbooks", len(inventory))
        return inventory

    def load_pinned_versions(self, environment: str) -> dict[str, str]:
        """Return the environment's cookbook constraints.

        Raises:
            RegistryUnavailable: If the environment cannot be loaded
        """
        data = self._request(
            "GET", f"/environments/{quote(environment, safe='')}", RegistryUnavailable
        )
        if not isinstance(data, dict):
            raise RegistryUnavailable(f"Unexpected response for environment {environment}")
        constraints = data.get("cookbook_versions") or {}
        if not isinstance(constraints, dict):
            raise RegistryUnavailable(f"Unexpected cookbook_versions in environment {environment}")
        return {str(name): str(value) for name, value in constraints.items()}

    def delete_version(self, artifact: str, version: Version) -> None:
        """Delete one cookbook version.

        Raises:
            DeletionFailed: If the server rejects the delete or is unreachable
        """
        endpoint = f"/cookbooks/{quote(artifact, safe='')}/{version}"
        self._request("DELETE", endpoint, DeletionFailed)
        logger.info("Deleted %s version %s", artifact, version)
