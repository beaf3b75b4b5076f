"""Shared test fixtures for cookbook-cleaner tests."""

import io
from collections.abc import Callable
from pathlib import Path

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from rich.console import Console
from typer.testing import CliRunner

from cookbook_cleaner.errors import DeletionFailed, RegistryUnavailable
from cookbook_cleaner.models import Version
from cookbook_cleaner.output import OutputContext


class FakeRegistry:
    """In-memory ArtifactRegistryClient recording every call."""

    def __init__(
        self,
        inventory: dict[str, list[str]],
        pins: dict[str, str],
        fail_on: set[tuple[str, str]] | None = None,
        unavailable: bool = False,
        unavailable_pins: bool = False,
    ) -> None:
        self.inventory = inventory
        self.pins = pins
        self.fail_on = fail_on or set()
        self.unavailable = unavailable
        self.unavailable_pins = unavailable_pins
        self.inventory_loads = 0
        self.environments: list[str] = []
        self.delete_calls: list[tuple[str, str]] = []
        self.closed = False

    def __enter__(self) -> "FakeRegistry":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.closed = True

    def load_inventory(self) -> dict[str, list[str]]:
        self.inventory_loads += 1
        if self.unavailable:
            raise RegistryUnavailable("GET /cookbooks failed: connection refused")
        return {name: list(versions) for name, versions in self.inventory.items()}

    def load_pinned_versions(self, environment: str) -> dict[str, str]:
        self.environments.append(environment)
        if self.unavailable_pins:
            raise RegistryUnavailable(f"GET /environments/{environment} returned 404")
        return dict(self.pins)

    def delete_version(self, artifact: str, version: Version) -> None:
        self.delete_calls.append((artifact, str(version)))
        if (artifact, str(version)) in self.fail_on:
            raise DeletionFailed(f"DELETE /cookbooks/{artifact}/{version} returned 500")


@pytest.fixture
def runner() -> CliRunner:
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def make_registry() -> Callable[..., FakeRegistry]:
    """Factory for in-memory registries."""
    return FakeRegistry


@pytest.fixture
def output() -> OutputContext:
    """Output context writing to an in-memory buffer (read via console.file)."""
    console = Console(file=io.StringIO(), force_terminal=False, width=200)
    return OutputContext(console=console)


@pytest.fixture(scope="session")
def rsa_key() -> rsa.RSAPrivateKey:
    """A throwaway RSA client key."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def key_file(tmp_path: Path, rsa_key: rsa.RSAPrivateKey) -> Path:
    """The client key written as unencrypted PEM."""
    path = tmp_path / "client.pem"
    path.write_bytes(
        rsa_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.TraditionalOpenSSL,
            encryption_algorithm=serialization.NoEncryption(),
        )
    )
    return path


@pytest.fixture
def config_file(tmp_path: Path, key_file: Path) -> Path:
    """Minimal valid config pointing at key_file."""
    path = tmp_path / "cookbook-cleaner.toml"
    path.write_text(
        f"""[server]
url = "https://chef.example.com/organizations/acme/"
client_name = "admin"
client_key = "{key_file}"

[retention]
historical_versions = 3
environment = "production"
"""
    )
    return path

