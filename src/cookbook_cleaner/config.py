"""Configuration management for cookbook-cleaner."""

import tomllib
from pathlib import Path
from typing import Any

import tomli_w
from pydantic import BaseModel, Field, ValidationError, field_validator

from .constants import DEFAULT_ENVIRONMENT, DEFAULT_HISTORICAL_VERSIONS, HTTP_TIMEOUT
from .errors import ConfigError


class ServerConfig(BaseModel):
    """Connection settings for the Chef server."""

    url: str = Field(description="Chef server URL including the organization path")
    client_name: str = Field(description="API client or user name (X-Ops-UserId)")
    client_key: Path = Field(description="Path to the client's RSA private key")
    verify_ssl: bool = True
    timeout: int = Field(default=HTTP_TIMEOUT, gt=0, description="Request timeout in seconds")

    @field_validator("url")
    @classmethod
    def validate_url(cls, value: str) -> str:
        """Require an http(s) URL and drop any trailing slash."""
        if not value.startswith(("http://", "https://")):
            raise ValueError("Server URL must start with 'http://' or 'https://'")
        return value.rstrip("/")

    @field_validator("client_key")
    @classmethod
    def expand_client_key(cls, value: Path) -> Path:
        """Expand ~ in the key path."""
        return value.expanduser()


class RetentionConfig(BaseModel):
    """Retention and reporting settings for a cleanup run.

    Attributes:
        historical_versions: Versions older than the pin to keep per cookbook.
        environment: Environment whose pins protect cookbook versions.
        really_clean: Actually delete versions (default is a dry run).
        verbose: Print the full list of versions to delete.
    """

    historical_versions: int = Field(default=DEFAULT_HISTORICAL_VERSIONS, ge=0)
    environment: str = Field(default=DEFAULT_ENVIRONMENT, min_length=1)
    really_clean: bool = False
    verbose: bool = False


class CleanerConfig(BaseModel):
    """Root configuration for cookbook-cleaner."""

    server: ServerConfig
    retention: RetentionConfig = Field(default_factory=RetentionConfig)

    def with_overrides(self, **overrides: Any) -> "CleanerConfig":
        """Return a copy with retention settings overridden.

        None values are ignored so unset CLI options keep file values.

        Raises:
            ConfigError: If an override fails validation
        """
        updates = {k: v for k, v in overrides.items() if v is not None}
        if not updates:
            return self
        try:
            retention = RetentionConfig.model_validate(
                {**self.retention.model_dump(), **updates}
            )
        except ValidationError as e:
            raise ConfigError(f"Invalid option: {e}") from e
        return self.model_copy(update={"retention": retention})


def load_config(config_path: Path) -> CleanerConfig:
    """Load config from a TOML file.

    Args:
        config_path: Path to the config file

    Returns:
        Validated configuration

    Raises:
        ConfigError: If the file is missing, is not valid TOML, fails
            validation, or tries to enable destructive mode
    """
    config_path = config_path.expanduser()
    if not config_path.exists():
        raise ConfigError(
            f"Config file not found: {config_path}. "
            "Create one with: cookbook-cleaner init"
        )
    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {config_path}: {e}") from e

    retention = data.get("retention")
    if isinstance(retention, dict) and "really_clean" in retention:
        raise ConfigError("really_clean cannot be set in the config file; pass --really-clean")

    try:
        return CleanerConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config {config_path}: {e}") from e


def write_config_template(config_path: Path) -> Path:
    """Write default config template.

    Args:
        config_path: Where to write the template

    Returns:
        Path to the written config file

    Raises:
        ConfigError: If a file already exists at config_path
    """
    config_path = config_path.expanduser()
    if config_path.exists():
        raise ConfigError(f"Config already exists: {config_path}")
    template = {
        "server": {
            "url": "https://chef.example.com/organizations/example",
            "client_name": "admin",
            "client_key": "~/.chef/admin.pem",
            "verify_ssl": True,
            "timeout": HTTP_TIMEOUT,
        },
        "retention": {
            "historical_versions": DEFAULT_HISTORICAL_VERSIONS,
            "environment": DEFAULT_ENVIRONMENT,
            "verbose": False,
        },
    }
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "wb") as f:
        tomli_w.dump(template, f)
    return config_path
