"""Constants for cookbook-cleaner."""

from pathlib import Path

DEFAULT_CONFIG_PATH = Path("~/.chef/cookbook-cleaner.toml")

# Retention defaults
DEFAULT_HISTORICAL_VERSIONS = 5
DEFAULT_ENVIRONMENT = "production"

# Chef server API
HTTP_TIMEOUT = 30  # seconds
CHEF_SERVER_API_VERSION = "1"
CHEF_CLIENT_VERSION = "18.0.0"
AUTH_HEADER_WIDTH = 60  # X-Ops-Authorization-N chunk size

# Exit codes for the clean command
EXIT_REGISTRY_UNAVAILABLE = 1
EXIT_CONFIG_ERROR = 2
