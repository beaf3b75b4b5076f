"""Chef server request signing (header authentication protocol 1.3).

Each request carries X-Ops-* headers and an RSA/SHA-256 signature of a
canonical description of the request, split across X-Ops-Authorization-N
headers.
"""

import base64
import hashlib
import re
from datetime import UTC, datetime
from pathlib import Path

from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from ..constants import AUTH_HEADER_WIDTH, CHEF_SERVER_API_VERSION
from ..errors import ConfigError

SIGN_VERSION = "1.3"
SIGN_DESCRIPTION = f"algorithm=sha256;version={SIGN_VERSION}"


def load_private_key(key_path: Path) -> rsa.RSAPrivateKey:
    """Load an unencrypted PEM RSA private key.

    Raises:
        ConfigError: If the file is missing or is not an RSA private key
    """
    try:
        key = serialization.load_pem_private_key(key_path.read_bytes(), password=None)
    except OSError as e:
        raise ConfigError(f"Cannot read client key {key_path}: {e}") from e
    except (ValueError, TypeError) as e:
        raise ConfigError(f"Invalid client key {key_path}: {e}") from e
    if not isinstance(key, rsa.RSAPrivateKey):
        raise ConfigError(f"Client key {key_path} is not an RSA key")
    return key


def canonical_path(path: str) -> str:
    """Collapse repeated slashes and drop a trailing slash."""
    path = re.sub(r"/+", "/", path) or "/"
    if len(path) > 1:
        path = path.rstrip("/")
    return path


def hash_body(body: bytes) -> str:
    """Base64 SHA-256 digest of the request body."""
    return base64.b64encode(hashlib.sha256(body).digest()).decode("ascii")


def canonical_request(
    method: str,
    path: str,
    content_hash: str,
    timestamp: str,
    user_id: str,
    server_api_version: str = CHEF_SERVER_API_VERSION,
) -> str:
    """Build the string that gets signed."""
    return "\n".join(
        [
            f"Method:{method.upper()}",
            f"Path:{canonical_path(path)}",
            f"X-Ops-Content-Hash:{content_hash}",
            f"X-Ops-Sign:version={SIGN_VERSION}",
            f"X-Ops-Timestamp:{timestamp}",
            f"X-Ops-UserId:{user_id}",
            f"X-Ops-Server-API-Version:{server_api_version}",
        ]
    )


def sign_request(
    key: rsa.RSAPrivateKey,
    method: str,
    path: str,
    user_id: str,
    body: bytes = b"",
    timestamp: datetime | None = None,
    server_api_version: str = CHEF_SERVER_API_VERSION,
) -> dict[str, str]:
    """Return the authentication headers for a request.

    Args:
        key: Client RSA private key
        method: HTTP method
        path: URL path without query string
        user_id: Client name
        body: Request body
        timestamp: Request time (default: now, UTC)
        server_api_version: Value of X-Ops-Server-API-Version

    Returns:
        Header name to value mapping
    """
    stamp = (timestamp or datetime.now(UTC)).strftime("%Y-%m-%dT%H:%M:%SZ")
    content_hash = hash_body(body)
    to_sign = canonical_request(method, path, content_hash, stamp, user_id, server_api_version)
    signature = key.sign(to_sign.encode("utf-8"), padding.PKCS1v15(), hashes.SHA256())
    encoded = base64.b64encode(signature).decode("ascii")

    headers = {
        "X-Ops-Sign": SIGN_DESCRIPTION,
        "X-Ops-UserId": user_id,
        "X-Ops-Timestamp": stamp,
        "X-Ops-Content-Hash": content_hash,
        "X-Ops-Server-API-Version": server_api_version,
    }
    for i in range(0, len(encoded), AUTH_HEADER_WIDTH):
        headers[f"X-Ops-Authorization-{i // AUTH_HEADER_WIDTH + 1}"] = encoded[
            i : i + AUTH_HEADER_WIDTH
        ]
    return headers
