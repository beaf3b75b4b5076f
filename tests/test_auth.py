"""Tests for Chef request signing."""

import base64
from datetime import UTC, datetime
from pathlib import Path

import pytest
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, padding, rsa

from cookbook_cleaner.errors import ConfigError
from cookbook_cleaner.services.auth import (
    SIGN_DESCRIPTION,
    canonical_path,
    canonical_request,
    hash_body,
    load_private_key,
    sign_request,
)

WHEN = datetime(2024, 3, 1, 12, 30, 5, tzinfo=UTC)
# base64(sha256(b""))
EMPTY_HASH = "47DEQpj8HBSa+/TImW+5JCeuQeRkm5NMpJWZG3hSuFU="


def _signature(headers: dict[str, str]) -> bytes:
    chunks = []
    n = 1
    while f"X-Ops-Authorization-{n}" in headers:
        chunks.append(headers[f"X-Ops-Authorization-{n}"])
        n += 1
    return base64.b64decode("".join(chunks))


class TestCanonicalRequest:
    """Tests for the signed string."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("/organizations/acme/cookbooks/", "/organizations/acme/cookbooks"),
            ("//organizations//acme///cookbooks", "/organizations/acme/cookbooks"),
            ("/", "/"),
            ("", "/"),
        ],
    )
    def test_canonical_path(self, path: str, expected: str) -> None:
        assert canonical_path(path) == expected

    @pytest.mark.unit
    def test_hash_of_empty_body(self) -> None:
        assert hash_body(b"") == EMPTY_HASH

    @pytest.mark.unit
    def test_layout(self) -> None:
        text = canonical_request(
            "get", "/organizations/acme/cookbooks/", EMPTY_HASH, "2024-03-01T12:30:05Z", "admin"
        )
        assert text.split("\n") == [
            "Method:GET",
            "Path:/organizations/acme/cookbooks",
            f"X-Ops-Content-Hash:{EMPTY_HASH}",
            "X-Ops-Sign:version=1.3",
            "X-Ops-Timestamp:2024-03-01T12:30:05Z",
            "X-Ops-UserId:admin",
            "X-Ops-Server-API-Version:1",
        ]


class TestSignRequest:
    """Tests for sign_request."""

    @pytest.mark.unit
    def test_headers(self, rsa_key: rsa.RSAPrivateKey) -> None:
        headers = sign_request(rsa_key, "GET", "/cookbooks", "admin", timestamp=WHEN)
        assert headers["X-Ops-Sign"] == SIGN_DESCRIPTION
        assert headers["X-Ops-UserId"] == "admin"
        assert headers["X-Ops-Timestamp"] == "2024-03-01T12:30:05Z"
        assert headers["X-Ops-Content-Hash"] == EMPTY_HASH
        assert headers["X-Ops-Server-API-Version"] == "1"

    @pytest.mark.unit
    def test_authorization_split_into_60_char_chunks(self, rsa_key: rsa.RSAPrivateKey) -> None:
        headers = sign_request(rsa_key, "GET", "/cookbooks", "admin", timestamp=WHEN)
        chunks = [v for k, v in headers.items() if k.startswith("X-Ops-Authorization-")]
        # 2048-bit key -> 256-byte signature -> 344 base64 chars
        assert len(chunks) == 6
        assert all(len(c) == 60 for c in chunks[:-1])
        assert len("".join(chunks)) == 344

    @pytest.mark.unit
    def test_signature_verifies_with_public_key(self, rsa_key: rsa.RSAPrivateKey) -> None:
        headers = sign_request(
            rsa_key,
            "DELETE",
            "/organizations/acme/cookbooks/apache2/1.0.0",
            "admin",
            timestamp=WHEN,
        )
        expected = canonical_request(
            "DELETE",
            "/organizations/acme/cookbooks/apache2/1.0.0",
            EMPTY_HASH,
            "2024-03-01T12:30:05Z",
            "admin",
        )
        rsa_key.public_key().verify(
            _signature(headers), expected.encode(), padding.PKCS1v15(), hashes.SHA256()
        )

    @pytest.mark.unit
    def test_signature_covers_method(self, rsa_key: rsa.RSAPrivateKey) -> None:
        headers = sign_request(rsa_key, "GET", "/cookbooks", "admin", timestamp=WHEN)
        tampered = canonical_request(
            "DELETE", "/cookbooks", EMPTY_HASH, "2024-03-01T12:30:05Z", "admin"
        )
        with pytest.raises(InvalidSignature):
            rsa_key.public_key().verify(
                _signature(headers), tampered.encode(), padding.PKCS1v15(), hashes.SHA256()
            )


class TestLoadPrivateKey:
    """Tests for load_private_key."""

    @pytest.mark.unit
    def test_loads_pem(self, key_file: Path, rsa_key: rsa.RSAPrivateKey) -> None:
        key = load_private_key(key_file)
        assert key.public_key().public_numbers() == rsa_key.public_key().public_numbers()

    @pytest.mark.unit
    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Cannot read"):
            load_private_key(tmp_path / "missing.pem")

    @pytest.mark.unit
    def test_garbage(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.pem"
        path.write_text("not a key")
        with pytest.raises(ConfigError, match="Invalid client key"):
            load_private_key(path)

    @pytest.mark.unit
    def test_rejects_non_rsa_key(self, tmp_path: Path) -> None:
        key = ec.generate_private_key(ec.SECP256R1())
        path = tmp_path / "ec.pem"
        path.write_bytes(
            key.private_bytes(
                serialization.Encoding.PEM,
                serialization.PrivateFormat.PKCS8,
                serialization.NoEncryption(),
            )
        )
        with pytest.raises(ConfigError, match="not an RSA key"):
            load_private_key(path)
