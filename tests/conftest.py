"""
Shared pytest fixtures.

Keys are generated once per session (RSA generation is slow).  Certificates
are built with cryptography's CertificateBuilder so that their validity
window is known exactly.
"""
from __future__ import annotations

from datetime import datetime, timezone

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.x509.oid import NameOID

from certhelper.keys import KeyType, generate_key, load_private_key

NOT_BEFORE = datetime(2024, 1, 1, tzinfo=timezone.utc)
LEAF_NOT_AFTER = datetime(2031, 5, 17, 12, 30, 45, tzinfo=timezone.utc)
INTERMEDIATE_NOT_AFTER = datetime(2035, 1, 1, tzinfo=timezone.utc)


def _name(common_name: str) -> x509.Name:
    return x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])


def make_certificate(
    subject_cn: str,
    issuer_cn: str,
    subject_key,
    signing_key,
    not_after: datetime,
) -> x509.Certificate:
    return (
        x509.CertificateBuilder()
        .subject_name(_name(subject_cn))
        .issuer_name(_name(issuer_cn))
        .public_key(subject_key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(NOT_BEFORE)
        .not_valid_after(not_after)
        .sign(signing_key, hashes.SHA256())
    )


# ─── Keys ─────────────────────────────────────────────────────────────────────

@pytest.fixture(scope="session")
def rsa_key_pem() -> str:
    return generate_key(KeyType.RSA, 2048)


@pytest.fixture(scope="session")
def rsa_key(rsa_key_pem):
    return load_private_key(rsa_key_pem)


@pytest.fixture(scope="session")
def ec_key_pem() -> str:
    return generate_key(KeyType.EC, 256)


@pytest.fixture(scope="session")
def ec_key(ec_key_pem):
    return load_private_key(ec_key_pem)


# ─── Certificates ─────────────────────────────────────────────────────────────

@pytest.fixture(scope="session")
def intermediate_cert(rsa_key):
    return make_certificate("Test Intermediate CA", "Test Intermediate CA", rsa_key, rsa_key, INTERMEDIATE_NOT_AFTER)


@pytest.fixture(scope="session")
def leaf_cert(ec_key, rsa_key):
    return make_certificate("example.com", "Test Intermediate CA", ec_key, rsa_key, LEAF_NOT_AFTER)


@pytest.fixture(scope="session")
def leaf_pem(leaf_cert) -> str:
    """Leaf certificate PEM without the trailing newline."""
    return leaf_cert.public_bytes(serialization.Encoding.PEM).decode().rstrip("\n")


@pytest.fixture(scope="session")
def intermediate_pem(intermediate_cert) -> str:
    return intermediate_cert.public_bytes(serialization.Encoding.PEM).decode().rstrip("\n")
