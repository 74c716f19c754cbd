"""
Certificate inspection: expiry extraction for renewal decisions.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from cryptography import x509
from cryptography.hazmat.backends import default_backend

from certhelper.errors import CertificateParseError


def load_certificate(certificate: str | bytes) -> x509.Certificate:
    """Parse a PEM (str or bytes) or DER (bytes) certificate."""
    if isinstance(certificate, str):
        certificate = certificate.encode()
    if not isinstance(certificate, bytes):
        raise CertificateParseError(
            f"Could not parse certificate: expected str or bytes, got {type(certificate).__name__}"
        )
    try:
        if certificate.lstrip().startswith(b"-----BEGIN"):
            return x509.load_pem_x509_certificate(certificate, default_backend())
        return x509.load_der_x509_certificate(certificate, default_backend())
    except ValueError as exc:
        raise CertificateParseError(f"Could not parse certificate: {exc!s}") from exc


def expiry_of(certificate: str | bytes) -> datetime:
    """Return the notAfter field of *certificate* as a UTC datetime."""
    cert = load_certificate(certificate)
    return cert.not_valid_after_utc


def days_until_expiry(expiry: datetime, now: Optional[datetime] = None) -> int:
    """Return integer days until expiry (negative if already expired)."""
    now = now or datetime.now(tz=timezone.utc)
    return (expiry - now).days
