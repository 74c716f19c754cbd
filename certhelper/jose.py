"""
base64url helpers for JOSE signing inputs (RFC 7515 / RFC 4648 §5).

ACME JWS protected headers, payloads and signatures are all transported in
this "safe string" form: URL-safe alphabet, no ``=`` padding.
"""
from __future__ import annotations

import base64
import re

from certhelper.errors import InvalidParameter

_SAFE_ALPHABET = re.compile(r"[A-Za-z0-9_-]*")


def to_safe_string(data: bytes | str) -> str:
    """URL-safe base64 encoding with no padding (as required by JOSE)."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def from_safe_string(s: str | bytes) -> bytes:
    """
    URL-safe base64 decode, adding padding as needed.

    Only the canonical encoding is accepted: unused trailing bits must be zero.
    """
    if isinstance(s, bytes):
        try:
            s = s.decode("ascii")
        except UnicodeDecodeError as exc:
            raise InvalidParameter("base64url data must be ASCII") from exc
    if not isinstance(s, str):
        raise InvalidParameter(f"base64url data must be str or bytes, not {type(s).__name__}")
    if not _SAFE_ALPHABET.fullmatch(s) or len(s) % 4 == 1:
        raise InvalidParameter(f"Not a valid base64url string: {s!r}")

    data = base64.urlsafe_b64decode(s + "=" * (-len(s) % 4))
    if to_safe_string(data) != s:
        raise InvalidParameter(f"Not a canonical base64url string: {s!r}")
    return data
