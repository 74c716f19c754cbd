"""
PEM <-> DER conversion.

A PEM block is ``-----BEGIN <LABEL>-----``, base64 lines, ``-----END <LABEL>-----``.
Header and footer are matched explicitly (same label on both ends) instead of
blindly dropping the first and last line, so CRLF line endings, blank lines in
the body and surrounding whitespace are all handled, and a truncated block is
rejected instead of decoding to garbage.
"""
from __future__ import annotations

import base64
import binascii
import re

from certhelper.errors import PemFormatError

_PEM_BLOCK = re.compile(
    r"\A\s*-----BEGIN (?P<label>[A-Z0-9][A-Z0-9 ]*)-----\r?\n"
    r"(?P<body>[A-Za-z0-9+/=\s]*?)"
    r"-----END (?P=label)-----\s*\Z"
)

_LINE_WIDTH = 64


def _match_block(pem: str | bytes) -> re.Match:
    if isinstance(pem, bytes):
        try:
            pem = pem.decode("ascii")
        except UnicodeDecodeError as exc:
            raise PemFormatError("PEM data must be ASCII") from exc
    if not isinstance(pem, str):
        raise PemFormatError(f"PEM data must be str or bytes, not {type(pem).__name__}")

    match = _PEM_BLOCK.match(pem)
    if match is None:
        raise PemFormatError("Not a single PEM block with matching BEGIN/END markers")
    return match


def pem_to_der(pem: str | bytes) -> bytes:
    """
    Decode a single PEM block to its DER bytes.

    Raises PemFormatError if the markers are missing or mismatched, if the
    input holds more than one block, or if the body is not valid base64.
    """
    body = "".join(_match_block(pem).group("body").split())
    try:
        return base64.b64decode(body, validate=True)
    except binascii.Error as exc:
        raise PemFormatError(f"PEM body is not valid base64: {exc!s}") from exc


def pem_label(pem: str | bytes) -> str:
    """Return the label of a PEM block, e.g. ``CERTIFICATE``."""
    return _match_block(pem).group("label")


def der_to_pem(der: bytes, label: str) -> str:
    """Wrap *der* in a PEM block with 64-column base64 lines."""
    if not re.fullmatch(r"[A-Z0-9][A-Z0-9 ]*", label):
        raise PemFormatError(f"Invalid PEM label: {label!r}")
    b64 = base64.b64encode(der).decode("ascii")
    lines = [b64[i:i + _LINE_WIDTH] for i in range(0, len(b64), _LINE_WIDTH)]
    return "\n".join([f"-----BEGIN {label}-----", *lines, f"-----END {label}-----"]) + "\n"
