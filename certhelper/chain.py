"""
Split an ACME certificate download into leaf and intermediate.

Only the two-certificate shape is supported: leaf, a single newline, then
the intermediate.  Chains with more intermediates are rejected rather than
truncated.
"""
from __future__ import annotations

import re

from certhelper.errors import ChainParseError

# Base64 bodies never contain "-", so one block cannot run into the next.
_CERT_BLOCK = r"-----BEGIN CERTIFICATE-----[^-]+-----END CERTIFICATE-----"

_TWO_CERT_CHAIN = re.compile(
    rf"(?P<leaf>{_CERT_BLOCK})\n(?P<intermediate>{_CERT_BLOCK})\n?"
)


def split_chain(chain: str) -> tuple[str, str]:
    """
    Return (leaf_pem, intermediate_pem) from a two-certificate PEM chain.

    A single trailing newline is allowed; anything else outside the two
    blocks raises ChainParseError.
    """
    if not isinstance(chain, str):
        raise ChainParseError(f"Could not parse certificate chain: expected str, got {type(chain).__name__}")

    match = _TWO_CERT_CHAIN.fullmatch(chain)
    if match is None:
        raise ChainParseError("Could not parse certificate chain: expected exactly leaf + intermediate")
    return match.group("leaf"), match.group("intermediate")
