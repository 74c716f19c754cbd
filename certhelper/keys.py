"""
Private-key generation, loading and inspection.

Keys leave this module as unencrypted PKCS#8 PEM strings; nothing is written
to disk.  Algorithm parameters are always passed in explicitly; the defaults
live in ``certhelper.config`` and are applied by ``KeyGenerator.from_settings``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from josepy.jwk import JWK

from certhelper.config import Settings, settings
from certhelper.errors import CryptoBackendError, InvalidParameter
from certhelper.jose import to_safe_string

logger = logging.getLogger(__name__)

PrivateKey = Union[rsa.RSAPrivateKey, ec.EllipticCurvePrivateKey]
PublicKey = Union[rsa.RSAPublicKey, ec.EllipticCurvePublicKey]


class KeyType(str, Enum):
    RSA = "RSA"
    EC = "EC"


# key size -> (OpenSSL curve name, cryptography curve class)
_EC_CURVES: dict[int, tuple[str, type[ec.EllipticCurve]]] = {
    256: ("prime256v1", ec.SECP256R1),
    384: ("secp384r1", ec.SECP384R1),
}

# cryptography reports SEC names; OpenSSL calls P-256 "prime256v1"
_OPENSSL_CURVE_NAMES = {name_cls().name: name for name, name_cls in _EC_CURVES.values()}


# ─── Generation ───────────────────────────────────────────────────────────────


def _coerce_key_type(key_type: KeyType | str) -> KeyType:
    if isinstance(key_type, KeyType):
        return key_type
    if isinstance(key_type, str):
        try:
            return KeyType(key_type.upper())
        except ValueError:
            pass
    raise InvalidParameter("key type must be RSA or EC")


def _coerce_key_size(key_type: KeyType, key_size: int) -> int:
    if isinstance(key_size, bool) or not isinstance(key_size, int):
        raise InvalidParameter(f"key size must be an integer, got {key_size!r}")
    if key_type is KeyType.EC and key_size not in _EC_CURVES:
        raise InvalidParameter("EC key size must be 256 or 384")
    return key_size


def generate_key(key_type: KeyType | str, key_size: int) -> str:
    """
    Generate a new private key and return it as a PKCS#8 PEM string.

    *key_type* is ``RSA`` or ``EC``.  For RSA *key_size* is the modulus length
    in bits (2048 or more is recommended, not enforced).  For EC it selects the
    curve: 256 -> prime256v1 (P-256), 384 -> secp384r1 (P-384).

    Raises InvalidParameter for an unknown type or an unsupported EC size, and
    CryptoBackendError if the cryptographic library fails.
    """
    kt = _coerce_key_type(key_type)
    size = _coerce_key_size(kt, key_size)

    logger.debug("Generating %s-%d private key", kt.value, size)
    try:
        key: PrivateKey
        if kt is KeyType.EC:
            _, curve_cls = _EC_CURVES[size]
            key = ec.generate_private_key(curve_cls(), default_backend())
        else:
            key = rsa.generate_private_key(
                public_exponent=65537,
                key_size=size,
                backend=default_backend(),
            )
        return private_key_to_pem(key)
    except Exception as exc:
        raise CryptoBackendError(f"Could not generate {kt.value}-{size} key: {exc!s}") from exc


class KeyGenerator:
    """Generate keys with a fixed, explicitly configured algorithm and size."""

    def __init__(self, key_type: KeyType | str, key_size: int) -> None:
        self.key_type = _coerce_key_type(key_type)
        self.key_size = _coerce_key_size(self.key_type, key_size)

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "KeyGenerator":
        config = config or settings
        return cls(config.DEFAULT_KEY_TYPE, config.DEFAULT_KEY_SIZE)

    def generate(self) -> str:
        return generate_key(self.key_type, self.key_size)

    def __repr__(self) -> str:
        return f"KeyGenerator({self.key_type.value}, {self.key_size})"


# ─── Serialization / loading ──────────────────────────────────────────────────


def private_key_to_pem(key: PrivateKey) -> str:
    """Serialize a private key to an unencrypted PKCS#8 PEM string."""
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()


def load_private_key(pem: str | bytes) -> PrivateKey:
    """Load an unencrypted RSA or EC private key from PEM."""
    data = pem.encode() if isinstance(pem, str) else pem
    try:
        key = serialization.load_pem_private_key(data, password=None, backend=default_backend())
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise InvalidParameter(f"Could not load private key: {exc!s}") from exc

    if not isinstance(key, (rsa.RSAPrivateKey, ec.EllipticCurvePrivateKey)):
        raise InvalidParameter("key type must be RSA or EC")
    return key


def as_private_key(key: Any) -> PrivateKey:
    """Accept a private key object or its PEM serialization."""
    if isinstance(key, (rsa.RSAPrivateKey, ec.EllipticCurvePrivateKey)):
        return key
    if isinstance(key, (str, bytes)):
        return load_private_key(key)
    raise InvalidParameter(f"Expected an RSA/EC private key or PEM, got {type(key).__name__}")


# ─── Key details ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class KeyDetails:
    """Read-only metadata derived from a private key."""

    key_type: KeyType
    bits: int
    public_key_pem: str
    curve_name: Optional[str] = None
    modulus: Optional[int] = None
    public_exponent: Optional[int] = None
    x: Optional[int] = None
    y: Optional[int] = None
    public_key: Optional[PublicKey] = field(default=None, repr=False, compare=False)

    def jwk(self) -> dict:
        """Return the public key as a JWK dict (``kty`` included)."""
        return self._josepy_jwk().to_partial_json()

    def thumbprint(self) -> str:
        """Return the base64url RFC 7638 SHA-256 thumbprint of the public JWK."""
        return to_safe_string(self._josepy_jwk().thumbprint())

    def _josepy_jwk(self) -> JWK:
        return JWK.load(self.public_key_pem.encode())


def key_details(key: Any) -> KeyDetails:
    """Describe a private key (object or PEM)."""
    private_key = as_private_key(key)
    public_key = private_key.public_key()
    public_pem = public_key.public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode()

    if isinstance(public_key, rsa.RSAPublicKey):
        numbers = public_key.public_numbers()
        return KeyDetails(
            key_type=KeyType.RSA,
            bits=public_key.key_size,
            public_key_pem=public_pem,
            modulus=numbers.n,
            public_exponent=numbers.e,
            public_key=public_key,
        )

    ec_numbers = public_key.public_numbers()
    return KeyDetails(
        key_type=KeyType.EC,
        bits=public_key.curve.key_size,
        public_key_pem=public_pem,
        curve_name=_OPENSSL_CURVE_NAMES.get(public_key.curve.name, public_key.curve.name),
        x=ec_numbers.x,
        y=ec_numbers.y,
        public_key=public_key,
    )
