"""
PKCS#10 CSR construction for ACME orders.

The first domain becomes the subject common name; every domain, the first
one included, is listed in the subjectAltName extension in the order given.
The extension is attached in memory, so no scratch OpenSSL config file is
needed and concurrent calls share nothing.
"""
from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.x509.oid import NameOID

from certhelper.config import settings
from certhelper.errors import CsrCreationFailed, CsrExportFailed, InvalidParameter, PemFormatError
from certhelper.keys import as_private_key
from certhelper.pem import pem_label, pem_to_der

logger = logging.getLogger(__name__)

_DIGESTS: dict[str, type[hashes.HashAlgorithm]] = {
    "sha256": hashes.SHA256,
    "sha384": hashes.SHA384,
    "sha512": hashes.SHA512,
}

_CSR_LABELS = ("CERTIFICATE REQUEST", "NEW CERTIFICATE REQUEST")


def _validate_domains(domains: Any) -> list[str]:
    if isinstance(domains, (str, bytes)) or not isinstance(domains, (list, tuple)):
        raise InvalidParameter("domains must be a list of domain names")
    if not domains:
        raise InvalidParameter("domains must contain at least one domain")
    for domain in domains:
        if not isinstance(domain, str) or not domain:
            raise InvalidParameter(f"Invalid domain entry: {domain!r}")
    return list(domains)


def san_string(domains: Sequence[str]) -> str:
    """Render the subjectAltName value, e.g. ``DNS:example.com,DNS:www.example.com``."""
    return ",".join(f"DNS:{d}" for d in _validate_domains(domains))


def build_csr(
    domains: Sequence[str],
    key: Any,
    *,
    country_name: Optional[str] = None,
    digest: Optional[str] = None,
) -> str:
    """
    Build a PEM-encoded CSR for *domains*, signed with *key*.

    *key* may be an RSA/EC private key object or its PEM.  *country_name* and
    *digest* default to CSR_COUNTRY_NAME ("NL") and CSR_DIGEST ("sha512").

    Raises:
      InvalidParameter: bad domain list, key, country code or digest
      CsrCreationFailed: the request could not be built or signed
      CsrExportFailed: the signed request could not be serialized
    """
    domain_list = _validate_domains(domains)
    private_key = as_private_key(key)
    country = settings.CSR_COUNTRY_NAME if country_name is None else country_name
    if not isinstance(country, str) or len(country) != 2 or not country.isalpha():
        raise InvalidParameter(f"country_name must be a two-letter code, got {country!r}")
    digest_name = (digest or settings.CSR_DIGEST).lower()
    if digest_name not in _DIGESTS:
        raise InvalidParameter(f"digest must be one of {sorted(_DIGESTS)}, got {digest_name!r}")

    primary = domain_list[0]
    logger.debug("Building CSR for %s with %d SAN entries", primary, len(domain_list))

    try:
        csr = (
            x509.CertificateSigningRequestBuilder()
            .subject_name(
                x509.Name([
                    x509.NameAttribute(NameOID.COUNTRY_NAME, country),
                    x509.NameAttribute(NameOID.COMMON_NAME, primary),
                ])
            )
            .add_extension(
                x509.SubjectAlternativeName([x509.DNSName(d) for d in domain_list]),
                critical=False,
            )
            .sign(private_key, _DIGESTS[digest_name]())
        )
    except Exception as exc:
        raise CsrCreationFailed(f"Could not create a CSR for {primary}: {exc!s}") from exc

    try:
        pem = csr.public_bytes(serialization.Encoding.PEM)
    except Exception as exc:
        raise CsrExportFailed(f"CSR export failed for {primary}: {exc!s}") from exc

    return pem.decode().rstrip()


def csr_to_der(csr_pem: str | bytes) -> bytes:
    """Return the DER bytes of a PEM CSR (the form ACME /finalize expects)."""
    label = pem_label(csr_pem)
    if label not in _CSR_LABELS:
        raise PemFormatError(f"Expected a CERTIFICATE REQUEST PEM block, got {label!r}")
    return pem_to_der(csr_pem)
