"""
certhelper: certificate material for ACME clients.

Key generation, CSR construction, PEM/DER conversion, certificate expiry,
chain splitting and JOSE base64url encoding.
"""
from certhelper.certificate import days_until_expiry, expiry_of
from certhelper.chain import split_chain
from certhelper.csr import build_csr, csr_to_der, san_string
from certhelper.errors import (
    CertHelperError,
    CertificateParseError,
    ChainParseError,
    CryptoBackendError,
    CsrCreationFailed,
    CsrExportFailed,
    InvalidParameter,
    PemFormatError,
)
from certhelper.jose import from_safe_string, to_safe_string
from certhelper.keys import KeyDetails, KeyGenerator, KeyType, generate_key, key_details, load_private_key
from certhelper.pem import der_to_pem, pem_to_der

__all__ = [
    "CertHelperError",
    "CertificateParseError",
    "ChainParseError",
    "CryptoBackendError",
    "CsrCreationFailed",
    "CsrExportFailed",
    "InvalidParameter",
    "KeyDetails",
    "KeyGenerator",
    "KeyType",
    "PemFormatError",
    "build_csr",
    "csr_to_der",
    "days_until_expiry",
    "der_to_pem",
    "expiry_of",
    "from_safe_string",
    "generate_key",
    "key_details",
    "load_private_key",
    "pem_to_der",
    "san_string",
    "split_chain",
    "to_safe_string",
]
