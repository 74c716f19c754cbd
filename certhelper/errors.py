"""
Error taxonomy for certificate-material preparation.

Every failure is raised, never returned.  Callers that only care about
"something went wrong in the helper" can catch ``CertHelperError``; callers
that want to react differently (retry a flaky backend vs. abort on bad input)
catch the specific subclasses.
"""
from __future__ import annotations


class CertHelperError(Exception):
    """Base class for every error raised by certhelper."""


class InvalidParameter(CertHelperError, ValueError):
    """The caller supplied an out-of-range or malformed argument."""


class PemFormatError(InvalidParameter):
    """A PEM block has missing or mismatched markers, or a non-base64 body."""


class CryptoBackendError(CertHelperError):
    """The cryptographic library failed while generating or serializing a key."""


class CsrCreationFailed(CertHelperError):
    """Building or signing the certificate signing request failed."""


class CsrExportFailed(CertHelperError):
    """Serializing a built CSR to PEM failed."""


class CertificateParseError(CertHelperError):
    """A certificate could not be parsed."""


class ChainParseError(CertHelperError):
    """A PEM chain is not exactly a leaf followed by one intermediate."""
