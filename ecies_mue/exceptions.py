"""
ECIES Error Taxonomy

All codec failures derive from ECIESError, which is a ValueError so that
callers already catching ValueError around crypto operations keep working.

- MissingKeyError: a mandatory key was not supplied (or is invalid)
- ConfigurationError: encrypt/decrypt invoked without the keys it needs
- FormatError: frame too short or embedded key not a valid curve point
- IntegrityError: authentication tag mismatch

Callers must treat any error from decrypt() as "reject this message".

Author: ecies-mue Project
Date: October 2026
"""


class ECIESError(ValueError):
    """Base class for all ECIES codec errors."""


class MissingKeyError(ECIESError):
    """A required key was not provided or could not be used as a key."""


class ConfigurationError(ECIESError):
    """The codec lacks the keys required by the requested operation."""


class FormatError(ECIESError):
    """The ciphertext frame cannot be parsed."""


class IntegrityError(ECIESError):
    """Authentication tag verification failed."""

    def __init__(self, message: str = "Invalid checksum"):
        super().__init__(message)


__all__ = [
    "ECIESError",
    "MissingKeyError",
    "ConfigurationError",
    "FormatError",
    "IntegrityError",
]
