"""Lequel error types.

Only reference-data loading raises; identification itself always returns
a language code or ``"unknown"``.
"""


class LequelError(Exception):
    """Base error for all lequel failures."""


class LequelVersionError(LequelError):
    """Bundle manifest version is not the one this release reads."""


class LequelChecksumError(LequelError):
    """A bundle file does not match its manifest SHA-256."""


class LequelFormatError(LequelError):
    """A bundle file decoded, but its contents have the wrong shape."""
