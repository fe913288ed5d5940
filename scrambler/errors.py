"""
Error taxonomy.

Every error the tool raises on purpose derives from ScramblerError, so the
pipeline and the CLI can tell expected failures apart from bugs.
"""

from __future__ import annotations


class ScramblerError(Exception):
    """Base class for all expected failures."""


class ValidationError(ScramblerError):
    """No matching or eligible input files. Fatal for the whole run."""


class ConfigError(ScramblerError):
    """The settings file is missing, unreadable or malformed."""


class InvalidKeyError(ScramblerError):
    """Key material is not base64 or does not decode to the cipher key size."""


class FormatError(ScramblerError):
    """A cipher blob is not valid transport encoding or is too short."""


class CryptoError(ScramblerError):
    """Block decryption or padding validation failed."""
