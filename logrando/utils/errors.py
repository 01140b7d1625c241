"""Custom exceptions raised by the randomizer core.

Plain filesystem failures are *not* wrapped: they surface as the
:class:`OSError` subclasses raised by :mod:`pathlib` / :mod:`shutil` /
:mod:`zipfile` so callers can tell an I/O problem from a format problem.
"""

from __future__ import annotations


class LograndoError(RuntimeError):
    """Base class for every expected failure reported by the core."""

    pass


class SoundFormatError(LograndoError):
    """Raised when a sound container cannot be encoded or decoded."""


class SoundTooLargeError(SoundFormatError):
    """Raised when an audio payload does not fit the 32-bit length field."""


class SoundHeaderError(SoundFormatError):
    """Raised when a sound container header is truncated or fails strict checks."""


class MalformedSubtitleError(LograndoError):
    """Raised when a subtitle chunk has a key but no line break after it."""


class BackupMissingError(LograndoError):
    """Raised when a restore is requested but no backup exists."""


class CatalogError(LograndoError):
    """Raised when the slot catalog cannot be parsed or violates uniqueness."""


class InstallationError(LograndoError):
    """Raised when a game directory holds neither the data archive nor its unpacked tree."""
