from __future__ import annotations


class SoundMatrixError(Exception):
    """Base class for soundmatrix errors."""


class ConfigError(SoundMatrixError, ValueError):
    """An engine setting is out of range or cannot be parsed."""


class HandleReleasedError(SoundMatrixError, RuntimeError):
    """A shape record tried to destroy its visual a second time."""
