"""Engine settings.

Defaults reproduce the stock instrument: a 12 x 3 grid, twelve live figures,
roughly one second per figure at 60 Hz. Any field can be overridden from the
environment as ``SOUNDMATRIX_<FIELD>`` (e.g. ``SOUNDMATRIX_MAX_LIVE=8``).
"""
from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Mapping, Optional

from .errors import ConfigError

ENV_PREFIX = "SOUNDMATRIX_"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class EngineConfig:
    cols: int = 12
    rows: int = 3
    max_live: int = 12
    frame_step: float = 0.016
    lifetime: float = 1.0
    frame_interval_ms: int = 16
    press_flash_ms: int = 400
    samplerate: int = 48000
    blocksize: int = 512
    audio_enabled: bool = True

    def __post_init__(self) -> None:
        if self.cols < 1 or self.rows < 1:
            raise ConfigError(f"grid must have at least one cell, got {self.cols}x{self.rows}")
        if self.max_live < 1:
            raise ConfigError(f"max_live must be positive, got {self.max_live}")
        if self.lifetime <= 0 or self.frame_step <= 0:
            raise ConfigError("lifetime and frame_step must be positive")
        if self.samplerate <= 0:
            raise ConfigError(f"samplerate must be positive, got {self.samplerate}")

    @property
    def total_cells(self) -> int:
        return self.cols * self.rows

    @property
    def normalized_step(self) -> float:
        return self.frame_step / self.lifetime

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EngineConfig":
        env = os.environ if environ is None else environ
        overrides = {}
        for f in fields(cls):
            raw = env.get(ENV_PREFIX + f.name.upper())
            if raw is None or not raw.strip():
                continue
            overrides[f.name] = _coerce(f.name, str(f.type), raw.strip())
        return cls(**overrides)


def _coerce(name: str, type_name: str, raw: str):
    try:
        if type_name == "bool":
            low = raw.lower()
            if low in _TRUE:
                return True
            if low in _FALSE:
                return False
            raise ValueError(raw)
        if type_name == "int":
            return int(raw)
        if type_name == "float":
            return float(raw)
    except ValueError as exc:
        raise ConfigError(f"{ENV_PREFIX}{name.upper()}={raw!r} is not a valid {type_name}") from exc
    return raw
