from __future__ import annotations

import logging
import threading
from typing import List, Optional

import numpy as np

try:
    import sounddevice as sd  # type: ignore
except Exception:  # pragma: no cover
    sd = None  # type: ignore

logger = logging.getLogger(__name__)

BASE_MIDI = 48  # C3 on cell 0
WAVEFORMS = ("sine", "triangle", "sine", "triangle", "square")

ONSET_GAIN = 0.12
KNEE_GAIN = 0.08
FLOOR_GAIN = 0.001
KNEE_SECONDS = 0.05
TONE_SECONDS = 0.25


def midi_to_freq(note: float) -> float:
    return 440.0 * 2.0 ** ((note - 69) / 12.0)


def cell_frequency(cell: int) -> float:
    return midi_to_freq(BASE_MIDI + cell)


def waveform_for(cell: int) -> str:
    return WAVEFORMS[cell % len(WAVEFORMS)]


def oscillator(kind: str, freq: float, n: int, samplerate: int) -> np.ndarray:
    phase = 2 * np.pi * freq * np.arange(n, dtype=np.float64) / samplerate
    if kind == "sine":
        return np.sin(phase)
    if kind == "square":
        return np.where(np.sin(phase) >= 0, 1.0, -1.0)
    if kind == "triangle":
        return (2 / np.pi) * np.arcsin(np.sin(phase))
    raise ValueError(f"unknown waveform {kind!r}")


def gain_envelope(n: int, samplerate: int) -> np.ndarray:
    """Two exponential ramps: onset -> knee in 50 ms, knee -> floor by 250 ms."""
    t = np.arange(n, dtype=np.float64) / samplerate
    attack = ONSET_GAIN * (KNEE_GAIN / ONSET_GAIN) ** (t / KNEE_SECONDS)
    decay_span = TONE_SECONDS - KNEE_SECONDS
    decay = KNEE_GAIN * (FLOOR_GAIN / KNEE_GAIN) ** ((t - KNEE_SECONDS) / decay_span)
    return np.where(t <= KNEE_SECONDS, attack, decay)


def render_tone(cell: int, samplerate: int = 48000) -> np.ndarray:
    n = int(round(TONE_SECONDS * samplerate))
    wave = oscillator(waveform_for(cell), cell_frequency(cell), n, samplerate)
    return (wave * gain_envelope(n, samplerate)).astype(np.float32)


class VoiceMixer:
    """Sums the tones still sounding; written by the UI thread, read by the audio callback."""

    def __init__(self, max_voices: int = 16):
        self.max_voices = int(max_voices)
        self.voices: List[List] = []  # [samples, read position]
        self.lock = threading.Lock()

    def add(self, samples: np.ndarray) -> None:
        with self.lock:
            if len(self.voices) >= self.max_voices:
                self.voices.pop(0)
            self.voices.append([samples.astype(np.float32, copy=False), 0])

    def active(self) -> int:
        with self.lock:
            return len(self.voices)

    def mix(self, frames: int) -> np.ndarray:
        out = np.zeros(frames, dtype=np.float32)
        with self.lock:
            alive = []
            for voice in self.voices:
                samples, pos = voice
                chunk = samples[pos : pos + frames]
                out[: len(chunk)] += chunk
                voice[1] = pos + len(chunk)
                if voice[1] < len(samples):
                    alive.append(voice)
            self.voices = alive
        return np.clip(out, -1.0, 1.0)


class ToneOutput:
    def __init__(self, samplerate: int = 48000, blocksize: int = 512, channels: int = 1):
        self.samplerate = samplerate
        self.blocksize = blocksize
        self.channels = channels
        self.stream: Optional[object] = None
        self.mixer = VoiceMixer()

    @property
    def running(self) -> bool:
        return self.stream is not None

    def start(self) -> bool:
        if self.stream is not None:
            return True
        if sd is None:
            logger.warning("sounddevice is not available; tones are disabled")
            return False

        def callback(outdata, frames, time_info, status):  # type: ignore
            if status:
                logger.debug("Audio stream status: %s", status)
            outdata[:] = self.mixer.mix(frames)[:, np.newaxis]

        try:
            self.stream = sd.OutputStream(
                samplerate=self.samplerate,
                channels=self.channels,
                dtype="float32",
                blocksize=self.blocksize,
                callback=callback,
            )
            self.stream.start()
        except Exception as exc:
            logger.warning("Could not open audio output: %s", exc)
            self.stream = None
            return False
        logger.info("Audio output started at %d Hz", self.samplerate)
        return True

    def stop(self) -> None:
        if self.stream is not None:
            try:
                self.stream.stop()
                self.stream.close()
            finally:
                self.stream = None

    def play_tone(self, cell: int) -> None:
        if self.stream is None:
            return
        self.mixer.add(render_tone(cell, self.samplerate))
