"""SoundMatrix: a grid of cells that play tones and spawn animated figures."""

__version__ = "0.1.0"
