from __future__ import annotations

from typing import Tuple

from PIL import ImageColor

RGB = Tuple[int, int, int]


def clamp01(x: float) -> float:
    return min(1.0, max(0.0, float(x)))


def to_rgb(color: str) -> RGB:
    r, g, b = ImageColor.getrgb(color)[:3]
    return r, g, b


def luminance(color: str) -> float:
    r, g, b = to_rgb(color)
    y = 0.2126 * r + 0.7152 * g + 0.0722 * b
    return y / 255.0


def lerp_rgb(c1: RGB, c2: RGB, t: float) -> RGB:
    t = clamp01(t)
    return (
        int(c1[0] + (c2[0] - c1[0]) * t),
        int(c1[1] + (c2[1] - c1[1]) * t),
        int(c1[2] + (c2[2] - c1[2]) * t),
    )


def overlay_ink(background: str, strength: float = 0.18) -> RGB:
    """Grid-line colour: the background pushed toward white or black."""
    base = to_rgb(background)
    target = (0, 0, 0) if luminance(background) > 0.5 else (255, 255, 255)
    return lerp_rgb(base, target, strength)
