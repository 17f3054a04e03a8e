from __future__ import annotations

import math

BACK_OVERSHOOT = 1.7
BOUNCE_N = 7.5625
BOUNCE_D = 2.75

# largest power of two a double can hold
_MAX_EXP2 = 1023.0


def ease_out_back(t: float) -> float:
    c = BACK_OVERSHOOT
    u = t - 1
    return 1 + (c + 1) * u * u * u + c * u * u


def ease_in_back(t: float) -> float:
    c = BACK_OVERSHOOT
    return t * t * ((c + 1) * t - c)


def ease_out_elastic(t: float) -> float:
    if t == 0:
        return 0.0
    if t == 1:
        return 1.0
    decay = 2.0 ** min(-10 * t, _MAX_EXP2)
    return decay * math.sin((t * 10 - 0.75) * (2 * math.pi) / 3) + 1


def ease_out_bounce(t: float) -> float:
    n, d = BOUNCE_N, BOUNCE_D
    if t < 1 / d:
        return n * t * t
    if t < 2 / d:
        t -= 1.5 / d
        return n * t * t + 0.75
    if t < 2.5 / d:
        t -= 2.25 / d
        return n * t * t + 0.9375
    t -= 2.625 / d
    return n * t * t + 0.984375


def clamp01(x: float) -> float:
    return min(1.0, max(0.0, x))
