"""Three-phase motion envelope for live shapes.

A shape's normalized life ``t`` in [0, 1] is split by ``enter_end`` and
``exit_start``. Before ``enter_end`` an enter behaviour grows the figure in,
after ``exit_start`` an exit behaviour takes it away, and in between the
figure sits at rest with an optional idle motion driven by wall-clock time.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict

from .easing import clamp01, ease_in_back, ease_out_back, ease_out_bounce, ease_out_elastic

if TYPE_CHECKING:
    from .shapes import ShapeRecord

TWO_PI = 2 * math.pi
DEFAULT_ROTATION_SPEED = 0.04
DRIFT_VELOCITY_GAIN = 120.0


class EnterKind(str, Enum):
    SCALE = "scale"
    BOUNCE = "bounce"
    SLIDE_LEFT = "slideLeft"
    SLIDE_RIGHT = "slideRight"
    SLIDE_UP = "slideUp"
    SLIDE_DOWN = "slideDown"
    ZOOM = "zoom"
    ROTATE = "rotate"
    STRETCH_H = "stretchH"
    STRETCH_V = "stretchV"
    ELASTIC = "elastic"
    FROM_CENTER = "fromCenter"
    DIAGONAL = "diagonal"
    WHIP_IN = "whipIn"
    FLIP_IN = "flipIn"
    SLAM_DOWN = "slamDown"
    BURST = "burst"


class ExitKind(str, Enum):
    SCALE = "scale"
    BOUNCE_OUT = "bounceOut"
    SLIDE_LEFT = "slideLeft"
    SLIDE_RIGHT = "slideRight"
    SLIDE_UP = "slideUp"
    SLIDE_DOWN = "slideDown"
    ZOOM_OUT = "zoomOut"
    ROTATE_OUT = "rotateOut"
    EXPLODE = "explode"
    IMPLODE = "implode"
    COLLAPSE = "collapse"
    FLY_RIGHT = "flyRight"
    FLY_UP = "flyUp"
    FLY_LEFT = "flyLeft"
    SPIN_OUT = "spinOut"
    STRETCH_OUT = "stretchOut"
    WHIP_OUT = "whipOut"
    FLIP_OUT = "flipOut"
    SLAM_UP = "slamUp"


class HoldMotion(str, Enum):
    NONE = "none"
    BREATHE = "breathe"
    BREATHE_ROT = "breatheRot"
    PULSE = "pulse"
    PULSE_DRIFT = "pulseDrift"
    DRIFT = "drift"
    ORBIT = "orbit"
    FLOAT = "float"
    WAVE = "wave"
    EXPAND = "expand"
    RADIATE = "radiate"
    SPIN = "spin"


@dataclass
class Transform:
    scale: float = 1.0
    dx: float = 0.0
    dy: float = 0.0
    rotation: float = 0.0
    opacity: float = 1.0


PhaseFn = Callable[[float, float, float], Transform]
HoldFn = Callable[[float, int, float], Transform]


# te runs 0 -> 1 from spawn to the enter boundary; every entry lands on scale 1, no offset
ENTER_TRANSFORMS: Dict[EnterKind, PhaseFn] = {
    EnterKind.SCALE: lambda te, w, h: Transform(scale=ease_out_back(te)),
    EnterKind.BOUNCE: lambda te, w, h: Transform(scale=ease_out_bounce(te)),
    EnterKind.SLIDE_LEFT: lambda te, w, h: Transform(dx=-w * 0.3 * (1 - te)),
    EnterKind.SLIDE_RIGHT: lambda te, w, h: Transform(dx=w * 0.3 * (1 - te)),
    EnterKind.SLIDE_UP: lambda te, w, h: Transform(dy=-h * 0.3 * (1 - te)),
    EnterKind.SLIDE_DOWN: lambda te, w, h: Transform(dy=h * 0.3 * (1 - te)),
    EnterKind.ZOOM: lambda te, w, h: Transform(scale=te * te),
    EnterKind.ROTATE: lambda te, w, h: Transform(scale=te, rotation=(1 - te) * TWO_PI),
    EnterKind.STRETCH_H: lambda te, w, h: Transform(scale=0.1 + 0.9 * te),
    EnterKind.STRETCH_V: lambda te, w, h: Transform(scale=0.1 + 0.9 * te),
    EnterKind.ELASTIC: lambda te, w, h: Transform(scale=ease_out_elastic(te)),
    EnterKind.FROM_CENTER: lambda te, w, h: Transform(scale=te),
    EnterKind.DIAGONAL: lambda te, w, h: Transform(
        scale=te, dx=-w * 0.2 * (1 - te), dy=-h * 0.2 * (1 - te)
    ),
    EnterKind.WHIP_IN: lambda te, w, h: Transform(scale=te, rotation=(1 - te) * math.pi),
    EnterKind.FLIP_IN: lambda te, w, h: Transform(scale=te, rotation=(1 - te) * TWO_PI),
    EnterKind.SLAM_DOWN: lambda te, w, h: Transform(
        scale=ease_out_bounce(te), dy=-h * 0.4 * (1 - te)
    ),
    EnterKind.BURST: lambda te, w, h: Transform(scale=ease_out_elastic(te)),
}

# te runs 0 -> 1 from the exit boundary to death; growing or travelling exits fade to nothing
EXIT_TRANSFORMS: Dict[ExitKind, PhaseFn] = {
    ExitKind.SCALE: lambda te, w, h: Transform(scale=1 - ease_in_back(te)),
    ExitKind.BOUNCE_OUT: lambda te, w, h: Transform(scale=1 - ease_out_bounce(te)),
    ExitKind.SLIDE_LEFT: lambda te, w, h: Transform(dx=-w * 0.4 * te, opacity=1 - te),
    ExitKind.SLIDE_RIGHT: lambda te, w, h: Transform(dx=w * 0.4 * te, opacity=1 - te),
    ExitKind.SLIDE_UP: lambda te, w, h: Transform(dy=-h * 0.4 * te, opacity=1 - te),
    ExitKind.SLIDE_DOWN: lambda te, w, h: Transform(dy=h * 0.4 * te, opacity=1 - te),
    ExitKind.ZOOM_OUT: lambda te, w, h: Transform(scale=1 + te * 0.5, opacity=1 - te),
    ExitKind.ROTATE_OUT: lambda te, w, h: Transform(scale=1 - te, rotation=te * math.pi * 3),
    ExitKind.EXPLODE: lambda te, w, h: Transform(
        scale=1 + te * 0.8, rotation=te * math.pi, opacity=1 - te
    ),
    ExitKind.IMPLODE: lambda te, w, h: Transform(scale=1 - te),
    ExitKind.COLLAPSE: lambda te, w, h: Transform(scale=max(0.0, 1 - te * 1.5)),
    ExitKind.FLY_RIGHT: lambda te, w, h: Transform(
        scale=1 - te * 0.3, dx=w * 0.5 * te, opacity=1 - te
    ),
    ExitKind.FLY_UP: lambda te, w, h: Transform(
        scale=1 - te * 0.3, dy=-h * 0.5 * te, opacity=1 - te
    ),
    ExitKind.FLY_LEFT: lambda te, w, h: Transform(
        scale=1 - te * 0.3, dx=-w * 0.5 * te, opacity=1 - te
    ),
    ExitKind.SPIN_OUT: lambda te, w, h: Transform(scale=1 - te, rotation=te * math.pi * 4),
    ExitKind.STRETCH_OUT: lambda te, w, h: Transform(scale=1 + te * 0.5, opacity=1 - te),
    ExitKind.WHIP_OUT: lambda te, w, h: Transform(scale=1 - te, rotation=te * TWO_PI),
    ExitKind.FLIP_OUT: lambda te, w, h: Transform(scale=1 - te, rotation=te * math.pi * 3),
    ExitKind.SLAM_UP: lambda te, w, h: Transform(scale=1 - te, dy=h * 0.5 * te),
}


def _enter_linear(te: float, w: float, h: float) -> Transform:
    return Transform(scale=te)


def _exit_linear(te: float, w: float, h: float) -> Transform:
    return Transform(scale=1 - te)


def _breathe(phase: float, slot: int, progress: float) -> Transform:
    return Transform(scale=1 + math.sin(phase * 1.5) * 0.02)


def _pulse(phase: float, slot: int, progress: float) -> Transform:
    return Transform(scale=1 + math.sin(phase * 2) * 0.025)


def _drift(phase: float, slot: int, progress: float) -> Transform:
    return Transform(dx=math.sin(phase * 0.8) * 8, dy=math.cos(phase) * 6)


def _pulse_drift(phase: float, slot: int, progress: float) -> Transform:
    out = _drift(phase, slot, progress)
    out.scale = _pulse(phase, slot, progress).scale
    return out


def _orbit(phase: float, slot: int, progress: float) -> Transform:
    return Transform(dx=math.cos(phase * 0.5) * 10, dy=math.sin(phase * 0.5) * 10)


def _float(phase: float, slot: int, progress: float) -> Transform:
    return Transform(scale=1 + math.sin(phase * 1.5) * 0.015, dy=math.sin(phase * 1.2) * 6)


def _wave(phase: float, slot: int, progress: float) -> Transform:
    return Transform(scale=1 + math.sin(phase * 2.5 + slot * 0.2) * 0.02)


def _expand(phase: float, slot: int, progress: float) -> Transform:
    return Transform(scale=1 + progress * 0.04)


def _radiate(phase: float, slot: int, progress: float) -> Transform:
    return Transform(scale=1 + math.sin(phase * 1.8) * 0.02)


def _still(phase: float, slot: int, progress: float) -> Transform:
    return Transform()


HOLD_TRANSFORMS: Dict[HoldMotion, HoldFn] = {
    HoldMotion.NONE: _still,
    HoldMotion.BREATHE: _breathe,
    HoldMotion.BREATHE_ROT: _breathe,
    HoldMotion.PULSE: _pulse,
    HoldMotion.PULSE_DRIFT: _pulse_drift,
    HoldMotion.DRIFT: _drift,
    HoldMotion.ORBIT: _orbit,
    HoldMotion.FLOAT: _float,
    HoldMotion.WAVE: _wave,
    HoldMotion.EXPAND: _expand,
    HoldMotion.RADIATE: _radiate,
    HoldMotion.SPIN: _still,
}

ROTATING_MOTIONS = frozenset({HoldMotion.BREATHE_ROT, HoldMotion.RADIATE, HoldMotion.SPIN})


def enter_transform(kind: EnterKind, te: float, width: float, height: float) -> Transform:
    return ENTER_TRANSFORMS.get(kind, _enter_linear)(clamp01(te), width, height)


def exit_transform(kind: ExitKind, te: float, width: float, height: float) -> Transform:
    return EXIT_TRANSFORMS.get(kind, _exit_linear)(clamp01(te), width, height)


def hold_transform(record: ShapeRecord, t: float, now: float, slot: int = 0) -> Transform:
    """Idle motion while a shape sits between its enter and exit phases.

    ``now`` is wall-clock seconds and ``slot`` the record's position in the
    registry, so two shapes spawned together still drift out of step.
    """
    span = record.exit_start - record.enter_end
    progress = clamp01((t - record.enter_end) / span) if span > 0 else 0.0
    phase = now + slot * 0.5

    out = HOLD_TRANSFORMS.get(record.hold_motion, _still)(phase, slot, progress)
    if record.hold_motion in ROTATING_MOTIONS:
        speed = record.rotation_speed if record.rotation_speed is not None else DEFAULT_ROTATION_SPEED
        out.rotation = now * speed
    if record.drift_velocity is not None:
        vx, vy = record.drift_velocity
        out.dx += vx * progress * DRIFT_VELOCITY_GAIN
        out.dy += vy * progress * DRIFT_VELOCITY_GAIN
    return out


def phase_of(record: ShapeRecord, t: float) -> str:
    if t < record.enter_end:
        return "enter"
    if t > record.exit_start:
        return "exit"
    return "hold"


def evaluate(
    record: ShapeRecord,
    t: float,
    now: float,
    width: float,
    height: float,
    slot: int = 0,
) -> Transform:
    """Compose the frame transform for ``record`` at normalized time ``t``.

    Offsets are relative to the record's origin; callers add the origin when
    placing the visual.
    """
    hold = Transform()
    phase = phase_of(record, t)
    if phase == "enter":
        motion = enter_transform(record.enter_kind, t / record.enter_end, width, height)
    elif phase == "exit":
        te = (t - record.exit_start) / (1.0 - record.exit_start)
        motion = exit_transform(record.exit_kind, te, width, height)
    else:
        motion = Transform()
        hold = hold_transform(record, t, now, slot)

    return Transform(
        scale=motion.scale * record.base_scale * hold.scale,
        dx=motion.dx + hold.dx,
        dy=motion.dy + hold.dy,
        rotation=motion.rotation + hold.rotation + record.base_rotation + record.rotation_jitter,
        opacity=motion.opacity,
    )
