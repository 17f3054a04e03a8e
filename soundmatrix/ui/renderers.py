"""The 36 figures, one per cell.

Each figure is laid out around (0, 0) and sized from the surface so it fills
most of the screen; the item is then moved to the anchor and handed to the
engine, which owns it from there.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from PySide6.QtCore import QPointF
from PySide6.QtGui import QColor, QPainterPath, QPolygonF, QTransform
from PySide6.QtWidgets import QGraphicsScene

from ..core.shapes import ShapeDesign
from ..core.timeline import EnterKind, ExitKind, HoldMotion
from .handle import FigureItem, Part, QtShapeHandle

PI = math.pi
RADIATE_SPEED = 0.03


@dataclass(frozen=True)
class Size:
    w: float
    h: float

    @property
    def min(self) -> float:
        return min(self.w, self.h)

    @property
    def r(self) -> float:
        return self.min * 0.45

    @property
    def l(self) -> float:
        return self.min * 0.5

    def stroke(self, floor: float, frac: float) -> float:
        return max(floor, self.min * frac)


def _placed(path: QPainterPath, x: float, y: float, rotation: float) -> QPainterPath:
    tf = QTransform()
    tf.translate(x, y)
    tf.rotateRadians(rotation)
    return tf.map(path)


def _closed(points: List[Tuple[float, float]]) -> QPainterPath:
    path = QPainterPath()
    path.addPolygon(QPolygonF([QPointF(px, py) for px, py in points]))
    path.closeSubpath()
    return path


class Figure:
    def __init__(self):
        self.parts: List[Part] = []

    def polygon(self, x, y, radius, sides, rotation=0.0, width=0.0) -> "Figure":
        pts = []
        for i in range(sides):
            theta = 2 * PI * (i + 0.5) / sides + PI / 2
            pts.append((radius * math.cos(theta), radius * math.sin(theta)))
        self.parts.append((_placed(_closed(pts), x, y, rotation), width))
        return self

    def star(self, x, y, inner, outer, points, rotation=0.0, width=0.0) -> "Figure":
        pts = []
        for i in range(points * 2):
            radius = outer if i % 2 == 0 else inner
            theta = PI * i / points
            pts.append((radius * math.cos(theta), radius * math.sin(theta)))
        self.parts.append((_placed(_closed(pts), x, y, rotation), width))
        return self

    def line(self, x1, y1, x2, y2, width) -> "Figure":
        path = QPainterPath(QPointF(x1, y1))
        path.lineTo(x2, y2)
        self.parts.append((path, width))
        return self

    def ellipse(self, x, y, rx, ry, width=0.0) -> "Figure":
        path = QPainterPath()
        path.addEllipse(QPointF(x, y), rx, ry)
        self.parts.append((path, width))
        return self

    def arc_segment(self, x, y, inner, outer, start, end, rotation=0.0, width=0.0, resolution=24) -> "Figure":
        steps = [start + (end - start) * k / (resolution - 1) for k in range(resolution)]
        pts = [(outer * math.cos(a), outer * math.sin(a)) for a in steps]
        pts += [(inner * math.cos(a), inner * math.sin(a)) for a in reversed(steps)]
        self.parts.append((_placed(_closed(pts), x, y, rotation), width))
        return self


FigureFn = Callable[[Size], Figure]


# ---- single polygons (rotation lives on the design, not the geometry) ----

def wedge(s: Size) -> Figure:
    return Figure().polygon(0, 0, s.r * 0.88, 3)


def arrow_wedge(s: Size) -> Figure:
    return Figure().polygon(0, 0, s.r * 0.85, 3)


def shield(s: Size) -> Figure:
    return Figure().polygon(0, 0, s.r * 0.8, 5)


def big_wedge(s: Size) -> Figure:
    return Figure().polygon(0, 0, s.r * 1.05, 3)


def triangle_outline(s: Size) -> Figure:
    return Figure().polygon(0, 0, s.r * 0.82, 3, width=s.stroke(4, 0.006))


def pentagon(s: Size) -> Figure:
    return Figure().polygon(0, 0, s.r * 0.8, 5)


def star_outline(s: Size) -> Figure:
    return Figure().star(0, 0, s.r * 0.38, s.r * 0.78, 5, width=s.stroke(3, 0.005))


def octagon(s: Size) -> Figure:
    return Figure().polygon(0, 0, s.r * 0.72, 8)


def star_filled(s: Size) -> Figure:
    return Figure().star(0, 0, s.r * 0.42, s.r * 0.82, 5)


def hexagon(s: Size) -> Figure:
    return Figure().polygon(0, 0, s.r * 0.75, 6)


# ---- line work ----

def chevron_stack(s: Size) -> Figure:
    fig, lw = Figure(), s.stroke(3, 0.005)
    for i in range(-2, 3):
        y = i * s.min * 0.14
        w = s.w * (0.36 - abs(i) * 0.05)
        fig.line(-w * 0.5, y + s.min * 0.04, 0, y - s.min * 0.04, lw)
        fig.line(0, y - s.min * 0.04, w * 0.5, y + s.min * 0.04, lw)
    return fig


def eight_way_cross(s: Size) -> Figure:
    fig, lw, d = Figure(), s.stroke(2, 0.004), s.l * 0.44
    fig.line(-d, 0, d, 0, lw).line(0, -d, 0, d, lw)
    fig.line(-d * 0.707, -d * 0.707, d * 0.707, d * 0.707, lw)
    fig.line(-d * 0.707, d * 0.707, d * 0.707, -d * 0.707, lw)
    return fig


def _rays(s: Size, n: int, length: float) -> Figure:
    fig, lw = Figure(), s.stroke(2, 0.003)
    for i in range(n):
        a = i / n * 2 * PI
        fig.line(0, 0, math.cos(a) * length, math.sin(a) * length, lw)
    return fig


def ray_burst(s: Size) -> Figure:
    return _rays(s, 16, s.r * 0.86)


def fine_rays(s: Size) -> Figure:
    return _rays(s, 18, s.l * 0.86)


def speed_lines(s: Size) -> Figure:
    fig, lw, n = Figure(), s.stroke(2, 0.003), 8
    for i in range(n):
        dy = (i - (n - 1) / 2) * s.min * 0.1
        w = s.w * (0.42 - abs(i - 3.5) * 0.04)
        fig.line(-w * 0.5, dy, w * 0.5, dy, lw)
    return fig


def double_slash(s: Size) -> Figure:
    fig, lw, d = Figure(), s.stroke(3, 0.005), s.l * 0.84
    return fig.line(-d, -d * 0.6, d, d * 0.6, lw).line(-d, d * 0.6, d, -d * 0.6, lw)


def chevron_row(s: Size) -> Figure:
    fig, lw = Figure(), s.stroke(2, 0.004)
    for i in range(-2, 3):
        x = i * s.w * 0.18
        fig.line(x - s.w * 0.12, 0, x, s.h * 0.12, lw)
        fig.line(x, s.h * 0.12, x + s.w * 0.12, 0, lw)
    return fig


def mountain(s: Size) -> Figure:
    fig, lw = Figure(), s.stroke(4, 0.006)
    fig.line(-s.w * 0.38, s.h * 0.28, 0, -s.h * 0.28, lw)
    return fig.line(0, -s.h * 0.28, s.w * 0.38, s.h * 0.28, lw)


def divider(s: Size) -> Figure:
    return Figure().line(0, -s.h * 0.44, 0, s.h * 0.44, s.stroke(3, 0.005))


def triple_cross(s: Size) -> Figure:
    fig, lw, d = Figure(), s.stroke(3, 0.005), s.l * 0.86
    fig.line(-d, -d * 0.5, d, d * 0.5, lw)
    fig.line(-d * 0.7, d * 0.5, d * 0.7, -d * 0.5, lw)
    return fig.line(0, -d, 0, d, lw)


def parallel_lines(s: Size) -> Figure:
    fig, lw = Figure(), s.stroke(2, 0.003)
    for i in (-1, 0, 1):
        fig.line(-s.w * 0.4, i * s.h * 0.15, s.w * 0.4, i * s.h * 0.15, lw)
    return fig


def cross_star(s: Size) -> Figure:
    fig, lw, d = Figure(), s.stroke(3, 0.005), s.r * 0.8
    fig.line(-d, 0, d, 0, lw).line(0, -d, 0, d, lw)
    fig.line(-d * 0.5, -d * 0.5, d * 0.5, d * 0.5, lw)
    return fig.line(-d * 0.5, d * 0.5, d * 0.5, -d * 0.5, lw)


# ---- triangle arrangements ----

def stepped_fan(s: Size) -> Figure:
    fig = Figure()
    for i in range(4):
        r = s.r * (0.22 + i * 0.22)
        fig.polygon(0, -r * 0.5, r * 0.55, 3, rotation=PI / 2)
    return fig


def sunburst(s: Size) -> Figure:
    fig, n, rad = Figure(), 10, s.r * 0.78
    for i in range(n):
        a = i / n * 2 * PI
        fig.polygon(math.cos(a) * rad * 0.38, math.sin(a) * rad * 0.38, rad * 0.42, 3, rotation=a + PI / 2)
    return fig


def step_column(s: Size) -> Figure:
    fig = Figure()
    for i in range(4):
        w = s.min * (0.1 + i * 0.06)
        fig.polygon(0, (i - 1.5) * s.h * 0.22, w * 0.55, 3, rotation=PI / 2)
    return fig


def double_arrow(s: Size) -> Figure:
    fig = Figure()
    fig.polygon(-s.r * 0.42, 0, s.r * 0.42, 3, rotation=PI / 2)
    return fig.polygon(s.r * 0.42, 0, s.r * 0.42, 3, rotation=-PI / 2)


def triangle_fan(s: Size) -> Figure:
    fig, n, rad = Figure(), 6, s.r * 0.78
    for i in range(n):
        a = i / n * PI * 1.3
        fig.polygon(math.cos(a) * rad * 0.45, math.sin(a) * rad * 0.45, rad * 0.5, 3, rotation=a + PI / 2)
    return fig


def layered_fan(s: Size) -> Figure:
    fig = Figure()
    for i in range(5):
        a = PI * 0.2 + i / 5 * PI * 0.6
        r = s.r * (0.45 + i * 0.12)
        fig.polygon(math.cos(a) * r * 0.5, math.sin(a) * r * 0.5, r * 0.4, 3, rotation=a + PI / 2)
    return fig


def eight_triangles(s: Size) -> Figure:
    fig, n = Figure(), 8
    for i in range(n):
        fig.polygon(0, 0, s.r * 0.35, 3, rotation=i / n * 2 * PI)
    return fig


def pyramid(s: Size) -> Figure:
    fig, w = Figure(), s.min * 0.2
    for row in range(4):
        n = 4 - row
        y = (row - 1.5) * s.min * 0.22
        for col in range(n):
            fig.polygon((col - (n - 1) / 2) * w * 1.1, y, w * 0.45, 3, rotation=PI / 2)
    return fig


def four_arrows(s: Size) -> Figure:
    fig = Figure()
    for a in (0, PI / 2, PI, -PI / 2):
        fig.polygon(0, 0, s.r * 0.38, 3, rotation=a)
    return fig


# ---- curves ----

def hammer(s: Size) -> Figure:
    fig = Figure().ellipse(0, -s.r * 0.24, s.r * 0.42, s.r * 0.1)
    return fig.line(0, -s.r * 0.16, 0, s.r * 0.6, s.stroke(4, 0.006))


def hammer_and_sickle(s: Size) -> Figure:
    fig = Figure().ellipse(0, -s.r * 0.22, s.r * 0.34, s.r * 0.1)
    fig.line(0, -s.r * 0.1, 0, s.r * 0.5, s.stroke(3, 0.005))
    return fig.arc_segment(
        s.r * 0.05, s.r * 0.03, s.r * 0.18, s.r * 0.44, PI * 0.38, PI * 0.85, rotation=-PI / 3.5
    )


def twin_rings(s: Size) -> Figure:
    lw = s.stroke(3, 0.005)
    return Figure().ellipse(0, 0, s.r * 0.35, s.r * 0.35, lw).ellipse(0, 0, s.r * 0.65, s.r * 0.65, lw)


def diamond_grid(s: Size) -> Figure:
    fig, lw = Figure(), s.stroke(2, 0.003)
    for i in (-1, 0, 1):
        for j in (-1, 0, 1):
            fig.polygon(i * s.w * 0.2, j * s.h * 0.2, s.min * 0.08, 4, rotation=PI / 4, width=lw)
    return fig


def half_fan(s: Size) -> Figure:
    return Figure().arc_segment(0, 0, s.r * 0.3, s.r * 0.85, 0, PI, width=s.stroke(4, 0.006), resolution=32)


@dataclass(frozen=True)
class Design:
    figure: FigureFn
    hold: HoldMotion = HoldMotion.BREATHE
    base_rotation: float = 0.0
    enter: Optional[EnterKind] = None
    exit: Optional[ExitKind] = None
    rotation_speed: Optional[float] = None


def _radiating(fn: FigureFn) -> Design:
    return Design(fn, hold=HoldMotion.RADIATE, rotation_speed=RADIATE_SPEED)


CATALOG: Tuple[Design, ...] = (
    Design(wedge, base_rotation=PI / 3),
    Design(chevron_stack),
    Design(eight_way_cross),
    Design(stepped_fan),
    _radiating(sunburst),
    Design(hammer, enter=EnterKind.SLAM_DOWN, exit=ExitKind.SLAM_UP),
    Design(arrow_wedge, base_rotation=PI / 2),
    _radiating(ray_burst),
    Design(speed_lines),
    Design(hammer_and_sickle, enter=EnterKind.FLIP_IN, exit=ExitKind.FLIP_OUT),
    Design(shield, base_rotation=-PI / 2),
    Design(step_column),
    _radiating(fine_rays),
    Design(big_wedge, base_rotation=PI / 4),
    Design(triangle_outline, base_rotation=PI / 6),
    Design(double_arrow),
    Design(double_slash),
    Design(chevron_row),
    _radiating(triangle_fan),
    Design(pentagon, base_rotation=0.15),
    Design(mountain),
    Design(star_outline, base_rotation=-PI / 2),
    _radiating(layered_fan),
    _radiating(eight_triangles),
    Design(octagon, base_rotation=PI / 8),
    Design(divider),
    Design(triple_cross),
    Design(pyramid),
    Design(star_filled, base_rotation=-PI / 2),
    _radiating(four_arrows),
    Design(hexagon, base_rotation=PI / 6),
    Design(twin_rings),
    Design(diamond_grid),
    Design(half_fan),
    Design(parallel_lines),
    _radiating(cross_star),
)


def make_designs(
    scene: QGraphicsScene,
    surface_size: Callable[[], Tuple[float, float]],
) -> List[ShapeDesign]:
    """Bind the catalog to a scene: each ``build`` adds one item and returns its handle."""

    def builder(fn: FigureFn):
        def build(anchor: Tuple[float, float], color: str, cell_index: int) -> QtShapeHandle:
            w, h = surface_size()
            item = FigureItem(fn(Size(w or 1920.0, h or 1080.0)).parts, QColor(color))
            item.setPos(anchor[0], anchor[1])
            scene.addItem(item)
            return QtShapeHandle(item)

        return build

    return [
        ShapeDesign(
            build=builder(d.figure),
            enter_kind=d.enter,
            exit_kind=d.exit,
            hold_motion=d.hold,
            base_rotation=d.base_rotation,
            rotation_speed=d.rotation_speed,
        )
        for d in CATALOG
    ]
