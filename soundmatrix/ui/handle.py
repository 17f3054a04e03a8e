from __future__ import annotations

import math
from typing import List, Tuple

from PySide6.QtCore import QRectF, Qt
from PySide6.QtGui import QColor, QPainter, QPainterPath, QPen
from PySide6.QtWidgets import QGraphicsItem

Part = Tuple[QPainterPath, float]  # stroke width, 0 means filled


class FigureItem(QGraphicsItem):
    """One figure drawn in a single colour from filled and stroked paths."""

    def __init__(self, parts: List[Part], color: QColor):
        super().__init__()
        self.parts = parts
        self.color = QColor(color)
        bounds = QRectF()
        for path, width in parts:
            rect = path.boundingRect()
            if width > 0:
                rect = rect.adjusted(-width, -width, width, width)
            bounds = bounds.united(rect)
        self._bounds = bounds

    def boundingRect(self) -> QRectF:
        return self._bounds

    def paint(self, painter: QPainter, option, widget=None) -> None:
        painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        for path, width in self.parts:
            if width > 0:
                pen = QPen(self.color, width)
                pen.setCapStyle(Qt.PenCapStyle.FlatCap)
                pen.setJoinStyle(Qt.PenJoinStyle.MiterJoin)
                painter.strokePath(path, pen)
            else:
                painter.fillPath(path, self.color)


class QtShapeHandle:
    """Visual handle over a scene item; rotation is exposed in radians."""

    def __init__(self, item: QGraphicsItem):
        self.item = item

    @property
    def scale(self) -> float:
        return self.item.scale()

    @scale.setter
    def scale(self, value: float) -> None:
        self.item.setScale(value)

    @property
    def rotation(self) -> float:
        return math.radians(self.item.rotation())

    @rotation.setter
    def rotation(self, value: float) -> None:
        self.item.setRotation(math.degrees(value))

    @property
    def translation(self) -> Tuple[float, float]:
        pos = self.item.pos()
        return pos.x(), pos.y()

    @translation.setter
    def translation(self, value: Tuple[float, float]) -> None:
        self.item.setPos(value[0], value[1])

    @property
    def opacity(self) -> float:
        return self.item.opacity()

    @opacity.setter
    def opacity(self, value: float) -> None:
        self.item.setOpacity(value)

    def destroy(self) -> None:
        scene = self.item.scene()
        if scene is not None:
            scene.removeItem(self.item)
