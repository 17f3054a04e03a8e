from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

from PySide6.QtCore import QEvent, QRectF, Qt, QTimer, Signal
from PySide6.QtGui import QColor, QPainter, QPen
from PySide6.QtWidgets import QFrame, QGraphicsScene, QGraphicsView, QWidget

from ..config import EngineConfig
from ..core.audio import ToneOutput
from ..core.engine import SoundMatrix
from ..utils.colors import overlay_ink
from .renderers import make_designs

logger = logging.getLogger(__name__)


class GridOverlay(QWidget):
    """Transparent cell grid over the canvas: hit-testing and the pressed flash."""

    pressed = Signal(int)
    moved = Signal(int)
    released = Signal()

    def __init__(self, cols: int, rows: int, flash_ms: int = 400, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.cols = cols
        self.rows = rows
        self.flash_ms = flash_ms
        self.ink: Tuple[int, int, int] = (255, 255, 255)
        self._flashing: Dict[int, int] = {}
        self._flash_seq = 0
        self.setAttribute(Qt.WidgetAttribute.WA_AcceptTouchEvents, True)
        self.setFocusPolicy(Qt.FocusPolicy.NoFocus)

    def cell_at(self, x: float, y: float) -> int:
        w, h = self.width(), self.height()
        if w <= 0 or h <= 0 or not (0 <= x < w and 0 <= y < h):
            return -1
        col = min(self.cols - 1, int(x * self.cols / w))
        row = min(self.rows - 1, int(y * self.rows / h))
        return row * self.cols + col

    def cell_rect(self, cell: int) -> QRectF:
        cw = self.width() / self.cols
        ch = self.height() / self.rows
        row, col = divmod(cell, self.cols)
        return QRectF(col * cw, row * ch, cw, ch)

    def is_flashing(self, cell: int) -> bool:
        return cell in self._flashing

    def flash(self, cell: int) -> None:
        self._flash_seq += 1
        token = self._flash_seq
        self._flashing[cell] = token
        QTimer.singleShot(self.flash_ms, lambda: self._unflash(cell, token))
        self.update()

    def _unflash(self, cell: int, token: int) -> None:
        # a newer flash of the same cell owns the highlight now
        if self._flashing.get(cell) == token:
            del self._flashing[cell]
            self.update()

    def set_background(self, color: str) -> None:
        self.ink = overlay_ink(color)
        self.update()

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        r, g, b = self.ink
        for cell in self._flashing:
            painter.fillRect(self.cell_rect(cell), QColor(r, g, b, 60))
        painter.setPen(QPen(QColor(r, g, b, 90), 1))
        for c in range(1, self.cols):
            x = c * self.width() / self.cols
            painter.drawLine(int(x), 0, int(x), self.height())
        for rr in range(1, self.rows):
            y = rr * self.height() / self.rows
            painter.drawLine(0, int(y), self.width(), int(y))
        painter.end()

    def mousePressEvent(self, event) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            pos = event.position()
            self.pressed.emit(self.cell_at(pos.x(), pos.y()))

    def mouseMoveEvent(self, event) -> None:
        pos = event.position()
        self.moved.emit(self.cell_at(pos.x(), pos.y()))

    def mouseReleaseEvent(self, event) -> None:
        self.released.emit()

    def leaveEvent(self, event) -> None:
        self.released.emit()
        super().leaveEvent(event)

    def event(self, event) -> bool:
        kind = event.type()
        if kind in (QEvent.Type.TouchBegin, QEvent.Type.TouchUpdate, QEvent.Type.TouchEnd):
            points = event.points()
            if kind == QEvent.Type.TouchEnd or not points:
                self.released.emit()
            else:
                pos = points[0].position()
                cell = self.cell_at(pos.x(), pos.y())
                if kind == QEvent.Type.TouchBegin:
                    self.pressed.emit(cell)
                else:
                    self.moved.emit(cell)
            event.accept()
            return True
        return super().event(event)


class MainWindow(QWidget):
    def __init__(self, config: Optional[EngineConfig] = None, tone: Optional[ToneOutput] = None):
        super().__init__()
        self.config = config if config is not None else EngineConfig()
        self.tone = tone
        self.setWindowTitle("SoundMatrix")
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.resize(1280, 720)

        self.scene = QGraphicsScene(self)
        self.view = QGraphicsView(self.scene, self)
        self.view.setFrameShape(QFrame.Shape.NoFrame)
        self.view.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.view.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.view.setAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop)
        self.view.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        self.view.setViewportUpdateMode(QGraphicsView.ViewportUpdateMode.FullViewportUpdate)
        self.view.setFocusPolicy(Qt.FocusPolicy.NoFocus)

        self.overlay = GridOverlay(self.config.cols, self.config.rows, self.config.press_flash_ms, self)

        self.engine = SoundMatrix(
            make_designs(self.scene, self.surface_size),
            self.surface_size,
            self.config,
            play_tone=tone.play_tone if tone is not None else None,
            on_pressed=self.overlay.flash,
            on_background=self.set_background,
        )
        self.overlay.pressed.connect(self._on_pressed)
        self.overlay.moved.connect(self._on_moved)
        self.overlay.released.connect(self.engine.gestures.release)

        self.set_background(self.engine.background.color)
        self._layout_children()

        self.timer = QTimer(self)
        self.timer.setTimerType(Qt.TimerType.PreciseTimer)
        self.timer.setInterval(self.config.frame_interval_ms)
        self.timer.timeout.connect(self.engine.tick)
        self.timer.start()

    def surface_size(self) -> Tuple[float, float]:
        vp = self.view.viewport()
        return float(vp.width() or 1920), float(vp.height() or 1080)

    def set_background(self, color: str) -> None:
        self.view.setBackgroundBrush(QColor(color))
        self.overlay.set_background(color)

    def _layout_children(self) -> None:
        rect = self.rect()
        self.view.setGeometry(rect)
        self.overlay.setGeometry(rect)
        self.scene.setSceneRect(0, 0, rect.width(), rect.height())

    def _on_pressed(self, cell: int) -> None:
        self.engine.gestures.press(cell if cell >= 0 else None)

    def _on_moved(self, cell: int) -> None:
        self.engine.gestures.move(cell if cell >= 0 else None)

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        self._layout_children()

    def keyPressEvent(self, event) -> None:
        key = event.key()
        if key == Qt.Key.Key_Escape:
            self.close()
            return
        if key == Qt.Key.Key_F11:
            if self.isFullScreen():
                self.showNormal()
            else:
                self.showFullScreen()
            return
        if self.engine.gestures.key_down(event.text(), event.isAutoRepeat(), _key_code(event)):
            event.accept()
            return
        super().keyPressEvent(event)

    def keyReleaseEvent(self, event) -> None:
        if not event.isAutoRepeat():
            self.engine.gestures.key_up(event.text(), _key_code(event))
        super().keyReleaseEvent(event)

    def focusOutEvent(self, event) -> None:
        # releases are not delivered once focus is gone
        self.engine.gestures.reset()
        super().focusOutEvent(event)

    def closeEvent(self, event) -> None:
        self.timer.stop()
        self.engine.shutdown()
        super().closeEvent(event)


def _key_code(event) -> int:
    """Physical key of a key event; the scan code survives Shift, the key code is the fallback."""
    return event.nativeScanCode() or int(event.key())
