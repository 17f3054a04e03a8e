"""Shared fixtures for soundmatrix tests.

The core never touches Qt, so most tests drive it with ``FakeHandle`` visuals
and a ``FixedRandom`` source that makes spawn jitter exact.
"""
import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from soundmatrix.core.palette import BackgroundCycle
from soundmatrix.core.shapes import ShapeDesign, ShapeRecord, ShapeRegistry
from soundmatrix.core.timeline import HoldMotion
from soundmatrix.core.trigger import TriggerCoordinator

WIDTH, HEIGHT = 800.0, 600.0


class FakeHandle:
    def __init__(self, label=None):
        self.label = label
        self.scale = 1.0
        self.rotation = 0.0
        self.opacity = 1.0
        self.translation = (0.0, 0.0)
        self.destroyed = 0

    def destroy(self):
        self.destroyed += 1


class FixedRandom:
    """uniform() returns a fixed fraction of the range, integers() a fixed index."""

    def __init__(self, fraction=0.5, index=0):
        self.fraction = fraction
        self.index = index

    def uniform(self, low, high):
        return low + (high - low) * self.fraction

    def integers(self, low, high):
        return min(max(self.index, low), high - 1)


def make_record(cell_index=-1, **kwargs):
    kwargs.setdefault("handle", FakeHandle(cell_index))
    kwargs.setdefault("origin_x", WIDTH / 2)
    kwargs.setdefault("origin_y", HEIGHT / 2)
    kwargs.setdefault("enter_end", 0.15)
    kwargs.setdefault("exit_start", 0.75)
    kwargs.setdefault("hold_motion", HoldMotion.NONE)
    return ShapeRecord(cell_index=cell_index, **kwargs)


class DesignBook:
    """Renderer table of fake designs; remembers every handle it built."""

    def __init__(self, count=36, **design_kwargs):
        self.built = []
        self.designs = [ShapeDesign(build=self._build, **design_kwargs) for _ in range(count)]

    def _build(self, anchor, color, cell_index):
        handle = FakeHandle(cell_index)
        handle.anchor = anchor
        handle.color = color
        self.built.append(handle)
        return handle


@pytest.fixture
def fixed_rng():
    return FixedRandom()


@pytest.fixture
def registry():
    return ShapeRegistry(max_live=12)


@pytest.fixture
def book():
    return DesignBook()


@pytest.fixture
def coordinator(registry, book, fixed_rng):
    return TriggerCoordinator(
        registry,
        BackgroundCycle(),
        book.designs,
        lambda: (WIDTH, HEIGHT),
        rng=fixed_rng,
    )


@pytest.fixture
def qapp():
    pytest.importorskip("PySide6")
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app


