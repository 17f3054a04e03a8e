from __future__ import annotations

import time
from typing import Callable, Tuple

from .shapes import ShapeRegistry

NOMINAL_STEP = 0.016


class FrameDriver:
    """Advances the registry once per display refresh.

    The step is constant per frame, so a slow display stretches the animation
    rather than skipping it. The clock only feeds the idle-motion phase.
    """

    def __init__(
        self,
        registry: ShapeRegistry,
        surface_size: Callable[[], Tuple[float, float]],
        step: float = NOMINAL_STEP,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.registry = registry
        self.surface_size = surface_size
        self.step = step
        self.clock = clock

    def tick(self) -> int:
        width, height = self.surface_size()
        return self.registry.tick(self.step, self.clock(), width, height)
