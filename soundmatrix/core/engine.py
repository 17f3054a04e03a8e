from __future__ import annotations

import logging
import time
from typing import Callable, Optional, Sequence, Tuple

from ..config import EngineConfig
from .frame import FrameDriver
from .gestures import GestureTracker
from .palette import BackgroundCycle
from .shapes import RandomSource, ShapeDesign, ShapeRecord, ShapeRegistry
from .trigger import TriggerCoordinator

logger = logging.getLogger(__name__)


class SoundMatrix:
    """One independent instrument: its live shapes, background and input state."""

    def __init__(
        self,
        designs: Sequence[ShapeDesign],
        surface_size: Callable[[], Tuple[float, float]],
        config: Optional[EngineConfig] = None,
        play_tone: Optional[Callable[[int], None]] = None,
        on_pressed: Optional[Callable[[int], None]] = None,
        on_background: Optional[Callable[[str], None]] = None,
        rng: Optional[RandomSource] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.config = config if config is not None else EngineConfig()
        if len(designs) < self.config.total_cells:
            raise ValueError(
                f"{len(designs)} designs for {self.config.total_cells} cells"
            )
        self.registry = ShapeRegistry(self.config.max_live)
        self.background = BackgroundCycle()
        self.coordinator = TriggerCoordinator(
            self.registry,
            self.background,
            designs,
            surface_size,
            play_tone=play_tone,
            on_pressed=on_pressed,
            on_background=on_background,
            rng=rng,
        )
        self.frames = FrameDriver(
            self.registry,
            surface_size,
            step=self.config.normalized_step,
            clock=clock,
        )
        self.gestures = GestureTracker(self.trigger)

    def trigger(self, cell_index: int) -> Optional[ShapeRecord]:
        if not 0 <= cell_index < self.config.total_cells:
            logger.warning("Ignoring trigger for cell %d outside the grid", cell_index)
            return None
        return self.coordinator.trigger(cell_index)

    def tick(self) -> int:
        return self.frames.tick()

    def shutdown(self) -> None:
        count = len(self.registry)
        self.registry.clear()
        logger.info("Released %d live shapes", count)
