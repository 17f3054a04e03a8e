from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence, Tuple

import numpy as np

from .palette import BackgroundCycle
from .shapes import RandomSource, ShapeDesign, ShapeRecord, ShapeRegistry, spawn_record

logger = logging.getLogger(__name__)

SurfaceSize = Callable[[], Tuple[float, float]]


class TriggerCoordinator:
    """Runs everything a single cell activation sets off.

    Background cycle, pressed flash, tone, then a new figure handed to the
    registry. The gesture position is ignored: figures always grow from the
    middle of the surface.
    """

    def __init__(
        self,
        registry: ShapeRegistry,
        background: BackgroundCycle,
        designs: Sequence[ShapeDesign],
        surface_size: SurfaceSize,
        play_tone: Optional[Callable[[int], None]] = None,
        on_pressed: Optional[Callable[[int], None]] = None,
        on_background: Optional[Callable[[str], None]] = None,
        rng: Optional[RandomSource] = None,
    ):
        self.registry = registry
        self.background = background
        self.designs = designs
        self.surface_size = surface_size
        self.play_tone = play_tone
        self.on_pressed = on_pressed
        self.on_background = on_background
        self.rng: RandomSource = rng if rng is not None else np.random.default_rng()

    def anchor(self) -> Tuple[float, float]:
        w, h = self.surface_size()
        return w / 2, h / 2

    def trigger(self, cell_index: int, origin: Optional[Tuple[float, float]] = None) -> ShapeRecord:
        anchor = self.anchor()

        bg = self.background.advance()
        color = self.background.foreground(cell_index)
        if self.on_background is not None:
            self.on_background(bg)
        if self.on_pressed is not None:
            self.on_pressed(cell_index)
        if self.play_tone is not None:
            self.play_tone(cell_index)

        design = self.designs[cell_index]
        handle = design.build(anchor, color, cell_index)
        record = spawn_record(handle, anchor, design, cell_index, self.rng)
        self.registry.insert(record)
        logger.debug(
            "Cell %d: bg=%s fg=%s enter=%s exit=%s live=%d",
            cell_index,
            bg,
            color,
            record.enter_kind.value,
            record.exit_kind.value,
            len(self.registry),
        )
        return record
