from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Protocol, Sequence, Tuple, TypeVar

from ..errors import HandleReleasedError
from .timeline import EnterKind, ExitKind, HoldMotion, Transform, evaluate

logger = logging.getLogger(__name__)

MAX_LIVE = 12

ENTER_CHOICES: Tuple[EnterKind, ...] = (
    EnterKind.SCALE,
    EnterKind.FROM_CENTER,
    EnterKind.BURST,
    EnterKind.ZOOM,
)
EXIT_CHOICES: Tuple[ExitKind, ...] = (
    ExitKind.SCALE,
    ExitKind.IMPLODE,
    ExitKind.EXPLODE,
    ExitKind.SPIN_OUT,
)

T = TypeVar("T")


class VisualHandle(Protocol):
    scale: float
    rotation: float
    opacity: float
    translation: Tuple[float, float]

    def destroy(self) -> None: ...


class RandomSource(Protocol):
    """Subset of ``numpy.random.Generator`` used for per-shape jitter."""

    def uniform(self, low: float, high: float) -> float: ...

    def integers(self, low: int, high: int) -> int: ...


@dataclass(frozen=True)
class ShapeDesign:
    """One entry of the renderer table: how to draw a cell and how it moves."""

    build: Callable[[Tuple[float, float], str, int], VisualHandle]
    enter_kind: Optional[EnterKind] = None
    exit_kind: Optional[ExitKind] = None
    hold_motion: HoldMotion = HoldMotion.NONE
    base_rotation: float = 0.0
    rotation_speed: Optional[float] = None


@dataclass(eq=False)
class ShapeRecord:
    handle: Optional[VisualHandle]
    origin_x: float
    origin_y: float
    cell_index: int = -1
    elapsed: float = 0.0
    enter_kind: EnterKind = EnterKind.SCALE
    exit_kind: ExitKind = ExitKind.SCALE
    enter_end: float = 0.15
    exit_start: float = 0.78
    base_scale: float = 1.0
    base_rotation: float = 0.0
    rotation_jitter: float = 0.0
    hold_motion: HoldMotion = HoldMotion.NONE
    rotation_speed: Optional[float] = None
    drift_velocity: Optional[Tuple[float, float]] = None

    @property
    def released(self) -> bool:
        return self.handle is None

    @property
    def finished(self) -> bool:
        return self.elapsed >= 1.0

    def apply(self, tf: Transform) -> None:
        handle = self.handle
        if handle is None:
            raise HandleReleasedError(f"shape for cell {self.cell_index} is already released")
        handle.scale = tf.scale
        handle.translation = (self.origin_x + tf.dx, self.origin_y + tf.dy)
        handle.rotation = tf.rotation
        handle.opacity = tf.opacity

    def release(self) -> None:
        handle = self.handle
        if handle is None:
            raise HandleReleasedError(f"shape for cell {self.cell_index} is already released")
        self.handle = None
        handle.destroy()


def _pick(rng: RandomSource, options: Sequence[T]) -> T:
    return options[int(rng.integers(0, len(options)))]


def spawn_record(
    handle: VisualHandle,
    anchor: Tuple[float, float],
    design: ShapeDesign,
    cell_index: int,
    rng: RandomSource,
) -> ShapeRecord:
    """Fresh record for a just-built visual, with small per-instance jitter."""
    enter_kind = design.enter_kind if design.enter_kind is not None else _pick(rng, ENTER_CHOICES)
    exit_kind = design.exit_kind if design.exit_kind is not None else _pick(rng, EXIT_CHOICES)
    return ShapeRecord(
        handle=handle,
        origin_x=anchor[0],
        origin_y=anchor[1],
        cell_index=cell_index,
        enter_kind=enter_kind,
        exit_kind=exit_kind,
        base_scale=float(rng.uniform(0.99, 1.01)),
        enter_end=0.14 + float(rng.uniform(0.0, 0.02)),
        exit_start=0.74 + float(rng.uniform(0.0, 0.04)),
        base_rotation=design.base_rotation + float(rng.uniform(-0.06, 0.06)),
        rotation_jitter=float(rng.uniform(-0.02, 0.02)),
        hold_motion=design.hold_motion,
        rotation_speed=design.rotation_speed,
    )


class ShapeRegistry:
    """Live shapes in insertion order, capped at ``max_live``.

    Every path that drops a record (restart, eviction, completion, clear)
    releases its visual exactly once.
    """

    def __init__(self, max_live: int = MAX_LIVE):
        self.max_live = max(1, int(max_live))
        self._records: List[ShapeRecord] = []

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ShapeRecord]:
        return iter(list(self._records))

    def __contains__(self, record: object) -> bool:
        return any(r is record for r in self._records)

    def cells(self) -> List[int]:
        return [r.cell_index for r in self._records]

    def find(self, cell_index: int) -> Optional[ShapeRecord]:
        if cell_index < 0:
            return None
        for record in self._records:
            if record.cell_index == cell_index:
                return record
        return None

    def insert(self, record: ShapeRecord) -> None:
        # restart, evict, append run back to back so the cap never breaks
        if record.cell_index >= 0:
            for i in range(len(self._records) - 1, -1, -1):
                if self._records[i].cell_index == record.cell_index:
                    old = self._records.pop(i)
                    logger.debug("Restarting cell %d", old.cell_index)
                    old.release()
        while len(self._records) >= self.max_live:
            oldest = self._records.pop(0)
            logger.debug("Evicting cell %d (cap %d)", oldest.cell_index, self.max_live)
            oldest.release()
        self._records.append(record)

    def tick(self, step: float, now: float, width: float, height: float) -> int:
        """Advance every record by ``step`` and reap the finished ones.

        Returns the number of records reaped.
        """
        reaped = 0
        for i in range(len(self._records) - 1, -1, -1):
            record = self._records[i]
            record.elapsed += step
            t = min(record.elapsed, 1.0)
            record.apply(evaluate(record, t, now, width, height, slot=i))
            if record.finished:
                del self._records[i]
                record.release()
                reaped += 1
        return reaped

    def clear(self) -> None:
        while self._records:
            self._records.pop().release()
