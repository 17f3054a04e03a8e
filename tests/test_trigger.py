import pytest

from conftest import HEIGHT, WIDTH, DesignBook, FixedRandom
from soundmatrix.config import EngineConfig
from soundmatrix.core.engine import SoundMatrix
from soundmatrix.core.palette import BG_PALETTE, FG_ON_DARK, FG_ON_LIGHT
from soundmatrix.core.shapes import ENTER_CHOICES, EXIT_CHOICES
from soundmatrix.core.timeline import EnterKind, ExitKind


def test_anchor_is_surface_center(coordinator):
    assert coordinator.anchor() == (WIDTH / 2, HEIGHT / 2)


def test_figure_is_built_at_center_with_foreground(coordinator, book):
    record = coordinator.trigger(3, origin=(5.0, 7.0))
    handle = book.built[-1]
    assert handle.anchor == (WIDTH / 2, HEIGHT / 2)
    assert (record.origin_x, record.origin_y) == (WIDTH / 2, HEIGHT / 2)
    # first trigger moves onto a light background
    assert handle.color == FG_ON_LIGHT[3]
    assert record.handle is handle
    assert record.cell_index == 3


def test_background_advances_once_per_trigger(coordinator):
    for _ in range(10):
        coordinator.trigger(0)
    assert coordinator.background.index == 10
    for _ in range(6):
        coordinator.trigger(0)
    assert coordinator.background.index == 0
    assert coordinator.background.color == BG_PALETTE[0]


def test_foreground_follows_background_darkness(coordinator, book):
    coordinator.trigger(4)
    coordinator.trigger(4)
    assert coordinator.background.is_dark
    assert book.built[-1].color == FG_ON_DARK[4]


def test_side_effects_run_in_order(registry, book, fixed_rng):
    from soundmatrix.core.palette import BackgroundCycle
    from soundmatrix.core.trigger import TriggerCoordinator

    events = []
    coordinator = TriggerCoordinator(
        registry,
        BackgroundCycle(),
        book.designs,
        lambda: (WIDTH, HEIGHT),
        play_tone=lambda cell: events.append(("tone", cell)),
        on_pressed=lambda cell: events.append(("pressed", cell)),
        on_background=lambda color: events.append(("bg", color)),
        rng=fixed_rng,
    )
    coordinator.trigger(8)
    assert events == [("bg", BG_PALETTE[1]), ("pressed", 8), ("tone", 8)]


def test_retrigger_restarts_the_cell(coordinator, registry, book):
    first = coordinator.trigger(2)
    registry.tick(0.3, 0.0, WIDTH, HEIGHT)
    second = coordinator.trigger(2)

    assert registry.cells() == [2]
    assert second.elapsed == 0.0
    assert book.built[0].destroyed == 1
    assert first.released
    assert not second.released


def test_thirteen_distinct_cells_evict_the_oldest(coordinator, registry, book):
    for cell in range(13):
        coordinator.trigger(cell)
    assert registry.cells() == list(range(1, 13))
    assert book.built[0].destroyed == 1
    assert all(h.destroyed == 0 for h in book.built[1:])


def test_random_kinds_come_from_default_choices(registry, book):
    from soundmatrix.core.palette import BackgroundCycle
    from soundmatrix.core.trigger import TriggerCoordinator

    coordinator = TriggerCoordinator(
        registry, BackgroundCycle(), book.designs, lambda: (WIDTH, HEIGHT), rng=FixedRandom(index=1)
    )
    record = coordinator.trigger(0)
    assert record.enter_kind == ENTER_CHOICES[1]
    assert record.exit_kind == EXIT_CHOICES[1]


def test_default_rng_is_numpy(registry, book):
    from soundmatrix.core.palette import BackgroundCycle
    from soundmatrix.core.trigger import TriggerCoordinator

    coordinator = TriggerCoordinator(registry, BackgroundCycle(), book.designs, lambda: (WIDTH, HEIGHT))
    record = coordinator.trigger(1)
    assert record.enter_kind in ENTER_CHOICES
    assert 0.99 <= record.base_scale <= 1.01


def test_design_kinds_override_random_choice(registry, fixed_rng):
    from soundmatrix.core.palette import BackgroundCycle
    from soundmatrix.core.trigger import TriggerCoordinator

    book = DesignBook(enter_kind=EnterKind.FLIP_IN, exit_kind=ExitKind.FLIP_OUT)
    coordinator = TriggerCoordinator(
        registry, BackgroundCycle(), book.designs, lambda: (WIDTH, HEIGHT), rng=fixed_rng
    )
    record = coordinator.trigger(9)
    assert record.enter_kind == EnterKind.FLIP_IN
    assert record.exit_kind == ExitKind.FLIP_OUT


def _matrix(**kwargs):
    book = DesignBook()
    kwargs.setdefault("rng", FixedRandom())
    kwargs.setdefault("clock", lambda: 0.0)
    return SoundMatrix(book.designs, lambda: (WIDTH, HEIGHT), **kwargs), book


def test_matrix_ignores_cells_outside_the_grid(caplog):
    matrix, book = _matrix()
    assert matrix.trigger(36) is None
    assert matrix.trigger(-1) is None
    assert book.built == []
    assert len(matrix.registry) == 0
    assert "outside the grid" in caplog.text


def test_matrix_needs_a_design_per_cell():
    book = DesignBook(count=10)
    with pytest.raises(ValueError):
        SoundMatrix(book.designs, lambda: (WIDTH, HEIGHT))


def test_matrix_honours_smaller_grid():
    book = DesignBook(count=4)
    config = EngineConfig(cols=2, rows=2, max_live=3)
    matrix = SoundMatrix(book.designs, lambda: (WIDTH, HEIGHT), config=config, rng=FixedRandom())
    for cell in range(4):
        matrix.trigger(cell)
    assert matrix.registry.cells() == [1, 2, 3]
    assert matrix.trigger(4) is None


def test_matrix_keyboard_triggers_cell(caplog):
    matrix, book = _matrix()
    assert matrix.gestures.key_down("z")
    assert matrix.registry.cells() == [0]
    assert book.built[0].label == 0


def test_matrix_tick_reaps_after_a_lifetime():
    matrix, _ = _matrix()
    matrix.trigger(5)
    for _ in range(62):
        matrix.tick()
    assert matrix.registry.cells() == [5]
    assert matrix.tick() == 1
    assert len(matrix.registry) == 0


def test_matrix_shutdown_releases_everything(caplog):
    matrix, book = _matrix()
    for cell in (0, 1, 2):
        matrix.trigger(cell)
    with caplog.at_level("INFO", logger="soundmatrix"):
        matrix.shutdown()
    assert len(matrix.registry) == 0
    assert [h.destroyed for h in book.built] == [1, 1, 1]
    assert "Released 3 live shapes" in caplog.text


def test_independent_matrices_share_nothing():
    first, _ = _matrix()
    second, _ = _matrix()
    first.trigger(0)
    assert len(second.registry) == 0
    assert second.background.index == 0
