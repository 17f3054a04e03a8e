import pytest

from soundmatrix.core.palette import (
    BG_PALETTE,
    DARK_BACKGROUNDS,
    FG_ON_DARK,
    FG_ON_LIGHT,
    BackgroundCycle,
)
from soundmatrix.utils.colors import luminance


def test_tables_have_one_colour_per_cell():
    assert len(FG_ON_DARK) == 36
    assert len(FG_ON_LIGHT) == 36
    assert len(BG_PALETTE) == 16


def test_dark_set_matches_palette_luminance():
    for color in BG_PALETTE:
        assert (color in DARK_BACKGROUNDS) == (luminance(color) < 0.5)


def test_foregrounds_contrast_with_their_backgrounds():
    assert all(luminance(c) > 0.5 for c in FG_ON_DARK)
    assert all(luminance(c) < 0.5 for c in FG_ON_LIGHT)


def test_cycle_starts_on_first_entry_and_wraps():
    cycle = BackgroundCycle()
    assert cycle.color == BG_PALETTE[0]
    seen = [cycle.advance() for _ in range(16)]
    assert seen == list(BG_PALETTE[1:]) + [BG_PALETTE[0]]
    assert cycle.index == 0


def test_foreground_picks_table_by_darkness():
    cycle = BackgroundCycle()
    assert cycle.is_dark
    assert cycle.foreground(7) == FG_ON_DARK[7]
    cycle.advance()
    assert not cycle.is_dark
    assert cycle.foreground(7) == FG_ON_LIGHT[7]


def test_foreground_wraps_out_of_range_cells():
    cycle = BackgroundCycle()
    assert cycle.foreground(40) == FG_ON_DARK[4]


def test_custom_palette_is_case_insensitive():
    cycle = BackgroundCycle(palette=["#ffffff", "#000000"], dark={"#000000"}, index=1)
    assert cycle.is_dark
    cycle.advance()
    assert not cycle.is_dark


def test_empty_palette_is_rejected():
    with pytest.raises(ValueError):
        BackgroundCycle(palette=[])
