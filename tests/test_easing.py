import math

import pytest

from soundmatrix.core.easing import (
    BOUNCE_D,
    clamp01,
    ease_in_back,
    ease_out_back,
    ease_out_bounce,
    ease_out_elastic,
)

CURVES = [ease_out_back, ease_in_back, ease_out_elastic, ease_out_bounce]


@pytest.mark.parametrize("fn", CURVES)
def test_curves_start_at_zero_and_end_at_one(fn):
    assert fn(0.0) == pytest.approx(0.0, abs=1e-12)
    assert fn(1.0) == pytest.approx(1.0, abs=1e-12)


@pytest.mark.parametrize("fn", CURVES)
@pytest.mark.parametrize("t", [-1e6, -3.0, -0.5, 1.5, 7.0, 1e6])
def test_curves_are_total_outside_unit_interval(fn, t):
    value = fn(t)
    assert isinstance(value, float)


def test_ease_out_back_overshoots():
    peak = max(ease_out_back(i / 100) for i in range(101))
    assert peak > 1.05


def test_ease_in_back_pulls_back_first():
    assert ease_in_back(0.2) < 0


def test_ease_out_elastic_oscillates_around_one():
    samples = [ease_out_elastic(i / 200) for i in range(1, 200)]
    assert max(samples) > 1.0
    # crossings can land exactly on 1.0, so look for a sign change of s - 1
    assert any((a - 1) * (b - 1) <= 0 and a != b for a, b in zip(samples, samples[1:]))


@pytest.mark.parametrize("boundary", [1 / BOUNCE_D, 2 / BOUNCE_D, 2.5 / BOUNCE_D])
def test_ease_out_bounce_segments_meet(boundary):
    left = ease_out_bounce(boundary - 1e-9)
    right = ease_out_bounce(boundary)
    assert left == pytest.approx(right, abs=1e-6)


def test_ease_out_bounce_stays_in_unit_range():
    for i in range(101):
        assert -1e-12 <= ease_out_bounce(i / 100) <= 1 + 1e-12


def test_clamp01():
    assert clamp01(-2) == 0.0
    assert clamp01(0.25) == 0.25
    assert clamp01(math.inf) == 1.0
