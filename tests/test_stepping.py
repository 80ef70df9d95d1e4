import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from nbodymap.stepping import StepController


def test_defaults_are_converged():
    ctl = StepController()
    assert ctl.step_size == pytest.approx(0.1)
    assert ctl.converged() is True


def test_boost_small_step_jumps_to_two():
    ctl = StepController(step_size=0.3)
    ctl.boost()
    assert ctl.step_size == 2


@given(st.floats(min_value=1.0, max_value=1e6))
def test_boost_large_step_doubles(step):
    ctl = StepController(step_size=step)
    ctl.boost()
    assert ctl.step_size == 2 * step


@given(st.floats(min_value=0.0, max_value=100.0), st.floats(min_value=0.0, max_value=100.0))
def test_limit_is_minimum(step, maximum):
    ctl = StepController(step_size=step)
    ctl.limit(maximum)
    assert ctl.step_size == min(step, maximum)


def test_energy_drop_counts_progress_before_growing():
    ctl = StepController(step_size=1.0, energy=100.0)
    for expected in (1, 2, 3):
        ctl.update(ctl.energy - 1)
        assert ctl.progress == expected
        assert ctl.step_size == 1.0
    ctl.update(ctl.energy - 1)
    assert ctl.progress == 3
    assert ctl.step_size == pytest.approx(1.3)


def test_growth_stops_at_limit():
    ctl = StepController(step_size=5.0, energy=100.0, progress=3)
    ctl.update(50.0)
    assert ctl.step_size == 5.0
    assert ctl.energy == 50.0


def test_energy_rise_resets_progress_and_shrinks():
    ctl = StepController(step_size=1.0, energy=10.0, progress=3)
    ctl.update(20.0)
    assert ctl.progress == 0
    assert ctl.step_size == pytest.approx(0.95)
    assert ctl.energy == 20.0


def test_equal_energy_counts_as_rise():
    ctl = StepController(step_size=1.0, energy=10.0, progress=2)
    ctl.update(10.0)
    assert ctl.progress == 0
    assert ctl.step_size < 1.0


def test_shrink_stops_at_floor():
    ctl = StepController(step_size=0.025, energy=1.0)
    ctl.update(2.0)
    assert ctl.step_size == 0.025


@pytest.mark.parametrize("bad", [math.inf, math.nan])
def test_non_finite_energy_resets_step(bad):
    ctl = StepController(step_size=0.5, energy=1.0, progress=1)
    ctl.update(bad)
    assert ctl.step_size == 2
    assert ctl.progress == 1
    assert not math.isfinite(ctl.energy)


def test_after_nan_energy_next_update_shrinks():
    ctl = StepController(step_size=1.0, energy=math.nan, progress=2)
    ctl.update(1.0)
    assert ctl.progress == 0
    assert ctl.step_size == pytest.approx(0.95)


@pytest.mark.parametrize("step,expected", [(0.1, True), (0.05, True), (0.11, False), (2.0, False)])
def test_converged_threshold(step, expected):
    assert StepController(step_size=step).converged() is expected


def test_repeated_rises_reach_convergence():
    ctl = StepController(step_size=1.0, energy=0.0)
    for energy in range(1, 200):
        ctl.update(float(energy))
    assert ctl.converged() is True
    assert ctl.step_size > 0.02