from datetime import datetime

import pytest

from orrery.core.config import J2000_JD, ClockParameters
from orrery.core.time_manager import SimulationClock


def test_tick_accumulates_dilated_simulated_time():
    clock = SimulationClock(ClockParameters(time_dilation=2.0, days_per_real_second=3.0))

    clock.tick(0.5)

    assert clock.elapsed_seconds == pytest.approx(0.5 * 2.0 * 3.0 * 86400.0)
    assert clock.julian_date == pytest.approx(J2000_JD + 3.0)


def test_default_pace_is_one_year_per_18_seconds():
    clock = SimulationClock()

    clock.tick(18.0)

    assert clock.elapsed_days == pytest.approx(365.256, rel=1e-9)


def test_pause_freezes_simulated_time_but_not_animation_time():
    clock = SimulationClock()
    clock.tick(1.0)
    frozen = clock.elapsed_seconds

    assert clock.toggle_pause() is True
    clock.tick(1.0)
    clock.tick(1.0)

    assert clock.elapsed_seconds == frozen
    assert clock.animation_time == pytest.approx(3.0)

    clock.toggle_pause()
    clock.tick(1.0)
    assert clock.elapsed_seconds == pytest.approx(2 * frozen)


def test_negative_dilation_runs_time_backwards():
    clock = SimulationClock(ClockParameters(time_dilation=-1.0))

    clock.tick(1.0)

    assert clock.elapsed_seconds < 0
    assert clock.julian_date < J2000_JD


def test_integration_delta_is_consumed_once():
    clock = SimulationClock(ClockParameters(days_per_real_second=1.0))
    clock.tick(0.25)

    assert clock.consume_integration_delta() == pytest.approx(0.25 * 86400.0)
    assert clock.consume_integration_delta() == 0.0

    clock.tick(0.25)
    clock.tick(0.25)
    assert clock.consume_integration_delta() == pytest.approx(0.5 * 86400.0)


def test_speed_adjustment_ignored_while_paused():
    clock = SimulationClock()

    clock.speed_up()
    clock.speed_up()
    assert clock.time_dilation == pytest.approx(1.2)

    clock.toggle_pause()
    clock.slow_down()
    assert clock.time_dilation == pytest.approx(1.2)

    clock.toggle_pause()
    for _ in range(15):
        clock.slow_down()
    assert clock.time_dilation == pytest.approx(-0.3)


def test_reset_returns_to_epoch():
    clock = SimulationClock(ClockParameters(start_paused=False))
    clock.tick(2.0)
    clock.speed_up()

    clock.reset()

    assert clock.elapsed_seconds == 0.0
    assert clock.time_dilation == 1.0
    assert clock.julian_date == J2000_JD


def test_julian_date_conversions():
    assert SimulationClock.datetime_to_jd(datetime(2000, 1, 1, 12)) == pytest.approx(J2000_JD)
    assert SimulationClock.datetime_to_jd(datetime(2026, 1, 8)) == pytest.approx(2461048.5)

    dt = SimulationClock.jd_to_datetime(2461048.5)
    assert (dt.year, dt.month, dt.day, dt.hour) == (2026, 1, 8, 0)


def test_current_utc_tracks_simulated_time():
    clock = SimulationClock(ClockParameters(days_per_real_second=1.0))

    assert clock.current_utc == datetime(2000, 1, 1, 12)
    clock.tick(0.5)
    assert clock.current_utc == datetime(2000, 1, 2, 0)
