import pytest

from greenhouse_sim.core.clock import TimeClock


def test_starts_on_day_one_hour_zero():
    clock = TimeClock()
    assert clock.day == 1
    assert clock.hour == 0


def test_partial_hour_carries_remainder():
    clock = TimeClock(seconds_per_game_hour=0.5)
    assert clock.advance(0.75) is False
    assert clock.hour == 1
    assert clock.elapsed == pytest.approx(0.25)
    clock.advance(0.25)
    assert clock.hour == 2
    assert clock.elapsed == pytest.approx(0.0)


def test_small_frames_do_not_drift():
    clock = TimeClock(seconds_per_game_hour=0.5)
    for _ in range(8):
        clock.advance(0.125)
    assert clock.hour == 2


def test_day_boundary_reported_once():
    clock = TimeClock(seconds_per_game_hour=0.5)
    assert clock.advance(0.5 * 23) is False
    assert clock.hour == 23
    assert clock.advance(0.5) is True
    assert clock.day == 2
    assert clock.hour == 0
    assert clock.days_crossed == 1


def test_large_delta_crosses_several_days():
    clock = TimeClock(seconds_per_game_hour=0.5)
    assert clock.advance(0.5 * 24 * 3 + 0.5 * 5) is True
    assert clock.day == 4
    assert clock.hour == 5
    assert clock.days_crossed == 3
    assert clock.advance(0.1) is False
    assert clock.days_crossed == 0


def test_negative_delta_is_ignored():
    clock = TimeClock()
    clock.advance(-10)
    assert (clock.day, clock.hour, clock.elapsed) == (1, 0, 0.0)


def test_seconds_until_day_end():
    clock = TimeClock(seconds_per_game_hour=0.5)
    clock.advance(0.5 * 20)
    assert clock.seconds_until_day_end() == pytest.approx(2.0)
    assert clock.day_fraction == pytest.approx(20 / 24)


@pytest.mark.parametrize("delta", [float("inf"), float("-inf"), float("nan")])
def test_non_finite_delta_is_rejected(delta):
    clock = TimeClock()
    with pytest.raises(ValueError):
        clock.advance(delta)
    assert (clock.day, clock.hour) == (1, 0)
