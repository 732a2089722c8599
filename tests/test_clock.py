import pytest

from orrery.clock import FrameClock


def _source(values):
    it = iter(values)
    return lambda: next(it)


def test_tick_reports_elapsed_and_delta():
    clock = FrameClock(time_source=_source([10.0, 10.5, 11.25]))
    assert clock.tick() == pytest.approx((0.5, 0.5))
    assert clock.tick() == pytest.approx((1.25, 0.75))


def test_callbacks_run_in_registration_order():
    calls = []
    clock = FrameClock(time_source=_source([0.0, 1.0]))
    clock.on_frame(lambda t, dt: calls.append(("a", t, dt)))
    clock.on_frame(lambda t, dt: calls.append(("b", t, dt)))
    clock.tick()
    assert calls == [("a", 1.0, 1.0), ("b", 1.0, 1.0)]


def test_backwards_time_source_gives_zero_delta():
    clock = FrameClock(time_source=_source([5.0, 4.0, 6.0]))
    assert clock.tick() == (0.0, 0.0)
    assert clock.tick() == pytest.approx((2.0, 2.0))
