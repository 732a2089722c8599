import pytest

from orrery.constants import SELF_ROTATION_RATE
from orrery.data_models import FocusState, OrbitingBody
from orrery.orbit import evaluate


def _earth(sim):
    return sim.scene.find("Earth")


def test_unfocused_body_follows_orbit(make_sim):
    sim = make_sim()
    sim.update(2.0, 0.016)
    assert _earth(sim).position == pytest.approx(evaluate(2.0, 5.0, 1.0))


def test_speed_multiplier_scales_orbit(make_sim):
    sim = make_sim(speed=0.02)
    sim.update(2.0, 0.016)
    assert _earth(sim).position == pytest.approx(evaluate(2.0, 5.0, 2.0))


def test_speed_change_applies_next_frame(make_sim):
    sim = make_sim()
    sim.speed.set(0.03)
    sim.update(1.5, 0.016)
    assert _earth(sim).position == pytest.approx(evaluate(1.5, 5.0, 3.0))


def test_focus_freezes_position(make_sim):
    sim = make_sim()
    sim.update(1.0, 0.016)
    frozen = _earth(sim).position
    assert sim.on_select("Earth") is FocusState.FOCUSED
    sim.update(4.0, 0.016)
    assert _earth(sim).position == frozen
    assert _earth(sim).position != pytest.approx(evaluate(4.0, 5.0, 1.0))


def test_unfocus_jumps_to_current_orbit_position(make_sim):
    sim = make_sim()
    sim.update(1.0, 0.016)
    sim.on_select("Earth")
    sim.update(4.0, 0.016)
    assert sim.on_select("Earth") is FocusState.UNFOCUSED
    sim.update(4.0, 0.016)
    assert _earth(sim).position == pytest.approx(evaluate(4.0, 5.0, 1.0))


def test_rotation_continues_while_focused(make_sim):
    sim = make_sim()
    sim.update(1.0, 0.1)
    sim.on_select("Earth")
    sim.update(1.2, 0.2)
    assert _earth(sim).rotation == pytest.approx(0.3 * SELF_ROTATION_RATE)


def test_satellite_tracks_frozen_parent(make_sim):
    sim = make_sim()
    sim.update(1.0, 0.016)
    sim.on_select("Earth")
    parent = _earth(sim).position
    sim.update(3.0, 0.016)
    sat = _earth(sim).satellites[0]
    assert sat.orbit_radius == pytest.approx(0.5)
    ox, oz = evaluate(3.0, sat.orbit_radius, sat.angular_speed)
    assert sat.position == pytest.approx((parent[0] + ox, parent[1] + oz))


def test_satellite_speed_ignores_multiplier_by_default(make_sim):
    sim = make_sim(speed=0.2)
    sim.update(2.0, 0.016)
    earth = _earth(sim)
    sat = earth.satellites[0]
    ox, oz = evaluate(2.0, sat.orbit_radius, sat.angular_speed)
    assert sat.position == pytest.approx((earth.position[0] + ox, earth.position[1] + oz))


def test_satellite_speed_scales_when_enabled(make_sim):
    sim = make_sim(speed=0.2, scale_satellites=True)
    sim.update(2.0, 0.016)
    earth = _earth(sim)
    sat = earth.satellites[0]
    ox, oz = evaluate(2.0, sat.orbit_radius, sat.angular_speed * 0.2)
    assert sat.position == pytest.approx((earth.position[0] + ox, earth.position[1] + oz))


def _two_bodies():
    return [
        OrbitingBody("Earth", orbit_radius=5.0, angular_speed=100.0, size=0.5, moon_count=1),
        OrbitingBody("Mars", orbit_radius=7.0, angular_speed=50.0, size=0.3, moon_count=2),
    ]


def test_focus_is_exclusive(make_sim):
    sim = make_sim(bodies=_two_bodies())
    sim.update(1.0, 0.016)
    sim.on_select("Earth")
    sim.on_select("Mars")
    earth, mars = sim.scene.find("Earth"), sim.scene.find("Mars")
    assert earth.focus is FocusState.UNFOCUSED
    assert mars.focus is FocusState.FOCUSED
    assert sim.focused_body() is mars
    sim.update(2.0, 0.016)
    assert earth.position == pytest.approx(evaluate(2.0, 5.0, 1.0))


def test_no_viewpoint_moves_without_focus_events(make_sim):
    sim = make_sim()
    for i in range(50):
        sim.update(i * 0.1, 0.1)
    assert sim.viewpoint.reposition_count == 0


def test_each_focus_toggle_moves_viewpoint_once(make_sim):
    sim = make_sim(bodies=_two_bodies())
    sim.update(1.0, 0.016)
    sim.on_select("Earth")
    assert sim.viewpoint.reposition_count == 1
    for i in range(10):
        sim.update(1.0 + i, 0.016)
    assert sim.viewpoint.reposition_count == 1
    sim.on_select("Mars")
    assert sim.viewpoint.reposition_count == 2
    sim.on_select("Mars")
    assert sim.viewpoint.reposition_count == 3


def test_focus_moves_camera_behind_body(make_sim):
    sim = make_sim()
    sim.update(1.0, 0.016)
    x, z = _earth(sim).position
    sim.on_select("Earth")
    camera = sim.viewpoint.camera
    assert camera.position == pytest.approx((x, 1.25, z + 1.25))
    assert camera.target == pytest.approx((x, 0.0, z))
    sim.on_select("Earth")
    assert camera.position == (0.0, 20.0, 25.0)
    assert camera.target == (0.0, 0.0, 0.0)


def test_release_sends_camera_home(make_sim):
    sim = make_sim()
    sim.update(1.0, 0.016)
    sim.on_select("Earth")
    sim.focus.release()
    assert sim.focused_body() is None
    assert sim.viewpoint.camera.position == (0.0, 20.0, 25.0)
    sim.focus.release()
    assert sim.viewpoint.reposition_count == 2


def test_unknown_body_events_are_ignored(make_sim):
    sim = make_sim()
    assert sim.on_select("Pluto") is None
    assert sim.on_enter("Pluto") is False
    assert sim.on_leave("Pluto") is False
    assert sim.viewpoint.reposition_count == 0


def test_hover_does_not_affect_kinematics(make_sim):
    sim = make_sim()
    assert sim.on_enter("Earth")
    sim.update(2.0, 0.016)
    assert _earth(sim).position == pytest.approx(evaluate(2.0, 5.0, 1.0))
    labels = sim.hover_labels()
    assert [l.name for l in labels] == ["Earth"]
    x, z = _earth(sim).position
    assert labels[0].anchor == pytest.approx((x, 0.25 * 1.5, z))
    sim.on_leave("Earth")
    assert sim.hover_labels() == []


def test_overlay_only_while_focused(make_sim):
    sim = make_sim()
    sim.update(1.0, 0.016)
    assert sim.info_overlay() is None
    sim.on_select("Earth")
    overlay = sim.info_overlay()
    assert overlay.name == "Earth"
    assert overlay.mass == "5.97e24 kg"
    assert overlay.day_length == "24 hours"
    assert overlay.moons == 1
    assert overlay.lines()[1] == "Mass: 5.97e24 kg"
    sim.on_select("Earth")
    assert sim.info_overlay() is None


def test_snapshot_embeds_positions(make_sim):
    sim = make_sim()
    sim.update(1.0, 0.016)
    sim.on_enter("Earth")
    (view,) = sim.snapshot()
    x, z = _earth(sim).position
    assert view.position == (x, 0.0, z)
    assert view.hovered and not view.focused
    assert len(view.satellites) == 1


def test_attach_runs_update_on_tick(make_sim):
    from orrery.clock import FrameClock

    times = iter([0.0, 2.0])
    clock = FrameClock(time_source=lambda: next(times))
    sim = make_sim()
    sim.attach(clock)
    clock.tick()
    assert sim.elapsed == pytest.approx(2.0)
    assert _earth(sim).position == pytest.approx(evaluate(2.0, 5.0, 1.0))


def test_select_before_first_frame_freezes_at_orbit_start(make_sim):
    sim = make_sim()
    sim.on_select("Earth")
    sim.update(3.0, 0.016)
    assert _earth(sim).position == pytest.approx((5.0, 0.0))
    assert sim.viewpoint.camera.target == pytest.approx((5.0, 0.0, 0.0))
