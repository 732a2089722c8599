import math

import pytest

from orrery.camera import HOME_VIEWPOINT, Camera3D, ViewpointController, focus_viewpoint
from orrery.vector_utils import vec3_len, vec3_sub


def test_focus_viewpoint_offset_scales_with_size():
    vp = focus_viewpoint((3.0, 0.0, -2.0), 0.5)
    assert vp.position == (3.0, 2.5, 0.5)
    assert vp.target == (3.0, 0.0, -2.0)


def test_controller_counts_repositions():
    camera = Camera3D()
    controller = ViewpointController(camera)
    controller.on_focus_enter((1.0, 0.0, 1.0), 1.0)
    assert camera.position == (1.0, 5.0, 6.0)
    controller.on_focus_exit()
    assert camera.viewpoint == HOME_VIEWPOINT
    assert controller.reposition_count == 2


def test_target_projects_to_viewport_center():
    camera = Camera3D(position=(0.0, 20.0, 25.0))
    camera.set_viewport_size(800, 600)
    px, py, depth = camera.world_to_screen((0.0, 0.0, 0.0))
    assert abs(px - 400) <= 1 and abs(py - 300) <= 1
    assert depth == pytest.approx(math.hypot(20.0, 25.0))


def test_point_behind_camera_is_not_projected():
    camera = Camera3D(position=(0.0, 0.0, 15.0))
    assert camera.world_to_screen((0.0, 0.0, 20.0)) is None


def test_looking_straight_down_still_projects():
    camera = Camera3D(position=(0.0, 10.0, 0.0))
    assert camera.world_to_screen((0.0, 0.0, 0.0)) is not None


def test_projected_radius_shrinks_with_depth():
    camera = Camera3D()
    assert camera.projected_radius(1.0, 10.0) > camera.projected_radius(1.0, 20.0)
    assert camera.projected_radius(1.0, 0.0) == 0.0


def test_zoom_moves_toward_target():
    camera = Camera3D(position=(0.0, 0.0, 10.0))
    camera.zoom(2.0)
    assert camera.position == pytest.approx((0.0, 0.0, 5.0))


def test_orbit_keeps_distance():
    camera = Camera3D(position=(0.0, 20.0, 25.0))
    before = vec3_len(vec3_sub(camera.position, camera.target))
    camera.orbit(0.7, 0.2)
    after = vec3_len(vec3_sub(camera.position, camera.target))
    assert after == pytest.approx(before)


def test_pan_moves_position_and_target_together():
    camera = Camera3D(position=(0.0, 0.0, 10.0))
    offset = vec3_sub(camera.position, camera.target)
    camera.pan_pixels(50, -20)
    assert vec3_sub(camera.position, camera.target) == pytest.approx(offset)
    assert camera.target != (0.0, 0.0, 0.0)
