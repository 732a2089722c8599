#!/usr/bin/env python3
"""
Camera utilities: perspective world-to-screen transforms and focus viewpoints.

Camera3D is the free camera the viewport renders through; pointer input may
dolly, pan and orbit it at any time. ViewpointController moves it only when
focus changes: once on entering focus, once on leaving it.
"""
import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

from .constants import (
    FIELD_OF_VIEW_DEG,
    FOCUS_OFFSET_FACTOR,
    HOME_VIEW_POSITION,
    HOME_VIEW_TARGET,
    INITIAL_VIEW_POSITION,
    NEAR_PLANE,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from .vector_utils import (
    Vec3,
    clamp,
    vec3_add,
    vec3_cross,
    vec3_dot,
    vec3_len,
    vec3_norm,
    vec3_scale,
    vec3_sub,
)

logger = logging.getLogger(__name__)

WORLD_UP: Vec3 = (0.0, 1.0, 0.0)
MIN_DISTANCE = 0.05
MAX_DISTANCE = 500.0


@dataclass(frozen=True)
class Viewpoint:
    position: Vec3
    target: Vec3


HOME_VIEWPOINT = Viewpoint(HOME_VIEW_POSITION, HOME_VIEW_TARGET)


def focus_viewpoint(position: Vec3, size: float) -> Viewpoint:
    """Viewpoint above and behind a body, scaled by its visual size."""
    offset = size * FOCUS_OFFSET_FACTOR
    x, y, z = position
    return Viewpoint((x, y + offset, z + offset), position)


class Camera3D:
    """
    Simple perspective camera mapping scene coordinates to screen pixels.
    """

    def __init__(self, position: Vec3 = INITIAL_VIEW_POSITION, target: Vec3 = (0.0, 0.0, 0.0),
                 fov_deg: float = FIELD_OF_VIEW_DEG):
        self.position = tuple(position)
        self.target = tuple(target)
        self.fov_deg = fov_deg
        self.viewport_size = (VIEW_WIDTH, VIEW_HEIGHT)

    def set_viewport_size(self, w: int, h: int) -> None:
        self.viewport_size = (w, h)

    def look_from(self, viewpoint: Viewpoint) -> None:
        self.position = tuple(viewpoint.position)
        self.target = tuple(viewpoint.target)

    @property
    def viewpoint(self) -> Viewpoint:
        return Viewpoint(self.position, self.target)

    def _basis(self) -> Tuple[Vec3, Vec3, Vec3]:
        forward = vec3_norm(vec3_sub(self.target, self.position))
        right = vec3_cross(forward, WORLD_UP)
        if vec3_len(right) < 1e-9:
            # Looking straight up or down; any horizontal axis will do
            right = (1.0, 0.0, 0.0)
        right = vec3_norm(right)
        up = vec3_cross(right, forward)
        return forward, right, up

    def _focal_pixels(self) -> float:
        return (self.viewport_size[1] / 2) / math.tan(math.radians(self.fov_deg) / 2)

    def world_to_screen(self, point: Vec3) -> Optional[Tuple[int, int, float]]:
        """Return (px, py, depth), or None when the point is behind the near plane."""
        forward, right, up = self._basis()
        rel = vec3_sub(point, self.position)
        depth = vec3_dot(rel, forward)
        if depth <= NEAR_PLANE:
            return None
        f = self._focal_pixels()
        px = self.viewport_size[0] / 2 + vec3_dot(rel, right) * f / depth
        py = self.viewport_size[1] / 2 - vec3_dot(rel, up) * f / depth
        return (int(px), int(py), depth)

    def projected_radius(self, radius: float, depth: float) -> float:
        if depth <= 0:
            return 0.0
        return radius * self._focal_pixels() / depth

    def zoom(self, factor: float) -> None:
        """Dolly toward (factor > 1) or away from the target."""
        factor = clamp(factor, 0.05, 20.0)
        offset = vec3_sub(self.position, self.target)
        dist = clamp(vec3_len(offset) / factor, MIN_DISTANCE, MAX_DISTANCE)
        self.position = vec3_add(self.target, vec3_scale(vec3_norm(offset), dist))

    def pan_pixels(self, dx_pixels: float, dy_pixels: float) -> None:
        _, right, up = self._basis()
        scale = vec3_len(vec3_sub(self.position, self.target)) / self._focal_pixels()
        shift = vec3_add(vec3_scale(right, -dx_pixels * scale), vec3_scale(up, dy_pixels * scale))
        self.position = vec3_add(self.position, shift)
        self.target = vec3_add(self.target, shift)

    def orbit(self, yaw: float, pitch: float = 0.0) -> None:
        """Rotate the camera around its target (radians)."""
        ox, oy, oz = vec3_sub(self.position, self.target)
        radius = math.sqrt(ox * ox + oy * oy + oz * oz)
        if radius == 0:
            return
        theta = math.atan2(ox, oz) + yaw
        phi = clamp(math.acos(clamp(oy / radius, -1.0, 1.0)) - pitch, 0.01, math.pi - 0.01)
        offset = (
            radius * math.sin(phi) * math.sin(theta),
            radius * math.cos(phi),
            radius * math.sin(phi) * math.cos(theta),
        )
        self.position = vec3_add(self.target, offset)


class ViewpointController:
    """
    Repositions the camera on focus transitions only; never tracks per frame.

    reposition_count counts every reposition, which makes the once-per-transition
    contract observable.
    """

    def __init__(self, camera: Camera3D):
        self.camera = camera
        self.reposition_count = 0

    def on_focus_enter(self, position: Vec3, size: float) -> Viewpoint:
        return self._reposition(focus_viewpoint(position, size))

    def on_focus_exit(self) -> Viewpoint:
        return self._reposition(HOME_VIEWPOINT)

    def _reposition(self, viewpoint: Viewpoint) -> Viewpoint:
        self.camera.look_from(viewpoint)
        self.reposition_count += 1
        logger.info("Viewpoint moved to %s looking at %s", viewpoint.position, viewpoint.target)
        return viewpoint
