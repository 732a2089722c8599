#!/usr/bin/env python3
"""
Orbit evaluation for fixed circular paths.

Orbits are not integrated. A body's position is a closed-form function of the
elapsed simulation time, so evaluation is stateless and can be restarted at any
time without drift:

    x = r * cos(t * w)
    z = r * sin(t * w)

Positions are computed in the orbital plane as (x, z) pairs and embedded into
the 3D scene at a constant height by `embed`.
"""
import math

from .constants import ORBITAL_PLANE_HEIGHT
from .vector_utils import Vec2, Vec3


def evaluate(elapsed_time: float, radius: float, angular_speed: float) -> Vec2:
    """
    Position on a circular orbit centered at the origin of the orbital plane.

    Args:
        elapsed_time: Simulation time since session start.
        radius: Orbit radius; 0 is a valid fixed point at the center.
        angular_speed: Radians per unit of simulation time; 0 pins the body at angle 0.

    Returns:
        (x, z) offset from the parent's center.
    """
    angle = elapsed_time * angular_speed
    return (radius * math.cos(angle), radius * math.sin(angle))


def embed(point: Vec2, height: float = ORBITAL_PLANE_HEIGHT) -> Vec3:
    """Lift an orbital-plane point into scene coordinates (x, y, z)."""
    return (point[0], height, point[1])
