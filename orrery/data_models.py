#!/usr/bin/env python3
"""
Data models for the Orrery.

This module defines the body hierarchy shared between the simulation, the
renderer and the UI: a single central body at the origin, orbiting bodies on
fixed circular paths around it, and satellites orbiting those bodies.

Units and usage
- Positions are orbital-plane (x, z) pairs; the renderer lifts them to 3D with
  `orbit.embed`.
- Angular speeds are radians per unit of simulation time.
- Orbit radius and base angular speed of a body never change after creation;
  position, rotation, focus and hover are the only runtime state.
"""
import enum
from dataclasses import dataclass, field
from typing import List, Tuple

from .constants import (
    DEFAULT_BODY_COLOR,
    SATELLITE_BASE_SPEED,
    SATELLITE_RADIUS_FACTOR,
    SATELLITE_RADIUS_STEP,
    SATELLITE_SIZE,
    SATELLITE_SPEED_STEP,
)
from .orbit import evaluate
from .vector_utils import Vec2, Vec3, vec_add


class FocusState(enum.Enum):
    UNFOCUSED = "unfocused"
    FOCUSED = "focused"


@dataclass(frozen=True)
class BodyFacts:
    """Display-only physical facts shown in the info overlay."""
    mass: str = ""
    diameter: str = ""
    day_length: str = ""
    moons: int = 0


@dataclass
class Satellite:
    """
    A moon of an orbiting body.

    Fields:
    - index: Position among the parent's satellites (0 is innermost)
    - orbit_radius: Distance from the parent's center
    - angular_speed: Fixed angular speed, independent of the parent's focus
    - size: Rendered sphere radius
    - position: Current orbital-plane position, refreshed every frame
    """
    index: int
    orbit_radius: float
    angular_speed: float
    size: float = SATELLITE_SIZE
    position: Vec2 = (0.0, 0.0)


def make_satellites(count: int, parent_size: float) -> List[Satellite]:
    """Build the satellite ladder for a body; radius and speed grow with the index."""
    return [
        Satellite(
            index=i,
            orbit_radius=parent_size * SATELLITE_RADIUS_FACTOR + i * SATELLITE_RADIUS_STEP,
            angular_speed=SATELLITE_BASE_SPEED + i * SATELLITE_SPEED_STEP,
        )
        for i in range(max(0, int(count)))
    ]


_FIXED_KINEMATICS = ("orbit_radius", "angular_speed")


@dataclass
class OrbitingBody:
    """
    A body on a circular orbit around the central body.

    Fields:
    - name: Key into the display facts table
    - orbit_radius: Distance from the central body (fixed)
    - angular_speed: Base angular speed before the global multiplier (fixed)
    - size: Rendered sphere radius
    - color: RGB tuple used for rendering
    - moon_count: Number of satellites generated at construction
    - satellites: Owned satellite sequence, ordered by index
    - position: Current orbital-plane position; starts at (orbit_radius, 0)
    - rotation: Self-rotation angle in radians (unbounded)
    - focus: Focus state; only FocusController changes it
    - hovered: Pointer is over the body (presentation only)
    """
    name: str
    orbit_radius: float
    angular_speed: float
    size: float
    color: Tuple[int, int, int] = DEFAULT_BODY_COLOR
    moon_count: int = 0
    satellites: List[Satellite] = field(init=False)
    position: Vec2 = field(init=False)
    rotation: float = 0.0
    focus: FocusState = FocusState.UNFOCUSED
    hovered: bool = False

    def __post_init__(self):
        self.satellites = make_satellites(self.moon_count, self.size)
        # Start where the orbit places the body at t = 0, moons likewise
        self.position = evaluate(0.0, self.orbit_radius, self.angular_speed)
        for sat in self.satellites:
            sat.position = vec_add(self.position, evaluate(0.0, sat.orbit_radius, sat.angular_speed))
        self._initialized = True

    def __setattr__(self, name, value):
        if name in _FIXED_KINEMATICS and getattr(self, "_initialized", False):
            raise AttributeError(f"{name} is fixed for the lifetime of {self.name}")
        super().__setattr__(name, value)

    @property
    def focused(self) -> bool:
        return self.focus is FocusState.FOCUSED


@dataclass(frozen=True)
class CentralBody:
    """Root of the hierarchy. Never moves, never focusable."""
    name: str = "Sun"
    size: float = 1.0
    color: Tuple[int, int, int] = (255, 204, 0)

    @property
    def position(self) -> Vec3:
        return (0.0, 0.0, 0.0)
