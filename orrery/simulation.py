#!/usr/bin/env python3
"""
Scene state and the per-frame update.

What this module does
- Scene owns the central body and the ordered orbiting bodies; each body owns
  its satellites.
- SimulationController advances the scene once per frame, routes pointer
  events to the focus state machine, and answers read-only queries for the
  renderer (snapshot, hover labels, info overlay).

Frame update, for each orbiting body:
1) If not focused: position = evaluate(t, radius, base_speed * multiplier).
   A focused body keeps the position it had when focus was entered.
2) rotation += delta * SELF_ROTATION_RATE, focused or not.
3) Each satellite: position = parent position + evaluate(t, r_sat, w_sat),
   where w_sat ignores the speed multiplier unless the scene opts in.

Threading
- Everything runs on the frame loop's thread. Pointer events are applied as
  they arrive, so all events delivered before a frame are visible to it.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple

from .camera import ViewpointController
from .clock import FrameClock
from .constants import LABEL_HEIGHT_FACTOR, OVERLAY_SIDE_FACTOR, SELF_ROTATION_RATE
from .data_models import BodyFacts, CentralBody, FocusState, OrbitingBody
from .facts import ConfigurationError, facts_for, validate_facts
from .focus import FocusController
from .orbit import embed, evaluate
from .speed import SpeedControl
from .vector_utils import Vec3, vec_add

logger = logging.getLogger(__name__)


@dataclass
class Scene:
    bodies: List[OrbitingBody]
    central: CentralBody = field(default_factory=CentralBody)
    name: str = "Scene"
    scale_satellites_with_speed: bool = False

    def __post_init__(self):
        seen = set()
        for b in self.bodies:
            if b.name in seen:
                raise ConfigurationError(f"Duplicate body name: {b.name}")
            seen.add(b.name)
            if b.orbit_radius < 0:
                raise ConfigurationError(f"{b.name}: orbit radius must be >= 0")
            if b.size <= 0:
                raise ConfigurationError(f"{b.name}: size must be positive")

    def find(self, name: str) -> Optional[OrbitingBody]:
        for b in self.bodies:
            if b.name == name:
                return b
        return None


@dataclass(frozen=True)
class SatelliteView:
    position: Vec3
    size: float


@dataclass(frozen=True)
class BodyView:
    name: str
    position: Vec3
    rotation: float
    size: float
    color: Tuple[int, int, int]
    focused: bool
    hovered: bool
    satellites: Tuple[SatelliteView, ...]


@dataclass(frozen=True)
class HoverLabel:
    name: str
    anchor: Vec3


@dataclass(frozen=True)
class InfoOverlay:
    name: str
    mass: str
    diameter: str
    day_length: str
    moons: int
    anchor: Vec3

    def lines(self) -> List[str]:
        return [
            self.name,
            f"Mass: {self.mass}",
            f"Diameter: {self.diameter}",
            f"Day Length: {self.day_length}",
            f"Moons: {self.moons}",
        ]


class SimulationController:
    """
    Drives a Scene from frame callbacks and pointer events.

    The speed control is passed in rather than read from module state so the
    update can be exercised in isolation.
    """

    def __init__(self, scene: Scene, facts: Mapping[str, BodyFacts],
                 speed: SpeedControl, viewpoint: ViewpointController):
        validate_facts((b.name for b in scene.bodies), facts)
        self.scene = scene
        self.facts: Dict[str, BodyFacts] = dict(facts)
        self.speed = speed
        self.viewpoint = viewpoint
        self.focus = FocusController(viewpoint)
        self.elapsed = 0.0
        logger.info("Scene '%s' ready with %d orbiting bodies", scene.name, len(scene.bodies))

    def attach(self, clock: FrameClock) -> None:
        clock.on_frame(self.update)

    # -----------------------
    # Frame update
    # -----------------------

    def update(self, elapsed: float, delta: float) -> None:
        self.elapsed = elapsed
        multiplier = self.speed.value
        sat_multiplier = multiplier if self.scene.scale_satellites_with_speed else 1.0
        for body in self.scene.bodies:
            if body.focus is FocusState.UNFOCUSED:
                body.position = evaluate(elapsed, body.orbit_radius, body.angular_speed * multiplier)
            body.rotation += delta * SELF_ROTATION_RATE
            for sat in body.satellites:
                offset = evaluate(elapsed, sat.orbit_radius, sat.angular_speed * sat_multiplier)
                sat.position = vec_add(body.position, offset)

    # -----------------------
    # Pointer events
    # -----------------------

    def on_enter(self, name: str) -> bool:
        body = self.scene.find(name)
        if body is None:
            return False
        body.hovered = True
        return True

    def on_leave(self, name: str) -> bool:
        body = self.scene.find(name)
        if body is None:
            return False
        body.hovered = False
        return True

    def on_select(self, name: str) -> Optional[FocusState]:
        """Toggle focus on the named body; unknown names are ignored."""
        body = self.scene.find(name)
        if body is None:
            logger.debug("Select on unknown body %r ignored", name)
            return None
        return self.focus.select(body)

    # -----------------------
    # Read-only queries
    # -----------------------

    def focused_body(self) -> Optional[OrbitingBody]:
        return self.focus.focused

    def snapshot(self) -> List[BodyView]:
        views = []
        for b in self.scene.bodies:
            sats = tuple(SatelliteView(embed(s.position), s.size) for s in b.satellites)
            views.append(BodyView(
                name=b.name,
                position=embed(b.position),
                rotation=b.rotation,
                size=b.size,
                color=b.color,
                focused=b.focused,
                hovered=b.hovered,
                satellites=sats,
            ))
        return views

    def hover_labels(self) -> List[HoverLabel]:
        labels = []
        for b in self.scene.bodies:
            if b.hovered:
                x, y, z = embed(b.position)
                labels.append(HoverLabel(b.name, (x, y + b.size * LABEL_HEIGHT_FACTOR, z)))
        return labels

    def info_overlay(self) -> Optional[InfoOverlay]:
        body = self.focus.focused
        if body is None:
            return None
        f = facts_for(body.name, self.facts)
        x, y, z = embed(body.position)
        return InfoOverlay(
            name=body.name,
            mass=f.mass,
            diameter=f.diameter,
            day_length=f.day_length,
            moons=f.moons,
            anchor=(x + body.size * OVERLAY_SIDE_FACTOR, y, z),
        )
