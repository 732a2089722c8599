#!/usr/bin/env python3
"""
Orrery application entry point and UI/renderer coordination.

What this module does
- Loads a scene template and the display facts table, builds the simulation, and
  opens two windows: a Pygame viewport and a Dear PyGui control panel.
- Runs one loop on the main thread. Each iteration delivers pointer events from
  the viewport, ticks the frame clock (which updates the simulation), draws the
  viewport and renders one Dear PyGui frame.

Interaction
- Hover a body: its name label appears above it.
- Click a body: focus it (orbit freezes, camera moves above and behind it, info
  overlay appears). Click it again to return the camera home.
- Wheel: zoom. Right/middle drag: orbit the camera. Arrows: pan.
- The control panel slider sets the orbit speed multiplier.

Running
1) Install dependencies: `pip install pygame dearpygui`
2) Run this module: `python orrery_sim.py --scene solar_system.json`
"""

import argparse
import logging
import math
import random
import sys
from typing import Dict, List, Optional, Tuple

# GUI and Rendering libs
import pygame
from pygame import gfxdraw
import dearpygui.dearpygui as dpg

from orrery.assets import texture_path
from orrery.camera import Camera3D, ViewpointController
from orrery.clock import FrameClock
from orrery.constants import (
    BACKGROUND_COLOR,
    LABEL_COLOR,
    MAX_SPEED_MULTIPLIER,
    MIN_SPEED_MULTIPLIER,
    ORBIT_PATH_COLOR,
    OVERLAY_BG_COLOR,
    SAFE_COORD_LIMIT,
    SATELLITE_COLOR,
    SELECTION_COLOR,
    SPEED_STEP,
    STAR_COLOR,
    STAR_COUNT,
    TARGET_FPS,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from orrery.facts import ConfigurationError
from orrery.orbit import embed, evaluate
from orrery.presets_loader import list_templates, load_facts, load_template
from orrery.simulation import BodyView, Scene, SimulationController
from orrery.speed import SpeedControl

logger = logging.getLogger("orrery_sim")

ORBIT_PATH_SEGMENTS = 96
MIN_PICK_RADIUS_PX = 8

# ============================================================
# Pygame Renderer
# ============================================================

class PygameRenderer:
    """
    Pygame viewport: draws the scene through the camera and turns mouse input
    into hover/select events for the simulation.
    """
    def __init__(self, sim: SimulationController, camera: Camera3D):
        self.sim = sim
        self.camera = camera
        self.surface = None
        self.clock = None
        self.running = True
        self.dragging_view = False
        self.drag_start_screen = (0, 0)
        self.pan_speed_keys = 600  # pixels per second
        self.hovered_name: Optional[str] = None
        self._textures: Dict[str, Optional[pygame.Surface]] = {}
        rng = random.Random(7)
        self._stars = [(rng.random(), rng.random()) for _ in range(STAR_COUNT)]

    def start(self):
        pygame.init()
        pygame.display.set_caption("Orrery - Viewport")
        self.surface = pygame.display.set_mode((VIEW_WIDTH, VIEW_HEIGHT), pygame.RESIZABLE)
        self.camera.set_viewport_size(VIEW_WIDTH, VIEW_HEIGHT)
        self.clock = pygame.time.Clock()

    def stop(self):
        self.running = False
        pygame.quit()

    # -----------------------
    # Input
    # -----------------------

    def pick(self, screen: Tuple[int, int]) -> Optional[str]:
        """
        Nearest body (to the camera) whose projected disc contains the point.
        The central body takes part in the depth test but is never returned,
        so it hides anything behind it.
        """
        central = self.sim.scene.central
        candidates = [(None, central.position, central.size)]
        candidates += [(v.name, v.position, v.size) for v in self.sim.snapshot()]
        best = None
        best_depth = float("inf")
        for name, position, size in candidates:
            proj = self.camera.world_to_screen(position)
            if proj is None:
                continue
            px, py, depth = proj
            r = max(MIN_PICK_RADIUS_PX, self.camera.projected_radius(size, depth))
            if math.hypot(px - screen[0], py - screen[1]) <= r and depth < best_depth:
                best_depth = depth
                best = name
        return best

    def handle_events(self, real_dt: float):
        keys = pygame.key.get_pressed()
        if keys[pygame.K_LEFT]:
            self.camera.pan_pixels(-self.pan_speed_keys * real_dt, 0)
        if keys[pygame.K_RIGHT]:
            self.camera.pan_pixels(self.pan_speed_keys * real_dt, 0)
        if keys[pygame.K_UP]:
            self.camera.pan_pixels(0, self.pan_speed_keys * real_dt)
        if keys[pygame.K_DOWN]:
            self.camera.pan_pixels(0, -self.pan_speed_keys * real_dt)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.surface = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                self.camera.set_viewport_size(event.w, event.h)

            elif event.type == pygame.MOUSEWHEEL:
                self.camera.zoom(1.1 if event.y > 0 else 1.0 / 1.1)

            elif event.type == pygame.MOUSEBUTTONDOWN:
                if event.button == 1:
                    name = self.pick(event.pos)
                    if name is not None:
                        self.sim.on_select(name)
                elif event.button in (2, 3):
                    self.dragging_view = True
                    self.drag_start_screen = event.pos

            elif event.type == pygame.MOUSEBUTTONUP:
                if event.button in (2, 3):
                    self.dragging_view = False

            elif event.type == pygame.MOUSEMOTION:
                if self.dragging_view:
                    dx = event.pos[0] - self.drag_start_screen[0]
                    dy = event.pos[1] - self.drag_start_screen[1]
                    self.camera.orbit(-dx * 0.005, -dy * 0.005)
                    self.drag_start_screen = event.pos

        self._update_hover(pygame.mouse.get_pos())

    def _update_hover(self, mouse: Tuple[int, int]):
        name = self.pick(mouse)
        if name == self.hovered_name:
            return
        if self.hovered_name is not None:
            self.sim.on_leave(self.hovered_name)
        if name is not None:
            self.sim.on_enter(name)
        self.hovered_name = name

    # -----------------------
    # Drawing
    # -----------------------

    def _texture(self, name: str) -> Optional[pygame.Surface]:
        if name not in self._textures:
            path = texture_path(name)
            try:
                self._textures[name] = pygame.image.load(path).convert()
            except (pygame.error, FileNotFoundError) as exc:
                logger.warning("Texture for %s unavailable (%s); using flat color", name, exc)
                self._textures[name] = None
        return self._textures[name]

    @staticmethod
    def _textured_disc(tex: pygame.Surface, radius: int, rotation: float) -> pygame.Surface:
        # Spin about the vertical axis reads as the texture scrolling sideways
        w, h = tex.get_size()
        shift = int((rotation / (2 * math.pi)) * w) % w
        strip = pygame.Surface((w, h))
        strip.blit(tex, (-shift, 0))
        strip.blit(tex, (w - shift, 0))
        d = max(2, radius * 2)
        disc = pygame.transform.smoothscale(strip, (d, d)).convert_alpha()
        mask = pygame.Surface((d, d), pygame.SRCALPHA)
        pygame.draw.circle(mask, (255, 255, 255, 255), (d // 2, d // 2), d // 2)
        disc.blit(mask, (0, 0), special_flags=pygame.BLEND_RGBA_MIN)
        return disc

    def draw_stars(self, surf):
        w, h = self.camera.viewport_size
        for sx, sy in self._stars:
            surf.set_at((int(sx * w), int(sy * h)), STAR_COLOR)

    def draw_orbit_path(self, surf, radius: float):
        pts = []
        for i in range(ORBIT_PATH_SEGMENTS + 1):
            angle = 2 * math.pi * i / ORBIT_PATH_SEGMENTS
            proj = self.camera.world_to_screen(embed(evaluate(angle, radius, 1.0)))
            pt = _safe_point(proj)
            if pt is None:
                # Path passes behind the camera; draw what we have
                if len(pts) > 1:
                    pygame.draw.aalines(surf, ORBIT_PATH_COLOR, False, pts)
                pts = []
                continue
            pts.append(pt)
        if len(pts) > 1:
            pygame.draw.aalines(surf, ORBIT_PATH_COLOR, False, pts)

    def draw_sphere(self, surf, name: str, position, size: float, color, rotation: float = 0.0,
                    highlight: bool = False):
        proj = self.camera.world_to_screen(position)
        pt = _safe_point(proj)
        if pt is None:
            return None
        vis_r = int(max(1, min(self.camera.projected_radius(size, proj[2]), 400)))
        tex = self._texture(name) if vis_r > 3 else None
        try:
            if tex is not None:
                disc = self._textured_disc(tex, vis_r, rotation)
                surf.blit(disc, (pt[0] - disc.get_width() // 2, pt[1] - disc.get_height() // 2))
            else:
                gfxdraw.filled_circle(surf, pt[0], pt[1], vis_r, color)
                gfxdraw.aacircle(surf, pt[0], pt[1], vis_r, color)
                if vis_r > 3:
                    # Meridian marker so spin stays visible without a texture
                    mx = pt[0] + int(vis_r * math.sin(rotation))
                    pygame.draw.line(surf, (0, 0, 0), (mx, pt[1] - vis_r + 1), (mx, pt[1] + vis_r - 1), 1)
            if highlight:
                gfxdraw.aacircle(surf, pt[0], pt[1], vis_r + 4, SELECTION_COLOR)
        except (pygame.error, ValueError, OverflowError) as exc:
            logger.debug("Skipped drawing %s at %s: %s", name, pt, exc)
        return pt

    def draw_body(self, surf, view: BodyView):
        self.draw_sphere(surf, view.name, view.position, view.size, view.color,
                         view.rotation, highlight=view.focused)
        for sat in view.satellites:
            self.draw_sphere(surf, "moon", sat.position, sat.size, SATELLITE_COLOR)

    def draw(self):
        surf = self.surface
        surf.fill(BACKGROUND_COLOR)
        self.draw_stars(surf)

        views = self.sim.snapshot()
        for view in views:
            self.draw_orbit_path(surf, self.sim.scene.find(view.name).orbit_radius)

        central = self.sim.scene.central
        # Painter's order: farthest first
        items = [(self._depth(central.position), None)]
        items += [(self._depth(v.position), v) for v in views]
        for _, view in sorted(items, key=lambda it: -it[0]):
            if view is None:
                self.draw_sphere(surf, central.name, central.position, central.size, central.color)
            else:
                self.draw_body(surf, view)

        for label in self.sim.hover_labels():
            pt = _safe_point(self.camera.world_to_screen(label.anchor))
            if pt:
                draw_text(surf, label.name, pt[0], pt[1], LABEL_COLOR, center=True)

        overlay = self.sim.info_overlay()
        if overlay is not None:
            pt = _safe_point(self.camera.world_to_screen(overlay.anchor))
            if pt:
                draw_panel(surf, overlay.lines(), pt[0], pt[1])

        draw_text(surf, "Hover: name | Click: focus/unfocus | Wheel: zoom | Right-drag: orbit | Arrows: pan",
                  10, 10, (200, 200, 200))
        draw_text(surf, f"Speed: {self.sim.speed.label()}  t={self.sim.elapsed:8.1f}s", 10, 30, (200, 200, 200))

        pygame.display.flip()

    def _depth(self, position) -> float:
        proj = self.camera.world_to_screen(position)
        return proj[2] if proj is not None else -1.0


_cached_font = None

def draw_text(surface, text, x, y, color, center=False):
    global _cached_font
    if not pygame.font.get_init():
        pygame.font.init()
    if _cached_font is None:
        try:
            _cached_font = pygame.font.SysFont("consolas", 16)
        except (pygame.error, OSError):
            _cached_font = pygame.font.Font(None, 16)
    img = _cached_font.render(text, True, color)
    if center:
        x -= img.get_width() // 2
        y -= img.get_height()
    surface.blit(img, (x, y))


def draw_panel(surface, lines: List[str], x: int, y: int):
    pad = 6
    line_h = 18
    width = 260
    rect = pygame.Rect(x, y, width, pad * 2 + line_h * len(lines))
    pygame.draw.rect(surface, OVERLAY_BG_COLOR, rect)
    pygame.draw.rect(surface, (90, 90, 110), rect, 1)
    for i, line in enumerate(lines):
        draw_text(surface, line, x + pad, y + pad + i * line_h, LABEL_COLOR)


def _safe_point(pt):
    if pt is None:
        return None
    x, y = int(pt[0]), int(pt[1])
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None

# ============================================================
# Dear PyGui Control Panel
# ============================================================

class ControlPanel:
    """
    Dear PyGui window with the orbit speed slider and a home-view button.
    """
    def __init__(self, sim: SimulationController):
        self.sim = sim
        self.speed_label_id = None
        self._build_ui()

    def _build_ui(self):
        dpg.create_context()
        dpg.create_viewport(title="Orrery - Controls", width=360, height=170)

        with dpg.window(label="Controls", width=340, height=150, pos=(10, 10), tag="main_window"):
            dpg.add_text("Orbit Speed Control")
            with dpg.group(horizontal=True):
                dpg.add_slider_float(min_value=MIN_SPEED_MULTIPLIER, max_value=MAX_SPEED_MULTIPLIER,
                                     default_value=self.sim.speed.value, format="%.3f", width=220,
                                     callback=lambda s, a, u: self._on_speed(a), tag="speed_slider")
                self.speed_label_id = dpg.add_text(self.sim.speed.label())
            dpg.add_text(f"Step {SPEED_STEP:.3f}, range {MIN_SPEED_MULTIPLIER:.3f}-{MAX_SPEED_MULTIPLIER:.3f}",
                         color=(150, 150, 150))
            dpg.add_button(label="Home view", callback=lambda: self.sim.focus.release())

        dpg.setup_dearpygui()
        dpg.show_viewport()
        dpg.set_primary_window("main_window", True)

    def _on_speed(self, value):
        stored = self.sim.speed.set(value)
        # Reflect the clamped/snapped value back so the slider and label agree
        dpg.set_value("speed_slider", stored)
        dpg.set_value(self.speed_label_id, self.sim.speed.label())

    def render_frame(self) -> bool:
        if not dpg.is_dearpygui_running():
            return False
        dpg.render_dearpygui_frame()
        return True

    def close(self):
        dpg.destroy_context()

# ============================================================
# Application Entry
# ============================================================

def parse_args(argv=None):
    templates = ", ".join(fn for fn, _ in list_templates()) or "none found"
    parser = argparse.ArgumentParser(description="Animated orrery with click-to-focus.")
    parser.add_argument("--scene", default="earth.json",
                        help=f"scene template file in templates/ (available: {templates})")
    parser.add_argument("--speed", type=float, default=None,
                        help="initial orbit speed multiplier (clamped to the slider range)")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def build_simulation(scene_file: str, speed_override: Optional[float], camera: Camera3D) -> SimulationController:
    template = load_template(scene_file)
    facts = load_facts()
    speed = SpeedControl()
    if template.speed_multiplier is not None:
        speed.set(template.speed_multiplier)
    if speed_override is not None:
        speed.set(speed_override)
    scene = Scene(
        bodies=template.bodies,
        central=template.central,
        name=template.name,
        scale_satellites_with_speed=template.scale_satellites_with_speed,
    )
    return SimulationController(scene, facts, speed, ViewpointController(camera))


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    camera = Camera3D()
    try:
        sim = build_simulation(args.scene, args.speed, camera)
    except ConfigurationError as exc:
        logger.error("Cannot start: %s", exc)
        return 1

    frame_clock = FrameClock()
    sim.attach(frame_clock)

    renderer = PygameRenderer(sim, camera)
    renderer.start()
    panel = ControlPanel(sim)

    try:
        real_dt = 0.0
        while renderer.running:
            # Events first so every event lands before this frame's update
            renderer.handle_events(real_dt)
            frame_clock.tick()
            renderer.draw()
            if not panel.render_frame():
                break
            real_dt = renderer.clock.tick(TARGET_FPS) / 1000.0
    finally:
        renderer.stop()
        panel.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
