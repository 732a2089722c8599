#!/usr/bin/env python3
"""
Scene template and facts table JSON loading utilities.

This module defines simple JSON schemas and loaders for:
- Scene templates: a central body plus orbiting bodies (templates/*.json)
- Display facts: per-body facts shown when a body is focused (data/planet_facts.json)

Schemas
=======
Template JSON (templates/*.json):
{
  "name": "Human-friendly preset name",
  "speed_multiplier": 0.01,                # optional, default None
  "scale_satellites_with_speed": false,    # optional, default false
  "central_body": {"name": "Sun", "size": 1.0, "color": [255, 204, 0]},
  "bodies": [
    {
      "name": "Earth",
      "orbit_radius": 5.0,
      "period_years": 1.0,                 # or "angular_speed": 0.0628318
      "size": 0.5,
      "color": [65, 105, 225],
      "moons": 1
    }
  ]
}

Facts JSON (data/planet_facts.json):
{
  "Earth": {"mass": "5.97e24 kg", "diameter": "12,742 km", "dayLength": "24 hours", "moons": 1}
}

Users can add their own JSON files into templates/ and they'll be picked up by the loader.
"""
import json
import logging
import os
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .constants import DEFAULT_BODY_COLOR, EARTH_YEAR, ORBITAL_PERIOD_SCALE
from .data_models import BodyFacts, CentralBody, OrbitingBody
from .facts import ConfigurationError, facts_from_dict

logger = logging.getLogger(__name__)

PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
TEMPLATES_DIR = os.path.join(PACKAGE_DIR, "templates")
FACTS_PATH = os.path.join(PACKAGE_DIR, "data", "planet_facts.json")


@dataclass
class SceneTemplate:
  name: str
  central: CentralBody
  bodies: List[OrbitingBody]
  speed_multiplier: Optional[float] = None
  scale_satellites_with_speed: bool = False


def _read_json(path: str) -> Optional[dict]:
  try:
    with open(path, "r", encoding="utf-8") as f:
      return json.load(f)
  except (OSError, ValueError) as exc:
    logger.warning("Could not read %s: %s", path, exc)
    return None


def _coerce_color(c, default: Tuple[int, int, int] = DEFAULT_BODY_COLOR) -> Tuple[int, int, int]:
  try:
    r, g, b = int(c[0]), int(c[1]), int(c[2])
    r = max(0, min(255, r)); g = max(0, min(255, g)); b = max(0, min(255, b))
    return (r, g, b)
  except (TypeError, ValueError, IndexError):
    return default


def list_templates(templates_dir: str = TEMPLATES_DIR) -> List[Tuple[str, str]]:
  """Return list of (file_name, display_name) for available templates."""
  items: List[Tuple[str, str]] = []
  if not os.path.isdir(templates_dir):
    return items
  for fn in sorted(os.listdir(templates_dir)):
    if not fn.lower().endswith(".json"):
      continue
    data = _read_json(os.path.join(templates_dir, fn)) or {}
    display = data.get("name") or os.path.splitext(fn)[0]
    items.append((fn, display))
  return items


def _angular_speed(raw: dict) -> float:
  """Explicit angular_speed, else derived from period_years (1.0 = one Earth year)."""
  if "angular_speed" in raw:
    return float(raw["angular_speed"])
  period = float(raw["period_years"])
  if period <= 0:
    return 0.0
  return EARTH_YEAR * ORBITAL_PERIOD_SCALE / period


def _central_from(raw) -> CentralBody:
  if not isinstance(raw, dict):
    return CentralBody()
  return CentralBody(
    name=raw.get("name", "Sun"),
    size=float(raw.get("size", 1.0)),
    color=_coerce_color(raw.get("color"), (255, 204, 0)),
  )


def load_template(file_name: str, templates_dir: str = TEMPLATES_DIR) -> SceneTemplate:
  """
  Load a template JSON by file name.
  Malformed body entries are skipped; an unreadable file is a ConfigurationError.
  """
  path = os.path.join(templates_dir, file_name)
  data = _read_json(path)
  if data is None:
    raise ConfigurationError(f"Scene template not found or invalid: {path}")
  display_name = data.get("name") or os.path.splitext(file_name)[0]
  speed = data.get("speed_multiplier")
  bodies: List[OrbitingBody] = []
  for b in data.get("bodies", []):
    try:
      bodies.append(OrbitingBody(
        name=b["name"],
        orbit_radius=float(b["orbit_radius"]),
        angular_speed=_angular_speed(b),
        size=float(b["size"]),
        color=_coerce_color(b.get("color", list(DEFAULT_BODY_COLOR))),
        moon_count=int(b.get("moons", 0)),
      ))
    except (KeyError, TypeError, ValueError) as exc:
      logger.warning("Skipping malformed body in %s: %r (%s)", file_name, b, exc)
      continue
  logger.info("Loaded template '%s' (%d bodies)", display_name, len(bodies))
  return SceneTemplate(
    name=display_name,
    central=_central_from(data.get("central_body")),
    bodies=bodies,
    speed_multiplier=float(speed) if speed is not None else None,
    scale_satellites_with_speed=bool(data.get("scale_satellites_with_speed", False)),
  )


def load_facts(path: str = FACTS_PATH) -> Dict[str, BodyFacts]:
  """Load the display facts table."""
  data = _read_json(path)
  if not isinstance(data, dict):
    raise ConfigurationError(f"Facts table not found or invalid: {path}")
  return facts_from_dict(data)
