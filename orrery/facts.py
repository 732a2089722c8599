#!/usr/bin/env python3
"""
Display facts table and startup validation.

Facts (mass, diameter, day length, moon count) are presentation data only; the
simulation never reads them. Every orbiting body in a scene must have an
entry, which is checked once when the scene is built. At render time lookups
are tolerant so a bad entry shows up as blank overlay fields instead of
stopping the frame loop.
"""
import logging
from typing import Dict, Iterable, Mapping

from .data_models import BodyFacts

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Scene configuration violates a startup invariant."""


def validate_facts(names: Iterable[str], facts: Mapping[str, BodyFacts]) -> None:
    """Raise ConfigurationError listing every body name missing from facts."""
    missing = [n for n in names if n not in facts]
    if missing:
        raise ConfigurationError(f"No display facts for: {', '.join(missing)}")


def facts_for(name: str, facts: Mapping[str, BodyFacts]) -> BodyFacts:
    """Look up facts for name; blank facts (and a warning) when absent."""
    entry = facts.get(name)
    if entry is None:
        logger.warning("Missing display facts for %s; overlay fields left blank", name)
        return BodyFacts()
    return entry


def facts_from_dict(data: Mapping[str, Mapping]) -> Dict[str, BodyFacts]:
    """
    Build a facts table from a JSON-style mapping:
        {"Earth": {"mass": "...", "diameter": "...", "dayLength": "...", "moons": 1}}
    """
    table: Dict[str, BodyFacts] = {}
    for name, raw in data.items():
        try:
            table[name] = BodyFacts(
                mass=str(raw.get("mass", "")),
                diameter=str(raw.get("diameter", "")),
                day_length=str(raw.get("dayLength", raw.get("day_length", ""))),
                moons=int(raw.get("moons", 0)),
            )
        except (AttributeError, TypeError, ValueError) as exc:
            raise ConfigurationError(f"Malformed facts entry for {name}: {exc}") from exc
    return table
