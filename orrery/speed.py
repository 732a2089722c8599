#!/usr/bin/env python3
"""
Speed control: the shared multiplier applied to every orbiting body.

A SpeedControl instance is handed to the simulation explicitly; the UI writes
it and the frame update reads it. Both happen on the same thread, so reads
always see the latest write.
"""
import logging

from .constants import (
    DEFAULT_SPEED_MULTIPLIER,
    MAX_SPEED_MULTIPLIER,
    MIN_SPEED_MULTIPLIER,
    SPEED_STEP,
)
from .utils import try_float
from .vector_utils import clamp

logger = logging.getLogger(__name__)


class SpeedControl:
    """
    Bounded speed multiplier.

    Out-of-range input clamps to the nearest bound and non-numeric input keeps
    the current value; neither raises, since the control is live and has no undo.
    """

    def __init__(self, value: float = DEFAULT_SPEED_MULTIPLIER,
                 minimum: float = MIN_SPEED_MULTIPLIER,
                 maximum: float = MAX_SPEED_MULTIPLIER,
                 step: float = SPEED_STEP):
        self.minimum = float(minimum)
        self.maximum = float(maximum)
        self.step = float(step)
        self.value = self.minimum
        self.set(value)

    def set(self, raw) -> float:
        """Apply a new multiplier and return the stored value."""
        val = try_float(raw)
        if val is None:
            logger.warning("Ignoring non-numeric speed input %r", raw)
            return self.value
        clamped = clamp(val, self.minimum, self.maximum)
        if clamped != val:
            logger.warning("Speed %s outside [%s, %s]; clamped to %s",
                           val, self.minimum, self.maximum, clamped)
        # Snap to the control's step; re-clamp in case rounding crossed a bound
        snapped = round(round(clamped / self.step) * self.step, 6)
        self.value = clamp(snapped, self.minimum, self.maximum)
        return self.value

    def label(self) -> str:
        return f"{self.value:.3f}x"
