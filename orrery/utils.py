#!/usr/bin/env python3
"""
General utilities for the Orrery.
"""
import math
from typing import Optional


def try_float(val) -> Optional[float]:
    """Parse val as a finite float; None when it is not numeric."""
    try:
        f = float(val)
    except (TypeError, ValueError):
        return None
    if math.isnan(f):
        return None
    return f
