"""Rounding helpers shared by the rules."""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up.

    Game rules round ``2.5`` to ``3``; Python's built-in ``round`` would give ``2``.
    """

    return math.floor(value + 0.5)
