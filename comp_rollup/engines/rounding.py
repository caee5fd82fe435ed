# comp_rollup/engines/rounding.py
"""Denomination rounding for percentage-derived raises."""

import math

from comp_rollup.schema import (
    LARGE_INCREASE_STEP,
    LARGE_INCREASE_THRESHOLD,
    SMALL_INCREASE_STEP,
)


def _round_half_up(value: float) -> float:
    return math.floor(value + 0.5)


def round_increase(amount: float) -> float:
    """
    Round a raw increase to a clean administrative value.

    Amounts of 5000 or more go to the nearest 1000, anything smaller to the
    nearest 500. Halves round up. Only used on the percent -> amount path;
    explicitly entered amounts are never re-rounded.
    """
    step = LARGE_INCREASE_STEP if amount >= LARGE_INCREASE_THRESHOLD else SMALL_INCREASE_STEP
    return float(_round_half_up(amount / step) * step)
