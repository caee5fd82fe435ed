# comp_rollup/engines/market_position.py
"""
Market position: salary expressed as a percentage of a level midpoint.
"""

from typing import NamedTuple, Optional


class MarketPositions(NamedTuple):
    after_increase: Optional[float]
    next_level: Optional[float]


def position_percent(salary: Optional[float], midpoint: Optional[float]) -> Optional[float]:
    """Return salary / midpoint * 100, or None when there is no positive midpoint."""
    if not midpoint or midpoint <= 0:
        return None
    return float(salary or 0.0) / midpoint * 100


def compute_market_positions(
    proposed_base_salary: float,
    current_level_midpoint: Optional[float],
    next_level_midpoint: Optional[float],
    has_promotion: bool,
) -> MarketPositions:
    """
    Position of the proposed salary against the current level midpoint and,
    for promotions only, against the next level midpoint.
    """
    after = position_percent(proposed_base_salary, current_level_midpoint)
    nxt = position_percent(proposed_base_salary, next_level_midpoint) if has_promotion else None
    return MarketPositions(after_increase=after, next_level=nxt)
