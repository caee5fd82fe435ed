# comp_rollup/engines/flagging.py
"""Flag employees whose total base-salary increase needs manual review."""

from comp_rollup.schema import FLAG_THRESHOLD_PCT


def total_increase_percent(current_base_salary: float, proposed_base_salary: float) -> float:
    """Percent change from current to proposed base salary; 0 when there is no current salary."""
    if current_base_salary <= 0:
        return 0.0
    return (proposed_base_salary - current_base_salary) * 100 / current_base_salary


def is_flagged(total_pct: float) -> bool:
    # Fixed threshold, independent of BudgetSettings
    return total_pct > FLAG_THRESHOLD_PCT
