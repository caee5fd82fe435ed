# comp_rollup/reporting/budget.py
"""
Budget rollup: compare the roster's base-salary and stock increases against
the cycle's allowances and over-budget tolerance.

All figures are in the common unit. Base usage is the sum of resolved
increase amounts; stock usage is the proposed-minus-current stock delta,
since stock has no separate increase field.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, Optional, Union

import pandas as pd

from comp_rollup.config.models import BudgetSettings
from comp_rollup.engines.currency import add_normalized_columns
from comp_rollup.engines.increase import refresh_derived_fields
from comp_rollup.schema import (
    BUDGET_BASE, BUDGET_STOCK, HEALTH_NEAR_LIMIT, HEALTH_OVER, HEALTH_WITHIN,
    NEAR_LIMIT_UTILIZATION_PCT, NORM_CURRENT_STOCK, NORM_INCREASE, NORM_PROPOSED_STOCK,
)
from comp_rollup.state.employee import Employee
from comp_rollup.state.roster import Roster, roster_frame

logger = logging.getLogger(__name__)


@dataclass
class BudgetCategoryStatus:
    """Budget position of one category (base or stock)."""
    category: str
    allowance: float
    max_allowed: float
    used: float
    remaining: float
    over_budget: bool
    # None when the allowance is 0: utilisation is undefined
    utilization_percent: Optional[float]
    over_by: float
    health: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class BudgetStatus:
    base: BudgetCategoryStatus
    stock: BudgetCategoryStatus

    @property
    def is_over_budget(self) -> bool:
        return self.base.over_budget or self.stock.over_budget

    def to_dict(self) -> Dict[str, Any]:
        return {
            BUDGET_BASE: self.base.to_dict(),
            BUDGET_STOCK: self.stock.to_dict(),
            "is_over_budget": self.is_over_budget,
        }


def max_allowed(allowance: float, tolerance_pct: float) -> float:
    """allowance * (1 + tolerance / 100)"""
    return allowance + allowance * tolerance_pct / 100


def category_status(
    category: str,
    used: float,
    allowance: float,
    tolerance_pct: float,
) -> BudgetCategoryStatus:
    """
    Build the status of a single budget category.

    Args:
        category: 'base' or 'stock'
        used: Amount used, in the common unit
        allowance: Nominal allowance for the category
        tolerance_pct: Max over-budget tolerance (e.g., 5.0 for 5%)

    Returns:
        BudgetCategoryStatus; utilization_percent is None when allowance is 0
    """
    ceiling = max_allowed(allowance, tolerance_pct)
    over = used > ceiling
    if allowance > 0:
        utilization = used * 100 / allowance
    else:
        utilization = None
        logger.debug(f"[BUDGET] {category}: allowance is 0, utilisation undefined")

    if over:
        health = HEALTH_OVER
    elif utilization is not None and utilization > NEAR_LIMIT_UTILIZATION_PCT:
        health = HEALTH_NEAR_LIMIT
    else:
        health = HEALTH_WITHIN

    return BudgetCategoryStatus(
        category=category,
        allowance=float(allowance),
        max_allowed=float(ceiling),
        used=float(used),
        remaining=float(allowance - used),
        over_budget=bool(over),
        utilization_percent=utilization,
        over_by=float(max(used - ceiling, 0.0)),
        health=health,
    )


def base_increase_used(normalized: pd.DataFrame) -> float:
    return float(normalized[NORM_INCREASE].sum())


def stock_increase_used(normalized: pd.DataFrame) -> float:
    return float(normalized[NORM_PROPOSED_STOCK].sum() - normalized[NORM_CURRENT_STOCK].sum())


def budget_status_from_frame(normalized: pd.DataFrame, settings: BudgetSettings) -> BudgetStatus:
    """Budget status from a roster frame that already carries normalised columns."""
    tolerance = settings.max_over_budget
    status = BudgetStatus(
        base=category_status(
            BUDGET_BASE, base_increase_used(normalized),
            settings.base_salary_increase_allowance, tolerance,
        ),
        stock=category_status(
            BUDGET_STOCK, stock_increase_used(normalized),
            settings.stock_increase_allowance, tolerance,
        ),
    )
    for cat in (status.base, status.stock):
        if cat.over_budget:
            logger.warning(
                f"[BUDGET] {cat.category} increases exceed the maximum allowed "
                f"{cat.max_allowed:,.0f} by {cat.over_by:,.0f}"
            )
    return status


def compute_budget_status(
    employees: Union[Roster, Iterable[Employee]],
    settings: BudgetSettings,
) -> BudgetStatus:
    """
    Budget status for a roster under the given settings. Proposed figures are
    refreshed from each increase amount first, as `compute_report` does.
    """
    refreshed = [refresh_derived_fields(emp) for emp in employees]
    normalized = add_normalized_columns(roster_frame(refreshed))
    return budget_status_from_frame(normalized, settings)
