# comp_rollup/reporting/report.py
"""
Assemble the review report: refreshed employee records, budget status,
level breakdown, roster totals, and the flagged and promoted lists.

## QuickStart

```python
from comp_rollup import BudgetSettings, Employee, Roster, compute_report

roster = Roster()
settings = BudgetSettings(base_salary_increase_allowance=50000, max_over_budget=5)
roster.add(Employee(name="Ada", current_level="P3", current_base_salary=100000), settings)

report = compute_report(roster, settings)
print(report.budget.base.utilization_percent, report.is_over_budget)
```
"""

import logging
import re
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, Union

import pandas as pd

from comp_rollup.config.models import BudgetSettings
from comp_rollup.engines.currency import add_normalized_columns
from comp_rollup.engines.increase import refresh_derived_fields
from comp_rollup.reporting.budget import BudgetStatus, budget_status_from_frame
from comp_rollup.reporting.levels import LevelBreakdown, level_breakdown_from_frame
from comp_rollup.schema import (
    NORM_CURRENT_BASE, NORM_CURRENT_STOCK, NORM_INCREASE,
    NORM_PROPOSED_BASE, NORM_PROPOSED_STOCK,
)
from comp_rollup.state.employee import Employee
from comp_rollup.state.roster import Roster, roster_frame

logger = logging.getLogger(__name__)

_LEVEL_NUMBER = re.compile(r"\d+")


@dataclass
class RosterTotals:
    """Roster-wide sums in the common unit."""
    current_base: float = 0.0
    proposed_base: float = 0.0
    current_stock: float = 0.0
    proposed_stock: float = 0.0
    base_increase: float = 0.0
    stock_increase: float = 0.0
    total_increase: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Report:
    budget: BudgetStatus
    level_breakdown: List[LevelBreakdown]
    totals: RosterTotals
    employees: List[Employee] = field(default_factory=list)
    flagged_employee_ids: List[str] = field(default_factory=list)
    promoted_employee_ids: List[str] = field(default_factory=list)

    @property
    def is_over_budget(self) -> bool:
        return self.budget.is_over_budget

    @property
    def employee_count(self) -> int:
        return len(self.employees)

    @property
    def flagged_employees(self) -> List[Employee]:
        flagged = set(self.flagged_employee_ids)
        return [emp for emp in self.employees if emp.id in flagged]

    @property
    def promoted_employees(self) -> List[Employee]:
        by_id = {emp.id: emp for emp in self.employees}
        return [by_id[emp_id] for emp_id in self.promoted_employee_ids]

    def to_dict(self) -> Dict[str, Any]:
        """JSON-safe view: flat employee records plus report figures."""
        return {
            "employee_count": self.employee_count,
            "is_over_budget": self.is_over_budget,
            "budget": self.budget.to_dict(),
            "totals": self.totals.to_dict(),
            "level_breakdown": [lvl.to_dict() for lvl in self.level_breakdown],
            "flagged_employee_ids": list(self.flagged_employee_ids),
            "promoted_employee_ids": list(self.promoted_employee_ids),
            "employees": [emp.to_record() for emp in self.employees],
        }


def level_number(level: Union[str, None]) -> int:
    """Numeric part of a level code (P3 -> 3, M4 -> 4); 0 when there is none."""
    match = _LEVEL_NUMBER.search(level or "")
    return int(match.group()) if match else 0


def _totals(normalized: pd.DataFrame) -> RosterTotals:
    base_increase = float(normalized[NORM_INCREASE].sum())
    current_stock = float(normalized[NORM_CURRENT_STOCK].sum())
    proposed_stock = float(normalized[NORM_PROPOSED_STOCK].sum())
    stock_increase = proposed_stock - current_stock
    return RosterTotals(
        current_base=float(normalized[NORM_CURRENT_BASE].sum()),
        proposed_base=float(normalized[NORM_PROPOSED_BASE].sum()),
        current_stock=current_stock,
        proposed_stock=proposed_stock,
        base_increase=base_increase,
        stock_increase=stock_increase,
        total_increase=base_increase + stock_increase,
    )


def compute_report(
    employees: Union[Roster, Iterable[Employee]],
    budget_settings: BudgetSettings,
) -> Report:
    """
    Compute the full review report for a roster.

    Derived employee fields (total increase percent, flag, market positions)
    are refreshed from each employee's resolved increase amount; the refreshed
    records are returned on the report. Budget settings only affect the budget
    status, never the employee records.

    Args:
        employees: Roster or iterable of Employee records
        budget_settings: Allowances and tolerance for the cycle

    Returns:
        Report
    """
    refreshed = [refresh_derived_fields(emp) for emp in employees]
    normalized = add_normalized_columns(roster_frame(refreshed))

    budget = budget_status_from_frame(normalized, budget_settings)
    levels = level_breakdown_from_frame(normalized)
    totals = _totals(normalized)

    flagged = [emp.id for emp in refreshed if emp.flagged]
    promoted = sorted(
        (emp for emp in refreshed if emp.has_promotion),
        key=lambda emp: level_number(emp.current_level),
        reverse=True,
    )

    logger.info(
        f"[REPORT] {len(refreshed)} employees, {len(levels)} levels, {len(flagged)} flagged, "
        f"{len(promoted)} promoted, over budget: {budget.is_over_budget}"
    )
    return Report(
        budget=budget,
        level_breakdown=levels,
        totals=totals,
        employees=refreshed,
        flagged_employee_ids=flagged,
        promoted_employee_ids=[emp.id for emp in promoted],
    )
