# comp_rollup/config/models.py
"""
Pydantic models for validating the budget settings of a review cycle, whether
loaded from YAML files or from a stored project.
"""

import logging
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

DEFAULT_BASE_SALARY_INCREASE_ALLOWANCE = 50000.0
DEFAULT_STOCK_INCREASE_ALLOWANCE = 25000.0
DEFAULT_STANDARD_MERIT_PERCENTAGE = 4.0
DEFAULT_MAX_OVER_BUDGET = 5.0


class BudgetSettings(BaseModel):
    """Allowances and policy for one compensation review cycle."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    base_salary_increase_allowance: float = Field(
        DEFAULT_BASE_SALARY_INCREASE_ALLOWANCE,
        ge=0.0,
        alias="baseSalaryIncreaseAllowance",
        description="Budget for the sum of base salary increases, in the common unit",
    )
    stock_increase_allowance: float = Field(
        DEFAULT_STOCK_INCREASE_ALLOWANCE,
        ge=0.0,
        alias="stockIncreaseAllowance",
        description="Budget for the net increase in stock value, in the common unit",
    )
    standard_merit_percentage: float = Field(
        DEFAULT_STANDARD_MERIT_PERCENTAGE,
        ge=0.0,
        alias="standardMeritPercentage",
        description="Merit percent given to new employees (e.g., 4.0 for 4%)",
    )
    max_over_budget: float = Field(
        DEFAULT_MAX_OVER_BUDGET,
        ge=0.0,
        alias="maxOverBudget",
        description="Percent by which usage may exceed an allowance before it is over budget",
    )

    def is_default(self) -> bool:
        """True when every setting still has its default value."""
        return self.model_dump() == BudgetSettings().model_dump()

    def to_record(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
