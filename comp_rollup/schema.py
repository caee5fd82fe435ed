# comp_rollup/schema.py
# flake8: noqa
"""Centralized schema constants for comp_rollup records and roster frames.

This module defines:
  - Employee column constants (the pandas column names used by the aggregators)
  - The camelCase keys of the flat employee record that crosses the storage boundary
  - The tag naming which increase field was edited last
  - Fixed policy constants: exchange rates, rounding denominations, flag threshold

All other modules should import from here for consistency.
"""
from __future__ import annotations

from enum import Enum
from typing import Dict, List

# -----------------------------------------------------------------------------
# Employee column constants (roster DataFrame columns == Employee attribute names)
# -----------------------------------------------------------------------------
EMP_ID = "id"
EMP_NAME = "name"
EMP_CURRENCY = "currency"
EMP_LEVEL = "current_level"
EMP_NEXT_LEVEL = "next_level"
EMP_MARKET_POSITION = "current_market_position"
EMP_LEVEL_MIDPOINT = "current_level_midpoint"
EMP_NEXT_LEVEL_MIDPOINT = "next_level_midpoint"
EMP_CURRENT_BASE = "current_base_salary"
EMP_CURRENT_STOCK = "current_stock"
EMP_MERIT_PCT = "merit_percent"
EMP_PROMO_PCT = "promotion_percent"
EMP_HAS_PROMOTION = "has_promotion"
EMP_INCREASE = "increase_amount"
EMP_PROPOSED_BASE = "proposed_base_salary"
EMP_PROPOSED_STOCK = "proposed_stock"

# Derived, recomputed on every resolve
EMP_TOTAL_INCREASE_PCT = "total_increase_percent"
EMP_FLAGGED = "flagged"
EMP_AFTER_MARKET_POSITION = "after_increase_market_position"
EMP_NEXT_MARKET_POSITION = "next_level_market_position"

# Normalised (common-unit) helper columns added by the aggregators
NORM_CURRENT_BASE = "norm_current_base_salary"
NORM_PROPOSED_BASE = "norm_proposed_base_salary"
NORM_CURRENT_STOCK = "norm_current_stock"
NORM_PROPOSED_STOCK = "norm_proposed_stock"
NORM_INCREASE = "norm_increase_amount"

ROSTER_COLS: List[str] = [
    EMP_ID, EMP_NAME, EMP_CURRENCY, EMP_LEVEL, EMP_NEXT_LEVEL,
    EMP_MARKET_POSITION, EMP_LEVEL_MIDPOINT, EMP_NEXT_LEVEL_MIDPOINT,
    EMP_CURRENT_BASE, EMP_CURRENT_STOCK,
    EMP_MERIT_PCT, EMP_PROMO_PCT, EMP_HAS_PROMOTION,
    EMP_INCREASE, EMP_PROPOSED_BASE, EMP_PROPOSED_STOCK,
    EMP_TOTAL_INCREASE_PCT, EMP_FLAGGED,
    EMP_AFTER_MARKET_POSITION, EMP_NEXT_MARKET_POSITION,
]

# Keys of the flat employee record as stored by saved projects
RECORD_KEYS: Dict[str, str] = {
    EMP_ID: "id",
    EMP_NAME: "name",
    EMP_CURRENCY: "currency",
    EMP_LEVEL: "currentLevel",
    EMP_NEXT_LEVEL: "nextLevel",
    EMP_MARKET_POSITION: "currentMarketingPosition",
    EMP_LEVEL_MIDPOINT: "currentLevelMidpoint",
    EMP_NEXT_LEVEL_MIDPOINT: "nextLevelMidpoint",
    EMP_CURRENT_BASE: "currentBaseSalary",
    EMP_CURRENT_STOCK: "currentStock",
    EMP_MERIT_PCT: "meritIncrease",
    EMP_PROMO_PCT: "promotionIncrease",
    EMP_HAS_PROMOTION: "hasPromotion",
    EMP_INCREASE: "proposedIncrease",
    EMP_PROPOSED_BASE: "proposedBaseSalary",
    EMP_PROPOSED_STOCK: "proposedStock",
    EMP_TOTAL_INCREASE_PCT: "totalIncreasePercent",
    EMP_FLAGGED: "flagged",
    EMP_AFTER_MARKET_POSITION: "afterIncreaseMarketPosition",
    EMP_NEXT_MARKET_POSITION: "nextLevelMarketPosition",
}


class Currency(str, Enum):
    """Currencies an employee can be paid in."""
    USD = "USD"
    GBP = "GBP"
    EUR = "EUR"


DEFAULT_CURRENCY = Currency.USD.value

# Fixed conversion into the common unit (USD). Unknown codes fall back to 1.0.
EXCHANGE_RATES: Dict[str, float] = {
    Currency.USD.value: 1.0,
    Currency.GBP.value: 1.25,
    Currency.EUR.value: 1.08,
}
FALLBACK_EXCHANGE_RATE = 1.0


class EditedField(str, Enum):
    """Which increase representation the reviewer changed last."""
    NONE = "none"
    MERIT_PERCENT = "meritPercent"
    PROMOTION_PERCENT = "promotionPercent"
    INCREASE_AMOUNT = "increaseAmount"
    PROPOSED_BASE_SALARY = "proposedBaseSalary"
    CURRENT_BASE_SALARY = "currentBaseSalary"
    HAS_PROMOTION = "hasPromotion"


# Rounding Policy denominations
LARGE_INCREASE_THRESHOLD = 5000
LARGE_INCREASE_STEP = 1000
SMALL_INCREASE_STEP = 500

# Flagging Policy: strictly greater than this total increase percent
FLAG_THRESHOLD_PCT = 10.0

# Budget health: utilisation above this percent is reported as near the limit
NEAR_LIMIT_UTILIZATION_PCT = 90.0

BUDGET_BASE = "base"
BUDGET_STOCK = "stock"

# Bucket for employees with no current level
UNSPECIFIED_LEVEL = "unspecified"

# Health labels for a budget category
HEALTH_WITHIN = "within_budget"
HEALTH_NEAR_LIMIT = "near_limit"
HEALTH_OVER = "over_budget"

# Review CSV export headings and the record key each one carries
EXPORT_HEADINGS: Dict[str, str] = {
    "Name": RECORD_KEYS[EMP_NAME],
    "Current Level": RECORD_KEYS[EMP_LEVEL],
    "Next Level": RECORD_KEYS[EMP_NEXT_LEVEL],
    "Currency": RECORD_KEYS[EMP_CURRENCY],
    "Current Base Salary": RECORD_KEYS[EMP_CURRENT_BASE],
    "Current Stock": RECORD_KEYS[EMP_CURRENT_STOCK],
    "Proposed Base Salary": RECORD_KEYS[EMP_PROPOSED_BASE],
    "Proposed Stock": RECORD_KEYS[EMP_PROPOSED_STOCK],
    "Base Increase %": RECORD_KEYS[EMP_MERIT_PCT],
    "Total Increase %": RECORD_KEYS[EMP_TOTAL_INCREASE_PCT],
    "Has Promotion": RECORD_KEYS[EMP_HAS_PROMOTION],
    "Flagged": RECORD_KEYS[EMP_FLAGGED],
}
