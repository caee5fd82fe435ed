# comp_rollup/state/employee.py
"""
Employee record: one row of the review roster.

Values arrive from an editable form or a stored project, so coercion is
forgiving: blank or non-numeric money fields become 0, blank optional inputs
become None, and nothing here raises on bad numbers. The record serialises
to a flat camelCase mapping (see `RECORD_KEYS`) for storage and transport.
"""

import logging
import math
import uuid
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from comp_rollup.schema import DEFAULT_CURRENCY, RECORD_KEYS

logger = logging.getLogger(__name__)

_TRUE_STRINGS = {"true", "yes", "y", "1", "on"}


def new_employee_id() -> str:
    """Generate an opaque unique employee id."""
    return uuid.uuid4().hex


def _to_optional_number(value: Any) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip().replace(",", "")
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _to_number(value: Any) -> float:
    number = _to_optional_number(value)
    return 0.0 if number is None else number


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    if isinstance(value, float) and math.isnan(value):
        return False
    return bool(value)


def _to_optional_str(value: Any) -> Optional[str]:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return None
    text = str(value).strip()
    return text or None


class Employee(BaseModel):
    """A single employee under review, with increase inputs and derived figures."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(default_factory=new_employee_id, alias=RECORD_KEYS["id"])
    name: str = Field("", alias=RECORD_KEYS["name"])
    currency: str = Field(DEFAULT_CURRENCY, alias=RECORD_KEYS["currency"])
    current_level: Optional[str] = Field(None, alias=RECORD_KEYS["current_level"])
    next_level: Optional[str] = Field(None, alias=RECORD_KEYS["next_level"])

    # Market inputs (user supplied, optional)
    current_market_position: Optional[float] = Field(None, alias=RECORD_KEYS["current_market_position"])
    current_level_midpoint: Optional[float] = Field(None, alias=RECORD_KEYS["current_level_midpoint"])
    next_level_midpoint: Optional[float] = Field(None, alias=RECORD_KEYS["next_level_midpoint"])

    current_base_salary: float = Field(0.0, alias=RECORD_KEYS["current_base_salary"])
    current_stock: float = Field(0.0, alias=RECORD_KEYS["current_stock"])

    # Jointly resolved increase fields
    merit_percent: Optional[float] = Field(None, alias=RECORD_KEYS["merit_percent"])
    promotion_percent: float = Field(0.0, alias=RECORD_KEYS["promotion_percent"])
    has_promotion: bool = Field(False, alias=RECORD_KEYS["has_promotion"])
    increase_amount: float = Field(0.0, alias=RECORD_KEYS["increase_amount"])
    proposed_base_salary: float = Field(0.0, alias=RECORD_KEYS["proposed_base_salary"])
    proposed_stock: float = Field(0.0, alias=RECORD_KEYS["proposed_stock"])

    # Derived, never hand-edited
    total_increase_percent: float = Field(0.0, alias=RECORD_KEYS["total_increase_percent"])
    flagged: bool = Field(False, alias=RECORD_KEYS["flagged"])
    after_increase_market_position: Optional[float] = Field(
        None, alias=RECORD_KEYS["after_increase_market_position"]
    )
    next_level_market_position: Optional[float] = Field(
        None, alias=RECORD_KEYS["next_level_market_position"]
    )

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> str:
        text = _to_optional_str(value)
        return text if text is not None else new_employee_id()

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_name(cls, value: Any) -> str:
        return _to_optional_str(value) or ""

    @field_validator("currency", mode="before")
    @classmethod
    def _coerce_currency(cls, value: Any) -> str:
        text = _to_optional_str(value)
        return text.upper() if text else DEFAULT_CURRENCY

    @field_validator("current_level", "next_level", mode="before")
    @classmethod
    def _coerce_level(cls, value: Any) -> Optional[str]:
        return _to_optional_str(value)

    @field_validator(
        "current_market_position",
        "current_level_midpoint",
        "next_level_midpoint",
        "merit_percent",
        "after_increase_market_position",
        "next_level_market_position",
        mode="before",
    )
    @classmethod
    def _coerce_optional_number(cls, value: Any) -> Optional[float]:
        return _to_optional_number(value)

    @field_validator(
        "promotion_percent",
        "increase_amount",
        "proposed_base_salary",
        "proposed_stock",
        "total_increase_percent",
        mode="before",
    )
    @classmethod
    def _coerce_number(cls, value: Any) -> float:
        return _to_number(value)

    @field_validator("current_base_salary", "current_stock", mode="before")
    @classmethod
    def _coerce_non_negative(cls, value: Any) -> float:
        number = _to_number(value)
        if number < 0:
            logger.debug(f"[EMPLOYEE] Negative current amount {number} treated as 0")
            return 0.0
        return number

    @field_validator("has_promotion", "flagged", mode="before")
    @classmethod
    def _coerce_bool(cls, value: Any) -> bool:
        return _to_bool(value)

    @property
    def effective_promotion_percent(self) -> float:
        """Promotion percent counted towards the increase (0 unless promoted)."""
        return self.promotion_percent if self.has_promotion else 0.0

    def to_record(self) -> Dict[str, Any]:
        """Flat camelCase mapping, safe to JSON-encode and store."""
        return self.model_dump(by_alias=True)

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Employee":
        """Build an employee from a stored record (camelCase or snake_case keys)."""
        return cls.model_validate(record)
