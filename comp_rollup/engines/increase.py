# comp_rollup/engines/increase.py
"""
Engine for resolving an employee's base-salary increase.

Merit %, promotion %, the increase amount and the proposed base salary are four
views of one number. `resolve_increase` takes the tag of the field the reviewer
edited last and derives the other three from it, so there is no chain of
on-change handlers that can feed back into each other:

- merit / promotion percent edited (also current salary or promotion toggle):
  percent -> rounded amount -> proposed salary
- increase amount edited: amount -> proposed salary, percent split
- proposed salary edited: proposed salary -> amount, percent split
- nothing edited (initial load): an amount already on the record is kept
  as is (percentages are split from it only when none are stored); with no
  amount yet the percent path runs

Resolution never raises. Missing numbers count as 0 and every division is
guarded.
"""

import logging
from typing import NamedTuple, Optional, Union

from comp_rollup.config.models import BudgetSettings
from comp_rollup.engines.flagging import is_flagged, total_increase_percent
from comp_rollup.engines.market_position import compute_market_positions
from comp_rollup.engines.rounding import round_increase
from comp_rollup.schema import EditedField
from comp_rollup.state.employee import Employee

logger = logging.getLogger(__name__)

_PERCENT_EDITS = {
    EditedField.MERIT_PERCENT,
    EditedField.PROMOTION_PERCENT,
    EditedField.CURRENT_BASE_SALARY,
    EditedField.HAS_PROMOTION,
}


class IncreaseResolution(NamedTuple):
    merit_percent: float
    promotion_percent: float
    increase_amount: float
    proposed_base_salary: float


def coerce_edited_field(value: Union[EditedField, str, None]) -> EditedField:
    """
    Accept an EditedField, its value ("meritPercent"), its name ("MERIT_PERCENT")
    or a snake_case attribute name ("merit_percent"). Anything else is NONE.
    """
    if isinstance(value, EditedField):
        return value
    if not value:
        return EditedField.NONE
    text = str(value).strip()
    for member in EditedField:
        if text in (member.value, member.name) or text.upper() == member.name:
            return member
    logger.debug(f"[RESOLVE] Unknown edited field '{value}', treating as initial load")
    return EditedField.NONE


def _split_percent(total_pct: float, has_promotion: bool):
    if has_promotion:
        half = total_pct / 2
        return half, half
    return total_pct, 0.0


def _percent_of(amount: float, base: float) -> float:
    return amount * 100 / base if base > 0 else 0.0


def resolve_increase_fields(
    current_base_salary: float,
    merit_percent: Optional[float],
    promotion_percent: Optional[float],
    has_promotion: bool,
    last_edited: Union[EditedField, str, None] = EditedField.NONE,
    increase_amount: Optional[float] = None,
    proposed_base_salary: Optional[float] = None,
) -> IncreaseResolution:
    """
    Pure numeric resolution of the four coupled increase fields.

    Args:
        current_base_salary: Current base salary (>= 0)
        merit_percent: Merit increase percent (e.g., 4.0 for 4%)
        promotion_percent: Promotion increase percent; ignored unless has_promotion
        has_promotion: Whether a promotion is proposed
        last_edited: Which field the reviewer changed
        increase_amount: Explicit increase amount, used by the amount path
        proposed_base_salary: Explicit proposed salary, used by the proposed path

    Returns:
        IncreaseResolution with proposed_base_salary == current_base_salary + increase_amount
    """
    base = max(float(current_base_salary or 0.0), 0.0)
    merit = float(merit_percent or 0.0)
    promotion = float(promotion_percent or 0.0)
    edited = coerce_edited_field(last_edited)
    effective_promotion = promotion if has_promotion else 0.0

    if edited is EditedField.NONE:
        existing = float(increase_amount or 0.0)
        if existing == 0:
            edited = EditedField.MERIT_PERCENT
        else:
            # Stored amounts are never re-rounded on load
            if merit + effective_promotion == 0:
                merit, promotion = _split_percent(_percent_of(existing, base), has_promotion)
            return IncreaseResolution(merit, promotion, existing, base + existing)

    if edited in _PERCENT_EDITS:
        raw_increase = base * (merit + effective_promotion) / 100
        amount = round_increase(raw_increase)
        return IncreaseResolution(merit, promotion, amount, base + amount)

    if edited is EditedField.PROPOSED_BASE_SALARY:
        amount = float(proposed_base_salary or 0.0) - base
    else:
        # Explicit amounts are taken literally, no re-rounding
        amount = float(increase_amount or 0.0)

    merit, promotion = _split_percent(_percent_of(amount, base), has_promotion)
    return IncreaseResolution(merit, promotion, amount, base + amount)


def refresh_derived_fields(employee: Employee) -> Employee:
    """
    Recompute total increase percent, the review flag and market positions
    from the employee's increase amount. The increase amount is authoritative:
    the proposed salary is reset to current salary plus the amount.
    """
    proposed = employee.current_base_salary + employee.increase_amount
    total_pct = total_increase_percent(employee.current_base_salary, proposed)
    positions = compute_market_positions(
        proposed,
        employee.current_level_midpoint,
        employee.next_level_midpoint,
        employee.has_promotion,
    )
    return employee.model_copy(
        update={
            "proposed_base_salary": proposed,
            "total_increase_percent": total_pct,
            "flagged": is_flagged(total_pct),
            "after_increase_market_position": positions.after_increase,
            "next_level_market_position": positions.next_level,
        }
    )


def resolve_increase(
    employee: Employee,
    last_edited: Union[EditedField, str, None] = EditedField.NONE,
    budget_settings: Optional[BudgetSettings] = None,
) -> Employee:
    """
    Resolve an employee's increase fields and recompute the derived fields.

    On initial load an absent merit percent is seeded with the standard merit
    percentage from the budget settings, unless the record already carries an
    increase amount. Returns a new Employee; the input is
    left untouched.
    """
    edited = coerce_edited_field(last_edited)
    merit = employee.merit_percent
    if (
        merit is None
        and edited is EditedField.NONE
        and not employee.increase_amount
        and budget_settings is not None
    ):
        merit = budget_settings.standard_merit_percentage
        logger.debug(f"[RESOLVE] {employee.id}: seeding merit percent with standard {merit}")

    resolution = resolve_increase_fields(
        current_base_salary=employee.current_base_salary,
        merit_percent=merit,
        promotion_percent=employee.promotion_percent,
        has_promotion=employee.has_promotion,
        last_edited=edited,
        increase_amount=employee.increase_amount,
        proposed_base_salary=employee.proposed_base_salary,
    )
    logger.debug(
        f"[RESOLVE] {employee.id} edited={edited.value}: merit={resolution.merit_percent:.4f} "
        f"promo={resolution.promotion_percent:.4f} increase={resolution.increase_amount:.2f} "
        f"proposed={resolution.proposed_base_salary:.2f}"
    )
    resolved = employee.model_copy(update=resolution._asdict())
    return refresh_derived_fields(resolved)
