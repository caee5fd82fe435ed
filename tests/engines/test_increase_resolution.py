import pytest

from comp_rollup.config.models import BudgetSettings
from comp_rollup.engines.increase import (
    coerce_edited_field,
    refresh_derived_fields,
    resolve_increase,
    resolve_increase_fields,
)
from comp_rollup.schema import EditedField
from comp_rollup.state.employee import Employee


def test_merit_edit_rounds_to_500():
    emp = Employee(current_base_salary=100000, merit_percent=4.0)
    out = resolve_increase(emp, EditedField.MERIT_PERCENT)
    assert out.increase_amount == 4000.0
    assert out.proposed_base_salary == 104000.0
    assert out.total_increase_percent == 4.0
    assert out.flagged is False


def test_promotion_edit_rounds_to_1000_and_flags():
    emp = Employee(
        current_base_salary=150000, merit_percent=6.0, promotion_percent=8.0, has_promotion=True
    )
    out = resolve_increase(emp, EditedField.PROMOTION_PERCENT)
    assert out.increase_amount == 21000.0
    assert out.proposed_base_salary == 171000.0
    assert out.total_increase_percent == pytest.approx(14.0)
    assert out.flagged is True


def test_amount_edit_splits_percent_for_promotion():
    emp = Employee(current_base_salary=80000, has_promotion=True, increase_amount=8000)
    out = resolve_increase(emp, EditedField.INCREASE_AMOUNT)
    assert out.proposed_base_salary == 88000.0
    assert out.total_increase_percent == pytest.approx(10.0)
    assert out.merit_percent == pytest.approx(5.0)
    assert out.promotion_percent == pytest.approx(5.0)
    assert out.flagged is False


def test_amount_edit_is_not_rounded():
    emp = Employee(current_base_salary=100000, increase_amount=4321)
    out = resolve_increase(emp, EditedField.INCREASE_AMOUNT)
    assert out.increase_amount == 4321.0
    assert out.merit_percent == pytest.approx(4.321)
    assert out.promotion_percent == 0.0


def test_proposed_salary_edit():
    emp = Employee(current_base_salary=90000, proposed_base_salary=99000)
    out = resolve_increase(emp, EditedField.PROPOSED_BASE_SALARY)
    assert out.increase_amount == 9000.0
    assert out.merit_percent == pytest.approx(10.0)
    assert out.promotion_percent == 0.0


def test_promotion_toggled_off_keeps_stored_percent():
    emp = Employee(
        current_base_salary=100000, merit_percent=4.0, promotion_percent=6.0, has_promotion=False
    )
    out = resolve_increase(emp, EditedField.HAS_PROMOTION)
    assert out.increase_amount == 4000.0
    assert out.promotion_percent == 6.0
    assert out.effective_promotion_percent == 0.0
    assert out.next_level_market_position is None


def test_current_salary_edit_reapplies_percent():
    emp = Employee(current_base_salary=100000, merit_percent=4.0, increase_amount=4000)
    emp = emp.model_copy(update={"current_base_salary": 200000})
    out = resolve_increase(emp, EditedField.CURRENT_BASE_SALARY)
    assert out.increase_amount == 8000.0
    assert out.proposed_base_salary == 208000.0


def test_zero_salary_never_raises():
    out = resolve_increase(Employee(current_base_salary=0, merit_percent=4.0), "meritPercent")
    assert out.increase_amount == 0.0
    assert out.proposed_base_salary == 0.0
    assert out.total_increase_percent == 0.0

    out = resolve_increase(Employee(current_base_salary=0, increase_amount=5000), "increaseAmount")
    assert out.proposed_base_salary == 5000.0
    assert out.merit_percent == 0.0
    assert out.total_increase_percent == 0.0


def test_initial_load_seeds_standard_merit():
    settings = BudgetSettings(standard_merit_percentage=3.0)
    out = resolve_increase(Employee(current_base_salary=50000), EditedField.NONE, settings)
    assert out.merit_percent == 3.0
    assert out.increase_amount == 1500.0


def test_initial_load_keeps_explicit_amount_without_percent():
    out = resolve_increase(Employee(current_base_salary=100000, increase_amount=7500))
    assert out.increase_amount == 7500.0
    assert out.merit_percent == pytest.approx(7.5)


def test_seeding_only_on_initial_load():
    settings = BudgetSettings(standard_merit_percentage=3.0)
    emp = Employee(current_base_salary=50000, increase_amount=2000)
    out = resolve_increase(emp, EditedField.INCREASE_AMOUNT, settings)
    assert out.increase_amount == 2000.0
    assert out.merit_percent == pytest.approx(4.0)


def test_input_is_not_mutated():
    emp = Employee(current_base_salary=100000, merit_percent=4.0)
    resolve_increase(emp, EditedField.MERIT_PERCENT)
    assert emp.increase_amount == 0.0
    assert emp.proposed_base_salary == 0.0


_CASES = [
    (Employee(current_base_salary=83250, merit_percent=3.7), EditedField.MERIT_PERCENT),
    (
        Employee(current_base_salary=91000, merit_percent=2.5, promotion_percent=9.0, has_promotion=True),
        EditedField.PROMOTION_PERCENT,
    ),
    (Employee(current_base_salary=64000, increase_amount=3333), EditedField.INCREASE_AMOUNT),
    (
        Employee(current_base_salary=72000, has_promotion=True, proposed_base_salary=80000),
        EditedField.PROPOSED_BASE_SALARY,
    ),
    (Employee(current_base_salary=0, merit_percent=5.0), EditedField.NONE),
    (Employee(current_base_salary=83250, merit_percent=3.7), EditedField.NONE),
    (Employee(current_base_salary=100000, increase_amount=7500), EditedField.NONE),
    (
        Employee(current_base_salary=80000, has_promotion=True, increase_amount=6100),
        EditedField.NONE,
    ),
    (Employee(current_base_salary=100000, merit_percent=4.321, increase_amount=4321), EditedField.NONE),
]


@pytest.mark.parametrize("emp, edited", _CASES)
def test_resolution_is_idempotent(emp, edited):
    once = resolve_increase(emp, edited)
    twice = resolve_increase(once, edited)
    assert twice.model_dump() == once.model_dump()


@pytest.mark.parametrize("emp, edited", _CASES)
def test_proposed_equals_current_plus_increase(emp, edited):
    out = resolve_increase(emp, edited)
    assert out.proposed_base_salary - out.current_base_salary == out.increase_amount


def test_resolve_increase_fields_treats_missing_as_zero():
    res = resolve_increase_fields(None, None, None, False, EditedField.NONE)
    assert res == (0.0, 0.0, 0.0, 0.0)


def test_refresh_derived_fields_trusts_increase_amount():
    emp = Employee(
        current_base_salary=100000,
        increase_amount=12000,
        proposed_base_salary=1,
        current_level_midpoint=100000,
    )
    out = refresh_derived_fields(emp)
    assert out.proposed_base_salary == 112000.0
    assert out.total_increase_percent == pytest.approx(12.0)
    assert out.flagged is True
    assert out.after_increase_market_position == pytest.approx(112.0)


@pytest.mark.parametrize(
    "value, expected",
    [
        (EditedField.INCREASE_AMOUNT, EditedField.INCREASE_AMOUNT),
        ("meritPercent", EditedField.MERIT_PERCENT),
        ("MERIT_PERCENT", EditedField.MERIT_PERCENT),
        ("proposed_base_salary", EditedField.PROPOSED_BASE_SALARY),
        ("bogus", EditedField.NONE),
        (None, EditedField.NONE),
    ],
)
def test_coerce_edited_field(value, expected):
    assert coerce_edited_field(value) is expected


def test_initial_load_keeps_stored_amount_and_percent():
    emp = Employee(current_base_salary=100000, merit_percent=4.321, increase_amount=4321)
    out = resolve_increase(emp, EditedField.NONE, BudgetSettings())
    assert out.increase_amount == 4321.0
    assert out.merit_percent == 4.321
    assert out.proposed_base_salary == 104321.0


def test_initial_load_does_not_seed_over_stored_amount():
    out = resolve_increase(Employee(current_base_salary=100000, increase_amount=7500), EditedField.NONE, BudgetSettings())
    assert out.increase_amount == 7500.0
    assert out.merit_percent == pytest.approx(7.5)


def test_initial_load_twice_keeps_amount():
    once = resolve_increase(Employee(current_base_salary=100000, increase_amount=7500))
    twice = resolve_increase(once)
    assert twice.increase_amount == 7500.0
    assert twice.merit_percent == once.merit_percent
