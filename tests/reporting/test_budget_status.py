import pytest

from comp_rollup.config.models import BudgetSettings
from comp_rollup.reporting.budget import category_status, compute_budget_status, max_allowed
from comp_rollup.reporting.report import compute_report
from comp_rollup.schema import HEALTH_NEAR_LIMIT, HEALTH_OVER, HEALTH_WITHIN
from comp_rollup.state.employee import Employee


def test_within_tolerance_is_not_over_budget():
    status = category_status("base", used=52000, allowance=50000, tolerance_pct=5)
    assert status.max_allowed == 52500.0
    assert status.over_budget is False
    assert status.remaining == -2000.0
    assert status.utilization_percent == pytest.approx(104.0)
    assert status.over_by == 0.0
    assert status.health == HEALTH_NEAR_LIMIT


def test_beyond_tolerance_is_over_budget():
    status = category_status("base", used=53000, allowance=50000, tolerance_pct=5)
    assert status.over_budget is True
    assert status.over_by == 500.0
    assert status.health == HEALTH_OVER


@pytest.mark.parametrize("used, health", [(45000, HEALTH_WITHIN), (46000, HEALTH_NEAR_LIMIT)])
def test_near_limit_boundary(used, health):
    assert category_status("base", used, 50000, 5).health == health


def test_zero_allowance_reports_undefined_utilization():
    status = category_status("stock", used=100, allowance=0, tolerance_pct=5)
    assert status.utilization_percent is None
    assert status.over_budget is True

    idle = category_status("stock", used=0, allowance=0, tolerance_pct=5)
    assert idle.utilization_percent is None
    assert idle.over_budget is False
    assert idle.health == HEALTH_WITHIN


def test_max_allowed():
    assert max_allowed(25000, 0) == 25000.0
    assert max_allowed(25000, 10) == 27500.0


def test_compute_budget_status_sums_increase_amounts():
    employees = [
        Employee(current_base_salary=300000, increase_amount=30000),
        Employee(current_base_salary=220000, increase_amount=22000, current_stock=1000, proposed_stock=4000),
    ]
    settings = BudgetSettings(base_salary_increase_allowance=50000, max_over_budget=5)
    status = compute_budget_status(employees, settings)
    assert status.base.used == 52000.0
    assert status.base.over_budget is False
    assert status.stock.used == 3000.0
    assert status.is_over_budget is False


def test_stock_over_budget_makes_roster_over_budget():
    employees = [Employee(current_stock=0, proposed_stock=30000)]
    status = compute_budget_status(employees, BudgetSettings(stock_increase_allowance=25000, max_over_budget=5))
    assert status.stock.over_budget is True
    assert status.base.over_budget is False
    assert status.is_over_budget is True


def test_currency_neutrality():
    mixed = [
        Employee(currency="GBP", current_base_salary=80000, increase_amount=8000, current_stock=1000, proposed_stock=2000),
        Employee(currency="EUR", current_base_salary=50000, increase_amount=5000),
    ]
    usd = [
        Employee(currency="USD", current_base_salary=100000, increase_amount=10000, current_stock=1250, proposed_stock=2500),
        Employee(currency="USD", current_base_salary=54000, increase_amount=5400),
    ]
    settings = BudgetSettings()
    a = compute_budget_status(mixed, settings)
    b = compute_budget_status(usd, settings)
    for left, right in ((a.base, b.base), (a.stock, b.stock)):
        assert left.used == pytest.approx(right.used)
        assert left.remaining == pytest.approx(right.remaining)
        assert left.utilization_percent == pytest.approx(right.utilization_percent)
        assert left.over_budget == right.over_budget


def test_empty_roster(default_settings):
    status = compute_budget_status([], default_settings)
    assert status.base.used == 0.0
    assert status.stock.used == 0.0
    assert status.is_over_budget is False


def test_standalone_status_matches_report(default_settings):
    employees = [Employee(current_base_salary=90000, increase_amount=4500, proposed_base_salary=1)]
    status = compute_budget_status(employees, default_settings)
    assert status.base.used == 4500.0
    assert status.to_dict() == compute_report(employees, default_settings).budget.to_dict()
