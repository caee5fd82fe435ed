from comp_rollup.config.models import BudgetSettings
from comp_rollup.engines.increase import refresh_derived_fields, resolve_increase, resolve_increase_fields
from comp_rollup.reporting.report import Report, compute_report
from comp_rollup.schema import EditedField
from comp_rollup.state.employee import Employee
from comp_rollup.state.roster import Roster

__all__ = [
    "BudgetSettings",
    "EditedField",
    "Employee",
    "Report",
    "Roster",
    "compute_report",
    "refresh_derived_fields",
    "resolve_increase",
    "resolve_increase_fields",
]
