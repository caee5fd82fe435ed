# comp_rollup/state/roster.py
"""
The roster: every Employee under review in the current session.

Order is kept for display but carries no meaning; only ids must be unique.
The roster owns its employees exclusively and assumes a single writer.
"""

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Union

import pandas as pd

from comp_rollup.config.models import BudgetSettings
from comp_rollup.engines.increase import resolve_increase
from comp_rollup.exceptions import DuplicateEmployeeError, EmployeeNotFoundError
from comp_rollup.schema import ROSTER_COLS, EditedField
from comp_rollup.state.employee import Employee, new_employee_id

logger = logging.getLogger(__name__)


class Roster:
    """Ordered, id-unique collection of employees."""

    def __init__(self, employees: Optional[Iterable[Employee]] = None):
        self._employees: Dict[str, Employee] = {}
        for emp in employees or []:
            self.insert(emp)

    def __len__(self) -> int:
        return len(self._employees)

    def __iter__(self) -> Iterator[Employee]:
        return iter(list(self._employees.values()))

    def __contains__(self, employee_id: object) -> bool:
        return str(employee_id) in self._employees

    @property
    def employees(self) -> List[Employee]:
        return list(self._employees.values())

    def get(self, employee_id: Union[str, int]) -> Employee:
        try:
            return self._employees[str(employee_id)]
        except KeyError:
            raise EmployeeNotFoundError(f"Employee not on roster: {employee_id}") from None

    def insert(self, employee: Employee) -> Employee:
        """Insert an employee keeping its id. Raises DuplicateEmployeeError on id clash."""
        if employee.id in self._employees:
            raise DuplicateEmployeeError(f"Employee id already on roster: {employee.id}")
        self._employees[employee.id] = employee
        return employee

    def add(
        self,
        employee: Employee,
        budget_settings: Optional[BudgetSettings] = None,
        last_edited: Union[EditedField, str, None] = EditedField.NONE,
    ) -> Employee:
        """
        Add a new employee under a freshly generated id, resolving its increase.

        With last_edited left as NONE an absent merit percent is seeded from the
        standard merit percentage.
        """
        fresh = employee.model_copy(update={"id": new_employee_id()})
        resolved = resolve_increase(fresh, last_edited, budget_settings)
        self._employees[resolved.id] = resolved
        logger.debug(f"[ROSTER] Added employee {resolved.id} ({resolved.name})")
        return resolved

    def update(
        self,
        employee_id: Union[str, int],
        employee: Employee,
        last_edited: Union[EditedField, str, None] = EditedField.NONE,
        budget_settings: Optional[BudgetSettings] = None,
    ) -> Employee:
        """Replace an employee's record, keeping its id, and re-resolve it."""
        key = str(employee_id)
        if key not in self._employees:
            raise EmployeeNotFoundError(f"Employee not on roster: {employee_id}")
        resolved = resolve_increase(
            employee.model_copy(update={"id": key}), last_edited, budget_settings
        )
        self._employees[key] = resolved
        return resolved

    def edit(
        self,
        employee_id: Union[str, int],
        last_edited: Union[EditedField, str],
        budget_settings: Optional[BudgetSettings] = None,
        **changes: Any,
    ) -> Employee:
        """
        Apply field changes to one employee and resolve with the given tag.

        Example:
            roster.edit(emp_id, EditedField.INCREASE_AMOUNT, increase_amount=8000)
        """
        current = self.get(employee_id)
        merged = Employee.model_validate({**current.model_dump(), **changes})
        return self.update(employee_id, merged, last_edited, budget_settings)

    def resolve_all(
        self,
        budget_settings: Optional[BudgetSettings] = None,
        last_edited: Union[EditedField, str, None] = EditedField.NONE,
    ) -> None:
        """Re-resolve every employee with one tag, e.g. after importing raw rows."""
        for key, emp in list(self._employees.items()):
            self._employees[key] = resolve_increase(emp, last_edited, budget_settings)
        logger.info(f"[ROSTER] Resolved {len(self._employees)} employees")

    def duplicate(self, employee_id: Union[str, int]) -> Employee:
        """Copy an employee under a new id, carrying the increase fields over."""
        clone = self.get(employee_id).model_copy(update={"id": new_employee_id()})
        self._employees[clone.id] = clone
        return clone

    def remove(self, employee_id: Union[str, int]) -> Employee:
        key = str(employee_id)
        if key not in self._employees:
            raise EmployeeNotFoundError(f"Employee not on roster: {employee_id}")
        logger.debug(f"[ROSTER] Removing employee {key}")
        return self._employees.pop(key)

    def clear(self) -> None:
        logger.info(f"[ROSTER] Clearing {len(self._employees)} employees")
        self._employees.clear()

    def to_records(self) -> List[Dict[str, Any]]:
        """Flat camelCase records, one per employee, in roster order."""
        return [emp.to_record() for emp in self._employees.values()]

    def to_frame(self) -> pd.DataFrame:
        """Roster as a DataFrame with the ROSTER_COLS columns (snake_case)."""
        if not self._employees:
            return pd.DataFrame(columns=ROSTER_COLS)
        df = pd.DataFrame([emp.model_dump() for emp in self._employees.values()])
        return df[ROSTER_COLS]

    @classmethod
    def from_records(cls, records: Iterable[Dict[str, Any]]) -> "Roster":
        """
        Build a roster from stored records. Later records whose id is already
        taken are re-keyed with a fresh id rather than rejected.
        """
        roster = cls()
        for record in records:
            emp = Employee.from_record(record)
            if emp.id in roster:
                new_id = new_employee_id()
                logger.warning(
                    f"[ROSTER] Duplicate employee id {emp.id} ({emp.name}); re-keyed as {new_id}"
                )
                emp = emp.model_copy(update={"id": new_id})
            roster.insert(emp)
        return roster


def roster_frame(employees: Union[Roster, Iterable[Employee]]) -> pd.DataFrame:
    """DataFrame view of a Roster or any iterable of employees."""
    if isinstance(employees, Roster):
        return employees.to_frame()
    rows = [emp.model_dump() for emp in employees]
    if not rows:
        return pd.DataFrame(columns=ROSTER_COLS)
    return pd.DataFrame(rows)[ROSTER_COLS]
