# comp_rollup/data/writers.py
"""
Functions for writing review outputs (roster CSV, report JSON).
"""

import csv
import json
import logging
from pathlib import Path
from typing import Iterable, Union

import pandas as pd

from comp_rollup.exceptions import DataWriteError
from comp_rollup.reporting.report import Report
from comp_rollup.schema import DEFAULT_CURRENCY, EXPORT_HEADINGS
from comp_rollup.state.employee import Employee
from comp_rollup.state.roster import Roster

logger = logging.getLogger(__name__)

CSV_COLUMNS = list(EXPORT_HEADINGS)


def _yes_no(value: bool) -> str:
    return "Yes" if value else "No"


def roster_export_frame(employees: Union[Roster, Iterable[Employee]]) -> pd.DataFrame:
    """One row per employee with the export column headings."""
    rows = [
        [
            emp.name,
            emp.current_level or "",
            emp.next_level or "",
            emp.currency or DEFAULT_CURRENCY,
            emp.current_base_salary,
            emp.current_stock,
            emp.proposed_base_salary,
            emp.proposed_stock,
            emp.merit_percent or 0.0,
            emp.total_increase_percent,
            _yes_no(emp.has_promotion),
            _yes_no(emp.flagged),
        ]
        for emp in employees
    ]
    return pd.DataFrame(rows, columns=CSV_COLUMNS)


def write_roster_csv(
    employees: Union[Roster, Iterable[Employee]],
    output_path: Union[Path, str],
) -> Path:
    """
    Writes the roster as CSV with every field quoted.

    Raises:
        DataWriteError: If writing fails.
    """
    output_path = Path(output_path)
    df = roster_export_frame(employees)
    logger.info(f"Writing {len(df)} employees to {output_path}")
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(output_path, index=False, quoting=csv.QUOTE_ALL)
    except OSError as e:
        logger.error(f"Failed to write roster CSV {output_path}: {e}")
        raise DataWriteError(f"Failed to write roster CSV {output_path}") from e
    return output_path


def write_report_json(report: Report, output_path: Union[Path, str]) -> Path:
    """
    Writes `Report.to_dict()` as indented JSON.

    Raises:
        DataWriteError: If writing fails.
    """
    output_path = Path(output_path)
    logger.info(f"Writing report to {output_path}")
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(report.to_dict(), f, indent=2)
    except (OSError, TypeError) as e:
        logger.error(f"Failed to write report {output_path}: {e}")
        raise DataWriteError(f"Failed to write report {output_path}") from e
    return output_path
