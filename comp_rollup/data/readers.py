# comp_rollup/data/readers.py
"""
Functions for reading roster files (CSV or JSON records).
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import pandas as pd

from comp_rollup.exceptions import DataReadError
from comp_rollup.schema import (
    EMP_CURRENT_BASE, EMP_INCREASE, EMP_PROPOSED_BASE, EXPORT_HEADINGS, RECORD_KEYS,
)
from comp_rollup.state.roster import Roster

logger = logging.getLogger(__name__)

# Header spellings accepted for the id column, mapped to 'id'
_ID_ALIASES = ["employee_id", "Employee ID", "ID", "Emp ID"]


def _standardize_id_column(df: pd.DataFrame) -> pd.DataFrame:
    if "id" in df.columns:
        return df
    for col_name in _ID_ALIASES:
        if col_name in df.columns:
            logger.info(f"Renaming identifier column '{col_name}' to 'id'.")
            return df.rename(columns={col_name: "id"})
    return df


def _standardize_export_headings(df: pd.DataFrame) -> pd.DataFrame:
    """
    Map the review CSV headings ("Current Base Salary", ...) to record keys so
    an exported roster reads back in. The export has no increase column, so the
    increase amount is taken from proposed minus current base salary.
    """
    renames = {
        heading: key
        for heading, key in EXPORT_HEADINGS.items()
        if heading in df.columns and key not in df.columns
    }
    if renames:
        logger.info(f"Mapping export headings to record keys: {sorted(renames)}")
        df = df.rename(columns=renames)

    current_key = RECORD_KEYS[EMP_CURRENT_BASE]
    proposed_key = RECORD_KEYS[EMP_PROPOSED_BASE]
    increase_key = RECORD_KEYS[EMP_INCREASE]
    current_col = current_key if current_key in df.columns else EMP_CURRENT_BASE
    if current_col not in df.columns:
        logger.warning(
            f"No current base salary column found (expected '{current_key}' or "
            f"'Current Base Salary'); every employee will load with a salary of 0"
        )
    elif (
        proposed_key in df.columns
        and increase_key not in df.columns
        and EMP_INCREASE not in df.columns
    ):
        current = pd.to_numeric(df[current_col], errors="coerce").fillna(0.0)
        df[increase_key] = pd.to_numeric(df[proposed_key], errors="coerce") - current
    return df


def _frame_to_records(df: pd.DataFrame) -> List[Dict[str, Any]]:
    # NaN -> None so blank cells go through the forgiving record coercion
    cleaned = df.astype(object).where(pd.notna(df), None)
    return cleaned.to_dict(orient="records")


def read_roster_records(file_path: Union[Path, str]) -> List[Dict[str, Any]]:
    """
    Reads raw employee records from a CSV or JSON file.

    JSON may hold a list of records or a mapping with an 'employees' list
    (the stored project layout).

    Raises:
        DataReadError: If the file cannot be found, read, or parsed.
    """
    if not isinstance(file_path, Path):
        file_path = Path(file_path)

    logger.info(f"Attempting to read roster from: {file_path}")

    if not file_path.exists():
        logger.error(f"Roster file not found: {file_path}")
        raise DataReadError(f"Roster file not found: {file_path}")

    suffix = file_path.suffix.lower()
    if suffix == ".csv":
        try:
            # Read just the header first so id columns keep their text form
            cols_in_csv = pd.read_csv(file_path, nrows=0).columns.tolist()
            id_cols = {c: str for c in ["id", *_ID_ALIASES] if c in cols_in_csv}
            df = pd.read_csv(file_path, dtype=id_cols)
        except (OSError, ValueError, pd.errors.ParserError) as read_err:
            logger.error(f"Error reading CSV file {file_path}: {read_err}")
            raise DataReadError(f"Error reading CSV file {file_path}") from read_err
        df = _standardize_id_column(df)
        df = _standardize_export_headings(df)
        records = _frame_to_records(df)
    elif suffix == ".json":
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, json.JSONDecodeError) as read_err:
            logger.error(f"Error reading JSON file {file_path}: {read_err}")
            raise DataReadError(f"Error reading JSON file {file_path}") from read_err
        if isinstance(payload, dict):
            payload = payload.get("employees", [])
        if not isinstance(payload, list):
            raise DataReadError(f"Expected a list of employee records in {file_path}")
        records = payload
    else:
        logger.error(f"Unsupported roster file format: {file_path}. Please use .csv or .json.")
        raise DataReadError(f"Unsupported roster file format: {file_path.suffix}")

    if not records:
        logger.warning(f"No employee records loaded from: {file_path}")
    else:
        logger.info(f"Loaded {len(records)} employee records from {file_path}")
    return records


def read_roster(file_path: Union[Path, str]) -> Roster:
    """Reads a roster file into a Roster."""
    return Roster.from_records(read_roster_records(file_path))
