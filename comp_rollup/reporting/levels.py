# comp_rollup/reporting/levels.py
"""
Roster breakdown by current level.

Each level reports its increase two ways: the aggregate change of the summed
salaries and the mean of individual increase percentages. They differ when
salaries within a level are unequal, and both are kept.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, List, Union

import numpy as np
import pandas as pd

from comp_rollup.engines.currency import add_normalized_columns
from comp_rollup.engines.increase import refresh_derived_fields
from comp_rollup.schema import (
    EMP_CURRENT_BASE, EMP_ID, EMP_LEVEL, EMP_PROPOSED_BASE,
    NORM_CURRENT_BASE, NORM_PROPOSED_BASE, UNSPECIFIED_LEVEL,
)
from comp_rollup.state.employee import Employee
from comp_rollup.state.roster import Roster, roster_frame

logger = logging.getLogger(__name__)

_INDIVIDUAL_PCT = "individual_increase_pct"


@dataclass
class LevelBreakdown:
    level: str
    count: int
    current_total: float
    proposed_total: float
    increase_total: float
    aggregate_increase_percent: float
    mean_individual_increase_percent: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def individual_increase_percent(df: pd.DataFrame) -> pd.Series:
    """Per-employee base increase percent; 0 where there is no current salary."""
    current = pd.to_numeric(df[EMP_CURRENT_BASE], errors="coerce").fillna(0.0).astype(float)
    proposed = pd.to_numeric(df[EMP_PROPOSED_BASE], errors="coerce").fillna(0.0).astype(float)
    safe_current = current.where(current > 0, 1.0)
    pct = np.where(current > 0, (proposed - current) * 100 / safe_current, 0.0)
    return pd.Series(pct, index=df.index, dtype=float)


def level_breakdown_from_frame(normalized: pd.DataFrame) -> List[LevelBreakdown]:
    """Breakdown from a roster frame that already carries normalised columns."""
    if normalized.empty:
        return []

    df = normalized.copy()
    df[EMP_LEVEL] = (
        df[EMP_LEVEL].fillna(UNSPECIFIED_LEVEL).astype(str).str.strip().replace("", UNSPECIFIED_LEVEL)
    )
    df[_INDIVIDUAL_PCT] = individual_increase_percent(df)

    grouped = df.groupby(EMP_LEVEL, sort=False).agg(
        count=(EMP_ID, "size"),
        current_total=(NORM_CURRENT_BASE, "sum"),
        proposed_total=(NORM_PROPOSED_BASE, "sum"),
        pct_sum=(_INDIVIDUAL_PCT, "sum"),
    )

    breakdown = []
    for level, row in grouped.iterrows():
        count = int(row["count"])
        current_total = float(row["current_total"])
        proposed_total = float(row["proposed_total"])
        increase = proposed_total - current_total
        aggregate_pct = increase * 100 / current_total if current_total > 0 else 0.0
        breakdown.append(
            LevelBreakdown(
                level=str(level),
                count=count,
                current_total=current_total,
                proposed_total=proposed_total,
                increase_total=increase,
                aggregate_increase_percent=aggregate_pct,
                mean_individual_increase_percent=float(row["pct_sum"]) / count,
            )
        )
    logger.debug(f"[LEVELS] Built breakdown for {len(breakdown)} levels")
    return breakdown


def compute_level_breakdown(employees: Union[Roster, Iterable[Employee]]) -> List[LevelBreakdown]:
    """
    One LevelBreakdown per distinct current level, in order of first appearance.
    Proposed salaries are refreshed from each increase amount first.
    """
    refreshed = [refresh_derived_fields(emp) for emp in employees]
    return level_breakdown_from_frame(add_normalized_columns(roster_frame(refreshed)))
