# comp_rollup/engines/currency.py
"""
Currency normalisation into the common unit (USD) using a fixed rate table.

This is the only place exchange rates are consulted. Aggregators must route
every cross-employee monetary figure through it before summing.
"""

import logging
from typing import Mapping, Optional

import pandas as pd

from comp_rollup.schema import (
    DEFAULT_CURRENCY, EMP_CURRENCY, EMP_CURRENT_BASE, EMP_CURRENT_STOCK, EMP_INCREASE,
    EMP_PROPOSED_BASE, EMP_PROPOSED_STOCK, EXCHANGE_RATES, FALLBACK_EXCHANGE_RATE,
    NORM_CURRENT_BASE, NORM_CURRENT_STOCK, NORM_INCREASE, NORM_PROPOSED_BASE,
    NORM_PROPOSED_STOCK,
)

logger = logging.getLogger(__name__)


def exchange_rate(currency: Optional[str], rates: Mapping[str, float] = EXCHANGE_RATES) -> float:
    """
    Look up the conversion rate for a currency code.

    An absent code means the default currency (USD). Codes missing from the
    table fall back to 1.0.
    """
    code = (currency or DEFAULT_CURRENCY).strip().upper()
    rate = rates.get(code)
    if rate is None:
        logger.debug(f"[FX] No rate for currency '{code}', using {FALLBACK_EXCHANGE_RATE}")
        return FALLBACK_EXCHANGE_RATE
    return rate


def to_common_unit(
    amount: Optional[float],
    currency: Optional[str],
    rates: Mapping[str, float] = EXCHANGE_RATES,
) -> float:
    """Convert a native-currency amount into the common unit. Missing amounts count as 0."""
    return float(amount or 0.0) * exchange_rate(currency, rates)


def normalize_series(
    amounts: pd.Series,
    currencies: pd.Series,
    rates: Mapping[str, float] = EXCHANGE_RATES,
) -> pd.Series:
    """
    Vectorised `to_common_unit` over aligned amount and currency columns.

    NaN amounts are treated as 0; NaN or blank currencies as the default currency.
    """
    codes = (
        currencies.fillna(DEFAULT_CURRENCY)
        .astype(str)
        .str.strip()
        .str.upper()
        .replace("", DEFAULT_CURRENCY)
    )
    factors = codes.map(dict(rates)).astype(float)
    unknown = factors.isna()
    if unknown.any():
        logger.debug(
            f"[FX] {int(unknown.sum())} rows with unknown currency "
            f"{sorted(codes[unknown].unique().tolist())}; using {FALLBACK_EXCHANGE_RATE}"
        )
        factors = factors.fillna(FALLBACK_EXCHANGE_RATE)
    values = pd.to_numeric(amounts, errors="coerce").fillna(0.0).astype(float)
    return values * factors


def add_normalized_columns(
    df: pd.DataFrame,
    rates: Mapping[str, float] = EXCHANGE_RATES,
) -> pd.DataFrame:
    """
    Return a copy of a roster frame with common-unit columns for every money
    figure the aggregators sum across employees.
    """
    out = df.copy()
    mapping = {
        NORM_CURRENT_BASE: EMP_CURRENT_BASE,
        NORM_PROPOSED_BASE: EMP_PROPOSED_BASE,
        NORM_CURRENT_STOCK: EMP_CURRENT_STOCK,
        NORM_PROPOSED_STOCK: EMP_PROPOSED_STOCK,
        NORM_INCREASE: EMP_INCREASE,
    }
    for norm_col, src_col in mapping.items():
        out[norm_col] = normalize_series(out[src_col], out[EMP_CURRENCY], rates)
    return out
