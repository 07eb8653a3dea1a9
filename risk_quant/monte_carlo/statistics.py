"""
PURPOSE: Summary statistics over the simulated total-outcome distribution.

RESPONSIBILITIES:
- Linear-interpolation percentiles on an ascending-sorted outcome array
- Population mean and standard deviation
- Deterministic base (sum of likely P50 values over valid risks)
- Percentile table with each breakpoint's variance from base
- Single responsibility: statistics only, no sampling, no formatting
"""

from typing import Dict, Iterable, List, Sequence

import numpy as np

from .config import PERCENTILE_TABLE_BREAKPOINTS, SUMMARY_PERCENTILES
from .models import RiskInput
from .outputs import PercentileTableRow


def percentile(sorted_values: Sequence[float], p: float) -> float:
    """
    Percentile of an ascending-sorted array by linear interpolation.

    index = p / 100 * (n - 1); the values at floor(index) and ceil(index)
    are blended by the fractional part. Empty input returns 0.0.
    """
    values = np.asarray(sorted_values, dtype=float)
    if values.size == 0:
        return 0.0

    index = (p / 100.0) * (values.size - 1)
    lower = int(np.floor(index))
    upper = int(np.ceil(index))
    if lower == upper:
        return float(values[lower])
    weight = index - lower
    return float(values[lower] * (1.0 - weight) + values[upper] * weight)


def mean(values: Sequence[float]) -> float:
    values = np.asarray(values, dtype=float)
    if values.size == 0:
        return 0.0
    return float(np.mean(values))


def std_dev(values: Sequence[float]) -> float:
    """Population standard deviation (divides by N)."""
    values = np.asarray(values, dtype=float)
    if values.size == 0:
        return 0.0
    return float(np.std(values, ddof=0))


def compute_base(valid_risks: Iterable[RiskInput]) -> float:
    """Deterministic base: the sum of likely P50 over the risks that are simulated."""
    return float(sum(risk.likely_p50 for risk in valid_risks if risk.is_valid))


def build_percentile_table(
    sorted_values: Sequence[float],
    base: float,
    breakpoints: Iterable[float] = PERCENTILE_TABLE_BREAKPOINTS,
) -> List[PercentileTableRow]:
    """One row per breakpoint: the percentile value and its distance from base."""
    rows = []
    for p in breakpoints:
        value = percentile(sorted_values, p)
        rows.append(PercentileTableRow(percentile=p, value=value, variance_from_base=value - base))
    return rows


def summarize(sorted_values: Sequence[float]) -> Dict[str, float]:
    """P10/P50/P90, mean and population std dev of a sorted outcome array."""
    summary = {f"p{p}": percentile(sorted_values, p) for p in SUMMARY_PERCENTILES}
    summary["mean"] = mean(sorted_values)
    summary["std_dev"] = std_dev(sorted_values)
    return summary
