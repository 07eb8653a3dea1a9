"""
PURPOSE: Compose driver output into a MonteCarloResult.

Sorts the outcome array once and feeds it to the statistics engine and the
target-percentile lookup; sensitivity runs on the unsorted arrays so that
each risk's samples stay aligned with the iteration totals.
"""

import logging
from typing import Mapping, Optional, Sequence

import numpy as np

from .models import RiskInput
from .outputs import MonteCarloResult
from .sensitivity import SensitivityAnalyzer
from .statistics import build_percentile_table, compute_base, percentile, summarize

logger = logging.getLogger(__name__)


def assemble_result(
    valid_risks: Sequence[RiskInput],
    risk_samples: Mapping[str, np.ndarray],
    totals: np.ndarray,
    target_percentile: float,
    analyzer: Optional[SensitivityAnalyzer] = None,
) -> MonteCarloResult:
    """
    Build the result object from one run's transient arrays.

    Args:
        valid_risks: Risks that were simulated.
        risk_samples: Per-risk sample arrays keyed by risk id.
        totals: Iteration totals in iteration order.
        target_percentile: Percentile reported as target_value.
        analyzer: SensitivityAnalyzer to use (default instance if None).

    Returns:
        MonteCarloResult
    """
    totals = np.asarray(totals, dtype=float)
    sorted_totals = np.sort(totals)

    summary = summarize(sorted_totals)
    base = compute_base(valid_risks)
    target_value = percentile(sorted_totals, target_percentile)

    analyzer = analyzer or SensitivityAnalyzer()
    sensitivity_items = analyzer.analyze(valid_risks, risk_samples, totals)

    result = MonteCarloResult(
        p10=summary["p10"],
        p50=summary["p50"],
        p90=summary["p90"],
        mean=summary["mean"],
        std_dev=summary["std_dev"],
        base=base,
        target_value=target_value,
        target_percentile=target_percentile,
        iterations=int(totals.size),
        distribution=sorted_totals,
        sensitivity_analysis=sensitivity_items,
        percentile_table=build_percentile_table(sorted_totals, base),
    )
    logger.debug(
        "Assembled result: P10=%.2f P50=%.2f P90=%.2f P%s=%.2f base=%.2f",
        result.p10,
        result.p50,
        result.p90,
        target_percentile,
        target_value,
        base,
    )
    return result
