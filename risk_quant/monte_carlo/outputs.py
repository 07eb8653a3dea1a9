"""
PURPOSE: Structured Monte Carlo results and their serialized forms.

This module holds the result types handed to the reporting/dashboard layer
(histogram, percentile table, tornado chart) and converts them into
JSON-compatible dicts and snapshot payloads.

SRP/DRY: Single responsibility = result structure and serialization.
         No simulation, no statistics, no sensitivity computation.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

import numpy as np

from .config import ROUND_CONTRIBUTION, ROUND_VALUE
from .sensitivity import SensitivityItem


@dataclass
class PercentileTableRow:
    """One row of the probability-band table.

    Attributes:
        percentile (float): Breakpoint (e.g. 80 for P80).
        value (float): Simulated total at that percentile.
        variance_from_base (float): value minus the deterministic base.
    """
    percentile: float
    value: float
    variance_from_base: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "percentile": self.percentile,
            "value": self.value,
            "varianceFromBase": self.variance_from_base,
        }


@dataclass
class MonteCarloResult:
    """Structured output of one simulation run.

    Attributes:
        p10 (float): 10th percentile of the simulated total.
        p50 (float): Median of the simulated total.
        p90 (float): 90th percentile of the simulated total.
        mean (float): Mean of the simulated total.
        std_dev (float): Population standard deviation of the simulated total.
        base (float): Sum of likely P50 over the valid risks.
        target_value (float): Simulated total at target_percentile.
        target_percentile (float): Requested position (e.g. 80 for P80).
        iterations (int): Number of iterations run.
        distribution (np.ndarray): All iteration totals, sorted ascending.
        sensitivity_analysis (list): SensitivityItem list, most sensitive first.
        percentile_table (list): PercentileTableRow list, ascending percentile.
    """
    p10: float
    p50: float
    p90: float
    mean: float
    std_dev: float
    base: float
    target_value: float
    target_percentile: float
    iterations: int
    distribution: np.ndarray
    sensitivity_analysis: List[SensitivityItem] = field(default_factory=list)
    percentile_table: List[PercentileTableRow] = field(default_factory=list)

    @property
    def contingency(self) -> float:
        """Target value minus base: the allowance needed to reach the target percentile."""
        return self.target_value - self.base

    def to_dict(self) -> Dict[str, Any]:
        """Convert results to a JSON-compatible dict using the dashboard's field names."""
        return {
            "p10": self.p10,
            "p50": self.p50,
            "p90": self.p90,
            "mean": self.mean,
            "stdDev": self.std_dev,
            "base": self.base,
            "targetValue": self.target_value,
            "targetPercentile": self.target_percentile,
            "distribution": [float(v) for v in self.distribution],
            "sensitivityAnalysis": [item.to_dict() for item in self.sensitivity_analysis],
            "percentileTable": [row.to_dict() for row in self.percentile_table],
        }

    def to_snapshot(self) -> Dict[str, Any]:
        """
        Payload for a dashboard snapshot record.

        Summary figures are rounded to whole numbers because the snapshot
        store keeps them in integer columns; chart data stays at full precision
        apart from display rounding.
        """
        return {
            "iterations": self.iterations,
            "targetPercentile": int(round(self.target_percentile)),
            "p10": int(round(self.p10)),
            "p50": int(round(self.p50)),
            "p90": int(round(self.p90)),
            "mean": int(round(self.mean)),
            "stdDev": int(round(self.std_dev)),
            "base": int(round(self.base)),
            "targetValue": int(round(self.target_value)),
            "distribution": [round(float(v), ROUND_VALUE) for v in self.distribution],
            "percentileTable": [
                {
                    "percentile": row.percentile,
                    "value": round(row.value, ROUND_VALUE),
                    "varianceFromBase": round(row.variance_from_base, ROUND_VALUE),
                }
                for row in self.percentile_table
            ],
            "sensitivityAnalysis": [
                {
                    "riskId": item.risk_id,
                    "riskNumber": item.risk_number,
                    "title": item.title,
                    "varianceContribution": round(item.variance_contribution, ROUND_CONTRIBUTION),
                }
                for item in self.sensitivity_analysis
            ],
        }
