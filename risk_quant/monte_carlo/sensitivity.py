"""
PURPOSE: Rank risks by how much of the total-outcome variance each one drives.

For every simulated risk:

    risk_variance         = Var(risk samples)                  (population)
    correlation           = Pearson(risk samples, total outcome)
    variance_contribution = risk_variance * |correlation| / Var(total outcome)

This is a tolerant heuristic, not a Sobol/ANOVA decomposition: the
contributions of independent risks sum to roughly 1 but are not guaranteed to.

SRP/DRY: Single responsibility = sensitivity analysis only.
         No result formatting, no simulation.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

import numpy as np
from scipy import stats

from .config import ROUND_CONTRIBUTION, TOP_N_DRIVERS
from .models import RiskInput

logger = logging.getLogger(__name__)


@dataclass
class SensitivityItem:
    """Sensitivity of the total outcome to one risk.

    Attributes:
        risk_id (str): Identifier of the risk.
        risk_number (str): Register display label, if any.
        title (str): Risk title, if any.
        variance_contribution (float): Heuristic share of total variance [0, 1].
        correlation (float): Pearson correlation with the total [-1, 1].
        rank (int): Rank order (1 = most sensitive).
    """
    risk_id: str
    risk_number: Optional[str]
    title: Optional[str]
    variance_contribution: float
    correlation: float
    rank: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase dict the tornado chart consumes."""
        return {
            "riskId": self.risk_id,
            "riskNumber": self.risk_number,
            "title": self.title,
            "varianceContribution": self.variance_contribution,
            "correlation": self.correlation,
        }


def correlation(x: Sequence[float], y: Sequence[float]) -> float:
    """Pearson correlation; 0.0 when either series is constant or too short."""
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    if x.size < 2 or np.std(x) == 0 or np.std(y) == 0:
        return 0.0
    r = stats.pearsonr(x, y)[0]
    return float(np.clip(r, -1.0, 1.0))


class SensitivityAnalyzer:
    """
    Computes variance-contribution sensitivity for each simulated risk.

    Assumptions:
    - Risks are sampled independently (no correlation groups modelled).
    - The total outcome is the plain sum of the risk samples.
    """

    def __init__(self, top_n: int = TOP_N_DRIVERS):
        """
        Args:
            top_n: Number of drivers returned by top_drivers() (default 10).
        """
        self.top_n = top_n

    def analyze(
        self,
        risks: Sequence[RiskInput],
        risk_samples: Mapping[str, np.ndarray],
        totals: Sequence[float],
    ) -> List[SensitivityItem]:
        """
        Compute sensitivity for every risk, sorted by contribution (descending).

        Args:
            risks: The valid risks that were simulated.
            risk_samples: Per-risk sample arrays keyed by risk id, aligned with totals.
            totals: Total outcome per iteration (in iteration order, unsorted).

        Returns:
            List of SensitivityItem with ranks assigned from 1.
        """
        totals = np.asarray(totals, dtype=float)
        total_variance = float(np.var(totals))

        items = []
        for risk in risks:
            samples = np.asarray(risk_samples[risk.id], dtype=float)
            risk_variance = float(np.var(samples))
            corr = correlation(samples, totals)
            if total_variance > 0:
                contribution = risk_variance * abs(corr) / total_variance
            else:
                contribution = 0.0
            items.append(
                SensitivityItem(
                    risk_id=risk.id,
                    risk_number=risk.risk_number,
                    title=risk.title,
                    variance_contribution=contribution,
                    correlation=corr,
                )
            )

        items.sort(key=lambda item: item.variance_contribution, reverse=True)
        for rank, item in enumerate(items, 1):
            item.rank = rank

        if items:
            logger.debug(
                "Sensitivity: top driver %s (%.4f of total variance)",
                items[0].risk_id,
                items[0].variance_contribution,
            )
        return items

    def top_drivers(self, items: Sequence[SensitivityItem], n: Optional[int] = None) -> List[SensitivityItem]:
        """Return the n highest-ranked items (default: top_n)."""
        limit = self.top_n if n is None else n
        return sorted(items, key=lambda item: item.rank)[:limit]

    @staticmethod
    def to_tornado_rows(items: Sequence[SensitivityItem]) -> Dict[str, List]:
        """
        Convert sensitivity items to a column-wise table for tornado charts / CSV.

        Returns:
            Dictionary with keys as column names, values as lists (one per row).
        """
        return {
            "rank": [item.rank for item in items],
            "risk_id": [item.risk_id for item in items],
            "risk_number": [item.risk_number for item in items],
            "title": [item.title for item in items],
            "variance_contribution": [round(item.variance_contribution, ROUND_CONTRIBUTION) for item in items],
            "correlation": [round(item.correlation, ROUND_CONTRIBUTION) for item in items],
        }
