"""
Risk event sampling for Monte Carlo simulation.

PURPOSE:
    Model each risk/opportunity as a Bernoulli occurrence gate followed by an
    impact magnitude drawn from the risk's distribution family. When the gate
    does not fire the risk contributes exactly zero for that draw.

RESPONSIBILITIES:
    - Sample the occurrence gate (did the risk materialise in this draw?)
    - Combine occurrence and magnitude into one realisation
    - NO simulation aggregation, NO statistics

SRP/DRY CHECK:
    Single responsibility: risk event sampling. The only state touched is the
    injected random generator.
"""

from typing import Optional, Union

import numpy as np

from .distributions import RandomSource, resolve_rng, sample_magnitude
from .models import DistributionModel, RiskInput


def sample_occurrence(
    probability: float,
    rng: np.random.Generator,
    size: int = 1,
) -> np.ndarray:
    """
    Sample the occurrence gate.

    One uniform draw per realisation on (0, 1]; the risk occurs when the draw
    is <= probability / 100. probability=0 therefore never occurs and
    probability=100 always occurs.

    Args:
        probability: Occurrence probability in percent (0 to 100)
        rng: Random generator
        size: Number of draws

    Returns:
        Boolean ndarray, True where the risk occurred
    """
    u = 1.0 - rng.random(size)
    return u <= probability / 100.0


def sample(
    p10: float,
    p50: float,
    p90: float,
    model: Union[DistributionModel, str],
    probability: float,
    rng: RandomSource = None,
    size: Optional[int] = None,
) -> Union[float, np.ndarray]:
    """
    Sample one realisation (or `size` realisations) of a risk's impact.

    The occurrence gate is drawn first, then the magnitude. Gated draws are 0.

    Args:
        p10: Optimistic (10th percentile) impact
        p50: Likely (median) impact
        p90: Pessimistic (90th percentile) impact
        model: Distribution family
        probability: Occurrence probability in percent (0 to 100)
        rng: Generator, seed, or None for fresh entropy
        size: None for a single float, otherwise the number of realisations

    Returns:
        float or ndarray of realisations

    Raises:
        ValueError: If probability is outside [0, 100] or model is unknown
    """
    if not 0 <= probability <= 100:
        raise ValueError(f"probability must be in [0, 100], got {probability}")

    generator = resolve_rng(rng)
    n = 1 if size is None else size

    occurred = sample_occurrence(probability, generator, n)
    magnitudes = sample_magnitude(model, p10, p50, p90, generator, n)
    realisations = np.where(occurred, magnitudes, 0.0)

    if size is None:
        return float(realisations[0])
    return realisations


def sample_risk(
    risk: RiskInput,
    rng: RandomSource = None,
    size: Optional[int] = None,
) -> Union[float, np.ndarray]:
    """
    Sample a validated RiskInput.

    Raises:
        ValueError: If the risk is missing estimate fields
    """
    if not risk.is_valid:
        raise ValueError(f"risk {risk.label!r} is missing estimate fields and cannot be sampled")
    return sample(
        risk.optimistic_p10,
        risk.likely_p50,
        risk.pessimistic_p90,
        risk.distribution_model,
        risk.probability,
        rng=rng,
        size=size,
    )
