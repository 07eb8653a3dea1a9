"""
PURPOSE: Probabilistic distribution samplers for risk and opportunity impact magnitudes.

Every family is parameterised by the three-point estimate (P10, P50, P90).
These are percentiles, not bounds, so each family uses a documented
approximation to turn them into sampling parameters:

    triangular  support extended 30% beyond [P10, P90], mode = P50
    pert        support extended 15%, moment-matched normal clipped to support
    normal      mean = P50, sigma = (P90 - P10) / 2.56
    uniform     [P10, P90], P50 ignored
    lognormal   mu = ln(P50), sigma = ln(P90 / P10) / 2.56 (sign-aware)
    weibull     shape from P90 / P50, scale from P50

RESPONSIBILITIES:
- Sample impact magnitudes for each DistributionModel (vectorised over `size`)
- Provide the Box-Muller normal generator and the Beasley-Springer-Moro
  inverse normal CDF as numerical primitives
- Fall back to the normal family when lognormal/Weibull parameters are unusable
- Single responsibility: only sampling, no occurrence gate, no aggregation
"""

import logging
import math
from typing import Callable, Dict, Union

import numpy as np

from .config import (
    DEGENERATE_RANGE_EPSILON,
    P10_P90_Z_SPAN,
    PERT_LAMBDA,
    PERT_TAIL_EXTENSION,
    TRIANGULAR_TAIL_EXTENSION,
)
from .models import DistributionModel

logger = logging.getLogger(__name__)

RandomSource = Union[int, np.random.Generator, np.random.SeedSequence, None]

# Beasley-Springer (central region) and Moro (tails) coefficients.
_BSM_A = (2.50662823884, -18.61500062529, 41.39119773534, -25.44106049637)
_BSM_B = (-8.47351093090, 23.08336743743, -21.06224101826, 3.13082909833)
_BSM_C = (
    0.3374754822726147,
    0.9761690190917186,
    0.1607979714918209,
    0.0276438810333863,
    0.0038405729373609,
    0.0003951896511919,
    0.0000321767881768,
    0.0000002888167364,
    0.0000003960315187,
)
_BSM_CENTRAL_LIMIT = 0.42

_LN2 = math.log(2.0)
_LN10 = math.log(10.0)


def resolve_rng(random_state: RandomSource = None) -> np.random.Generator:
    """Return a numpy Generator for a seed, an existing Generator, or None (fresh entropy)."""
    if isinstance(random_state, np.random.Generator):
        return random_state
    return np.random.default_rng(random_state)


def standard_normal_ppf(p):
    """
    Inverse CDF of the standard normal distribution (Beasley-Springer-Moro).

    Rational approximation in the central region |p - 0.5| < 0.42 and
    Moro's Chebyshev polynomial in log(-log(q)) in the tails.

    Args:
        p: Probability or array of probabilities, each strictly in (0, 1)

    Returns:
        float for scalar input, numpy array otherwise

    Raises:
        ValueError: If any p is outside (0, 1) or NaN
    """
    p_arr = np.asarray(p, dtype=float)
    if np.any(np.isnan(p_arr)) or np.any((p_arr <= 0.0) | (p_arr >= 1.0)):
        raise ValueError("p must be in (0, 1)")

    y = p_arr - 0.5
    r = y * y
    a0, a1, a2, a3 = _BSM_A
    b0, b1, b2, b3 = _BSM_B
    central = y * (((a3 * r + a2) * r + a1) * r + a0)
    central = central / ((((b3 * r + b2) * r + b1) * r + b0) * r + 1.0)

    q = np.where(y < 0, p_arr, 1.0 - p_arr)
    t = np.log(-np.log(q))
    tail = np.full_like(t, _BSM_C[-1])
    for coefficient in reversed(_BSM_C[:-1]):
        tail = tail * t + coefficient
    tail = np.where(y < 0, -tail, tail)

    x = np.where(np.abs(y) < _BSM_CENTRAL_LIMIT, central, tail)
    if x.ndim == 0:
        return float(x)
    return x


def box_muller(rng: np.random.Generator, mean: float = 0.0, std_dev: float = 1.0, size: int = 1) -> np.ndarray:
    """Normal variates via the Box-Muller transform (cosine branch only)."""
    u1 = 1.0 - rng.random(size)  # (0, 1], keeps log() finite
    u2 = rng.random(size)
    z = np.sqrt(-2.0 * np.log(u1)) * np.cos(2.0 * np.pi * u2)
    return z * std_dev + mean


def sample_triangular(rng: np.random.Generator, p10: float, p50: float, p90: float, size: int = 1) -> np.ndarray:
    """
    Triangular sampling with support stretched past the P10/P90 estimates.

    The support is [lo - 0.3*range, hi + 0.3*range] so the tails extend beyond
    the stated percentiles; the mode is P50 clamped into the support.
    Two-branch inverse CDF.
    """
    lo, hi = min(p10, p90), max(p10, p90)
    spread = hi - lo
    low = lo - spread * TRIANGULAR_TAIL_EXTENSION
    high = hi + spread * TRIANGULAR_TAIL_EXTENSION
    mode = min(max(p50, low), high)
    width = high - low

    u = rng.random(size)
    fc = (mode - low) / width
    left = low + np.sqrt(u * width * (mode - low))
    right = high - np.sqrt((1.0 - u) * width * (high - mode))
    return np.where(u < fc, left, right)


def sample_pert(rng: np.random.Generator, p10: float, p50: float, p90: float, size: int = 1) -> np.ndarray:
    """
    PERT-like sampling: a moment-matched normal clipped to a 15%-extended support.

    mean = (min + 4*mode + max) / 6 and sd = (max - min) / 6, standing in for
    the Beta distribution of classic PERT.
    """
    lo, hi = min(p10, p90), max(p10, p90)
    spread = hi - lo
    low = lo - spread * PERT_TAIL_EXTENSION
    high = hi + spread * PERT_TAIL_EXTENSION

    mean = (low + PERT_LAMBDA * p50 + high) / (PERT_LAMBDA + 2)
    std_dev = (high - low) / 6.0
    return np.clip(box_muller(rng, mean, std_dev, size), low, high)


def sample_normal(rng: np.random.Generator, p10: float, p50: float, p90: float, size: int = 1) -> np.ndarray:
    """Normal with mean P50 and sigma (P90 - P10) / 2.56."""
    std_dev = (p90 - p10) / P10_P90_Z_SPAN
    return box_muller(rng, p50, std_dev, size)


def sample_uniform(rng: np.random.Generator, p10: float, p50: float, p90: float, size: int = 1) -> np.ndarray:
    """Uniform on [P10, P90]; P50 is ignored."""
    return p10 + rng.random(size) * (p90 - p10)


def sample_lognormal(rng: np.random.Generator, p10: float, p50: float, p90: float, size: int = 1) -> np.ndarray:
    """
    Lognormal fitted to the median and the P10/P90 spread.

    All-negative estimates (opportunities) are mirrored, sampled and negated.
    Mixed signs cannot be lognormal and fall back to the normal family.
    """
    if p10 > 0 and p50 > 0 and p90 > 0:
        mu = math.log(p50)
        sigma = math.log(p90 / p10) / P10_P90_Z_SPAN
        return np.exp(box_muller(rng, mu, sigma, size))

    if p10 < 0 and p50 < 0 and p90 < 0:
        return -sample_lognormal(rng, -p90, -p50, -p10, size)

    logger.debug("Lognormal estimate has mixed signs (%s, %s, %s); using normal", p10, p50, p90)
    return sample_normal(rng, p10, p50, p90, size)


def sample_weibull(rng: np.random.Generator, p10: float, p50: float, p90: float, size: int = 1) -> np.ndarray:
    """
    Weibull with shape solved from the P90/P50 ratio and scale from P50.

        p50 = scale * ln(2)  ** (1/k)
        p90 = scale * ln(10) ** (1/k)
        =>  k = ln(ln10 / ln2) / ln(p90 / p50)

    Non-positive P10 or P50, a ratio <= 1 or an unusable shape fall back to normal.
    """
    if p10 <= 0:
        logger.debug("Weibull needs P10 > 0 (got %s); using normal", p10)
        return sample_normal(rng, p10, p50, p90, size)

    if p50 <= 0:
        logger.debug("Weibull needs P50 > 0 (got %s); using normal", p50)
        return sample_normal(rng, p10, p50, p90, size)

    ratio = p90 / p50
    if not math.isfinite(ratio) or ratio <= 1:
        logger.debug("Weibull P90/P50 ratio %s is not > 1; using normal", ratio)
        return sample_normal(rng, p10, p50, p90, size)

    k = math.log(_LN10 / _LN2) / math.log(ratio)
    if not math.isfinite(k) or k <= 0:
        logger.debug("Weibull shape %s is unusable; using normal", k)
        return sample_normal(rng, p10, p50, p90, size)

    scale = p50 / _LN2 ** (1.0 / k)
    u = rng.random(size)
    return scale * np.power(-np.log1p(-u), 1.0 / k)


FAMILY_SAMPLERS: Dict[DistributionModel, Callable[..., np.ndarray]] = {
    DistributionModel.TRIANGULAR: sample_triangular,
    DistributionModel.PERT: sample_pert,
    DistributionModel.NORMAL: sample_normal,
    DistributionModel.UNIFORM: sample_uniform,
    DistributionModel.LOGNORMAL: sample_lognormal,
    DistributionModel.WEIBULL: sample_weibull,
}


def sample_magnitude(
    model: Union[DistributionModel, str],
    p10: float,
    p50: float,
    p90: float,
    rng: np.random.Generator,
    size: int = 1,
) -> np.ndarray:
    """
    Sample `size` impact magnitudes from the given family.

    A degenerate estimate (|P90 - P10| below epsilon) yields P50 exactly for
    every family and consumes no random draws.

    Raises:
        ValueError: If `model` is not one of the DistributionModel values
    """
    family = DistributionModel(model)
    if abs(p90 - p10) < DEGENERATE_RANGE_EPSILON:
        return np.full(size, float(p50))
    return FAMILY_SAMPLERS[family](rng, float(p10), float(p50), float(p90), size)
