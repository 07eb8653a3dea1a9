"""
Monte Carlo simulation module for risk and opportunity quantification.

PURPOSE:
    Quantify the uncertain cost/schedule outcome of a risk register by
    sampling every risk's three-point estimate (P10/P50/P90) behind an
    occurrence gate, and summarise the total with percentiles and a
    per-risk sensitivity ranking.

RESPONSIBILITIES:
    - Expose distribution samplers (triangular, PERT, normal, uniform,
      lognormal, Weibull)
    - Provide occurrence-gated risk sampling
    - Drive the iteration loop and assemble results
    - Compute percentile statistics and variance-contribution sensitivity

SRP/DRY CHECK:
    Each submodule has a single responsibility:
    - models.py: Input parsing and validation only
    - distributions.py: Sampling impact magnitudes only
    - risk_events.py: Occurrence gate + impact sampling only
    - simulation.py: Iteration loop only
    - statistics.py: Percentiles, mean, std dev, percentile table only
    - sensitivity.py: Sensitivity analysis only
    - outputs.py: Result structure and serialization only
    - assembler.py: Composing the above into one result
"""

from .distributions import (
    FAMILY_SAMPLERS,
    box_muller,
    sample_magnitude,
    standard_normal_ppf,
)
from .errors import MonteCarloError, NoValidRisks, SimulationCancelled
from .models import DistributionModel, RiskInput, SimulationConfig
from .outputs import MonteCarloResult, PercentileTableRow
from .risk_events import sample, sample_risk
from .sensitivity import SensitivityAnalyzer, SensitivityItem
from .simulation import MonteCarloSimulation, run_monte_carlo_simulation

__version__ = "0.1.0"

__all__ = [
    "DistributionModel",
    "RiskInput",
    "SimulationConfig",
    "FAMILY_SAMPLERS",
    "box_muller",
    "sample_magnitude",
    "standard_normal_ppf",
    "sample",
    "sample_risk",
    "MonteCarloSimulation",
    "run_monte_carlo_simulation",
    "MonteCarloResult",
    "PercentileTableRow",
    "SensitivityAnalyzer",
    "SensitivityItem",
    "MonteCarloError",
    "NoValidRisks",
    "SimulationCancelled",
]
