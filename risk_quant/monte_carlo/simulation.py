"""
PURPOSE: Core Monte Carlo driver for risk and opportunity quantification.

Runs N independent iterations; in each one every valid risk passes its
occurrence gate and, if it occurs, draws an impact magnitude. The iteration
total is the sum over risks.

SINGLE RESPONSIBILITY:
- Filter the register snapshot to risks with complete data
- Drive the sampling loop and keep per-risk sample arrays aligned with totals
- Report progress and honour cooperative cancellation between blocks
- Hand the arrays to the assembler (no statistics computed here)

CONSTRAINTS:
- Does NOT modify input risks; reads only
- Does NOT handle persistence or rendering
- Draw order is fixed (block by block, risk by risk within a block), so the
  same seed and configuration reproduce a run exactly
"""

import logging
import time
from typing import Any, Callable, Iterable, Mapping, Optional, Union

import numpy as np
from pydantic import ValidationError

from .assembler import assemble_result
from .distributions import RandomSource, resolve_rng
from .errors import NoValidRisks, SimulationCancelled
from .models import RiskInput, SimulationConfig
from .outputs import MonteCarloResult
from .risk_events import sample_risk
from .sensitivity import SensitivityAnalyzer

logger = logging.getLogger(__name__)

RiskRecord = Union[RiskInput, Mapping[str, Any]]
ProgressCallback = Callable[[int, int], None]
CancelCheck = Callable[[], bool]


def filter_valid_risks(risks: Iterable[RiskRecord]) -> list:
    """Parse register records and keep those with complete estimate data, in input order."""
    total = 0
    valid = []
    for record in risks:
        total += 1
        try:
            risk = RiskInput.from_record(record)
        except ValidationError as exc:
            row_id = record.get("id") if isinstance(record, Mapping) else None
            logger.warning(
                "Risk %r failed validation and is excluded: %s",
                row_id,
                "; ".join(error["msg"] for error in exc.errors()),
            )
            continue
        if risk.is_valid:
            valid.append(risk)
        else:
            logger.debug("Risk %r has incomplete estimate data", risk.label)

    excluded = total - len(valid)
    if excluded:
        logger.warning(
            "Excluding %s of %s risks with incomplete or invalid data from the simulation",
            excluded,
            total,
        )
    if not valid:
        raise NoValidRisks(total)

    seen = set()
    for risk in valid:
        if risk.id in seen:
            raise ValueError(f"duplicate risk id {risk.id!r} in simulation input")
        seen.add(risk.id)
    return valid


class MonteCarloSimulation:
    """
    Monte Carlo engine for a portfolio of risks and opportunities.

    The random generator is created once per engine instance; consecutive
    runs on the same instance continue the same random stream.
    """

    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        rng: RandomSource = None,
        analyzer: Optional[SensitivityAnalyzer] = None,
    ):
        """
        Initialize simulation engine.

        Args:
            config: Run settings (default SimulationConfig()).
            rng: numpy Generator or seed; when None, config.seed is used
                 (None there means fresh OS entropy).
            analyzer: Sensitivity analyzer (default SensitivityAnalyzer()).
        """
        self.config = config or SimulationConfig()
        self.rng = resolve_rng(rng if rng is not None else self.config.seed)
        self.analyzer = analyzer or SensitivityAnalyzer()

    def run(
        self,
        risks: Iterable[RiskRecord],
        progress_callback: Optional[ProgressCallback] = None,
        cancel_check: Optional[CancelCheck] = None,
    ) -> MonteCarloResult:
        """
        Execute the simulation.

        Args:
            risks: RiskInput instances or register mappings (camelCase or snake_case).
            progress_callback: Called as progress_callback(done, total) after each block.
            cancel_check: Polled after each unfinished block; returning True cancels.

        Returns:
            MonteCarloResult

        Raises:
            NoValidRisks: If no risk has complete estimate data.
            SimulationCancelled: If cancel_check requested a stop.
        """
        valid_risks = filter_valid_risks(risks)
        iterations = self.config.iterations
        block_size = self.config.progress_interval

        logger.info(
            "Running Monte Carlo simulation: %s iterations over %s risks (target P%s)",
            iterations,
            len(valid_risks),
            self.config.target_percentile,
        )
        started = time.perf_counter()

        risk_samples = {risk.id: np.empty(iterations) for risk in valid_risks}
        totals = np.zeros(iterations)

        for start in range(0, iterations, block_size):
            stop = min(start + block_size, iterations)
            self._run_block(valid_risks, risk_samples, totals, start, stop)

            if progress_callback is not None:
                progress_callback(stop, iterations)
            if cancel_check is not None and stop < iterations and cancel_check():
                logger.info("Simulation cancelled after %s of %s iterations", stop, iterations)
                raise SimulationCancelled(stop, iterations)

        result = assemble_result(
            valid_risks,
            risk_samples,
            totals,
            self.config.target_percentile,
            analyzer=self.analyzer,
        )
        logger.info(
            "Monte Carlo simulation finished in %.2fs: P50=%.2f, P%s=%.2f",
            time.perf_counter() - started,
            result.p50,
            self.config.target_percentile,
            result.target_value,
        )
        return result

    def _run_block(self, valid_risks, risk_samples, totals, start, stop):
        """Sample iterations [start, stop) for every risk, risk by risk."""
        size = stop - start
        for risk in valid_risks:
            draws = sample_risk(risk, self.rng, size=size)
            risk_samples[risk.id][start:stop] = draws
            totals[start:stop] += draws
        logger.debug("Sampled iterations %s-%s", start, stop)


def run_monte_carlo_simulation(
    risks: Iterable[RiskRecord],
    iterations: Optional[int] = None,
    target_percentile: Optional[float] = None,
    *,
    config: Optional[SimulationConfig] = None,
    rng: RandomSource = None,
    progress_callback: Optional[ProgressCallback] = None,
    cancel_check: Optional[CancelCheck] = None,
) -> MonteCarloResult:
    """
    Run one simulation with explicit settings.

    `iterations` and `target_percentile` override the corresponding fields of
    `config` (or of the defaults when no config is given).
    """
    settings = config.model_dump() if config is not None else {}
    if iterations is not None:
        settings["iterations"] = iterations
    if target_percentile is not None:
        settings["target_percentile"] = target_percentile
    simulation = MonteCarloSimulation(SimulationConfig(**settings), rng=rng)
    return simulation.run(risks, progress_callback=progress_callback, cancel_check=cancel_check)
