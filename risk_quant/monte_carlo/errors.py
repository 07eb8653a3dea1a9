"""
Error taxonomy for the Monte Carlo engine.

Only NoValidRisks is a numeric failure. Every other numeric edge case
(degenerate ranges, bad lognormal/Weibull parameters) is handled by a
sampling fallback and never raises.
"""


class MonteCarloError(Exception):
    """Base class for errors raised by the Monte Carlo engine."""


class NoValidRisks(MonteCarloError, ValueError):
    """Raised when no risk has the complete data needed for a simulation run."""

    def __init__(self, total_risks: int = 0):
        self.total_risks = total_risks
        super().__init__(
            f"No valid risks with complete data for simulation "
            f"({total_risks} supplied, 0 usable)"
        )


class SimulationCancelled(MonteCarloError):
    """Raised when the caller's cancel check asks a running simulation to stop."""

    def __init__(self, completed_iterations: int, total_iterations: int):
        self.completed_iterations = completed_iterations
        self.total_iterations = total_iterations
        super().__init__(
            f"Simulation cancelled after {completed_iterations} of {total_iterations} iterations"
        )
