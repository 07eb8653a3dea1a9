"""
PURPOSE: Simulation configuration and distribution-fitting constants for the Monte Carlo engine.

RESPONSIBILITIES:
- Define simulation hyperparameters (number of iterations, target percentile, random seed)
- Distribution-family fitting constants (tail extensions, PERT lambda, z-span)
- Percentile breakpoints for summary statistics and the percentile table
- Single responsibility: configuration only, no simulation logic
"""

# Simulation Parameters
NUM_ITERATIONS = 10000  # Standard Monte Carlo sample size
TARGET_PERCENTILE = 80  # P80 is the usual contingency position
RANDOM_SEED = None  # Set to int for reproducibility, None for random
PROGRESS_INTERVAL = 1000  # Iterations per sampling block / progress report

# Distribution Fitting
DEGENERATE_RANGE_EPSILON = 1e-4  # |P90 - P10| below this returns P50
TRIANGULAR_TAIL_EXTENSION = 0.30  # Support extends 30% of (P90 - P10) past each side
PERT_TAIL_EXTENSION = 0.15
PERT_LAMBDA = 4  # Weight on the mode in the PERT mean
P10_P90_Z_SPAN = 2.56  # z(0.90) - z(0.10) ~= 2 * 1.28

# Percentile Outputs
SUMMARY_PERCENTILES = [10, 50, 90]  # P10, P50, P90
PERCENTILE_TABLE_BREAKPOINTS = [10, 20, 30, 40, 50, 60, 70, 75, 80, 85, 90, 95, 99]

# Sensitivity Analysis (Tornado Chart)
TOP_N_DRIVERS = 10  # Number of top uncertainty drivers to report

# Output Configuration
ROUND_CONTRIBUTION = 4  # Decimal places for variance contribution / correlation
ROUND_VALUE = 2  # Decimal places for monetary / schedule values


def get_default_simulation_settings():
    """Return the defaults used when no SimulationConfig is supplied."""
    return {
        "iterations": NUM_ITERATIONS,
        "target_percentile": TARGET_PERCENTILE,
        "seed": RANDOM_SEED,
        "progress_interval": PROGRESS_INTERVAL,
    }

