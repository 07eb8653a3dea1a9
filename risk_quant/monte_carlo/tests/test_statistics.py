"""
PURPOSE: Unit tests for statistics.py.

Tests cover:
1. Linear-interpolation percentiles on sorted arrays
2. Population mean and standard deviation
3. Deterministic base over valid risks only
4. Percentile table breakpoints and ordering
"""

import math

import numpy as np
import pytest

from risk_quant.monte_carlo.config import PERCENTILE_TABLE_BREAKPOINTS
from risk_quant.monte_carlo.models import RiskInput
from risk_quant.monte_carlo.statistics import (
    build_percentile_table,
    compute_base,
    mean,
    percentile,
    std_dev,
    summarize,
)


class TestPercentile:
    """Tests for percentile()."""

    def test_interpolates_between_ranks(self):
        assert percentile([1.0, 2.0, 3.0, 4.0], 50) == pytest.approx(2.5)

    def test_exact_rank(self):
        assert percentile([10.0, 20.0, 30.0, 40.0, 50.0], 25) == 20.0

    def test_extremes(self):
        values = [3.0, 7.0, 11.0]
        assert percentile(values, 0) == 3.0
        assert percentile(values, 100) == 11.0

    def test_fractional_weight(self):
        # index = 0.8 * 4 = 3.2 -> 40 * 0.8 + 50 * 0.2
        assert percentile([10.0, 20.0, 30.0, 40.0, 50.0], 80) == pytest.approx(42.0)

    def test_empty_returns_zero(self):
        assert percentile([], 50) == 0.0

    def test_single_value(self):
        assert percentile([123.0], 90) == 123.0

    def test_matches_numpy_linear_method(self):
        values = np.sort(np.random.default_rng(0).normal(size=1001))
        for p in [1, 10, 33.3, 50, 80, 99]:
            assert percentile(values, p) == pytest.approx(np.percentile(values, p))


class TestMoments:
    """Tests for mean() and std_dev()."""

    def test_mean(self):
        assert mean([1.0, 2.0, 3.0, 4.0]) == pytest.approx(2.5)

    def test_population_std_dev(self):
        assert std_dev([1.0, 2.0, 3.0, 4.0]) == pytest.approx(math.sqrt(1.25))

    def test_constant_std_dev_is_zero(self):
        assert std_dev([5.0] * 10) == 0.0

    def test_empty_inputs(self):
        assert mean([]) == 0.0
        assert std_dev([]) == 0.0


class TestComputeBase:
    """Tests for compute_base()."""

    def test_sums_likely_over_valid_risks_only(self):
        risks = [
            RiskInput(id="a", optimistic_p10=90000, likely_p50=100000, pessimistic_p90=130000,
                      probability=50, distribution_model="normal"),
            RiskInput(id="b", optimistic_p10=200000, likely_p50=250000, pessimistic_p90=320000,
                      probability=80, distribution_model="pert"),
            RiskInput(id="c", optimistic_p10=1, likely_p50=999999, pessimistic_p90=2,
                      distribution_model="uniform"),
        ]
        assert compute_base(risks) == 350000.0

    def test_opportunities_reduce_base(self):
        risks = [
            RiskInput(id="a", optimistic_p10=5, likely_p50=10, pessimistic_p90=20,
                      probability=100, distribution_model="normal"),
            RiskInput(id="b", optimistic_p10=-20, likely_p50=-15, pessimistic_p90=-5,
                      probability=100, distribution_model="normal"),
        ]
        assert compute_base(risks) == -5.0


class TestPercentileTable:
    """Tests for build_percentile_table()."""

    def setup_method(self):
        self.sorted_values = np.sort(np.random.default_rng(1).lognormal(mean=10, sigma=0.5, size=5000))

    def test_breakpoints(self):
        table = build_percentile_table(self.sorted_values, base=0.0)
        assert [row.percentile for row in table] == PERCENTILE_TABLE_BREAKPOINTS
        assert PERCENTILE_TABLE_BREAKPOINTS == [10, 20, 30, 40, 50, 60, 70, 75, 80, 85, 90, 95, 99]

    def test_values_non_decreasing(self):
        table = build_percentile_table(self.sorted_values, base=0.0)
        values = [row.value for row in table]
        assert all(a <= b for a, b in zip(values, values[1:]))

    def test_variance_from_base(self):
        table = build_percentile_table(self.sorted_values, base=20000.0)
        for row in table:
            assert row.variance_from_base == pytest.approx(row.value - 20000.0)
            assert row.value == pytest.approx(percentile(self.sorted_values, row.percentile))

    def test_custom_breakpoints(self):
        table = build_percentile_table([1.0, 2.0, 3.0], base=1.0, breakpoints=[0, 100])
        assert [(row.percentile, row.value, row.variance_from_base) for row in table] == [
            (0, 1.0, 0.0),
            (100, 3.0, 2.0),
        ]


class TestSummarize:
    """Tests for summarize()."""

    def test_keys_and_values(self):
        summary = summarize([1.0, 2.0, 3.0, 4.0, 5.0])
        assert set(summary) == {"p10", "p50", "p90", "mean", "std_dev"}
        assert summary["p50"] == 3.0
        assert summary["p10"] == pytest.approx(1.4)
        assert summary["p90"] == pytest.approx(4.6)
        assert summary["mean"] == 3.0
        assert summary["std_dev"] == pytest.approx(math.sqrt(2.0))
