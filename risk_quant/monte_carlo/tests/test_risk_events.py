"""
Unit tests for occurrence-gated risk sampling.

STRATEGY:
    1. Gate extremes: probability 0 is always zero, probability 100 never gated
    2. Gate frequency matches the stated probability
    3. Scalar vs array return shapes
    4. Validation of probability and of incomplete risks
"""

import unittest

import numpy as np

from risk_quant.monte_carlo.models import RiskInput
from risk_quant.monte_carlo.risk_events import sample, sample_occurrence, sample_risk


class TestOccurrenceGate(unittest.TestCase):
    """Test the Bernoulli occurrence gate."""

    def test_probability_zero_never_occurs(self):
        occurred = sample_occurrence(0, np.random.default_rng(1), size=100000)
        self.assertFalse(np.any(occurred))

    def test_probability_hundred_always_occurs(self):
        occurred = sample_occurrence(100, np.random.default_rng(1), size=100000)
        self.assertTrue(np.all(occurred))

    def test_frequency_matches_probability(self):
        occurred = sample_occurrence(30, np.random.default_rng(2), size=100000)
        self.assertAlmostEqual(np.mean(occurred), 0.30, delta=0.01)


class TestSample(unittest.TestCase):
    """Test the combined gate + magnitude sampler."""

    def test_single_sample_is_float(self):
        value = sample(100.0, 150.0, 200.0, "triangular", 100, rng=1)
        self.assertIsInstance(value, float)

    def test_multiple_samples(self):
        values = sample(100.0, 150.0, 200.0, "pert", 50, rng=1, size=1000)
        self.assertIsInstance(values, np.ndarray)
        self.assertEqual(values.shape, (1000,))

    def test_probability_zero_gives_exact_zero(self):
        for model in ["triangular", "pert", "normal", "uniform", "lognormal", "weibull"]:
            values = sample(100.0, 150.0, 200.0, model, 0, rng=3, size=5000)
            np.testing.assert_array_equal(values, np.zeros(5000), err_msg=model)

    def test_probability_hundred_is_never_gated(self):
        values = sample(100.0, 150.0, 200.0, "triangular", 100, rng=3, size=20000)
        self.assertTrue(np.all(values > 0))

    def test_constant_estimate_at_full_probability(self):
        for model in ["triangular", "pert", "normal", "uniform", "lognormal", "weibull"]:
            values = sample(42000.0, 42000.0, 42000.0, model, 100, rng=5, size=200)
            np.testing.assert_array_equal(values, np.full(200, 42000.0), err_msg=model)

    def test_uniform_within_bounds(self):
        values = sample(-500.0, 0.0, 1500.0, "uniform", 100, rng=7, size=20000)
        self.assertTrue(np.all(values >= -500.0))
        self.assertTrue(np.all(values <= 1500.0))

    def test_partial_probability_zero_fraction(self):
        values = sample(100.0, 150.0, 200.0, "normal", 25, rng=8, size=100000)
        self.assertAlmostEqual(np.mean(values == 0.0), 0.75, delta=0.01)

    def test_reproducibility_with_seed(self):
        values1 = sample(10.0, 20.0, 40.0, "lognormal", 60, rng=42, size=100)
        values2 = sample(10.0, 20.0, 40.0, "lognormal", 60, rng=42, size=100)
        np.testing.assert_array_equal(values1, values2)

    def test_weibull_zero_median_stays_finite(self):
        values = sample(10.0, 0.0, 50.0, "weibull", 100, rng=1, size=100)
        self.assertTrue(np.all(np.isfinite(values)))

    def test_invalid_probability_raises_error(self):
        with self.assertRaises(ValueError):
            sample(1.0, 2.0, 3.0, "normal", -1)
        with self.assertRaises(ValueError):
            sample(1.0, 2.0, 3.0, "normal", 101)


class TestSampleRisk(unittest.TestCase):
    """Test sampling a RiskInput."""

    def test_valid_risk(self):
        risk = RiskInput(
            id="r1",
            optimistic_p10=100.0,
            likely_p50=150.0,
            pessimistic_p90=200.0,
            probability=100,
            distribution_model="normal",
        )
        values = sample_risk(risk, rng=np.random.default_rng(0), size=50000)
        self.assertAlmostEqual(np.median(values), 150.0, delta=1.0)

    def test_incomplete_risk_raises_error(self):
        risk = RiskInput(id="r2", risk_number="R-002", optimistic_p10=100.0, likely_p50=150.0, probability=50)
        with self.assertRaisesRegex(ValueError, "R-002"):
            sample_risk(risk)


if __name__ == "__main__":
    unittest.main()
