"""
Unit tests for the statistical helpers.

Tests the pure numeric functions behind correlation scoring:
- Error function approximation and normal CDF
- Binomial p-value via normal approximation
- Wald confidence interval
- Delay mean and sample standard deviation
- Strength/direction classification
"""

import math

import pytest

from flarefood.services.stats import (
    CorrelationDirection,
    CorrelationStrength,
    binomial_p_value,
    classify_direction,
    classify_strength,
    describe_correlation,
    erf,
    mean,
    normal_cdf,
    sample_standard_deviation,
    wald_interval,
)


class TestErf:
    """Tests for the Abramowitz-Stegun error function."""

    @pytest.mark.parametrize("x", [0.1, 0.5, 1.0, 1.5, 2.0, 3.0])
    def test_matches_reference_within_published_error(self, x):
        """Approximation error stays below 1.5e-7."""
        assert abs(erf(x) - math.erf(x)) < 1.5e-7

    def test_odd_function(self):
        """erf(-x) == -erf(x)."""
        assert erf(-0.7) == -erf(0.7)

    def test_zero_is_nearly_zero(self):
        """The polynomial coefficients sum to just under 1, so erf(0) is ~1e-9."""
        assert abs(erf(0.0)) < 1e-8

    def test_large_input_saturates(self):
        assert erf(10.0) == pytest.approx(1.0)


class TestNormalCdf:
    """Tests for the standard normal CDF."""

    def test_centre(self):
        assert normal_cdf(0.0) == pytest.approx(0.5, abs=1e-8)

    def test_critical_value(self):
        assert normal_cdf(1.96) == pytest.approx(0.975, abs=1e-4)


class TestBinomialPValue:
    """Tests for the normal-approximation binomial test."""

    def test_no_trials_returns_one(self):
        assert binomial_p_value(occurrences=0, trials=0, expected_rate=0.3) == 1.0

    def test_zero_baseline_returns_one(self):
        """A zero null rate gives zero standard error and p = 1.0."""
        assert binomial_p_value(occurrences=10, trials=10, expected_rate=0.0) == 1.0

    def test_certain_baseline_returns_one(self):
        assert binomial_p_value(occurrences=2, trials=10, expected_rate=1.0) == 1.0

    def test_large_difference_is_significant(self):
        """8/10 against a 0.1 baseline is far outside the null distribution."""
        p = binomial_p_value(occurrences=8, trials=10, expected_rate=0.1)

        assert 0.0 <= p < 0.05

    def test_observed_equals_expected_is_not_significant(self):
        p = binomial_p_value(occurrences=1, trials=10, expected_rate=0.1)

        assert p == pytest.approx(1.0, abs=1e-8)

    def test_known_value(self):
        """z = |0.5 - 0.3| / sqrt(0.3 * 0.7 / 20) ~= 1.9518."""
        z = 0.2 / math.sqrt(0.3 * 0.7 / 20)
        expected = 2 * (1 - 0.5 * (1 + math.erf(z / math.sqrt(2))))

        p = binomial_p_value(occurrences=10, trials=20, expected_rate=0.3)

        assert p == pytest.approx(expected, abs=1e-6)

    def test_always_within_unit_interval(self):
        for trials in (1, 5, 17, 100):
            for occurrences in range(trials + 1):
                for expected_rate in (0.0, 0.01, 0.25, 0.5, 0.9, 1.0):
                    p = binomial_p_value(occurrences, trials, expected_rate)
                    assert 0.0 <= p <= 1.0


class TestWaldInterval:
    """Tests for the Wald confidence interval."""

    def test_symmetric_around_coefficient(self):
        lower, upper = wald_interval(0.7, occurrence_rate=0.8, sample_size=10)
        half_width = 1.96 * math.sqrt(0.8 * 0.2 / 10)

        assert lower == pytest.approx(0.7 - half_width)
        assert upper == pytest.approx(0.7 + half_width)

    def test_bounds_are_not_clamped(self):
        """Upper bound may exceed 1.0 and is kept as computed."""
        lower, upper = wald_interval(0.9, occurrence_rate=0.5, sample_size=5)

        assert upper > 1.0
        assert upper == pytest.approx(0.9 + 1.96 * math.sqrt(0.25 / 5))

    def test_zero_width_for_certain_rate(self):
        lower, upper = wald_interval(1.0, occurrence_rate=1.0, sample_size=6)

        assert lower == upper == 1.0

    def test_custom_z(self):
        lower, upper = wald_interval(0.0, occurrence_rate=0.5, sample_size=25, z=2.576)

        assert upper == pytest.approx(2.576 * 0.1)
        assert lower == pytest.approx(-2.576 * 0.1)


class TestDelayStatistics:
    """Tests for mean and Bessel-corrected standard deviation."""

    def test_mean_of_empty_is_zero(self):
        assert mean([]) == 0.0

    def test_mean(self):
        assert mean([2.0, 4.0, 6.0]) == 4.0

    def test_std_of_empty_is_zero(self):
        assert sample_standard_deviation([]) == 0.0

    def test_std_of_single_value_is_zero(self):
        assert sample_standard_deviation([12.5]) == 0.0

    def test_std_uses_n_minus_one(self):
        values = [2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0]

        assert sample_standard_deviation(values) == pytest.approx(math.sqrt(32 / 7))


class TestClassification:
    """Tests for strength and direction classification."""

    @pytest.mark.parametrize(
        "coefficient,expected",
        [
            (0.0, CorrelationStrength.WEAK),
            (0.29, CorrelationStrength.WEAK),
            (-0.29, CorrelationStrength.WEAK),
            (0.3, CorrelationStrength.MODERATE),
            (-0.5, CorrelationStrength.MODERATE),
            (0.69, CorrelationStrength.MODERATE),
            (0.7, CorrelationStrength.STRONG),
            (-0.95, CorrelationStrength.STRONG),
        ],
    )
    def test_strength(self, coefficient, expected):
        assert classify_strength(coefficient) is expected

    def test_direction(self):
        assert classify_direction(0.2) is CorrelationDirection.POSITIVE
        assert classify_direction(-0.2) is CorrelationDirection.NEGATIVE
        assert classify_direction(0.0) is CorrelationDirection.NONE

    def test_direction_description(self):
        assert CorrelationDirection.POSITIVE.description == "Increases likelihood"
        assert CorrelationDirection.NONE.description == "No correlation"


class TestDescribeCorrelation:
    """Tests for the one-line correlation summary."""

    def test_significant_positive(self):
        text = describe_correlation(0.7, "Stomach Pain", is_significant=True)

        assert text == "This food strong increases the likelihood of stomach pain"

    def test_significant_negative(self):
        text = describe_correlation(-0.4, "Headache", is_significant=True)

        assert text == "This food moderate decreases the likelihood of headache"

    def test_not_significant(self):
        text = describe_correlation(0.9, "Bloating", is_significant=False)

        assert text == "No significant correlation found with bloating"
