"""Statistical helpers for food-symptom correlation scoring.

Pure functions with no database access. The correlation coefficient used
throughout is a rate difference (occurrence rate minus baseline rate), not a
Pearson or phi coefficient.
"""
import enum
import math
from typing import List, Sequence, Tuple

# Abramowitz & Stegun 7.1.26 coefficients (max absolute error ~1.5e-7)
ERF_A1 = 0.254829592
ERF_A2 = -0.284496736
ERF_A3 = 1.421413741
ERF_A4 = -1.453152027
ERF_A5 = 1.061405429
ERF_P = 0.3275911

WEAK_THRESHOLD = 0.3
MODERATE_THRESHOLD = 0.7


class CorrelationStrength(str, enum.Enum):
    WEAK = "Weak"
    MODERATE = "Moderate"
    STRONG = "Strong"


class CorrelationDirection(str, enum.Enum):
    POSITIVE = "Positive"
    NEGATIVE = "Negative"
    NONE = "None"

    @property
    def description(self) -> str:
        if self is CorrelationDirection.POSITIVE:
            return "Increases likelihood"
        if self is CorrelationDirection.NEGATIVE:
            return "Decreases likelihood"
        return "No correlation"


def erf(x: float) -> float:
    """Error function via the Abramowitz-Stegun rational approximation."""
    sign = -1.0 if x < 0 else 1.0
    abs_x = abs(x)

    t = 1.0 / (1.0 + ERF_P * abs_x)
    y = 1.0 - (((((ERF_A5 * t + ERF_A4) * t) + ERF_A3) * t + ERF_A2) * t + ERF_A1) * t * math.exp(-abs_x * abs_x)

    return sign * y


def normal_cdf(z: float) -> float:
    """Standard normal cumulative distribution function."""
    return 0.5 * (1 + erf(z / math.sqrt(2)))


def binomial_p_value(occurrences: int, trials: int, expected_rate: float) -> float:
    """
    Two-tailed p-value of a one-sample binomial test, normal approximation.

    Args:
        occurrences: Trials in which the symptom followed
        trials: Total trials (food-containing meals)
        expected_rate: Rate under the null hypothesis (the baseline rate)

    Returns:
        p-value in [0, 1]. Defined as 1.0 when there are no trials or the
        null rate is exactly 0 or 1, since the standard error is then zero.
    """
    if trials <= 0:
        return 1.0

    observed_rate = occurrences / trials
    standard_error = math.sqrt((expected_rate * (1 - expected_rate)) / trials)

    if standard_error <= 0:
        return 1.0

    z_score = abs(observed_rate - expected_rate) / standard_error
    return 2 * (1 - normal_cdf(z_score))


def wald_interval(
    coefficient: float, occurrence_rate: float, sample_size: int, z: float = 1.96
) -> Tuple[float, float]:
    """
    Wald confidence interval around the coefficient.

    The standard error comes from the occurrence rate alone. Bounds are not
    clamped to [-1, 1].
    """
    if sample_size <= 0:
        return (coefficient, coefficient)

    standard_error = math.sqrt((occurrence_rate * (1 - occurrence_rate)) / sample_size)
    return (coefficient - z * standard_error, coefficient + z * standard_error)


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean, 0.0 for an empty sequence."""
    if not values:
        return 0.0
    return sum(values) / len(values)


def sample_standard_deviation(values: Sequence[float]) -> float:
    """Bessel-corrected (n - 1) standard deviation, 0.0 below two values."""
    if len(values) < 2:
        return 0.0

    avg = sum(values) / len(values)
    squared_differences: List[float] = [(v - avg) ** 2 for v in values]
    variance = sum(squared_differences) / (len(values) - 1)

    return math.sqrt(variance)


def classify_strength(coefficient: float) -> CorrelationStrength:
    abs_value = abs(coefficient)
    if abs_value < WEAK_THRESHOLD:
        return CorrelationStrength.WEAK
    if abs_value < MODERATE_THRESHOLD:
        return CorrelationStrength.MODERATE
    return CorrelationStrength.STRONG


def classify_direction(coefficient: float) -> CorrelationDirection:
    if coefficient > 0:
        return CorrelationDirection.POSITIVE
    if coefficient < 0:
        return CorrelationDirection.NEGATIVE
    return CorrelationDirection.NONE


def describe_correlation(coefficient: float, symptom_name: str, is_significant: bool) -> str:
    """Human-readable one-line summary of a food-symptom correlation."""
    symptom = symptom_name.lower()
    if not is_significant:
        return f"No significant correlation found with {symptom}"

    strength = classify_strength(coefficient).value.lower()
    verb = "increases" if classify_direction(coefficient) is CorrelationDirection.POSITIVE else "decreases"
    return f"This food {strength} {verb} the likelihood of {symptom}"
