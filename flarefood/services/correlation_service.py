"""Correlation service for analyzing food-symptom associations."""
import calendar
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence, Tuple

from flarefood.models.symptom import SymptomType
from flarefood.services import stats
from flarefood.services.data.base import DataSource
from flarefood.services.data.events import EventSnapshot, FoodRef, MealEvent, SymptomEvent

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_MONTHS = 3
DEFAULT_MAX_DELAY_HOURS = 48.0
DEFAULT_MIN_SAMPLE_SIZE = 5
DEFAULT_SIGNIFICANCE_THRESHOLD = 0.05
DEFAULT_CONFIDENCE_Z = 1.96


def subtract_months(moment: datetime, months: int) -> datetime:
    """Step back whole calendar months, clamping the day to the target month's length."""
    month_index = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def load_events(
    data_source: DataSource, window_months: int, now: Optional[datetime] = None
) -> EventSnapshot:
    """
    Load everything one analysis run needs.

    Meals and symptoms are bounded to [now - window_months, now]; foods are
    not filtered. Any data source error propagates to the caller.
    """
    end = now or datetime.now(timezone.utc)
    start = subtract_months(end, window_months)

    meals = data_source.load_meals(start, end)
    symptoms = data_source.load_symptoms(start, end)
    foods = data_source.load_foods()

    logger.info(
        "Loaded %d meals, %d symptoms, %d foods for %s to %s",
        len(meals), len(symptoms), len(foods), start.isoformat(), end.isoformat(),
    )

    return EventSnapshot(meals=tuple(meals), symptoms=tuple(symptoms), foods=tuple(foods))


@dataclass(frozen=True)
class SymptomOccurrence:
    """Outcome of one food-containing meal's look-ahead window."""
    had_symptom: bool
    severity: float = 0.0
    delay_hours: float = 0.0


@dataclass(frozen=True)
class PairEvaluation:
    food_id: int
    symptom_type: SymptomType
    occurrences: Tuple[SymptomOccurrence, ...]
    baseline_meals: int
    baseline_hits: int

    @property
    def sample_size(self) -> int:
        return len(self.occurrences)

    @property
    def hits(self) -> int:
        return sum(1 for o in self.occurrences if o.had_symptom)

    @property
    def occurrence_rate(self) -> float:
        if not self.occurrences:
            return 0.0
        return self.hits / self.sample_size

    @property
    def baseline_rate(self) -> float:
        if self.baseline_meals == 0:
            return 0.0
        return self.baseline_hits / self.baseline_meals

    @property
    def delays(self) -> List[float]:
        return [o.delay_hours for o in self.occurrences if o.had_symptom]


def _first_symptom_after(
    meal: MealEvent, symptoms: Sequence[SymptomEvent], max_delay: timedelta
) -> Optional[SymptomEvent]:
    """Earliest symptom in (meal.timestamp, meal.timestamp + max_delay]."""
    window_end = meal.timestamp + max_delay
    following = [s for s in symptoms if meal.timestamp < s.timestamp <= window_end]
    return min(following, key=lambda s: s.timestamp, default=None)


def evaluate_pair(
    food_id: int,
    symptom_type: SymptomType,
    meals: Sequence[MealEvent],
    symptoms: Sequence[SymptomEvent],
    max_delay_hours: float = DEFAULT_MAX_DELAY_HOURS,
    min_sample_size: int = DEFAULT_MIN_SAMPLE_SIZE,
) -> Optional[PairEvaluation]:
    """
    Check every meal for a following symptom of one type.

    Meals containing the food record the delay and severity of the earliest
    matching symptom; the remaining meals only count towards the baseline.
    A symptom can be attributed to several overlapping meals.

    Returns:
        PairEvaluation, or None if fewer than min_sample_size meals contain
        the food.
    """
    with_food = [m for m in meals if m.contains_food(food_id)]
    if len(with_food) < min_sample_size:
        return None

    without_food = [m for m in meals if not m.contains_food(food_id)]
    relevant = [s for s in symptoms if s.symptom_type == symptom_type]
    max_delay = timedelta(hours=max_delay_hours)

    occurrences = []
    for meal in with_food:
        first = _first_symptom_after(meal, relevant, max_delay)
        if first is None:
            occurrences.append(SymptomOccurrence(had_symptom=False))
            continue
        delay = (first.timestamp - meal.timestamp).total_seconds() / 3600
        occurrences.append(
            SymptomOccurrence(had_symptom=True, severity=first.severity, delay_hours=delay)
        )

    baseline_hits = sum(
        1 for meal in without_food
        if _first_symptom_after(meal, relevant, max_delay) is not None
    )

    return PairEvaluation(
        food_id=food_id,
        symptom_type=symptom_type,
        occurrences=tuple(occurrences),
        baseline_meals=len(without_food),
        baseline_hits=baseline_hits,
    )


@dataclass(frozen=True)
class CorrelationResult:
    """One food/symptom-type finding of an analysis run."""
    food: FoodRef
    symptom_type: SymptomType
    correlation_coefficient: float
    p_value: float
    sample_size: int
    confidence_interval_lower: float
    confidence_interval_upper: float
    average_delay_hours: float
    delay_standard_deviation: float
    last_calculated: datetime
    significance_threshold: float = field(default=DEFAULT_SIGNIFICANCE_THRESHOLD, repr=False)

    @property
    def is_significant(self) -> bool:
        return self.p_value < self.significance_threshold

    @property
    def strength(self) -> stats.CorrelationStrength:
        return stats.classify_strength(self.correlation_coefficient)

    @property
    def direction(self) -> stats.CorrelationDirection:
        return stats.classify_direction(self.correlation_coefficient)

    @property
    def formatted_description(self) -> str:
        return stats.describe_correlation(
            self.correlation_coefficient, self.symptom_type.value, self.is_significant
        )


def calculate_statistics(
    food: FoodRef,
    evaluation: PairEvaluation,
    calculated_at: datetime,
    confidence_z: float = DEFAULT_CONFIDENCE_Z,
    significance_threshold: float = DEFAULT_SIGNIFICANCE_THRESHOLD,
) -> CorrelationResult:
    """Turn a pair evaluation into the numeric fields of a CorrelationResult."""
    occurrence_rate = evaluation.occurrence_rate
    coefficient = occurrence_rate - evaluation.baseline_rate

    p_value = stats.binomial_p_value(
        occurrences=evaluation.hits,
        trials=evaluation.sample_size,
        expected_rate=evaluation.baseline_rate,
    )
    lower, upper = stats.wald_interval(
        coefficient, occurrence_rate, evaluation.sample_size, z=confidence_z
    )
    delays = evaluation.delays

    return CorrelationResult(
        food=food,
        symptom_type=evaluation.symptom_type,
        correlation_coefficient=coefficient,
        p_value=p_value,
        sample_size=evaluation.sample_size,
        confidence_interval_lower=lower,
        confidence_interval_upper=upper,
        average_delay_hours=stats.mean(delays),
        delay_standard_deviation=stats.sample_standard_deviation(delays),
        last_calculated=calculated_at,
        significance_threshold=significance_threshold,
    )


class CorrelationService:
    """Runs food x symptom-type correlation analysis against a data source."""

    def __init__(
        self,
        data_source: DataSource,
        window_months: int = DEFAULT_WINDOW_MONTHS,
        max_delay_hours: float = DEFAULT_MAX_DELAY_HOURS,
        min_sample_size: int = DEFAULT_MIN_SAMPLE_SIZE,
        significance_threshold: float = DEFAULT_SIGNIFICANCE_THRESHOLD,
        confidence_z: float = DEFAULT_CONFIDENCE_Z,
    ):
        self.data_source = data_source
        self.window_months = window_months
        self.max_delay_hours = max_delay_hours
        self.min_sample_size = min_sample_size
        self.significance_threshold = significance_threshold
        self.confidence_z = confidence_z

    @classmethod
    def from_settings(cls, data_source: DataSource, config=None) -> "CorrelationService":
        """Build a service using the analysis policy from application settings."""
        if config is None:
            from flarefood.config import settings as config

        return cls(
            data_source,
            window_months=config.analysis_window_months,
            max_delay_hours=config.max_delay_hours,
            min_sample_size=config.min_sample_size,
            significance_threshold=config.significance_threshold,
            confidence_z=config.confidence_z,
        )

    def calculate_all_correlations(self, now: Optional[datetime] = None) -> List[CorrelationResult]:
        """
        Calculate correlations for every food and symptom type.

        Pairs with fewer than min_sample_size food-containing meals are
        skipped. All results of one call share the same last_calculated.
        """
        now = now or datetime.now(timezone.utc)
        snapshot = load_events(self.data_source, self.window_months, now)

        correlations = []
        skipped = 0
        for food in snapshot.foods:
            for symptom_type in SymptomType:
                evaluation = evaluate_pair(
                    food.id,
                    symptom_type,
                    snapshot.meals,
                    snapshot.symptoms,
                    max_delay_hours=self.max_delay_hours,
                    min_sample_size=self.min_sample_size,
                )
                if evaluation is None:
                    skipped += 1
                    continue

                correlations.append(
                    calculate_statistics(
                        food,
                        evaluation,
                        calculated_at=now,
                        confidence_z=self.confidence_z,
                        significance_threshold=self.significance_threshold,
                    )
                )

        logger.info(
            "Calculated %d correlations (%d pairs skipped below sample size %d)",
            len(correlations), skipped, self.min_sample_size,
        )
        return correlations

    def run_analysis(self, now: Optional[datetime] = None) -> List[CorrelationResult]:
        """
        Calculate all correlations and persist them in a single write.

        Nothing is saved unless the full result set was computed.

        Raises:
            DataAccessError: If loading fails
            StorageError: If saving fails
        """
        correlations = self.calculate_all_correlations(now)
        self.data_source.save_correlations(correlations)
        return correlations
