"""SQLAlchemy-backed data source for correlation analysis."""
import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from flarefood.models import Correlation, Food, Meal, Symptom
from flarefood.services.data.base import DataAccessError, DataSource, StorageError
from flarefood.services.data.events import FoodRef, MealEvent, MealItem, SymptomEvent

if TYPE_CHECKING:
    from flarefood.services.correlation_service import CorrelationResult

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    """Treat naive timestamps (SQLite drops tzinfo) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class SqlDataSource(DataSource):
    """Reads events from and writes correlations to the application database."""

    def __init__(self, db: Session):
        self.db = db

    def load_meals(self, start: datetime, end: datetime) -> List[MealEvent]:
        try:
            meals = (
                self.db.query(Meal)
                .options(selectinload(Meal.food_items))
                .filter(Meal.timestamp >= start, Meal.timestamp <= end)
                .order_by(Meal.timestamp.desc())
                .all()
            )
        except SQLAlchemyError as e:
            logger.error("Failed to load meals: %s", e)
            raise DataAccessError(f"Failed to load meals: {e}") from e

        return [
            MealEvent(
                id=meal.id,
                timestamp=_as_utc(meal.timestamp),
                items=tuple(
                    MealItem(food_id=item.food_id, portion_size=item.portion_size)
                    for item in meal.food_items
                ),
            )
            for meal in meals
        ]

    def load_symptoms(self, start: datetime, end: datetime) -> List[SymptomEvent]:
        try:
            symptoms = (
                self.db.query(Symptom)
                .filter(Symptom.timestamp >= start, Symptom.timestamp <= end)
                .order_by(Symptom.timestamp.desc())
                .all()
            )
        except SQLAlchemyError as e:
            logger.error("Failed to load symptoms: %s", e)
            raise DataAccessError(f"Failed to load symptoms: {e}") from e

        return [
            SymptomEvent(
                id=symptom.id,
                timestamp=_as_utc(symptom.timestamp),
                symptom_type=symptom.symptom_type,
                severity=symptom.severity,
                duration_minutes=symptom.duration_minutes,
            )
            for symptom in symptoms
        ]

    def load_foods(self) -> List[FoodRef]:
        try:
            foods = self.db.query(Food).order_by(Food.id).all()
        except SQLAlchemyError as e:
            logger.error("Failed to load foods: %s", e)
            raise DataAccessError(f"Failed to load foods: {e}") from e

        return [
            FoodRef(
                id=food.id,
                name=food.name,
                category=food.category,
                common_triggers=tuple(food.common_triggers or ()),
            )
            for food in foods
        ]

    def save_correlations(self, correlations: List["CorrelationResult"]) -> None:
        rows = [
            Correlation(
                food_id=result.food.id,
                symptom_type=result.symptom_type,
                correlation_coefficient=result.correlation_coefficient,
                p_value=result.p_value,
                sample_size=result.sample_size,
                confidence_interval_lower=result.confidence_interval_lower,
                confidence_interval_upper=result.confidence_interval_upper,
                average_delay_hours=result.average_delay_hours,
                delay_standard_deviation=result.delay_standard_deviation,
                last_calculated=result.last_calculated,
            )
            for result in correlations
        ]

        try:
            self.db.add_all(rows)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to save %d correlations: %s", len(rows), e)
            raise StorageError(f"Failed to save correlations: {e}") from e

        logger.info("Saved %d correlations", len(rows))

    def fetch_food(self, food_id: int) -> Optional[Food]:
        try:
            return self.db.query(Food).filter(Food.id == food_id).first()
        except SQLAlchemyError as e:
            logger.error("Failed to load food %s: %s", food_id, e)
            raise DataAccessError(f"Failed to load food: {e}") from e

    def fetch_correlations_for_food(self, food_id: int) -> List[Correlation]:
        """All stored correlations for one food, newest run first, then strongest positive."""
        try:
            return (
                self.db.query(Correlation)
                .filter(Correlation.food_id == food_id)
                .order_by(
                    Correlation.last_calculated.desc(),
                    Correlation.correlation_coefficient.desc(),
                )
                .all()
            )
        except SQLAlchemyError as e:
            raise DataAccessError(f"Failed to load correlations: {e}") from e

    def fetch_significant_correlations(self, threshold: float) -> List[Correlation]:
        """Stored correlations with p_value < threshold, newest run first, then strongest positive."""
        try:
            return (
                self.db.query(Correlation)
                .options(selectinload(Correlation.food))
                .filter(Correlation.p_value < threshold)
                .order_by(
                    Correlation.last_calculated.desc(),
                    Correlation.correlation_coefficient.desc(),
                )
                .all()
            )
        except SQLAlchemyError as e:
            raise DataAccessError(f"Failed to load correlations: {e}") from e

    def fetch_all_correlations(self) -> List[Correlation]:
        """Every stored correlation, newest run first."""
        try:
            return (
                self.db.query(Correlation)
                .options(selectinload(Correlation.food))
                .order_by(
                    Correlation.last_calculated.desc(),
                    Correlation.correlation_coefficient.desc(),
                )
                .all()
            )
        except SQLAlchemyError as e:
            raise DataAccessError(f"Failed to load correlations: {e}") from e
