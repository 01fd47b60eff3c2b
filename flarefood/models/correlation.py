"""Correlation model for persisted food-symptom analysis results."""
from sqlalchemy import Column, Integer, Float, DateTime, ForeignKey, Enum, Index
from sqlalchemy.orm import relationship

from flarefood.config import settings
from flarefood.database import Base
from flarefood.models.symptom import SymptomType
from flarefood.services.stats import classify_direction, classify_strength, describe_correlation


class Correlation(Base):
    """Stores one food/symptom-type result of a correlation analysis run."""

    __tablename__ = "correlations"

    id = Column(Integer, primary_key=True, index=True)
    food_id = Column(Integer, ForeignKey("foods.id", ondelete="CASCADE"), nullable=False, index=True)
    symptom_type = Column(Enum(SymptomType), nullable=False)

    # Rate difference: occurrence rate with the food minus baseline rate without it
    correlation_coefficient = Column(Float, nullable=False)
    p_value = Column(Float, nullable=False)
    sample_size = Column(Integer, nullable=False)  # Food-containing meals evaluated
    confidence_interval_lower = Column(Float, nullable=False)
    confidence_interval_upper = Column(Float, nullable=False)

    # Delay between eating and the first matching symptom (hours)
    average_delay_hours = Column(Float, nullable=False, default=0.0)
    delay_standard_deviation = Column(Float, nullable=False, default=0.0)

    last_calculated = Column(DateTime(timezone=True), nullable=False, index=True)

    # Relationships
    food = relationship("Food", back_populates="correlations")

    __table_args__ = (
        Index("idx_correlations_food_symptom", "food_id", "symptom_type"),
    )

    @property
    def is_significant(self) -> bool:
        return self.p_value < settings.significance_threshold

    @property
    def strength(self):
        return classify_strength(self.correlation_coefficient)

    @property
    def direction(self):
        return classify_direction(self.correlation_coefficient)

    @property
    def formatted_description(self) -> str:
        return describe_correlation(
            self.correlation_coefficient, self.symptom_type.value, self.is_significant
        )

    def __repr__(self):
        return (
            f"<Correlation(id={self.id}, food_id={self.food_id}, "
            f"symptom_type={self.symptom_type}, coefficient={self.correlation_coefficient})>"
        )
