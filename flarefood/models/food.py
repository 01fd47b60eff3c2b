from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, JSON, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from flarefood.database import Base


class Food(Base):
    """Food master table referenced by meal items and correlation results."""
    __tablename__ = "foods"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    category = Column(String(100), nullable=False, default="Other")  # e.g. "Dairy", "Grains"
    common_triggers = Column(JSON, nullable=False, default=list)  # ["Gluten", "High FODMAP"], informational only
    is_custom = Column(Boolean, nullable=False, default=False)
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    meal_items = relationship("MealFoodItem", back_populates="food")
    correlations = relationship("Correlation", back_populates="food", cascade="all, delete-orphan")

    __table_args__ = (
        Index('idx_foods_name', 'name'),
    )

    def __repr__(self):
        return f"<Food(id={self.id}, name={self.name!r})>"
