from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index, Float
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship, validates

from flarefood.database import Base


class Meal(Base):
    """Logged meal with an ordered list of food items."""

    __tablename__ = "meals"

    id = Column(Integer, primary_key=True)
    timestamp = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    meal_type = Column(
        String(20), nullable=False, default="Other"
    )  # 'Breakfast', 'Lunch', 'Dinner', 'Snack' or 'Other'
    notes = Column(Text)
    location = Column(String(255))  # Optional: home, restaurant, ...
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    food_items = relationship(
        "MealFoodItem",
        back_populates="meal",
        cascade="all, delete-orphan",
        order_by="MealFoodItem.position",
    )

    __table_args__ = (
        Index("idx_meals_timestamp", "timestamp"),
    )


class MealFoodItem(Base):
    """Junction table linking meals to foods with a portion size."""
    __tablename__ = "meal_food_items"

    id = Column(Integer, primary_key=True)
    meal_id = Column(Integer, ForeignKey('meals.id', ondelete='CASCADE'), nullable=False)
    food_id = Column(Integer, ForeignKey('foods.id', ondelete='SET NULL'), nullable=True)  # NULL once the food is deleted
    position = Column(Integer, nullable=False, default=0)
    portion_size = Column(Float, nullable=False, default=1.0)  # 0.0-1.0, 1.0 is a full serving
    quantity = Column(String(255))  # Free-text quantity (e.g., "2 slices", "1 cup")

    # Relationships
    meal = relationship("Meal", back_populates="food_items")
    food = relationship("Food", back_populates="meal_items")

    __table_args__ = (
        Index('idx_meal_food_items_meal_id', 'meal_id'),
        Index('idx_meal_food_items_food_id', 'food_id'),
    )

    @validates("portion_size")
    def clamp_portion_size(self, key, value):
        return max(0.0, min(1.0, float(value)))
