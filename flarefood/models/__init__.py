"""
Database models for Flare Food.

Import all models here so Alembic can detect them for migrations.
"""

from flarefood.database import Base
from flarefood.models.food import Food
from flarefood.models.meal import Meal, MealFoodItem
from flarefood.models.symptom import Symptom, SymptomType
from flarefood.models.correlation import Correlation

__all__ = [
    "Base",
    "Food",
    "Meal",
    "MealFoodItem",
    "Symptom",
    "SymptomType",
    "Correlation",
]
