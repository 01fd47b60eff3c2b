"""Data access for correlation analysis."""
from flarefood.services.data.base import DataAccessError, DataSource, StorageError
from flarefood.services.data.events import EventSnapshot, FoodRef, MealEvent, MealItem, SymptomEvent
from flarefood.services.data.sql_source import SqlDataSource

__all__ = [
    "DataAccessError",
    "DataSource",
    "StorageError",
    "EventSnapshot",
    "FoodRef",
    "MealEvent",
    "MealItem",
    "SymptomEvent",
    "SqlDataSource",
]
