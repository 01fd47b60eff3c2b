"""Immutable event snapshots consumed by the correlation engine."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple

from flarefood.models.symptom import SymptomType


@dataclass(frozen=True)
class FoodRef:
    id: int
    name: str
    category: str = "Other"
    common_triggers: Tuple[str, ...] = ()


@dataclass(frozen=True)
class MealItem:
    """A food entry within a meal. ``food_id`` is None once the food is gone."""
    food_id: Optional[int]
    portion_size: float = 1.0

    def __post_init__(self):
        object.__setattr__(self, "portion_size", max(0.0, min(1.0, float(self.portion_size))))


@dataclass(frozen=True)
class MealEvent:
    id: int
    timestamp: datetime
    items: Tuple[MealItem, ...] = ()

    @property
    def food_ids(self) -> frozenset:
        """Ids of foods referenced by this meal, absent references excluded."""
        return frozenset(item.food_id for item in self.items if item.food_id is not None)

    def contains_food(self, food_id: int) -> bool:
        return food_id in self.food_ids


@dataclass(frozen=True)
class SymptomEvent:
    id: int
    timestamp: datetime
    symptom_type: SymptomType
    severity: float
    duration_minutes: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "severity", max(0.0, min(10.0, float(self.severity))))


@dataclass(frozen=True)
class EventSnapshot:
    """Everything one analysis run reads, loaded up front."""
    meals: Tuple[MealEvent, ...] = field(default_factory=tuple)
    symptoms: Tuple[SymptomEvent, ...] = field(default_factory=tuple)
    foods: Tuple[FoodRef, ...] = field(default_factory=tuple)
