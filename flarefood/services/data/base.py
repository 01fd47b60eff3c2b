"""Abstract base class for the data source the correlation engine reads from."""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import TYPE_CHECKING, List

from flarefood.services.data.events import FoodRef, MealEvent, SymptomEvent

if TYPE_CHECKING:
    from flarefood.services.correlation_service import CorrelationResult


class DataAccessError(Exception):
    """Raised when events cannot be loaded from the underlying store."""
    pass


class StorageError(DataAccessError):
    """Raised when correlation results cannot be persisted."""
    pass


class DataSource(ABC):
    """
    Data-access interface for correlation analysis.

    The engine only ever loads events and writes back a complete result set,
    so swapping the SQL store for another backend needs no engine changes.
    """

    @abstractmethod
    def load_meals(self, start: datetime, end: datetime) -> List[MealEvent]:
        """Return meals with start <= timestamp <= end."""
        pass

    @abstractmethod
    def load_symptoms(self, start: datetime, end: datetime) -> List[SymptomEvent]:
        """Return symptoms with start <= timestamp <= end."""
        pass

    @abstractmethod
    def load_foods(self) -> List[FoodRef]:
        """Return every known food."""
        pass

    @abstractmethod
    def save_correlations(self, correlations: List["CorrelationResult"]) -> None:
        """
        Persist a full result set in one write.

        Raises StorageError if nothing could be written. Implementations must
        not leave a partial result set behind.
        """
        pass
