from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def worked_hours(self, entry: Mapping[str, Any]) -> float:
        raise NotImplementedError


class FoodAllowanceCalculator(ABC):
    """Estimates the per-day food allowance when the server omits it."""

    @abstractmethod
    def allowance_for(self, hours: float) -> float:
        raise NotImplementedError
