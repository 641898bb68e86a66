from __future__ import annotations

import re
from typing import Optional

from ...core.constants import (
    FOOD_ALLOWANCE_FULL_DAY_HOURS,
    FOOD_ALLOWANCE_FULL_DAY_IQD,
    FOOD_ALLOWANCE_HALF_DAY_IQD,
)
from .base import FoodAllowanceCalculator

_IRAQ_RE = re.compile(r"iraq|iqd")


class IraqiFoodAllowanceCalculator(FoodAllowanceCalculator):
    """Food allowance for Iraqi staff.

    Wages staff get the full amount from 13 worked hours and half of it for
    any shorter worked day; salaried staff get the half amount per worked day.
    Unknown employment types fall back to the salaried rule.
    """

    def __init__(self, employment_type: Optional[str] = None):
        self.employment_type = (employment_type or "").lower()

    def allowance_for(self, hours: float) -> float:
        if hours <= 0:
            return 0
        if self.employment_type == "wages" and hours >= FOOD_ALLOWANCE_FULL_DAY_HOURS:
            return FOOD_ALLOWANCE_FULL_DAY_IQD
        return FOOD_ALLOWANCE_HALF_DAY_IQD


def food_calculator_for(
    nationality: Optional[str],
    employment_type: Optional[str],
    *,
    country: Optional[str] = None,
    currency: Optional[str] = None,
    food_total: float = 0,
) -> Optional[FoodAllowanceCalculator]:
    """``None`` when no food policy applies.

    The policy applies to Iraqi staff, recognized from the nationality, else
    the country, else the currency. A month whose totals already carry a food
    allowance is under the policy when the nationality is unknown.
    """
    origin = (nationality or country or currency or "").lower()
    iraqi = bool(_IRAQ_RE.search(origin)) and "non" not in origin
    if not iraqi and not (food_total > 0 and not nationality):
        return None
    return IraqiFoodAllowanceCalculator(employment_type)
