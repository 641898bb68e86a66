from __future__ import annotations

from typing import Any, Mapping

from ...common.coerce import first_present, to_number
from ...common.datetime_utils import parse_timestamp
from .base import PayrollCalculator

HOURS_KEYS = ("hours", "duration_hours", "work_hours")
IN_KEYS = ("date_in", "ts_in", "in", "check_in", "datetime_in", "date")
OUT_KEYS = ("date_out", "ts_out", "out", "check_out", "datetime_out")


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: explicit hours, else (out - in), not below 0."""

    def worked_hours(self, entry: Mapping[str, Any]) -> float:
        explicit = first_present(entry, HOURS_KEYS)
        if explicit is not None:
            return max(to_number(explicit), 0)

        check_in = parse_timestamp(first_present(entry, IN_KEYS))
        check_out = parse_timestamp(first_present(entry, OUT_KEYS))
        if not check_in or not check_out:
            return 0
        try:
            seconds = (check_out - check_in).total_seconds()
        except TypeError:
            # naive vs aware timestamps
            return 0
        return max(seconds / 3600, 0)
