from __future__ import annotations

import calendar
import re
from datetime import date, datetime
from typing import Optional

_MONTH_RE = re.compile(r"^\d{4}-\d{2}$")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def month_clamp(value: Optional[str] = None, *, today: Optional[date] = None) -> str:
    """Coerce anything month-ish into ``YYYY-MM``.

    Empty or unparseable input falls back to the current month.
    """
    fallback = (today or now_local().date()).strftime("%Y-%m")
    if not value:
        return fallback
    text = str(value).strip()
    if _MONTH_RE.match(text):
        return text
    try:
        return datetime.fromisoformat(text).strftime("%Y-%m")
    except ValueError:
        return fallback


def month_range(month: str) -> tuple[str, str]:
    """First and last ISO day of a ``YYYY-MM`` month."""
    year, mon = (int(p) for p in month.split("-", 1))
    last_day = calendar.monthrange(year, mon)[1]
    return f"{month}-01", f"{month}-{last_day:02d}"


def iso_day_start(day: str) -> str:
    return f"{day[:10]}T00:00:00"


def iso_day_end(day: str) -> str:
    return f"{day[:10]}T23:59:59"


def parse_timestamp(value) -> Optional[datetime]:
    """Accept ISO strings or epoch seconds/milliseconds; ``None`` if unusable."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    text = str(value).strip()
    try:
        n = float(text)
    except ValueError:
        pass
    else:
        return datetime.fromtimestamp(n / 1000 if n > 1e12 else n)
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None
