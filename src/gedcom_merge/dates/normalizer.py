# src/gedcom_merge/dates/normalizer.py

from __future__ import annotations

import re
from datetime import date, datetime, timezone
from typing import Optional, Union


# ---------------------------------------------------------------------------
# Month helpers
# ---------------------------------------------------------------------------

MONTHS = (
    "JAN",
    "FEB",
    "MAR",
    "APR",
    "MAY",
    "JUN",
    "JUL",
    "AUG",
    "SEP",
    "OCT",
    "NOV",
    "DEC",
)

ISO_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


def format_ged_date(d: date) -> str:
    """date(1996, 1, 3) -> '03 JAN 1996'."""
    return f"{d.day:02d} {MONTHS[d.month - 1]} {d.year}"


def today_ged_date(now: Optional[datetime] = None) -> str:
    """Today's UTC date in GEDCOM day-month-year form."""
    now = now or datetime.now(timezone.utc)
    return format_ged_date(now.date())


def to_ged_date(value: Union[date, str, None]) -> str:
    """
    Normalize user date input to GEDCOM style.

    - ``date`` objects are formatted directly.
    - ``YYYY-MM-DD`` becomes ``DD MON YYYY`` (day kept as typed).
    - Anything else is assumed to be GEDCOM style already: trimmed and
      upper-cased (``abt 1900`` -> ``ABT 1900``).
    """
    if value is None:
        return ""
    if isinstance(value, date):
        return format_ged_date(value)

    s = value.strip()
    m = ISO_DATE_RE.match(s)
    if m:
        year, month, day = m.groups()
        month_index = int(month)
        if 1 <= month_index <= 12:
            return f"{day} {MONTHS[month_index - 1]} {int(year)}"
    return s.upper()
