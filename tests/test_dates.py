# tests/test_dates.py

from __future__ import annotations

from datetime import date, datetime, timezone

from gedcom_merge.dates import format_ged_date, to_ged_date, today_ged_date
from gedcom_merge.normalization.place import normalize_place


def test_iso_date_becomes_day_month_year():
    assert to_ged_date("1980-02-29") == "29 FEB 1980"
    assert to_ged_date("1996-01-03") == "03 JAN 1996"


def test_other_input_is_uppercased():
    assert to_ged_date(" abt 1900 ") == "ABT 1900"
    assert to_ged_date("3 jan 1996") == "3 JAN 1996"
    assert to_ged_date("2001-13-01") == "2001-13-01"


def test_date_objects():
    assert to_ged_date(date(1996, 1, 3)) == "03 JAN 1996"
    assert format_ged_date(date(2024, 12, 25)) == "25 DEC 2024"


def test_today_uses_utc():
    now = datetime(2024, 5, 7, 23, 30, tzinfo=timezone.utc)
    assert today_ged_date(now) == "07 MAY 2024"


def test_normalize_place():
    assert normalize_place(" Springfield ,  Greene County,, Missouri ") == (
        "Springfield, Greene County, Missouri"
    )
    assert normalize_place("") == ""
    assert normalize_place(None) == ""
