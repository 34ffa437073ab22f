from .normalizer import MONTHS, format_ged_date, to_ged_date, today_ged_date

__all__ = ["MONTHS", "format_ged_date", "to_ged_date", "today_ged_date"]
