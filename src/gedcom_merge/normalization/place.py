from __future__ import annotations

from typing import Optional


def normalize_place(value: Optional[str]) -> str:
    """
    Keep the user's component order, trim each part and drop empty ones.

        " Springfield ,  Greene County,, Missouri " -> "Springfield, Greene County, Missouri"
    """
    if not value:
        return ""
    return ", ".join(p.strip() for p in value.split(",") if p.strip())
