from __future__ import annotations

from datetime import datetime
from typing import Optional


def currency(amount: float | None) -> str:
    """USD display, e.g. ``$1,234.50`` and ``-$5.00``."""
    value = float(amount or 0)
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def local_timestamp(value: Optional[datetime]) -> str:
    if value is None:
        return ""
    if value.tzinfo is not None:
        value = value.astimezone()
    return value.strftime("%Y-%m-%d %H:%M")
