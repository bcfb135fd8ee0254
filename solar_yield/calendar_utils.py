from __future__ import annotations

from datetime import date, timedelta
from typing import List, Tuple

import numpy as np

MONSOON_MONTHS: Tuple[int, ...] = (5, 6, 7, 8)
"""Monsoon months as 0-based indices (June through September)."""


def is_monsoon(day: date) -> bool:
    """Return True when the calendar day falls in June–September."""
    return (day.month - 1) in MONSOON_MONTHS


def day_of_year(day: date) -> int:
    """1-based day count since January 1st of the same year."""
    return day.timetuple().tm_yday


def build_history_calendar(
    days: int,
    end: date,
) -> Tuple[List[date], np.ndarray, np.ndarray, np.ndarray]:
    """
    Returns the calendar of a backward-looking daily window.

    Outputs (oldest first, the last entry is ``end``):
      - dates: list of calendar days
      - day_of_year_for_day: 1-based day of year for each day
      - month_for_day: month index 0..11
      - monsoon_for_day: boolean monsoon flags
    """
    if days < 1:
        raise ValueError("days must be a positive integer")

    dates = [end - timedelta(days=offset) for offset in range(days - 1, -1, -1)]

    return (
        dates,
        np.array([day_of_year(d) for d in dates], dtype=int),
        np.array([d.month - 1 for d in dates], dtype=int),
        np.array([is_monsoon(d) for d in dates], dtype=bool),
    )
