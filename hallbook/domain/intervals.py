"""Primitives over half-open ``[start, end)`` date ranges.

Every component that compares ranges (conflict checks, gap search,
utilization) goes through :func:`overlaps`, so touching ranges (one ending
exactly when the next begins) never count as overlapping anywhere.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta

ONE_DAY = timedelta(days=1)


def duration_days(start: datetime, end: datetime) -> int:
    """Billable whole days between *start* and *end*, never less than 1."""
    days = math.ceil((end - start) / ONE_DAY)
    return max(days, 1)


def overlaps(
    a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime
) -> bool:
    return a_start < b_end and b_start < a_end
