"""
Small calculations over quarterly metric series (TTM sums, YoY changes).
"""

import math
from typing import List, Optional, Sequence, TypeVar

T = TypeVar("T")


def is_num(x) -> bool:
    """Finite int/float (bools excluded)"""
    return isinstance(x, (int, float)) and not isinstance(x, bool) and math.isfinite(x)


def last_n(values: Optional[Sequence[T]], n: int) -> List[T]:
    """Last ``n`` items (or fewer); empty for ``n <= 0`` or missing input."""
    if not values or n <= 0:
        return []
    return list(values[-n:])


def sum_ttm(series: Sequence[Optional[float]]) -> float:
    """Trailing-twelve-month sum: the last four finite values."""
    return float(sum(last_n([v for v in series if is_num(v)], 4)))


def pct_change(curr: Optional[float], prev: Optional[float]) -> Optional[float]:
    """Percentage change from ``prev`` to ``curr``, None when undefined."""
    if not is_num(curr) or not is_num(prev) or prev == 0:
        return None
    return (curr - prev) / prev * 100


def yoy_series(series: Sequence[Optional[float]]) -> List[Optional[float]]:
    """Year-over-year percentages (q[i] vs q[i-4]) for the last four quarters."""
    changes = [pct_change(series[i], series[i - 4]) for i in range(4, len(series))]
    return last_n(changes, 4)
