"""
Series alignment: turn a raw spreadsheet row into a numeric series whose
length always equals the number of quarter labels.
"""

import math
from typing import Any, List, Optional, Sequence

from src.sheet_financials.models import MetricSeries, Row


def label_of(row: Row) -> str:
    """Trimmed text of the row's label column (position 0)"""
    for value in row.values():
        return cell_text(value)
    return ""


def data_cells(row: Row) -> List[Any]:
    """Values of every column except the label column, in order"""
    return list(row.values())[1:]


def cell_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def parse_number(value: Any) -> Optional[float]:
    """
    Parse a cell into a finite number.

    Thousands separators (commas, spaces) are ignored and a trailing percent
    sign scales the value by 1/100. Returns None for anything that is not a
    finite number, including blanks.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None

    text = str(value).strip()
    if not text:
        return None

    is_pct = text.endswith("%")
    if is_pct:
        text = text[:-1]
    text = text.replace(",", "").replace(" ", "")
    # float() accepts digit-group underscores, spreadsheets don't
    if not text or "_" in text:
        return None

    try:
        number = float(text)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number / 100 if is_pct else number


def to_series(row: Optional[Row], quarters: Sequence[str]) -> MetricSeries:
    """Numeric series for ``row`` with exactly ``len(quarters)`` positions."""
    out: MetricSeries = [None] * len(quarters)
    if row is None:
        return out

    values = [parse_number(v) for v in data_cells(row)]
    for i in range(min(len(values), len(quarters))):
        out[i] = values[i]
    return out
