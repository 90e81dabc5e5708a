"""
Fixed-row extraction for the vendor layout without a usable label column.

One vendor's export leaves the first header cell blank (or mangles it into a
placeholder), so rows cannot be found by label. Its tabs keep a fixed
structure instead: quarter labels on tab row 1 and each metric on a known row.
"""

from typing import Dict, List, Sequence

from src.sheet_financials.models import MetricKind, MetricSeries, Row
from src.sheet_financials.quarters import EMPTY_ARTIFACT
from src.sheet_financials.series import cell_text, data_cells, to_series

BLANK_HEADER_SENTINEL = "__blank"

# Zero-based tab indices (header row already stripped by the API)
OVERRIDE_QUARTER_ROW = 1
OVERRIDE_METRIC_ROWS: Dict[MetricKind, int] = {
    MetricKind.REVENUE: 13,
    MetricKind.NET_INCOME: 10,
    MetricKind.GROSS_MARGIN: 27,
}


def _first_key(row: Row) -> str:
    for key in row:
        return key
    return ""


def is_override_layout(rows: Sequence[Row]) -> bool:
    """True when the first row's label-column key is blank or the sentinel"""
    if len(rows) < 2:
        return False
    key = (_first_key(rows[0]) or "").strip()
    return not key or key == BLANK_HEADER_SENTINEL


def override_quarters(rows: Sequence[Row]) -> List[str]:
    """Quarter labels from the fixed quarter row.

    Interior blanks (including the literal `""` artifact, read as blank) are
    kept so labels stay aligned with the data columns; only trailing blanks
    are dropped.
    """
    if len(rows) <= OVERRIDE_QUARTER_ROW:
        return []
    labels = [cell_text(c) for c in data_cells(rows[OVERRIDE_QUARTER_ROW])]
    labels = ["" if label == EMPTY_ARTIFACT else label for label in labels]
    while labels and not labels[-1]:
        labels.pop()
    return labels


def override_series(rows: Sequence[Row], metric: MetricKind, quarters: Sequence[str]) -> MetricSeries:
    idx = OVERRIDE_METRIC_ROWS[MetricKind(metric)]
    row = rows[idx] if idx < len(rows) else None
    return to_series(row, quarters)
