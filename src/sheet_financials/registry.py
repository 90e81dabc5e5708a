"""
Company -> sheet tab mapping and absolute row positions for metrics.

Row positions are 1-based INCLUDING the header row, as shown in the
spreadsheet UI. The API strips the header, so position 2 is tab index 0.
"""

from typing import Dict, Optional, Sequence

from src.sheet_financials.models import MetricKind, Row

COMPANY_TABS = ["AAPL", "AMZN", "GOOG", "META", "MSFT", "NVDA", "TSLA"]

SHEET_NAME: Dict[str, str] = {company: f"${company}" for company in COMPANY_TABS}

# Position of the "Product" row that carries quarter labels on most tabs
DEFAULT_QUARTER_ROW_POSITION = 5

ROW_INDEX: Dict[MetricKind, Dict[str, int]] = {
    MetricKind.REVENUE: {
        "AAPL": 5,
        "AMZN": 9,
        "GOOG": 5,
        "META": 5,
        "MSFT": 9,
        "NVDA": 5,
        "TSLA": 13,
    },
    MetricKind.NET_INCOME: {
        "AAPL": 36,
        "AMZN": 41,
        "GOOG": 41,
        "META": 27,
        "MSFT": 30,
        "NVDA": 29,
        "TSLA": 44,
    },
    MetricKind.GROSS_MARGIN: {
        "AAPL": 23,
        "AMZN": 15,
        "GOOG": 25,
        "META": 11,
        "MSFT": 15,
        "NVDA": 11,
        "TSLA": 26,
    },
}


def row_position(metric: MetricKind, company: str) -> Optional[int]:
    """Absolute row position of ``metric`` for ``company``, None when unmapped."""
    try:
        kind = MetricKind(metric)
    except ValueError:
        return None
    return ROW_INDEX[kind].get(company)


def position_to_index(position: int) -> int:
    return max(0, position - 2)


def row_at_position(rows: Sequence[Row], position: Optional[int]) -> Optional[Row]:
    """Row at an absolute sheet position, or None when missing/out of range."""
    if position is None:
        return None
    idx = position_to_index(position)
    if idx >= len(rows):
        return None
    return rows[idx]
