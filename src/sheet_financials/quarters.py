"""
Quarter label resolution

Finds the row carrying the reporting-period labels of a tab. Labels come in
two families:

* period codes: two-digit year, period letter, period digit (``24Q3``)
* date headers: day, three-letter month, two-digit year (``3 Aug 23``)

The first row where those make up at least half of the data cells (and at
least four of them) wins. Otherwise the ``Product`` row is used, then the row
at the registry's default position.
"""

import math
import re
from typing import List, Optional, Sequence

from src.sheet_financials.models import Row
from src.sheet_financials.registry import DEFAULT_QUARTER_ROW_POSITION, row_at_position
from src.sheet_financials.series import cell_text, data_cells, label_of

PERIOD_CODE_PATTERN = re.compile(r"^\d{2}[A-Za-z]\d$")
DATE_HEADER_PATTERN = re.compile(r"^\d{1,2}\s+[A-Za-z]{3}\s+\d{2}$")

QUARTER_ROW_LABEL = "Product"
MIN_LABEL_HITS = 4
MIN_LABEL_SHARE = 0.5

# Literal empty-string artifact some exports leave in blank cells
EMPTY_ARTIFACT = '""'


def is_period_code(text: str) -> bool:
    return bool(PERIOD_CODE_PATTERN.match(text))


def is_date_header(text: str) -> bool:
    return bool(DATE_HEADER_PATTERN.match(text))


def looks_like_period_label(value) -> bool:
    text = cell_text(value)
    if not text:
        return False
    return is_period_code(text) or is_date_header(text)


def is_quarter_row(row: Row) -> bool:
    cells = data_cells(row)
    if not cells:
        return False
    hits = sum(1 for c in cells if looks_like_period_label(c))
    return hits >= max(MIN_LABEL_HITS, math.ceil(MIN_LABEL_SHARE * len(cells)))


def find_row_by_label(rows: Sequence[Row], label: str) -> Optional[Row]:
    """First row whose label column matches ``label`` (trimmed, case-insensitive)"""
    wanted = label.strip().casefold()
    for row in rows:
        if label_of(row).casefold() == wanted:
            return row
    return None


def find_quarter_row(rows: Sequence[Row]) -> Optional[Row]:
    for row in rows:
        if is_quarter_row(row):
            return row
    return find_row_by_label(rows, QUARTER_ROW_LABEL) or row_at_position(
        rows, DEFAULT_QUARTER_ROW_POSITION
    )


def extract_quarters(rows: Sequence[Row]) -> List[str]:
    """Ordered quarter labels of a tab, empty when none can be located"""
    row = find_quarter_row(rows)
    if row is None:
        return []
    labels = (cell_text(c) for c in data_cells(row))
    return [label for label in labels if label and label != EMPTY_ARTIFACT]
