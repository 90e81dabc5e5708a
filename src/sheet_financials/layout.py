"""
Tab layout classification

Every tab is classified once into one of two layouts, and metric/quarter
extraction dispatches on that:

* ``StandardLayout``: heuristic quarter row + registry row positions
* ``OverrideLayout``: the vendor layout read from fixed rows
"""

from dataclasses import dataclass, field
from functools import cached_property
from typing import List, Sequence, Union

from src.sheet_financials.models import MetricKind, MetricSeries, Row
from src.sheet_financials.quarters import extract_quarters
from src.sheet_financials.registry import row_at_position, row_position
from src.sheet_financials.series import to_series
from src.sheet_financials.vendor_override import (
    is_override_layout,
    override_quarters,
    override_series,
)


@dataclass(frozen=True)
class StandardLayout:
    rows: Sequence[Row] = field(repr=False)
    kind: str = "standard"

    @cached_property
    def quarters(self) -> List[str]:
        return extract_quarters(self.rows)

    def series(self, company: str, metric: MetricKind) -> MetricSeries:
        row = row_at_position(self.rows, row_position(metric, company))
        return to_series(row, self.quarters)


@dataclass(frozen=True)
class OverrideLayout:
    rows: Sequence[Row] = field(repr=False)
    kind: str = "override"

    @cached_property
    def quarters(self) -> List[str]:
        return override_quarters(self.rows)

    def series(self, company: str, metric: MetricKind) -> MetricSeries:
        return override_series(self.rows, metric, self.quarters)


TabLayout = Union[StandardLayout, OverrideLayout]


def classify_layout(rows: Sequence[Row]) -> TabLayout:
    if is_override_layout(rows):
        return OverrideLayout(rows)
    return StandardLayout(rows)
