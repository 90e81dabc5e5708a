"""
Pydantic data models for the spreadsheet financials pipeline
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

# A spreadsheet row as returned by the API: column header -> cell value.
# Position 0 is the label column, the rest are period-indexed data columns.
Row = Dict[str, Any]

MetricSeries = List[Optional[float]]


class MetricKind(str, Enum):
    """Metrics extracted for every company"""

    REVENUE = "revenue"
    NET_INCOME = "net_income"
    GROSS_MARGIN = "gross_margin"


class MetricSeriesResult(BaseModel):
    """One metric aligned to the quarter labels of its tab"""

    quarters: List[str] = Field(default_factory=list)
    series: MetricSeries = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_alignment(self) -> "MetricSeriesResult":
        if len(self.series) != len(self.quarters):
            raise ValueError(
                f"series length {len(self.series)} != quarters length {len(self.quarters)}"
            )
        return self


class CompanyPayload(BaseModel):
    """Everything the presentation layer needs for one company"""

    company: str
    quarters: List[str] = Field(default_factory=list)
    revenue: MetricSeries = Field(default_factory=list)
    net_income: MetricSeries = Field(default_factory=list)
    gross_margin: MetricSeries = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_alignment(self) -> "CompanyPayload":
        for metric in MetricKind:
            series = getattr(self, metric.value)
            if len(series) != len(self.quarters):
                raise ValueError(
                    f"{metric.value} length {len(series)} != quarters length {len(self.quarters)}"
                )
        return self

    def series_for(self, metric: MetricKind) -> MetricSeries:
        return getattr(self, metric.value)
