"""
Per-metric access to company tabs.
"""

from typing import List

from src.sheet_financials.models import MetricKind, MetricSeriesResult
from src.sheet_financials.tab_store import TabStore


class FinancialSeriesService:
    """Loads tabs through the store and dispatches to each tab's layout"""

    def __init__(self, tab_store: TabStore) -> None:
        self.tab_store = tab_store

    async def get_quarters(self, company: str) -> List[str]:
        tab = await self.tab_store.load_tab(company)
        return list(tab.layout.quarters)

    async def get_series(self, company: str, metric: MetricKind) -> MetricSeriesResult:
        tab = await self.tab_store.load_tab(company)
        layout = tab.layout
        return MetricSeriesResult(
            quarters=list(layout.quarters),
            series=layout.series(company, MetricKind(metric)),
        )

    async def get_revenue(self, company: str) -> MetricSeriesResult:
        return await self.get_series(company, MetricKind.REVENUE)

    async def get_net_income(self, company: str) -> MetricSeriesResult:
        return await self.get_series(company, MetricKind.NET_INCOME)

    async def get_gross_margin(self, company: str) -> MetricSeriesResult:
        return await self.get_series(company, MetricKind.GROSS_MARGIN)
