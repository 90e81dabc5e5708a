"""
Per-company cache of raw spreadsheet tabs, backed by the request gateway.
"""

import asyncio
from functools import cached_property
from typing import Dict, Iterator, List, Optional

from src.sheet_financials.config import SheetConfig, sheet_config
from src.sheet_financials.gateway import RequestGateway
from src.sheet_financials.layout import TabLayout, classify_layout
from src.sheet_financials.models import Row
from src.utils.core.logger import get_logger

logger = get_logger(__name__)


class Tab:
    """One company's rows (header excluded) with its layout, classified once."""

    def __init__(self, company: str, rows: List[Row]) -> None:
        self.company = company
        self.rows = rows

    @cached_property
    def layout(self) -> TabLayout:
        return classify_layout(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    def __getitem__(self, idx: int) -> Row:
        return self.rows[idx]

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def __repr__(self) -> str:
        return f"Tab(company={self.company!r}, rows={len(self.rows)})"


class TabStore:
    """
    Caches the pending load per company, so concurrent callers share one
    gateway request. Failed loads are forgotten and retried on the next call.
    """

    def __init__(self, gateway: RequestGateway, config: Optional[SheetConfig] = None) -> None:
        self.gateway = gateway
        self.config = config or sheet_config
        self._tabs: Dict[str, asyncio.Future] = {}

    async def load_tab(self, company: str) -> Tab:
        pending = self._tabs.get(company)
        if pending is None:
            pending = asyncio.ensure_future(self._fetch_tab(company))
            self._tabs[company] = pending
            pending.add_done_callback(lambda fut, c=company: self._forget_failed(c, fut))
        return await asyncio.shield(pending)

    def _forget_failed(self, company: str, fut: asyncio.Future) -> None:
        if fut.cancelled() or fut.exception() is not None:
            if self._tabs.get(company) is fut:
                del self._tabs[company]

    async def _fetch_tab(self, company: str) -> Tab:
        tab_name = self.config.tab_name(company)
        logger.info(f"Loading tab {tab_name}")
        data = await self.gateway.get(self.config.sheet_url, self.config.get_request_params(company))

        if not isinstance(data, list):
            logger.warning(f"Tab {tab_name} returned {type(data).__name__}, treating as empty")
            return Tab(company, [])

        rows = [r for r in data if isinstance(r, dict)]
        logger.info(f"Loaded {len(rows)} rows for {tab_name}")
        return Tab(company, rows)

    def is_cached(self, company: str) -> bool:
        return company in self._tabs

    def invalidate(self, company: Optional[str] = None) -> None:
        """Drop one company's tab, or every tab when ``company`` is None"""
        if company is None:
            self._tabs.clear()
        else:
            self._tabs.pop(company, None)
