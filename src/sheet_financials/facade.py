"""
Public entry point: per-company payloads with a company-level cache and
observable loading/error state.
"""

import asyncio
from enum import Enum
from typing import Callable, Dict, List, Optional

from src.sheet_financials.gateway import NetworkError
from src.sheet_financials.models import (
    CompanyPayload,
    MetricKind,
    MetricSeriesResult,
)
from src.sheet_financials.service import FinancialSeriesService
from src.utils.core.logger import get_logger

logger = get_logger(__name__)

LOAD_ERROR_MESSAGE = "Failed to load data"

StateListener = Callable[[str, object], None]


class FetchStrategy(str, Enum):
    """How the three metric lookups of a company are aggregated.

    ISOLATED: a failing metric is replaced by an all-absent series so the
    others still load. ALL_OR_NOTHING: any failing metric fails the call.
    """

    ISOLATED = "isolated"
    ALL_OR_NOTHING = "all_or_nothing"


class FinancialFacade:
    """
    Caches one ``CompanyPayload`` per company.

    ``loading`` is True while any uncached fetch runs; ``error`` holds a
    generic message after a failed fetch and is cleared when the next fetch
    starts. Listeners registered with ``add_listener`` are called with
    ``(field, value)`` on every change. Failed fetches are never cached.
    """

    def __init__(
        self,
        service: FinancialSeriesService,
        strategy: FetchStrategy = FetchStrategy.ISOLATED,
    ) -> None:
        self.service = service
        self.strategy = FetchStrategy(strategy)
        self._cache: Dict[str, CompanyPayload] = {}
        self._active_fetches = 0
        self._loading = False
        self._error = ""
        self._listeners: List[StateListener] = []

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def error(self) -> str:
        return self._error

    def add_listener(self, listener: StateListener) -> None:
        self._listeners.append(listener)

    def _set_state(self, field: str, value) -> None:
        attr = f"_{field}"
        if getattr(self, attr) == value:
            return
        setattr(self, attr, value)
        for listener in self._listeners:
            listener(field, value)

    def is_cached(self, company: str) -> bool:
        return company in self._cache

    async def get_company(self, company: str) -> CompanyPayload:
        cached = self._cache.get(company)
        if cached is not None:
            return cached

        self._active_fetches += 1
        self._set_state("loading", True)
        self._set_state("error", "")
        try:
            payload = await self._load_company(company)
            self._cache[company] = payload
            return payload
        except Exception as e:
            logger.error(f"Loading {company} failed: {e}")
            self._set_state("error", LOAD_ERROR_MESSAGE)
            raise
        finally:
            self._active_fetches -= 1
            self._set_state("loading", self._active_fetches > 0)

    async def refresh(self, company: Optional[str] = None) -> None:
        """Evict payloads and tabs; re-fetch right away when ``company`` is given"""
        self.clear_cache(company)
        self.service.tab_store.invalidate(company)
        if company is not None:
            await self.get_company(company)

    def clear_cache(self, company: Optional[str] = None) -> None:
        """Evict cached payloads only, tabs stay cached"""
        if company is None:
            self._cache.clear()
        else:
            self._cache.pop(company, None)

    async def _load_company(self, company: str) -> CompanyPayload:
        metrics = list(MetricKind)
        if self.strategy is FetchStrategy.ALL_OR_NOTHING:
            results = await asyncio.gather(
                *(self.service.get_series(company, m) for m in metrics)
            )
            failed: Dict[MetricKind, NetworkError] = {}
        else:
            outcomes = await asyncio.gather(
                *(self.service.get_series(company, m) for m in metrics),
                return_exceptions=True,
            )
            results, failed = [], {}
            for metric, outcome in zip(metrics, outcomes):
                if isinstance(outcome, NetworkError):
                    failed[metric] = outcome
                    results.append(MetricSeriesResult())
                elif isinstance(outcome, BaseException):
                    raise outcome
                else:
                    results.append(outcome)

            if len(failed) == len(metrics):
                raise failed[metrics[0]]
            for metric, err in failed.items():
                logger.warning(f"{company} {metric.value} unavailable, using empty series: {err}")

        by_metric = dict(zip(metrics, results))
        quarters = next((r.quarters for r in results if r.quarters), [])

        def aligned(metric: MetricKind) -> List[Optional[float]]:
            if metric in failed:
                return [None] * len(quarters)
            return list(by_metric[metric].series)

        return CompanyPayload(
            company=company,
            quarters=list(quarters),
            revenue=aligned(MetricKind.REVENUE),
            net_income=aligned(MetricKind.NET_INCOME),
            gross_margin=aligned(MetricKind.GROSS_MARGIN),
        )
