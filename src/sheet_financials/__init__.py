"""
Spreadsheet Financials: ingestion of per-company spreadsheet tabs into
quarter-aligned revenue, net income and gross margin series
(gateway → tab store → layout/series resolution → facade).
"""

from .gateway import (
    NetworkError,
    RequestGateway,
    TerminalNetworkError,
    TransientNetworkError,
)
from .tab_store import Tab, TabStore
from .service import FinancialSeriesService
from .facade import FetchStrategy, FinancialFacade
from .models import CompanyPayload, MetricKind, MetricSeriesResult

__version__ = "1.0.0"

__all__ = [
    "NetworkError",
    "TransientNetworkError",
    "TerminalNetworkError",
    "RequestGateway",
    "Tab",
    "TabStore",
    "FinancialSeriesService",
    "FetchStrategy",
    "FinancialFacade",
    "CompanyPayload",
    "MetricKind",
    "MetricSeriesResult",
]
