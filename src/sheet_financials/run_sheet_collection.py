#!/usr/bin/env python3
"""
Spreadsheet Financials Collection Runner

Loads revenue, net income and gross margin for the configured companies and
prints a summary per company.
"""

import argparse
import asyncio
import sys
from typing import Any, Dict, List, Optional

from src.sheet_financials.analytics import is_num, sum_ttm, yoy_series
from src.sheet_financials.config import SheetConfig
from src.sheet_financials.facade import FetchStrategy, FinancialFacade
from src.sheet_financials.gateway import NetworkError, RequestGateway
from src.sheet_financials.models import CompanyPayload
from src.sheet_financials.registry import COMPANY_TABS
from src.sheet_financials.service import FinancialSeriesService
from src.sheet_financials.tab_store import TabStore
from src.utils.core.logger import get_logger

logger = get_logger(__name__)


async def collect(
    companies: List[str],
    strategy: FetchStrategy = FetchStrategy.ISOLATED,
    config: Optional[SheetConfig] = None,
) -> Dict[str, Any]:
    """Fetch every company, returning payloads and failures keyed by company"""
    payloads: Dict[str, CompanyPayload] = {}
    failures: Dict[str, str] = {}

    async with RequestGateway(config) as gateway:
        facade = FinancialFacade(
            FinancialSeriesService(TabStore(gateway, config)), strategy=strategy
        )
        for company in companies:
            try:
                payloads[company] = await facade.get_company(company)
            except NetworkError as e:
                failures[company] = str(e)

        logger.info(
            f"Collected {len(payloads)}/{len(companies)} companies "
            f"with {gateway.network_calls} network calls"
        )

    return {"payloads": payloads, "failures": failures}


def _fmt(value: Optional[float]) -> str:
    return f"{value:,.2f}" if is_num(value) else "-"


def print_results(results: Dict[str, Any]) -> None:
    print("\n" + "=" * 60)
    print("SPREADSHEET FINANCIALS")
    print("=" * 60)

    for company, payload in results["payloads"].items():
        quarters = payload.quarters
        span = f"{quarters[0]} .. {quarters[-1]}" if quarters else "no quarters"
        print(f"\n{company}: {len(quarters)} quarters ({span})")
        print(f"   Revenue (last):      {_fmt(payload.revenue[-1] if payload.revenue else None)}")
        print(f"   Revenue (TTM):       {_fmt(sum_ttm(payload.revenue))}")
        print(f"   Net income (last):   {_fmt(payload.net_income[-1] if payload.net_income else None)}")
        print(f"   Gross margin (last): {_fmt(payload.gross_margin[-1] if payload.gross_margin else None)}")
        yoy = ", ".join(_fmt(v) for v in yoy_series(payload.revenue)) or "-"
        print(f"   Revenue YoY %:       {yoy}")

    if results["failures"]:
        print("\nFailed:")
        for company, err in results["failures"].items():
            print(f"   {company}: {err}")
    print("=" * 60)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Spreadsheet Financials Collection Runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
            Examples:
            # All configured companies
            python -m src.sheet_financials.run_sheet_collection

            # Selected companies, failing a company when any metric fails
            python -m src.sheet_financials.run_sheet_collection --companies AAPL TSLA --strategy all_or_nothing
    """,
    )
    parser.add_argument(
        "--companies",
        nargs="+",
        default=list(COMPANY_TABS),
        help="Company identifiers (default: every configured tab)",
    )
    parser.add_argument(
        "--strategy",
        choices=[s.value for s in FetchStrategy],
        default=FetchStrategy.ISOLATED.value,
        help="How metric failures are aggregated per company",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    results = asyncio.run(collect(args.companies, FetchStrategy(args.strategy)))
    print_results(results)
    return 1 if results["failures"] else 0


if __name__ == "__main__":
    sys.exit(main())
