import asyncio

import pytest

from src.sheet_financials.models import MetricKind, MetricSeriesResult
from src.sheet_financials.service import FinancialSeriesService
from src.sheet_financials.tab_store import TabStore
from tests._fixtures import QUARTERS, StubGateway, override_tab, standard_tab


def _run(coro):
    return asyncio.run(coro)


@pytest.fixture
def service(sheet_cfg):
    gateway = StubGateway(
        {
            "$MSFT": standard_tab("MSFT"),
            "$TSLA": override_tab(),
            "$META": standard_tab("META", revenue=["1,000", "", "n/a", "4", "5%"]),
        }
    )
    return FinancialSeriesService(TabStore(gateway, sheet_cfg))


@pytest.mark.unit
def test_get_quarters(service):
    assert _run(service.get_quarters("MSFT")) == QUARTERS


@pytest.mark.unit
def test_get_revenue_is_aligned(service):
    result = _run(service.get_revenue("MSFT"))

    assert isinstance(result, MetricSeriesResult)
    assert result.quarters == QUARTERS
    assert len(result.series) == len(result.quarters)
    assert result.series[0] == pytest.approx(52857.0)


@pytest.mark.unit
def test_unparseable_and_missing_cells_are_absent(service):
    result = _run(service.get_revenue("META"))

    assert result.series == [1000.0, None, None, 4.0, 0.05, None]


@pytest.mark.unit
def test_override_company_uses_fixed_rows(service):
    async def _call():
        return await service.get_net_income("TSLA"), await service.get_gross_margin("TSLA")

    net_income, gross_margin = _run(_call())

    assert net_income.series[-1] == pytest.approx(22036.0)
    assert gross_margin.series[1] == pytest.approx(0.701)


@pytest.mark.unit
def test_metrics_of_one_company_share_one_tab_load(service):
    async def _call():
        return await asyncio.gather(
            *(service.get_series("MSFT", metric) for metric in MetricKind)
        )

    results = _run(_call())

    assert [r.quarters for r in results] == [QUARTERS] * 3
    assert service.tab_store.gateway.network_calls == 1
