"""Fixtures package for tests.

Re-export commonly used fakes and builders for convenient imports from
`tests._fixtures`.
"""

from .frozen_time import FrozenClock
from .http import FakeResponse, FakeSession, Responses, StubGateway
from .sheets import (
    GROSS_MARGIN,
    NET_INCOME,
    QUARTERS,
    REVENUE,
    make_row,
    override_tab,
    standard_tab,
)

__all__ = [
    "FrozenClock",
    "FakeResponse",
    "FakeSession",
    "Responses",
    "StubGateway",
    "QUARTERS",
    "REVENUE",
    "NET_INCOME",
    "GROSS_MARGIN",
    "make_row",
    "override_tab",
    "standard_tab",
]
