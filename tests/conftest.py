import sys
from pathlib import Path

import pytest

# Ensure the project root is importable during pytest collection so that
# `src.*` and `tests._fixtures` resolve without an editable install.
root = Path(__file__).resolve().parent.parent
if str(root) not in sys.path:
    sys.path.insert(0, str(root))

from src.sheet_financials.config import SheetConfig  # noqa: E402

# Load shared fixtures from tests._fixtures so pytest discovers them
pytest_plugins = [
    "tests._fixtures.frozen_time",
]


@pytest.fixture
def sheet_cfg():
    """Deterministic endpoint configuration, independent of the environment."""
    return SheetConfig(
        BASE_URL="https://sheets.test/api/v1",
        SHEET_ID="testsheet",
        API_TOKEN="",
        TAB_PREFIX="$",
        PACING_GAP=0.12,
        RETRY_ATTEMPTS=4,
    )


@pytest.fixture(autouse=True)
def no_network(mocker):
    """Autouse fixture: prevent any test from opening a real aiohttp session"""

    def _refuse(*args, **kwargs):
        raise AssertionError("tests must not open a real aiohttp.ClientSession")

    mocker.patch("aiohttp.ClientSession", _refuse)
    yield
