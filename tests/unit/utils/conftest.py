import pytest

from src.utils.core import logger as logger_mod


@pytest.fixture(autouse=True)
def restore_log_sinks():
    """Leave the logging sinks as a fresh process would find them."""
    yield
    logger_mod.shutdown_logging()
