import asyncio

import pytest

from src.utils.core.retry import (
    RetryConfig,
    RetryError,
    calculate_delay,
    execute_with_async_retry,
    is_retryable_exception,
)


class Flaky(Exception):
    error_category = "retryable"


class Fatal(Exception):
    error_category = "client_error"


def _counting(outcomes):
    """Coroutine function that raises or returns the next outcome on each call"""
    calls = []

    async def func(*args, **kwargs):
        calls.append((args, kwargs))
        outcome = outcomes[min(len(calls), len(outcomes)) - 1]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    return func, calls


def test_calculate_delay_doubles_without_jitter():
    cfg = RetryConfig(base_delay=0.25, backoff_factor=2.0, jitter=False)

    assert [calculate_delay(a, cfg) for a in range(4)] == [0.25, 0.5, 1.0, 2.0]


def test_calculate_delay_is_capped():
    cfg = RetryConfig(base_delay=1.0, backoff_factor=10.0, max_delay=5.0)

    assert calculate_delay(3, cfg) == 5.0


def test_calculate_delay_jitter_stays_in_range():
    cfg = RetryConfig(base_delay=1.0, backoff_factor=2.0, jitter=True)

    for _ in range(20):
        assert 0.75 <= calculate_delay(0, cfg) <= 1.25


def test_is_retryable_exception():
    assert is_retryable_exception(Flaky())
    assert not is_retryable_exception(Fatal())
    assert not is_retryable_exception(ValueError())


def test_retries_until_success(frozen_clock):
    func, calls = _counting([Flaky("1"), Flaky("2"), "ok"])

    result = asyncio.run(execute_with_async_retry(func, RetryConfig(), "a", key="b"))

    assert result == "ok"
    assert len(calls) == 3
    assert calls[0] == (("a",), {"key": "b"})
    assert frozen_clock.sleeps == [0.25, 0.5]


def test_exhaustion_raises_retry_error(frozen_clock):
    last = Flaky("last")
    func, calls = _counting([Flaky("1"), Flaky("2"), last])

    with pytest.raises(RetryError) as excinfo:
        asyncio.run(execute_with_async_retry(func, RetryConfig(max_attempts=3)))

    assert excinfo.value.attempts == 3
    assert excinfo.value.last_exception is last
    assert len(calls) == 3
    # no wait after the final attempt
    assert frozen_clock.sleeps == [0.25, 0.5]


def test_non_retryable_error_propagates_immediately(frozen_clock):
    func, calls = _counting([Fatal("nope"), "ok"])

    with pytest.raises(Fatal):
        asyncio.run(execute_with_async_retry(func, RetryConfig()))

    assert len(calls) == 1
    assert frozen_clock.sleeps == []
