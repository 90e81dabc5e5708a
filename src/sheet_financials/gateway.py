"""
Request gateway for the spreadsheet API

Sole egress point to the remote data source. Keeps HTTP concerns isolated:
session lifecycle, call pacing, in-flight de-duplication and retry/backoff.
"""

from __future__ import annotations

import asyncio
import json
import time
from typing import Any, Callable, Dict, Optional, Tuple

import aiohttp

from src.sheet_financials.config import SheetConfig, sheet_config
from src.utils.core.logger import get_logger
from src.utils.core.retry import RetryError, execute_with_async_retry

logger = get_logger(__name__)


class NetworkError(Exception):
    """Failure talking to the spreadsheet API, classified by status code"""

    RETRYABLE_HTTP_ERRORS = (429,)  # plus any 5xx

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        error_category: Optional[str] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.error_category = error_category or self._classify_error()
        super().__init__(self.message)

    def _classify_error(self) -> str:
        if self.status_code is not None:
            if self.status_code in self.RETRYABLE_HTTP_ERRORS or 500 <= self.status_code < 600:
                return "retryable"
            return "client_error"
        return "network"

    def is_retryable(self) -> bool:
        return self.error_category == "retryable"


class TransientNetworkError(NetworkError):
    """Rate-limited or server-side failure. Absorbed by the retry loop."""


class TerminalNetworkError(NetworkError):
    """Non-retriable failure, or retries exhausted. Propagated to callers."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        attempts: int = 1,
        last_exception: Optional[Exception] = None,
    ) -> None:
        # Terminal regardless of status, never fed back into the retry loop
        super().__init__(message, status_code=status_code, error_category="terminal")
        self.attempts = attempts
        self.last_exception = last_exception


def error_for_status(status: int, detail: str = "") -> NetworkError:
    """Build the transient or terminal error matching an HTTP status"""
    message = f"HTTP {status}: {detail}" if detail else f"HTTP {status}"
    probe = NetworkError(message, status_code=status)
    if probe.is_retryable():
        return TransientNetworkError(message, status_code=status)
    return TerminalNetworkError(message, status_code=status)


RequestKey = Tuple[str, str]


class RequestGateway:
    """
    Paced, de-duplicating, retrying JSON GET client.

    Pacing and in-flight state belong to the instance; every caller sharing
    the instance shares them. Use as an async context manager:

        async with RequestGateway() as gateway:
            rows = await gateway.get(url, {"sheet": "$AAPL"})
    """

    def __init__(
        self,
        config: Optional[SheetConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config or sheet_config
        self.retry_config = self.config.retry_config
        self.session: Optional[aiohttp.ClientSession] = None
        self._clock = clock
        self._inflight: Dict[RequestKey, asyncio.Future] = {}
        self._last_call_at: Optional[float] = None
        self.network_calls = 0

    async def __aenter__(self) -> "RequestGateway":
        timeout = aiohttp.ClientTimeout(
            total=self.config.REQUEST_TIMEOUT, connect=self.config.CONNECTION_TIMEOUT
        )
        self.session = aiohttp.ClientSession(headers=self.config.headers, timeout=timeout)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session:
            await self.session.close()
            self.session = None

    @staticmethod
    def request_key(resource: str, params: Optional[Dict[str, Any]]) -> RequestKey:
        return resource, json.dumps(params or {}, sort_keys=True, default=str)

    @property
    def inflight_count(self) -> int:
        return len(self._inflight)

    async def get(self, resource: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        GET ``resource`` with query ``params`` and return the decoded JSON.

        An identical request already in flight is joined instead of re-issued.
        Cancelling this coroutine does not cancel the shared request.

        Raises:
            TerminalNetworkError: non-retriable status, transport failure,
                or all attempts exhausted.
        """
        if not self.session:
            raise RuntimeError("Gateway session not initialized. Use async context manager.")

        key = self.request_key(resource, params)
        pending = self._inflight.get(key)
        if pending is None:
            pending = asyncio.ensure_future(self._fetch_with_retry(resource, params))
            self._inflight[key] = pending
            pending.add_done_callback(lambda fut, k=key: self._settle(k, fut))
        else:
            logger.debug(f"Joining in-flight request {key[0]} {key[1]}")

        return await asyncio.shield(pending)

    def _settle(self, key: RequestKey, fut: asyncio.Future) -> None:
        if self._inflight.get(key) is fut:
            del self._inflight[key]
        if not fut.cancelled() and fut.exception() is not None:
            logger.debug(f"Request {key[0]} {key[1]} settled with {type(fut.exception()).__name__}")

    async def _fetch_with_retry(self, resource: str, params: Optional[Dict[str, Any]]) -> Any:
        try:
            return await execute_with_async_retry(
                self._fetch_once, self.retry_config, resource, params
            )
        except RetryError as e:
            last = e.last_exception
            raise TerminalNetworkError(
                f"Giving up on {resource} after {e.attempts} attempts: {last}",
                status_code=getattr(last, "status_code", None),
                attempts=e.attempts,
                last_exception=last,
            ) from last

    async def _pace(self) -> None:
        """Reserve the next start slot at least PACING_GAP after the previous one."""
        now = self._clock()
        if self._last_call_at is None:
            slot = now
        else:
            slot = max(now, self._last_call_at + self.config.PACING_GAP)
        self._last_call_at = slot

        wait = slot - now
        if wait > 0:
            logger.debug(f"Pacing outgoing call, waiting {wait:.3f}s")
            await asyncio.sleep(wait)

    async def _fetch_once(self, resource: str, params: Optional[Dict[str, Any]]) -> Any:
        await self._pace()
        self.network_calls += 1

        try:
            async with self.session.get(resource, params=params) as resp:
                if 200 <= resp.status < 300:
                    try:
                        return await resp.json()
                    except ValueError as e:
                        raise TerminalNetworkError(
                            f"Invalid JSON from {resource}", status_code=resp.status
                        ) from e
                detail = await resp.text()
                raise error_for_status(resp.status, detail[:200])
        except asyncio.TimeoutError as e:
            raise TerminalNetworkError(f"Timeout requesting {resource}") from e
        except aiohttp.ClientError as e:
            raise TerminalNetworkError(f"Transport failure requesting {resource}: {e}") from e
