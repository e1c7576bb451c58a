"""Rate-limited, retrying async HTTP client."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from logging import getLogger
from typing import TYPE_CHECKING, TypedDict, Unpack

import httpx
from aiolimiter import AsyncLimiter
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    retry_if_result,
    stop_after_attempt,
    wait_exponential,
)

if TYPE_CHECKING:
    from types import TracebackType

    from httpx._types import HeaderTypes, QueryParamTypes, TimeoutTypes, URLTypes

    from animesync.config.http_resilience import ResilienceConfig, RetryPolicy

log = getLogger(__name__)


class RequestOptions(TypedDict, total=False):
    json: object
    params: QueryParamTypes | None
    headers: HeaderTypes | None
    timeout: TimeoutTypes


class AsyncClientOptions(TypedDict, total=False):
    base_url: str
    timeout: TimeoutTypes
    headers: HeaderTypes
    transport: httpx.AsyncBaseTransport


def _retry_after_seconds(response: httpx.Response) -> float | None:
    value = response.headers.get("Retry-After")
    if value is None:
        return None
    try:
        return max(float(value), 0.0)
    except ValueError:
        pass
    try:
        moment = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return max((moment - datetime.now(UTC)).total_seconds(), 0.0)


class _WaitRetryAfter:
    """Exponential backoff that defers to a server's ``Retry-After`` header."""

    def __init__(self, policy: RetryPolicy) -> None:
        self._policy = policy
        self._fallback = wait_exponential(
            multiplier=policy.backoff_factor, max=policy.max_backoff_wait
        )

    def __call__(self, retry_state: RetryCallState) -> float:
        outcome = retry_state.outcome
        if (
            self._policy.respect_retry_after_header
            and outcome is not None
            and not outcome.failed
        ):
            delay = _retry_after_seconds(outcome.result())
            if delay is not None:
                return min(delay, self._policy.max_backoff_wait)
        return self._fallback(retry_state)


def _log_retry(retry_state: RetryCallState) -> None:
    outcome = retry_state.outcome
    if outcome is None:
        return
    reason = outcome.exception() if outcome.failed else outcome.result().status_code
    log.warning("Retrying HTTP request (attempt %s): %s", retry_state.attempt_number, reason)


def _give_up(retry_state: RetryCallState) -> httpx.Response:
    # hand the last response back, or re-raise the last transport error
    outcome = retry_state.outcome
    if outcome is None:
        raise RuntimeError("Retry loop finished without an outcome")
    return outcome.result()


def build_retrying(policy: RetryPolicy, method: str) -> AsyncRetrying:
    """Return a tenacity controller for one request under ``policy``."""

    if method.upper() not in policy.allowed_methods:
        return AsyncRetrying(stop=stop_after_attempt(1), reraise=True)

    statuses = policy.status_forcelist
    return AsyncRetrying(
        stop=stop_after_attempt(policy.total + 1),
        wait=_WaitRetryAfter(policy),
        retry=(
            retry_if_exception_type(policy.retry_on_exceptions)
            | retry_if_result(lambda response: response.status_code in statuses)
        ),
        before_sleep=_log_retry,
        retry_error_callback=_give_up,
        reraise=True,
    )


class ResilientClient:
    """``httpx.AsyncClient`` behind a token-bucket limiter and a retry loop.

    ``transport`` replaces the network layer (tests pass ``httpx.MockTransport``).
    Every attempt, retries included, takes a limiter slot.
    """

    def __init__(
        self,
        config: ResilienceConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._limiter: AsyncLimiter | None = (
            AsyncLimiter(config.ratelimit.max_calls, config.ratelimit.per_seconds)
            if config.ratelimit
            else None
        )

        client_kwargs: AsyncClientOptions = {"timeout": config.timeout_seconds}
        if transport is not None:
            client_kwargs["transport"] = transport
        if config.base_url is not None:
            client_kwargs["base_url"] = config.base_url
        if config.default_headers is not None:
            client_kwargs["headers"] = dict(config.default_headers)

        self._client = httpx.AsyncClient(**client_kwargs)

    async def __aenter__(self) -> ResilientClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        url: URLTypes,
        **kwargs: Unpack[RequestOptions],
    ) -> httpx.Response:
        async def do_request() -> httpx.Response:
            return await self._send(lambda: self._client.request(method, url, **kwargs))

        if self.config.retry is None:
            return await do_request()
        return await build_retrying(self.config.retry, method)(do_request)

    async def get(self, url: URLTypes, **kwargs: Unpack[RequestOptions]) -> httpx.Response:
        return await self.request("GET", url, **kwargs)

    async def post(self, url: URLTypes, **kwargs: Unpack[RequestOptions]) -> httpx.Response:
        return await self.request("POST", url, **kwargs)

    async def _send(self, func: Callable[[], Awaitable[httpx.Response]]) -> httpx.Response:
        if self._limiter is None:
            return await func()
        async with self._limiter:
            return await func()
