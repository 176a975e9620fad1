"""
Remote fetch with a timed, retrying policy.

A fetcher is any zero-argument callable returning the decoded JSON
payload. HttpSyncFetcher does one GET against the proxy's /sync route;
fetch_with_retry wraps any fetcher in the retry policy.
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

import httpx
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from core.config import (
    SYNC_MAX_RETRIES,
    SYNC_RETRY_BASE_DELAY_SECONDS,
    SYNC_TIMEOUT_SECONDS,
)
from core.errors import NetworkError, ProtocolError, RequestTimeout, SyncError


RemoteFetcher = Callable[[], Any]


@dataclass(frozen=True)
class RetryEvent:
    """
    Emitted after a failed attempt, before the backoff sleep.
    """
    attempt: int
    next_attempt: int
    max_attempts: int
    error: SyncError

    @property
    def error_kind(self) -> str:
        return getattr(self.error, "kind", "sync")


def remaining_seconds(deadline: float, clock: Callable[[], float] = time.monotonic) -> float:
    """
    Seconds left before the deadline.

    Raises:
        RequestTimeout: the deadline has already passed
    """
    remaining = deadline - clock()
    if remaining <= 0:
        raise RequestTimeout()
    return remaining


def request_with_deadline(
    client: httpx.Client,
    method: str,
    url: str,
    deadline: float,
    clock: Callable[[], float] = time.monotonic,
    **kwargs: Any
) -> tuple[httpx.Response, bytes]:
    """
    Send one request and read its body, aborting at the deadline.

    httpx timeouts only bound each connect/read/write step, so the body is
    streamed and the deadline is checked after every chunk. The response is
    closed on the way out either way.

    Returns:
        (response, body bytes)

    Raises:
        RequestTimeout: deadline passed (or an httpx step timed out)
        NetworkError: connection-level failure
    """
    try:
        with client.stream(method, url, timeout=remaining_seconds(deadline, clock), **kwargs) as response:
            chunks: list[bytes] = []
            for chunk in response.iter_bytes():
                chunks.append(chunk)
                remaining_seconds(deadline, clock)
            return response, b"".join(chunks)
    except httpx.TimeoutException as exc:
        raise RequestTimeout() from exc
    except httpx.TransportError as exc:
        raise NetworkError(f"network error: {exc}") from exc


def decode_json_body(body: bytes, source: str = "proxy") -> Any:
    """Decode a JSON body; anything unparsable is a protocol error."""
    try:
        return json.loads(body)
    except ValueError as exc:
        raise ProtocolError(f"{source} returned invalid JSON: {exc}") from exc


class HttpSyncFetcher:
    """
    Single-attempt GET of <endpoint>/sync[?db=<id>].

    The whole attempt (connect, headers and body) must finish within
    `timeout` seconds, otherwise the request is aborted with RequestTimeout.
    """

    def __init__(
        self,
        endpoint: str,
        db_id: str = "",
        timeout: float = SYNC_TIMEOUT_SECONDS,
        client: Optional[httpx.Client] = None,
        clock: Callable[[], float] = time.monotonic
    ):
        self.endpoint = endpoint
        self.db_id = db_id
        self.timeout = timeout
        self.client = client
        self.clock = clock

    @property
    def url(self) -> str:
        return f"{self.endpoint.rstrip('/')}/sync"

    def __call__(self) -> list:
        params = {"db": self.db_id} if self.db_id else None
        deadline = self.clock() + self.timeout
        if self.client is not None:
            return self._get(self.client, params, deadline)
        with httpx.Client(timeout=self.timeout) as client:
            return self._get(client, params, deadline)

    def _get(self, client: httpx.Client, params: Optional[dict], deadline: float) -> list:
        response, body = request_with_deadline(
            client, "GET", self.url, deadline, clock=self.clock, params=params
        )

        if not response.is_success:
            text = body.decode("utf-8", errors="replace")
            raise ProtocolError(f"proxy returned error: {response.status_code} {text}")

        data = decode_json_body(body)
        if not isinstance(data, list):
            raise ProtocolError("proxy response is not an array")
        return data


def fetch_with_retry(
    fetcher: RemoteFetcher,
    max_retries: int = SYNC_MAX_RETRIES,
    base_delay: float = SYNC_RETRY_BASE_DELAY_SECONDS,
    on_retry: Optional[Callable[[RetryEvent], None]] = None,
    sleep: Callable[[float], None] = time.sleep
) -> list:
    """
    Call a fetcher with up to max_retries retries and exponential backoff.

    Backoff is base_delay * 2**(attempt - 1): 0.6s, 1.2s, ...
    Non-list payloads count as protocol errors and are retried too.

    Args:
        fetcher: Zero-argument callable returning the decoded payload
        max_retries: Retries after the first attempt
        base_delay: First backoff delay in seconds
        on_retry: Observer called with a RetryEvent before each backoff
        sleep: Sleep function (injectable for tests)

    Returns:
        The remote records list

    Raises:
        SyncError: the last attempt's error once all attempts failed
    """
    max_attempts = max_retries + 1

    def _attempt() -> list:
        data = fetcher()
        if not isinstance(data, list):
            raise ProtocolError("remote response is not an array")
        return data

    def _before_sleep(retry_state) -> None:
        if on_retry is None:
            return
        on_retry(RetryEvent(
            attempt=retry_state.attempt_number,
            next_attempt=retry_state.attempt_number + 1,
            max_attempts=max_attempts,
            error=retry_state.outcome.exception(),
        ))

    retrying = Retrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=base_delay, min=base_delay),
        retry=retry_if_exception_type(SyncError),
        before_sleep=_before_sleep,
        sleep=sleep,
        reraise=True,
    )
    return retrying(_attempt)
