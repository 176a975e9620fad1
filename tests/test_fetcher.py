"""
Tests for the HTTP fetcher and the retry policy.
"""

import httpx
import pytest

from core.errors import NetworkError, ProtocolError, RequestTimeout, SyncError
from core.sync.fetcher import HttpSyncFetcher, fetch_with_retry


def _client(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestHttpSyncFetcher:

    def test_get_sync_with_db_param(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            return httpx.Response(200, json=[{"word": "a"}])

        fetcher = HttpSyncFetcher("https://proxy.example/", "db1", client=_client(handler))
        assert fetcher() == [{"word": "a"}]
        assert seen["url"] == "https://proxy.example/sync?db=db1"

    def test_no_db_param_when_unset(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            return httpx.Response(200, json=[])

        HttpSyncFetcher("https://proxy.example", client=_client(handler))()
        assert seen["url"] == "https://proxy.example/sync"

    def test_non_2xx_is_protocol_error(self):
        fetcher = HttpSyncFetcher("https://p", client=_client(lambda r: httpx.Response(502, text="bad gateway")))
        with pytest.raises(ProtocolError, match="502"):
            fetcher()

    @pytest.mark.parametrize("body", [{"items": []}, "text", 5])
    def test_non_array_body_is_protocol_error(self, body):
        fetcher = HttpSyncFetcher("https://p", client=_client(lambda r: httpx.Response(200, json=body)))
        with pytest.raises(ProtocolError):
            fetcher()

    def test_invalid_json_is_protocol_error(self):
        fetcher = HttpSyncFetcher("https://p", client=_client(lambda r: httpx.Response(200, text="<html>")))
        with pytest.raises(ProtocolError):
            fetcher()

    def test_timeout_is_classified(self):
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(RequestTimeout) as info:
            HttpSyncFetcher("https://p", client=_client(handler))()
        assert info.value.kind == "timeout"

    def test_connection_error_is_network_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(NetworkError) as info:
            HttpSyncFetcher("https://p", client=_client(handler))()
        assert info.value.kind == "network"


class TestFetchWithRetry:

    def test_fail_twice_then_succeed(self, fake_sleep):
        calls = []
        events = []

        def fetcher():
            calls.append(1)
            if len(calls) < 3:
                raise NetworkError("down")
            return [{"word": "a"}]

        result = fetch_with_retry(fetcher, max_retries=2, base_delay=0.6,
                                  on_retry=events.append, sleep=fake_sleep)

        assert result == [{"word": "a"}]
        assert len(calls) == 3
        assert fake_sleep.calls == pytest.approx([0.6, 1.2])
        assert [(e.attempt, e.next_attempt, e.max_attempts) for e in events] == [(1, 2, 3), (2, 3, 3)]
        assert events[0].error_kind == "network"

    def test_attempts_exhausted_raises_last_error(self, fake_sleep):
        calls = []

        def fetcher():
            calls.append(1)
            raise RequestTimeout()

        with pytest.raises(RequestTimeout):
            fetch_with_retry(fetcher, max_retries=2, sleep=fake_sleep)
        assert len(calls) == 3
        assert len(fake_sleep.calls) == 2

    def test_non_list_result_is_retried_as_protocol_error(self, fake_sleep):
        results = iter([{"oops": 1}, [1, 2]])
        assert fetch_with_retry(lambda: next(results), sleep=fake_sleep) == [1, 2]
        assert len(fake_sleep.calls) == 1

    def test_non_sync_errors_are_not_retried(self, fake_sleep):
        calls = []

        def fetcher():
            calls.append(1)
            raise KeyError("bug")

        with pytest.raises(KeyError):
            fetch_with_retry(fetcher, sleep=fake_sleep)
        assert len(calls) == 1
        assert fake_sleep.calls == []

    def test_zero_retries_means_single_attempt(self, fake_sleep):
        def fetcher():
            raise ProtocolError("x")

        with pytest.raises(SyncError):
            fetch_with_retry(fetcher, max_retries=0, sleep=fake_sleep)
        assert fake_sleep.calls == []


class TestAttemptDeadline:

    def test_slow_body_is_aborted_at_deadline(self, clock):
        chunks_sent = []

        def trickle():
            for byte in b"[1, 2, 3, 4, 5]":
                clock.advance(0.4)
                chunks_sent.append(byte)
                yield bytes([byte])

        client = _client(lambda request: httpx.Response(200, content=trickle()))
        fetcher = HttpSyncFetcher("https://p", timeout=1.0, client=client, clock=clock)

        with pytest.raises(RequestTimeout):
            fetcher()
        # 1.0s allows two 0.4s chunks; the third crosses the deadline
        assert len(chunks_sent) == 3

    def test_body_within_deadline_is_returned(self, clock):
        def steady():
            for part in (b"[1,", b" 2]"):
                clock.advance(0.2)
                yield part

        client = _client(lambda request: httpx.Response(200, content=steady()))
        assert HttpSyncFetcher("https://p", timeout=1.0, client=client, clock=clock)() == [1, 2]

    def test_each_attempt_gets_a_fresh_deadline(self, clock, fake_sleep):
        attempts = []

        def handler(request):
            attempts.append(1)
            if len(attempts) == 1:
                def stall():
                    clock.advance(5)
                    yield b"[]"
                return httpx.Response(200, content=stall())
            return httpx.Response(200, json=[{"word": "a"}])

        fetcher = HttpSyncFetcher("https://p", timeout=1.0, client=_client(handler), clock=clock)
        assert fetch_with_retry(fetcher, sleep=fake_sleep) == [{"word": "a"}]
        assert len(attempts) == 2
