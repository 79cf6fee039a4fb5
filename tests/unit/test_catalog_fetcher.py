import httpx
import pytest

from domain.errors import FetchError
from infrastructure.deadline import Deadline
from infrastructure.remote import fetch_catalog

URL = "https://example.test/languages.yml"


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_returns_body_bytes() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, content=b"Go:\n  language_id: 1\n")

    with _client(handler) as client:
        body = fetch_catalog(client, URL)

    assert body == b"Go:\n  language_id: 1\n"
    assert len(seen) == 1
    assert seen[0].method == "GET"
    assert str(seen[0].url) == URL


def test_non_2xx_status_is_not_an_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, content=b"404: Not Found")

    with _client(handler) as client:
        body = fetch_catalog(client, URL)

    assert body == b"404: Not Found"


def test_transport_failure_raises_fetch_error_without_retry() -> None:
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        raise httpx.ConnectError("unreachable host", request=request)

    with _client(handler) as client:
        with pytest.raises(FetchError) as exc_info:
            fetch_catalog(client, URL)

    assert calls == 1
    assert exc_info.value.url == URL
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


def test_timeout_raises_fetch_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with _client(handler) as client:
        with pytest.raises(FetchError, match="timed out"):
            fetch_catalog(client, URL)


def test_request_timeouts_are_set_to_time_left() -> None:
    now = [100.0]
    deadline = Deadline(60, clock=lambda: now[0])
    now[0] += 30.0
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, content=b"Go:\n  language_id: 1\n")

    with _client(handler) as client:
        fetch_catalog(client, URL, deadline=deadline)

    timeouts = seen[0].extensions["timeout"]
    assert timeouts["connect"] == 30.0
    assert timeouts["read"] == 30.0


def test_slow_body_stops_at_the_deadline() -> None:
    now = [0.0]
    deadline = Deadline(10, clock=lambda: now[0])
    sent: list[bytes] = []

    def trickle():
        for chunk in (b"Go:\n", b"  language_id: 1\n", b"Rust:\n", b"  language_id: 2\n"):
            sent.append(chunk)
            # each chunk arrives just inside any per-read timeout
            now[0] += 4.0
            yield chunk

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=trickle())

    with _client(handler) as client:
        with pytest.raises(FetchError, match="deadline"):
            fetch_catalog(client, URL, deadline=deadline)

    assert len(sent) == 3


def test_expired_deadline_sends_nothing() -> None:
    now = [0.0]
    deadline = Deadline(1, clock=lambda: now[0])
    now[0] = 5.0
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        return httpx.Response(200, content=b"")

    with _client(handler) as client:
        with pytest.raises(FetchError, match="deadline exceeded"):
            fetch_catalog(client, URL, deadline=deadline)

    assert calls == 0
