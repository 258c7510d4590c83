import json
from datetime import datetime, timezone

import httpx
import pytest

from wiz_graphql.auth import BearerTokenAuth, ClientCredentialsAuth
from wiz_graphql.client import GraphQLClient
from wiz_graphql.errors import (
    AuthError,
    RateLimitError,
    RequestError,
    TransientError,
    ValidationError,
)
from wiz_graphql.transport import reset_shared_http_client, shared_http_client


def _client(handler, *, retry_count=3, auth=None, sleeps=None, now=None):
    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    sleeper = sleeps.append if sleeps is not None else (lambda _: None)
    kwargs = {}
    if now is not None:
        kwargs["now"] = now
    return GraphQLClient(
        "https://api.eu17.app.wiz.io",
        auth=auth or BearerTokenAuth("tok"),
        http_client=http_client,
        retry_count=retry_count,
        retry_delay_seconds=0.5,
        sleeper=sleeper,
        **kwargs,
    )


def _ok(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json={"data": {"ok": True}}, request=request)


def test_execute_posts_query_to_graphql_endpoint():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["auth"] = request.headers.get("authorization")
        captured["body"] = json.loads(request.content.decode("utf-8"))
        return _ok(request)

    client = _client(handler)
    result = client.execute("query { ok }", {"first": 2}, operation_name="Ok")

    assert result.data == {"ok": True}
    assert captured["url"] == "https://api.eu17.app.wiz.io/graphql"
    assert captured["auth"] == "Bearer tok"
    assert captured["body"] == {
        "query": "query { ok }",
        "variables": {"first": 2},
        "operationName": "Ok",
    }


def test_transient_failures_then_success_uses_retry_count_plus_one_calls():
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        if calls["count"] <= 3:
            return httpx.Response(503, text="busy", request=request)
        return _ok(request)

    sleeps = []
    client = _client(handler, retry_count=3, sleeps=sleeps)
    result = client.execute("query { ok }")

    assert result.data == {"ok": True}
    assert calls["count"] == 4
    assert sleeps == [0.5, 1.0, 2.0]


def test_retries_exhausted_raises_transient_error():
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        return httpx.Response(502, text="bad gateway", request=request)

    client = _client(handler, retry_count=2)
    with pytest.raises(TransientError) as excinfo:
        client.execute("query { ok }")

    assert calls["count"] == 3
    assert excinfo.value.status_code == 502
    assert excinfo.value.attempts == 3


def test_zero_retry_count_makes_single_attempt():
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        return httpx.Response(500, request=request)

    client = _client(handler, retry_count=0)
    with pytest.raises(TransientError):
        client.execute("query { ok }")
    assert calls["count"] == 1


def test_transport_error_is_retried():
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        if calls["count"] == 1:
            raise httpx.ConnectError("connection refused", request=request)
        return _ok(request)

    client = _client(handler)
    assert client.execute("query { ok }").data == {"ok": True}
    assert calls["count"] == 2


def test_transport_error_exhausted_raises_transient_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    client = _client(handler, retry_count=1)
    with pytest.raises(TransientError) as excinfo:
        client.execute("query { ok }")
    assert excinfo.value.attempts == 2


def test_429_waits_for_retry_after_seconds():
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        if calls["count"] == 1:
            return httpx.Response(429, headers={"Retry-After": "7"}, request=request)
        return _ok(request)

    sleeps = []
    client = _client(handler, sleeps=sleeps)
    client.execute("query { ok }")
    assert sleeps == [7.0]


def test_429_exhausted_raises_rate_limit_error_with_retry_at():
    now = datetime(2024, 1, 1, 0, 0, 0, tzinfo=timezone.utc)

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            429, headers={"Retry-After": "2024-01-01T00:00:30Z"}, request=request
        )

    sleeps = []
    client = _client(handler, retry_count=1, sleeps=sleeps, now=lambda: now)
    with pytest.raises(RateLimitError) as excinfo:
        client.execute("query { ok }")

    assert sleeps == [30.0]
    assert excinfo.value.attempts == 2
    assert excinfo.value.retry_after == datetime(2024, 1, 1, 0, 0, 30, tzinfo=timezone.utc)
    assert isinstance(excinfo.value, TransientError)


def test_client_error_is_not_retried_and_formats_message():
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        return httpx.Response(400, text="bad query", request=request)

    client = _client(handler)
    with pytest.raises(RequestError) as excinfo:
        client.execute("query { ok }")

    assert calls["count"] == 1
    assert str(excinfo.value) == (
        "Request failed with status code 400 (Bad Request). Body: bad query"
    )
    assert excinfo.value.status_code == 400


def test_invalid_json_raises_request_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>", request=request)

    client = _client(handler)
    with pytest.raises(RequestError, match="Received null or invalid response from API"):
        client.execute("query { ok }")


def test_401_refreshes_token_once_and_replays():
    seen = []
    fetches = []

    def fetcher(client_id, client_secret):
        fetches.append((client_id, client_secret))
        return "fresh"

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.headers.get("authorization"))
        if len(seen) == 1:
            return httpx.Response(401, request=request)
        return _ok(request)

    auth = ClientCredentialsAuth("cid", "secret", "stale", token_fetcher=fetcher)
    client = _client(handler, auth=auth)
    result = client.execute("query { ok }")

    assert result.data == {"ok": True}
    assert fetches == [("cid", "secret")]
    assert seen == ["Bearer stale", "Bearer fresh"]


def test_second_401_raises_auth_error():
    fetches = []

    def fetcher(client_id, client_secret):
        fetches.append(client_id)
        return "fresh"

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, text="denied", request=request)

    auth = ClientCredentialsAuth("cid", "secret", "stale", token_fetcher=fetcher)
    client = _client(handler, auth=auth)
    with pytest.raises(AuthError) as excinfo:
        client.execute("query { ok }")

    assert len(fetches) == 1
    assert excinfo.value.status_code == 401


def test_401_without_refresh_capability_raises_auth_error():
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        return httpx.Response(401, request=request)

    client = _client(handler)
    with pytest.raises(AuthError):
        client.execute("query { ok }")
    assert calls["count"] == 1


def test_closed_client_refuses_requests_but_keeps_transport_open():
    http_client = httpx.Client(transport=httpx.MockTransport(_ok))
    with GraphQLClient(
        "https://api.eu17.app.wiz.io", auth=BearerTokenAuth("tok"), http_client=http_client
    ) as client:
        client.execute("query { ok }")

    assert client.closed
    assert not http_client.is_closed
    with pytest.raises(ValidationError, match="closed"):
        client.execute("query { ok }")


def test_clients_without_transport_share_the_process_handle():
    reset_shared_http_client()
    try:
        first = GraphQLClient("https://api.eu17.app.wiz.io", auth=BearerTokenAuth("tok"))
        second = GraphQLClient("https://api.us1.app.wiz.io", auth=BearerTokenAuth("tok"))
        shared = shared_http_client()

        assert first._http is shared
        assert second._http is shared

        first.close()
        assert not shared.is_closed
        assert second._http is shared

        reset_shared_http_client()
        assert shared.is_closed
        fresh = shared_http_client()
        assert fresh is not shared
        assert not fresh.is_closed
    finally:
        reset_shared_http_client()


def test_constructor_validates_options():
    with pytest.raises(ValidationError):
        GraphQLClient(" ", auth=BearerTokenAuth("tok"))
    with pytest.raises(ValidationError):
        GraphQLClient("https://x", auth=BearerTokenAuth("tok"), retry_count=-1)
    with pytest.raises(ValidationError):
        GraphQLClient("https://x", auth=BearerTokenAuth("tok"), retry_delay_seconds=-1)
