from urllib.parse import parse_qs

import httpx
import pytest
import respx

from wiz_graphql.auth import (
    DEFAULT_TOKEN_URL,
    BearerTokenAuth,
    ClientCredentialsAuth,
    acquire_token,
)
from wiz_graphql.errors import (
    AuthError,
    SerializationError,
    TransientError,
    ValidationError,
)


@respx.mock
def test_acquire_token_posts_client_credentials_form():
    captured = {}

    def capture(request: httpx.Request):
        captured["form"] = parse_qs(request.content.decode("utf-8"))
        captured["content_type"] = request.headers.get("content-type")
        return httpx.Response(200, json={"access_token": "abc", "expires_in": 3600})

    route = respx.post(DEFAULT_TOKEN_URL).mock(side_effect=capture)
    token = acquire_token("cid", "secret")

    assert route.called
    assert token == "abc"
    assert captured["content_type"].startswith("application/x-www-form-urlencoded")
    assert captured["form"] == {
        "client_id": ["cid"],
        "client_secret": ["secret"],
        "grant_type": ["client_credentials"],
        "audience": ["wiz-api"],
    }


@respx.mock
def test_acquire_token_rejected_credentials_raise_auth_error():
    respx.post(DEFAULT_TOKEN_URL).mock(
        return_value=httpx.Response(401, text="invalid_client")
    )
    with pytest.raises(AuthError) as excinfo:
        acquire_token("cid", "wrong")
    assert excinfo.value.status_code == 401
    assert "Authentication failed with status code 401" in str(excinfo.value)


@respx.mock
def test_acquire_token_server_error_is_transient():
    respx.post(DEFAULT_TOKEN_URL).mock(return_value=httpx.Response(503))
    with pytest.raises(TransientError):
        acquire_token("cid", "secret")


@respx.mock
def test_acquire_token_missing_access_token():
    respx.post(DEFAULT_TOKEN_URL).mock(return_value=httpx.Response(200, json={"foo": 1}))
    with pytest.raises(SerializationError, match="Token was not found"):
        acquire_token("cid", "secret")


@respx.mock
def test_acquire_token_null_access_token():
    respx.post(DEFAULT_TOKEN_URL).mock(
        return_value=httpx.Response(200, json={"access_token": None})
    )
    with pytest.raises(SerializationError, match="Token was null"):
        acquire_token("cid", "secret")


def test_acquire_token_requires_credentials():
    with pytest.raises(ValidationError):
        acquire_token(" ", "secret")
    with pytest.raises(ValidationError):
        acquire_token("cid", "")


def test_bearer_auth_header():
    headers = {}
    BearerTokenAuth("abc123").apply(headers)
    assert headers["Authorization"] == "Bearer abc123"


def test_bearer_auth_cannot_refresh():
    auth = BearerTokenAuth("abc123")
    assert not auth.can_refresh
    with pytest.raises(AuthError):
        auth.refresh()


def test_client_credentials_auth_fetches_missing_token_on_first_use():
    calls = []

    def fetcher(client_id, client_secret):
        calls.append((client_id, client_secret))
        return f"token-{len(calls)}"

    auth = ClientCredentialsAuth("cid", "secret", token_fetcher=fetcher)
    headers = {}
    auth.apply(headers)
    auth.apply(headers)

    assert headers["Authorization"] == "Bearer token-1"
    assert calls == [("cid", "secret")]

    auth.refresh()
    auth.apply(headers)
    assert headers["Authorization"] == "Bearer token-2"
