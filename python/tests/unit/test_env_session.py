import json

import httpx
import pytest

from wiz_graphql.auth import BearerTokenAuth, ClientCredentialsAuth
from wiz_graphql.errors import ValidationError
from wizcloud.client import WizClient
from wizcloud.env import load_settings
from wizcloud.regions import WizRegion
from wizcloud.session import session


@pytest.fixture(autouse=True)
def _reset_session():
    session.reset()
    yield
    session.reset()


def test_load_settings_defaults():
    settings = load_settings({})
    assert settings.token is None
    assert settings.region is WizRegion.EU17
    assert settings.retry_count == 3
    assert settings.retry_delay_seconds == 1.0
    assert settings.timeout_seconds == 30.0
    assert not settings.has_client_credentials


def test_load_settings_reads_values():
    settings = load_settings(
        {
            "WIZ_TOKEN": " tok ",
            "WIZ_CLIENT_ID": "cid",
            "WIZ_CLIENT_SECRET": "secret",
            "WIZ_REGION": "US2",
            "WIZ_RETRY_COUNT": "5",
            "WIZ_RETRY_DELAY_SECONDS": "0.25",
            "WIZ_TIMEOUT_SECONDS": "10",
        }
    )
    assert settings.token == "tok"
    assert settings.region is WizRegion.US2
    assert settings.retry_count == 5
    assert settings.retry_delay_seconds == 0.25
    assert settings.timeout_seconds == 10.0
    assert settings.has_client_credentials


@pytest.mark.parametrize(
    "environ",
    [
        {"WIZ_RETRY_COUNT": "many"},
        {"WIZ_RETRY_COUNT": "-1"},
        {"WIZ_TIMEOUT_SECONDS": "soon"},
        {"WIZ_REGION": "mars1"},
        {"WIZ_TOKEN": "same", "WIZ_CLIENT_SECRET": "same"},
    ],
)
def test_load_settings_rejects_bad_values(environ):
    with pytest.raises(ValidationError):
        load_settings(environ)


def test_session_defaults_feed_new_clients():
    session.default_token = "session-token"
    session.default_region = "ap1"

    client = WizClient(http_client=httpx.Client(transport=httpx.MockTransport(lambda r: None)))

    assert client.region is WizRegion.AP1
    assert client.endpoint == "https://api.ap1.app.wiz.io/graphql"
    assert isinstance(client.auth, BearerTokenAuth)
    assert client.auth.token == "session-token"


def test_session_rejects_unknown_region():
    with pytest.raises(ValidationError):
        session.default_region = "mars1"


def test_client_requires_token():
    with pytest.raises(ValidationError, match="Token cannot be null or empty"):
        WizClient(" ", "us1")


def test_client_with_credentials_refreshes_via_token_endpoint():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/oauth/token":
            return httpx.Response(200, json={"access_token": "fresh"}, request=request)
        seen.append(request.headers.get("authorization"))
        if len(seen) == 1:
            return httpx.Response(401, request=request)
        return httpx.Response(200, json={"data": {"ok": True}}, request=request)

    client = WizClient(
        "stale",
        WizRegion.US1,
        client_id="cid",
        client_secret="secret",
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
    )
    assert isinstance(client.auth, ClientCredentialsAuth)
    assert client.execute("query { ok }").data == {"ok": True}
    assert seen == ["Bearer stale", "Bearer fresh"]


def test_create_acquires_token_up_front():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"access_token": "abc"}, request=request)

    client = WizClient.create(
        "cid", "secret", "ca1", http_client=httpx.Client(transport=httpx.MockTransport(handler))
    )

    assert len(requests) == 1
    assert client.auth.token == "abc"
    assert client.region is WizRegion.CA1


def test_from_env_prefers_token():
    client = WizClient.from_env(
        {"WIZ_TOKEN": "tok", "WIZ_REGION": "us1", "WIZ_RETRY_COUNT": "1"},
        http_client=httpx.Client(transport=httpx.MockTransport(lambda r: None)),
    )
    assert client.auth.token == "tok"
    assert client.retry_count == 1
    assert client.region is WizRegion.US1


def test_from_env_exchanges_client_credentials():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        return httpx.Response(200, json={"access_token": "abc"}, request=request)

    client = WizClient.from_env(
        {"WIZ_CLIENT_ID": "cid", "WIZ_CLIENT_SECRET": "secret"},
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
    )
    assert captured["url"] == "https://auth.app.wiz.io/oauth/token"
    assert client.auth.token == "abc"


def test_from_env_without_credentials_raises():
    with pytest.raises(ValidationError, match="Missing Wiz credentials"):
        WizClient.from_env({})


def test_explicit_token_beats_session_credentials():
    session.set_client_credentials("cid", "secret")

    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["body"] = json.loads(request.content.decode("utf-8"))
        captured["auth"] = request.headers.get("authorization")
        return httpx.Response(200, json={"data": {}}, request=request)

    client = WizClient(
        "explicit", "us1", http_client=httpx.Client(transport=httpx.MockTransport(handler))
    )
    client.execute("query { ok }")
    assert captured["auth"] == "Bearer explicit"
    assert isinstance(client.auth, ClientCredentialsAuth)
