import io
import json

import httpx
import pytest

from wizcloud.cli import build_parser, main
from wizcloud.session import session


@pytest.fixture(autouse=True)
def _reset_session():
    session.reset()
    yield
    session.reset()


def _run(argv, handler, environ=None):
    out, err = io.StringIO(), io.StringIO()
    code = main(
        argv,
        environ=environ if environ is not None else {"WIZ_TOKEN": "tok"},
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
        stdout=out,
        stderr=err,
    )
    return code, out.getvalue(), err.getvalue()


def _projects_handler(captured):
    def handler(request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content.decode("utf-8"))
        captured.append((str(request.url), payload))
        after = payload["variables"]["after"]
        if after is None:
            nodes, cursor = [{"id": "p-1", "name": "Prod"}], "c1"
        else:
            nodes, cursor = [{"id": "p-2", "name": "Dev"}], None
        return httpx.Response(
            200,
            json={
                "data": {
                    "projects": {
                        "pageInfo": {"hasNextPage": cursor is not None, "endCursor": cursor},
                        "nodes": nodes,
                    }
                }
            },
            request=request,
        )

    return handler


def test_projects_prints_json_lines():
    captured = []
    code, out, _ = _run(
        ["projects", "--region", "US1", "--page-size", "1"], _projects_handler(captured)
    )

    assert code == 0
    lines = [json.loads(line) for line in out.splitlines()]
    assert [line["id"] for line in lines] == ["p-1", "p-2"]
    assert lines[0] == {"id": "p-1", "name": "Prod", "slug": None, "is_folder": False}
    assert captured[0][0] == "https://api.us1.app.wiz.io/graphql"


def test_max_results_and_parallel_options():
    captured = []
    code, out, _ = _run(
        ["projects", "--max-results", "1", "--parallel", "2"], _projects_handler(captured)
    )
    assert code == 0
    assert len(out.splitlines()) == 1


def test_connect_with_test_connection():
    captured = []
    code, out, _ = _run(["connect", "--test-connection"], _projects_handler(captured))

    assert code == 0
    assert json.loads(out) == {
        "region": "eu17",
        "endpoint": "https://api.eu17.app.wiz.io/graphql",
        "connection_tested": True,
    }
    assert captured[0][1]["variables"]["first"] == 1


def test_missing_credentials_exit_code():
    code, _, err = _run(["projects"], _projects_handler([]), environ={})
    assert code == 2
    assert err.startswith("error: ValidationError: Missing Wiz credentials")


def test_auth_failure_exit_code():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, text="denied", request=request)

    code, out, err = _run(["issues"], handler)
    assert code == 3
    assert out == ""
    assert "error: AuthError:" in err


def test_transient_failure_mid_stream_keeps_output_and_exits_nonzero():
    def handler(request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content.decode("utf-8"))
        if payload["variables"]["after"] is not None:
            return httpx.Response(503, request=request)
        return httpx.Response(
            200,
            json={
                "data": {
                    "projects": {
                        "pageInfo": {"hasNextPage": True, "endCursor": "c1"},
                        "nodes": [{"id": "p-1"}],
                    }
                }
            },
            request=request,
        )

    code, out, err = _run(["projects"], handler, environ={"WIZ_TOKEN": "t", "WIZ_RETRY_COUNT": "0"})
    assert code == 4
    assert [json.loads(line)["id"] for line in out.splitlines()] == ["p-1"]
    assert "error: TransientError:" in err


def test_users_progress_goes_to_stderr():
    def handler(request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content.decode("utf-8"))
        if payload["operationName"] == "CloudIdentityPrincipalsCount":
            data = {"cloudResourcesV2": {"totalCount": 1}}
        else:
            assert payload["variables"]["filterBy"] == {"type": {"equals": "GROUP"}}
            data = {
                "cloudResourcesV2": {
                    "pageInfo": {"hasNextPage": False, "endCursor": None},
                    "nodes": [{"id": "g-1", "name": "admins", "type": "GROUP"}],
                }
            }
        return httpx.Response(200, json={"data": data}, request=request)

    code, out, err = _run(["users", "--type", "GROUP", "--progress"], handler)
    assert code == 0
    assert json.loads(out)["id"] == "g-1"
    assert "progress: 0/1" in err
    assert "progress: 1/1" in err


def _single_user_handler(request: httpx.Request) -> httpx.Response:
    node = {
        "id": "u-1",
        "name": "alice",
        "type": "USER_ACCOUNT",
        "nativeType": "AADUser",
        "graphEntity": {
            "id": "ge-1",
            "type": "USER",
            "properties": {"userPrincipalName": "alice@contoso.com", "hasMfa": "true"},
        },
    }
    return httpx.Response(
        200,
        json={
            "data": {
                "cloudResourcesV2": {
                    "pageInfo": {"hasNextPage": False, "endCursor": None},
                    "nodes": [node],
                }
            }
        },
        request=request,
    )


def test_users_emit_comprehensive_records_by_default():
    code, out, _ = _run(["users"], _single_user_handler)

    assert code == 0
    record = json.loads(out)
    assert record["user_principal_name"] == "alice@contoso.com"
    assert record["has_mfa"] is True
    assert record["native_kind"] == "AADUser"
    assert record["graph_entity_kind"] == "USER"


def test_users_raw_flag_emits_plain_records():
    code, out, _ = _run(["users", "--raw"], _single_user_handler)

    assert code == 0
    record = json.loads(out)
    assert "user_principal_name" not in record
    assert record["graph_entity_properties"]["userPrincipalName"] == "alice@contoso.com"


def test_resources_tag_option_builds_filter():
    captured = []

    def handler(request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content.decode("utf-8"))
        captured.append(payload)
        return httpx.Response(
            200,
            json={
                "data": {
                    "resources": {
                        "pageInfo": {"hasNextPage": False, "endCursor": None},
                        "nodes": [],
                    }
                }
            },
            request=request,
        )

    code, _, _ = _run(
        ["resources", "--tag", "env=prod", "--cloud-provider", "AWS", "--publicly-accessible", "yes"],
        handler,
    )
    assert code == 0
    assert captured[0]["variables"]["filterBy"] == {
        "cloudPlatform": {"equals": ["AWS"]},
        "publiclyAccessible": {"equals": True},
        "tags": [{"name": "env", "equals": ["prod"]}],
    }


def test_regions_command():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=["us1", "eu17"], request=request)

    code, out, _ = _run(["regions"], handler, environ={})
    assert code == 0
    assert out.splitlines() == ['"us1"', '"eu17"']


@pytest.mark.parametrize("size", ["0", "5001", "abc"])
def test_page_size_is_validated_by_the_parser(size, capsys):
    with pytest.raises(SystemExit) as excinfo:
        build_parser().parse_args(["projects", "--page-size", size])
    assert excinfo.value.code == 2
