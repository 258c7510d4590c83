from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, TextIO

import httpx

from wiz_graphql.errors import (
    AuthError,
    PaginationError,
    RequestError,
    TransientError,
    ValidationError,
)

from .client import WizClient
from .enums import WizCloudProvider, WizSeverity, WizUserType
from .env import load_settings
from .graph.api.audit_logs import iter_audit_logs
from .graph.api.cloud_accounts import iter_cloud_accounts
from .graph.api.compliance import iter_compliance_posture
from .graph.api.configuration_findings import iter_configuration_findings
from .graph.api.issues import iter_issues
from .graph.api.network_exposures import iter_network_exposures
from .graph.api.projects import fetch_projects_page, iter_projects
from .graph.api.resources import iter_resources
from .graph.api.users import iter_users, iter_users_with_progress
from .graph.api.vulnerabilities import iter_vulnerabilities
from .graph.mappers.users import map_user_comprehensive
from .pagination import MAX_PAGE_SIZE
from .progress import Progress
from .regions import RegionResolver, WizRegion

EXIT_OK = 0
EXIT_REQUEST = 1
EXIT_VALIDATION = 2
EXIT_AUTH = 3
EXIT_TRANSIENT = 4


def exit_code_for(exc: BaseException) -> int:
    if isinstance(exc, ValidationError):
        return EXIT_VALIDATION
    if isinstance(exc, AuthError):
        return EXIT_AUTH
    if isinstance(exc, TransientError):
        return EXIT_TRANSIENT
    return EXIT_REQUEST


def _error_kind(exc: BaseException) -> str:
    for kind in (ValidationError, AuthError, TransientError, PaginationError, RequestError):
        if isinstance(exc, kind):
            return kind.__name__
    return type(exc).__name__


def _page_size(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid page size: {raw}") from exc
    if value < 1 or value > MAX_PAGE_SIZE:
        raise argparse.ArgumentTypeError(f"page size must be between 1 and {MAX_PAGE_SIZE}")
    return value


def _positive_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer: {raw}") from exc
    if value < 1:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return value


def _bool_arg(raw: str) -> bool:
    lowered = raw.strip().lower()
    if lowered in {"true", "yes", "1"}:
        return True
    if lowered in {"false", "no", "0"}:
        return False
    raise argparse.ArgumentTypeError(f"expected true or false, got {raw}")


def _tag(raw: str) -> tuple:
    key, sep, value = raw.partition("=")
    if not sep or not key.strip():
        raise argparse.ArgumentTypeError(f"tag must look like KEY=VALUE, got {raw}")
    return key.strip(), value


def _choices(enum_cls) -> List[str]:
    return [member.value for member in enum_cls]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wizcloud",
        description="Query the Wiz GraphQL API and print records as JSON lines.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")

    conn = argparse.ArgumentParser(add_help=False)
    conn.add_argument("--token", help="Bearer token (default: WIZ_TOKEN).")
    conn.add_argument("--client-id", help="Service account client id (default: WIZ_CLIENT_ID).")
    conn.add_argument(
        "--client-secret", help="Service account client secret (default: WIZ_CLIENT_SECRET)."
    )
    conn.add_argument(
        "--region",
        type=str.lower,
        choices=[r.value for r in WizRegion],
        help="Wiz region (default: WIZ_REGION or eu17).",
    )

    paging = argparse.ArgumentParser(add_help=False)
    paging.add_argument("--page-size", type=_page_size, default=20)
    paging.add_argument("--max-results", type=_positive_int)
    paging.add_argument(
        "--parallel",
        type=_positive_int,
        metavar="N",
        help="Prefetch up to N pages ahead on worker threads.",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    connect = sub.add_parser("connect", parents=[conn], help="Acquire and verify a token.")
    connect.add_argument(
        "--test-connection",
        action="store_true",
        help="Issue a one-item projects query to verify the token.",
    )

    sub.add_parser("regions", help="List regions advertised by the Wiz auth service.")

    users = sub.add_parser("users", parents=[conn, paging], help="Cloud identity principals.")
    users.add_argument("--type", dest="types", action="append", choices=_choices(WizUserType))
    users.add_argument("--project-id")
    users.add_argument(
        "--progress", action="store_true", help="Report progress (with total) on stderr."
    )
    users.add_argument(
        "--raw",
        action="store_true",
        help="Emit the plain principal records without lifting graph entity properties.",
    )

    sub.add_parser("projects", parents=[conn, paging], help="Projects.")
    sub.add_parser("cloud-accounts", parents=[conn, paging], help="Cloud accounts.")

    issues = sub.add_parser("issues", parents=[conn, paging], help="Security issues.")
    issues.add_argument(
        "--severity", dest="severities", action="append", choices=_choices(WizSeverity)
    )
    issues.add_argument("--status", dest="statuses", action="append")
    issues.add_argument("--type", dest="types", action="append")
    issues.add_argument("--project-id")

    vulns = sub.add_parser("vulnerabilities", parents=[conn, paging], help="Vulnerabilities.")
    vulns.add_argument("--cve")
    vulns.add_argument("--min-cvss", type=float)
    vulns.add_argument("--exploit-available", type=_bool_arg, metavar="{true,false}")
    vulns.add_argument("--project-id")

    resources = sub.add_parser("resources", parents=[conn, paging], help="Cloud resources.")
    resources.add_argument("--type", dest="types", action="append")
    resources.add_argument(
        "--cloud-provider",
        dest="cloud_providers",
        action="append",
        choices=_choices(WizCloudProvider),
    )
    resources.add_argument("--resource-region", help="Cloud region of the resources.")
    resources.add_argument("--publicly-accessible", type=_bool_arg, metavar="{true,false}")
    resources.add_argument("--tag", dest="tags", action="append", type=_tag, metavar="KEY=VALUE")
    resources.add_argument("--project-id")

    findings = sub.add_parser(
        "configuration-findings", parents=[conn, paging], help="Configuration findings."
    )
    findings.add_argument("--framework", dest="frameworks", action="append")
    findings.add_argument(
        "--severity", dest="severities", action="append", choices=_choices(WizSeverity)
    )
    findings.add_argument("--category", dest="categories", action="append")
    findings.add_argument("--project-id")

    exposures = sub.add_parser(
        "network-exposures", parents=[conn, paging], help="Network exposures."
    )
    exposures.add_argument("--port", dest="ports", action="append", type=int)
    exposures.add_argument("--protocol", dest="protocols", action="append")
    exposures.add_argument("--internet-facing", type=_bool_arg, metavar="{true,false}")
    exposures.add_argument("--project-id")

    audit = sub.add_parser("audit-logs", parents=[conn, paging], help="Audit log entries.")
    audit.add_argument("--start-date", help="ISO-8601 timestamp.")
    audit.add_argument("--end-date", help="ISO-8601 timestamp.")
    audit.add_argument("--user")
    audit.add_argument("--action")
    audit.add_argument("--status")

    compliance = sub.add_parser("compliance", parents=[conn], help="Compliance posture.")
    compliance.add_argument("--framework", dest="frameworks", action="append")
    compliance.add_argument("--min-score", type=float)
    compliance.add_argument("--max-results", type=_positive_int)

    return parser


def _build_client(
    args: argparse.Namespace,
    environ: Optional[Mapping[str, str]],
    http_client: Optional[httpx.Client],
) -> WizClient:
    settings = load_settings(environ)
    token = args.token or settings.token
    client_id = args.client_id or settings.client_id
    client_secret = args.client_secret or settings.client_secret
    region = args.region or settings.region
    options: Dict[str, Any] = dict(
        http_client=http_client,
        timeout_seconds=settings.timeout_seconds,
        retry_count=settings.retry_count,
        retry_delay_seconds=settings.retry_delay_seconds,
    )
    if token:
        return WizClient(
            token, region, client_id=client_id, client_secret=client_secret, **options
        )
    if client_id and client_secret:
        return WizClient.create(client_id, client_secret, region, **options)
    raise ValidationError(
        "Missing Wiz credentials. Pass --token or --client-id/--client-secret, "
        "or set WIZ_TOKEN or WIZ_CLIENT_ID + WIZ_CLIENT_SECRET."
    )


def _paging(args: argparse.Namespace) -> Dict[str, Any]:
    return dict(
        page_size=args.page_size,
        max_results=args.max_results,
        degree_of_parallelism=args.parallel,
    )


def _stream_records(
    args: argparse.Namespace,
    client: WizClient,
    on_error: Callable[[Exception], None],
    stderr: TextIO,
) -> Iterable[Any]:
    command = args.command
    if command == "users":
        if args.progress:
            def report(progress: Progress) -> None:
                total = "?" if progress.total is None else progress.total
                stderr.write(f"progress: {progress.retrieved}/{total}\n")

            users = iter_users_with_progress(
                client,
                types=args.types,
                project_id=args.project_id,
                progress=report,
                on_error=on_error,
                **_paging(args),
            )
        else:
            users = iter_users(
                client,
                types=args.types,
                project_id=args.project_id,
                on_error=on_error,
                **_paging(args),
            )
        if args.raw:
            return users
        return (map_user_comprehensive(user) for user in users)
    if command == "projects":
        return iter_projects(client, on_error=on_error, **_paging(args))
    if command == "cloud-accounts":
        return iter_cloud_accounts(client, on_error=on_error, **_paging(args))
    if command == "issues":
        return iter_issues(
            client,
            severities=args.severities,
            statuses=args.statuses,
            project_id=args.project_id,
            types=args.types,
            on_error=on_error,
            **_paging(args),
        )
    if command == "vulnerabilities":
        return iter_vulnerabilities(
            client,
            cve=args.cve,
            min_cvss=args.min_cvss,
            exploit_available=args.exploit_available,
            project_id=args.project_id,
            on_error=on_error,
            **_paging(args),
        )
    if command == "resources":
        return iter_resources(
            client,
            types=args.types,
            cloud_providers=args.cloud_providers,
            region=args.resource_region,
            publicly_accessible=args.publicly_accessible,
            tags=dict(args.tags) if args.tags else None,
            project_id=args.project_id,
            on_error=on_error,
            **_paging(args),
        )
    if command == "configuration-findings":
        return iter_configuration_findings(
            client,
            frameworks=args.frameworks,
            severities=args.severities,
            categories=args.categories,
            project_id=args.project_id,
            on_error=on_error,
            **_paging(args),
        )
    if command == "network-exposures":
        return iter_network_exposures(
            client,
            ports=args.ports,
            protocols=args.protocols,
            internet_facing=args.internet_facing,
            project_id=args.project_id,
            on_error=on_error,
            **_paging(args),
        )
    if command == "audit-logs":
        return iter_audit_logs(
            client,
            start_date=args.start_date,
            end_date=args.end_date,
            user=args.user,
            action=args.action,
            status=args.status,
            on_error=on_error,
            **_paging(args),
        )
    if command == "compliance":
        return iter_compliance_posture(
            client,
            frameworks=args.frameworks,
            min_score=args.min_score,
            max_results=args.max_results,
            on_error=on_error,
        )
    raise ValidationError(f"Unknown command: {command}")


def _run(
    args: argparse.Namespace,
    *,
    environ: Optional[Mapping[str, str]],
    http_client: Optional[httpx.Client],
    stdout: TextIO,
    stderr: TextIO,
) -> int:
    if args.command == "regions":
        resolver = RegionResolver(http_client=http_client)
        for region in resolver.available_regions():
            stdout.write(json.dumps(region.value) + "\n")
        return EXIT_OK

    with _build_client(args, environ, http_client) as client:
        if args.command == "connect":
            tested = False
            if args.test_connection:
                fetch_projects_page(client, first=1)
                tested = True
            summary = {
                "region": client.region.value,
                "endpoint": client.endpoint,
                "connection_tested": tested,
            }
            stdout.write(json.dumps(summary) + "\n")
            return EXIT_OK

        failures: List[Exception] = []
        for record in _stream_records(args, client, failures.append, stderr):
            stdout.write(json.dumps(dataclasses.asdict(record)) + "\n")
        if failures:
            raise failures[0]
        return EXIT_OK


def main(
    argv: Optional[List[str]] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
    http_client: Optional[httpx.Client] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> int:
    out = stdout if stdout is not None else sys.stdout
    err = stderr if stderr is not None else sys.stderr
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        stream=err,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return _run(args, environ=environ, http_client=http_client, stdout=out, stderr=err)
    except (ValidationError, AuthError, TransientError, RequestError, PaginationError) as exc:
        err.write(f"error: {_error_kind(exc)}: {exc}\n")
        return exit_code_for(exc)


if __name__ == "__main__":
    raise SystemExit(main())
