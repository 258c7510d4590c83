from __future__ import annotations

from concurrent.futures import Executor
from typing import Iterator, List, Optional

from wiz_graphql.client import GraphQLClient

from ...canonical_models import WizAuditLogEntry
from ...cursors import CancellationToken, Page
from ...filters import DateLike, audit_log_filters
from ...pagination import ErrorSink, collect_all, iter_lazy, validate_page_size
from ...progress import ProgressCallback
from ..gen import audit_logs_api as api
from ..mappers.audit_logs import map_audit_log_entry
from ._query import PagedQuery

_AUDIT_LOGS: PagedQuery = PagedQuery(
    query=api.AUDIT_LOGS_QUERY,
    operation_name="AuditLogs",
    root_field="auditLogs",
    parse=api.parse_audit_logs_page,
    map_node=map_audit_log_entry,
)


def fetch_audit_logs_page(
    client: GraphQLClient,
    *,
    first: int = 20,
    after: Optional[str] = None,
    start_date: Optional[DateLike] = None,
    end_date: Optional[DateLike] = None,
    user: Optional[str] = None,
    action: Optional[str] = None,
    status: Optional[str] = None,
) -> Page[WizAuditLogEntry]:
    validate_page_size(first)
    filter_by = audit_log_filters(start_date, end_date, user, action, status)
    return _AUDIT_LOGS.fetch(client, first, after, filter_by)


def iter_audit_logs(
    client: GraphQLClient,
    *,
    page_size: int = 20,
    start_date: Optional[DateLike] = None,
    end_date: Optional[DateLike] = None,
    user: Optional[str] = None,
    action: Optional[str] = None,
    status: Optional[str] = None,
    max_results: Optional[int] = None,
    cancellation: Optional[CancellationToken] = None,
    degree_of_parallelism: Optional[int] = None,
    progress: Optional[ProgressCallback] = None,
    on_error: Optional[ErrorSink] = None,
    executor: Optional[Executor] = None,
) -> Iterator[WizAuditLogEntry]:
    validate_page_size(page_size)
    filter_by = audit_log_filters(start_date, end_date, user, action, status)
    return iter_lazy(
        _AUDIT_LOGS.fetcher(client, page_size, filter_by),
        max_results=max_results,
        cancellation=cancellation,
        degree_of_parallelism=degree_of_parallelism,
        progress=progress,
        on_error=on_error,
        executor=executor,
        path=_AUDIT_LOGS.root_field,
    )


def list_audit_logs(
    client: GraphQLClient,
    *,
    page_size: int = 20,
    start_date: Optional[DateLike] = None,
    end_date: Optional[DateLike] = None,
    user: Optional[str] = None,
    action: Optional[str] = None,
    status: Optional[str] = None,
    max_results: Optional[int] = None,
    degree_of_parallelism: Optional[int] = None,
    progress: Optional[ProgressCallback] = None,
    executor: Optional[Executor] = None,
) -> List[WizAuditLogEntry]:
    validate_page_size(page_size)
    filter_by = audit_log_filters(start_date, end_date, user, action, status)
    return collect_all(
        _AUDIT_LOGS.fetcher(client, page_size, filter_by),
        max_results=max_results,
        degree_of_parallelism=degree_of_parallelism,
        progress=progress,
        executor=executor,
        path=_AUDIT_LOGS.root_field,
    )
