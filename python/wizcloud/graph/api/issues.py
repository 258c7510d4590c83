from __future__ import annotations

from concurrent.futures import Executor
from typing import Iterator, List, Optional, Sequence, Union

from wiz_graphql.client import GraphQLClient

from ...canonical_models import WizIssue
from ...cursors import CancellationToken, Page
from ...enums import WizSeverity
from ...filters import issue_filters
from ...pagination import ErrorSink, collect_all, iter_lazy, validate_page_size
from ...progress import ProgressCallback
from ..gen import issues_api as api
from ..mappers.issues import map_issue
from ._query import PagedQuery

Severities = Optional[Sequence[Union[WizSeverity, str]]]

_ISSUES: PagedQuery = PagedQuery(
    query=api.ISSUES_QUERY,
    operation_name="Issues",
    root_field="issues",
    parse=api.parse_issues_page,
    map_node=map_issue,
)


def fetch_issues_page(
    client: GraphQLClient,
    *,
    first: int = 20,
    after: Optional[str] = None,
    severities: Severities = None,
    statuses: Optional[Sequence[str]] = None,
    project_id: Optional[str] = None,
    types: Optional[Sequence[str]] = None,
) -> Page[WizIssue]:
    validate_page_size(first)
    filter_by = issue_filters(severities, statuses, project_id, types)
    return _ISSUES.fetch(client, first, after, filter_by)


def iter_issues(
    client: GraphQLClient,
    *,
    page_size: int = 20,
    severities: Severities = None,
    statuses: Optional[Sequence[str]] = None,
    project_id: Optional[str] = None,
    types: Optional[Sequence[str]] = None,
    max_results: Optional[int] = None,
    cancellation: Optional[CancellationToken] = None,
    degree_of_parallelism: Optional[int] = None,
    progress: Optional[ProgressCallback] = None,
    on_error: Optional[ErrorSink] = None,
    executor: Optional[Executor] = None,
) -> Iterator[WizIssue]:
    validate_page_size(page_size)
    filter_by = issue_filters(severities, statuses, project_id, types)
    return iter_lazy(
        _ISSUES.fetcher(client, page_size, filter_by),
        max_results=max_results,
        cancellation=cancellation,
        degree_of_parallelism=degree_of_parallelism,
        progress=progress,
        on_error=on_error,
        executor=executor,
        path=_ISSUES.root_field,
    )


def list_issues(
    client: GraphQLClient,
    *,
    page_size: int = 20,
    severities: Severities = None,
    statuses: Optional[Sequence[str]] = None,
    project_id: Optional[str] = None,
    types: Optional[Sequence[str]] = None,
    max_results: Optional[int] = None,
    degree_of_parallelism: Optional[int] = None,
    progress: Optional[ProgressCallback] = None,
    executor: Optional[Executor] = None,
) -> List[WizIssue]:
    validate_page_size(page_size)
    filter_by = issue_filters(severities, statuses, project_id, types)
    return collect_all(
        _ISSUES.fetcher(client, page_size, filter_by),
        max_results=max_results,
        degree_of_parallelism=degree_of_parallelism,
        progress=progress,
        executor=executor,
        path=_ISSUES.root_field,
    )
