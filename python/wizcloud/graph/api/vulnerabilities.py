from __future__ import annotations

from concurrent.futures import Executor
from typing import Iterator, List, Optional

from wiz_graphql.client import GraphQLClient

from ...canonical_models import WizVulnerability
from ...cursors import CancellationToken, Page
from ...filters import vulnerability_filters
from ...pagination import ErrorSink, collect_all, iter_lazy, validate_page_size
from ...progress import ProgressCallback
from ..gen import vulnerabilities_api as api
from ..mappers.vulnerabilities import map_vulnerability
from ._query import PagedQuery

_VULNERABILITIES: PagedQuery = PagedQuery(
    query=api.VULNERABILITIES_QUERY,
    operation_name="Vulnerabilities",
    root_field="vulnerabilities",
    parse=api.parse_vulnerabilities_page,
    map_node=map_vulnerability,
)


def fetch_vulnerabilities_page(
    client: GraphQLClient,
    *,
    first: int = 20,
    after: Optional[str] = None,
    cve: Optional[str] = None,
    min_cvss: Optional[float] = None,
    exploit_available: Optional[bool] = None,
    project_id: Optional[str] = None,
) -> Page[WizVulnerability]:
    validate_page_size(first)
    filter_by = vulnerability_filters(cve, min_cvss, exploit_available, project_id)
    return _VULNERABILITIES.fetch(client, first, after, filter_by)


def iter_vulnerabilities(
    client: GraphQLClient,
    *,
    page_size: int = 20,
    cve: Optional[str] = None,
    min_cvss: Optional[float] = None,
    exploit_available: Optional[bool] = None,
    project_id: Optional[str] = None,
    max_results: Optional[int] = None,
    cancellation: Optional[CancellationToken] = None,
    degree_of_parallelism: Optional[int] = None,
    progress: Optional[ProgressCallback] = None,
    on_error: Optional[ErrorSink] = None,
    executor: Optional[Executor] = None,
) -> Iterator[WizVulnerability]:
    validate_page_size(page_size)
    filter_by = vulnerability_filters(cve, min_cvss, exploit_available, project_id)
    return iter_lazy(
        _VULNERABILITIES.fetcher(client, page_size, filter_by),
        max_results=max_results,
        cancellation=cancellation,
        degree_of_parallelism=degree_of_parallelism,
        progress=progress,
        on_error=on_error,
        executor=executor,
        path=_VULNERABILITIES.root_field,
    )


def list_vulnerabilities(
    client: GraphQLClient,
    *,
    page_size: int = 20,
    cve: Optional[str] = None,
    min_cvss: Optional[float] = None,
    exploit_available: Optional[bool] = None,
    project_id: Optional[str] = None,
    max_results: Optional[int] = None,
    degree_of_parallelism: Optional[int] = None,
    progress: Optional[ProgressCallback] = None,
    executor: Optional[Executor] = None,
) -> List[WizVulnerability]:
    validate_page_size(page_size)
    filter_by = vulnerability_filters(cve, min_cvss, exploit_available, project_id)
    return collect_all(
        _VULNERABILITIES.fetcher(client, page_size, filter_by),
        max_results=max_results,
        degree_of_parallelism=degree_of_parallelism,
        progress=progress,
        executor=executor,
        path=_VULNERABILITIES.root_field,
    )
