from __future__ import annotations

from concurrent.futures import Executor
from typing import Iterator, List, Optional, Sequence, Union

from wiz_graphql.client import GraphQLClient

from ...canonical_models import WizConfigurationFinding
from ...cursors import CancellationToken, Page
from ...enums import WizSeverity
from ...filters import configuration_finding_filters
from ...pagination import ErrorSink, collect_all, iter_lazy, validate_page_size
from ...progress import ProgressCallback
from ..gen import configuration_findings_api as api
from ..mappers.configuration_findings import map_configuration_finding
from ._query import PagedQuery

Severities = Optional[Sequence[Union[WizSeverity, str]]]

_FINDINGS: PagedQuery = PagedQuery(
    query=api.CONFIGURATION_FINDINGS_QUERY,
    operation_name="ConfigurationFindings",
    root_field="configurationFindings",
    parse=api.parse_configuration_findings_page,
    map_node=map_configuration_finding,
)


def fetch_configuration_findings_page(
    client: GraphQLClient,
    *,
    first: int = 20,
    after: Optional[str] = None,
    frameworks: Optional[Sequence[str]] = None,
    severities: Severities = None,
    categories: Optional[Sequence[str]] = None,
    project_id: Optional[str] = None,
) -> Page[WizConfigurationFinding]:
    validate_page_size(first)
    filter_by = configuration_finding_filters(frameworks, severities, categories, project_id)
    return _FINDINGS.fetch(client, first, after, filter_by)


def iter_configuration_findings(
    client: GraphQLClient,
    *,
    page_size: int = 20,
    frameworks: Optional[Sequence[str]] = None,
    severities: Severities = None,
    categories: Optional[Sequence[str]] = None,
    project_id: Optional[str] = None,
    max_results: Optional[int] = None,
    cancellation: Optional[CancellationToken] = None,
    degree_of_parallelism: Optional[int] = None,
    progress: Optional[ProgressCallback] = None,
    on_error: Optional[ErrorSink] = None,
    executor: Optional[Executor] = None,
) -> Iterator[WizConfigurationFinding]:
    validate_page_size(page_size)
    filter_by = configuration_finding_filters(frameworks, severities, categories, project_id)
    return iter_lazy(
        _FINDINGS.fetcher(client, page_size, filter_by),
        max_results=max_results,
        cancellation=cancellation,
        degree_of_parallelism=degree_of_parallelism,
        progress=progress,
        on_error=on_error,
        executor=executor,
        path=_FINDINGS.root_field,
    )


def list_configuration_findings(
    client: GraphQLClient,
    *,
    page_size: int = 20,
    frameworks: Optional[Sequence[str]] = None,
    severities: Severities = None,
    categories: Optional[Sequence[str]] = None,
    project_id: Optional[str] = None,
    max_results: Optional[int] = None,
    degree_of_parallelism: Optional[int] = None,
    progress: Optional[ProgressCallback] = None,
    executor: Optional[Executor] = None,
) -> List[WizConfigurationFinding]:
    validate_page_size(page_size)
    filter_by = configuration_finding_filters(frameworks, severities, categories, project_id)
    return collect_all(
        _FINDINGS.fetcher(client, page_size, filter_by),
        max_results=max_results,
        degree_of_parallelism=degree_of_parallelism,
        progress=progress,
        executor=executor,
        path=_FINDINGS.root_field,
    )
