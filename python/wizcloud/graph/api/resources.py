from __future__ import annotations

from concurrent.futures import Executor
from typing import Iterator, List, Mapping, Optional, Sequence, Union

from wiz_graphql.client import GraphQLClient

from ...canonical_models import WizResource
from ...cursors import CancellationToken, Page
from ...enums import WizCloudProvider
from ...filters import resource_filters
from ...pagination import ErrorSink, collect_all, iter_lazy, validate_page_size
from ...progress import ProgressCallback
from ..gen import resources_api as api
from ..mappers.resources import map_resource
from ._query import PagedQuery

CloudProviders = Optional[Sequence[Union[WizCloudProvider, str]]]

_RESOURCES: PagedQuery = PagedQuery(
    query=api.RESOURCES_QUERY,
    operation_name="Resources",
    root_field="resources",
    parse=api.parse_resources_page,
    map_node=map_resource,
)


def fetch_resources_page(
    client: GraphQLClient,
    *,
    first: int = 20,
    after: Optional[str] = None,
    types: Optional[Sequence[str]] = None,
    cloud_providers: CloudProviders = None,
    region: Optional[str] = None,
    publicly_accessible: Optional[bool] = None,
    tags: Optional[Mapping[str, str]] = None,
    project_id: Optional[str] = None,
) -> Page[WizResource]:
    validate_page_size(first)
    filter_by = resource_filters(
        types, cloud_providers, region, publicly_accessible, tags, project_id
    )
    return _RESOURCES.fetch(client, first, after, filter_by)


def iter_resources(
    client: GraphQLClient,
    *,
    page_size: int = 20,
    types: Optional[Sequence[str]] = None,
    cloud_providers: CloudProviders = None,
    region: Optional[str] = None,
    publicly_accessible: Optional[bool] = None,
    tags: Optional[Mapping[str, str]] = None,
    project_id: Optional[str] = None,
    max_results: Optional[int] = None,
    cancellation: Optional[CancellationToken] = None,
    degree_of_parallelism: Optional[int] = None,
    progress: Optional[ProgressCallback] = None,
    on_error: Optional[ErrorSink] = None,
    executor: Optional[Executor] = None,
) -> Iterator[WizResource]:
    validate_page_size(page_size)
    filter_by = resource_filters(
        types, cloud_providers, region, publicly_accessible, tags, project_id
    )
    return iter_lazy(
        _RESOURCES.fetcher(client, page_size, filter_by),
        max_results=max_results,
        cancellation=cancellation,
        degree_of_parallelism=degree_of_parallelism,
        progress=progress,
        on_error=on_error,
        executor=executor,
        path=_RESOURCES.root_field,
    )


def list_resources(
    client: GraphQLClient,
    *,
    page_size: int = 20,
    types: Optional[Sequence[str]] = None,
    cloud_providers: CloudProviders = None,
    region: Optional[str] = None,
    publicly_accessible: Optional[bool] = None,
    tags: Optional[Mapping[str, str]] = None,
    project_id: Optional[str] = None,
    max_results: Optional[int] = None,
    degree_of_parallelism: Optional[int] = None,
    progress: Optional[ProgressCallback] = None,
    executor: Optional[Executor] = None,
) -> List[WizResource]:
    validate_page_size(page_size)
    filter_by = resource_filters(
        types, cloud_providers, region, publicly_accessible, tags, project_id
    )
    return collect_all(
        _RESOURCES.fetcher(client, page_size, filter_by),
        max_results=max_results,
        degree_of_parallelism=degree_of_parallelism,
        progress=progress,
        executor=executor,
        path=_RESOURCES.root_field,
    )
