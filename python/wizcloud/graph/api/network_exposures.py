from __future__ import annotations

from concurrent.futures import Executor
from typing import Iterator, List, Optional, Sequence

from wiz_graphql.client import GraphQLClient

from ...canonical_models import WizNetworkExposure
from ...cursors import CancellationToken, Page
from ...filters import network_exposure_filters
from ...pagination import ErrorSink, collect_all, iter_lazy, validate_page_size
from ...progress import ProgressCallback
from ..gen import network_exposures_api as api
from ..mappers.network_exposures import map_network_exposure
from ._query import PagedQuery

_EXPOSURES: PagedQuery = PagedQuery(
    query=api.NETWORK_EXPOSURES_QUERY,
    operation_name="NetworkExposure",
    root_field="networkExposure",
    parse=api.parse_network_exposures_page,
    map_node=map_network_exposure,
)


def fetch_network_exposures_page(
    client: GraphQLClient,
    *,
    first: int = 20,
    after: Optional[str] = None,
    ports: Optional[Sequence[int]] = None,
    protocols: Optional[Sequence[str]] = None,
    internet_facing: Optional[bool] = None,
    project_id: Optional[str] = None,
) -> Page[WizNetworkExposure]:
    validate_page_size(first)
    filter_by = network_exposure_filters(ports, protocols, internet_facing, project_id)
    return _EXPOSURES.fetch(client, first, after, filter_by)


def iter_network_exposures(
    client: GraphQLClient,
    *,
    page_size: int = 20,
    ports: Optional[Sequence[int]] = None,
    protocols: Optional[Sequence[str]] = None,
    internet_facing: Optional[bool] = None,
    project_id: Optional[str] = None,
    max_results: Optional[int] = None,
    cancellation: Optional[CancellationToken] = None,
    degree_of_parallelism: Optional[int] = None,
    progress: Optional[ProgressCallback] = None,
    on_error: Optional[ErrorSink] = None,
    executor: Optional[Executor] = None,
) -> Iterator[WizNetworkExposure]:
    validate_page_size(page_size)
    filter_by = network_exposure_filters(ports, protocols, internet_facing, project_id)
    return iter_lazy(
        _EXPOSURES.fetcher(client, page_size, filter_by),
        max_results=max_results,
        cancellation=cancellation,
        degree_of_parallelism=degree_of_parallelism,
        progress=progress,
        on_error=on_error,
        executor=executor,
        path=_EXPOSURES.root_field,
    )


def list_network_exposures(
    client: GraphQLClient,
    *,
    page_size: int = 20,
    ports: Optional[Sequence[int]] = None,
    protocols: Optional[Sequence[str]] = None,
    internet_facing: Optional[bool] = None,
    project_id: Optional[str] = None,
    max_results: Optional[int] = None,
    degree_of_parallelism: Optional[int] = None,
    progress: Optional[ProgressCallback] = None,
    executor: Optional[Executor] = None,
) -> List[WizNetworkExposure]:
    validate_page_size(page_size)
    filter_by = network_exposure_filters(ports, protocols, internet_facing, project_id)
    return collect_all(
        _EXPOSURES.fetcher(client, page_size, filter_by),
        max_results=max_results,
        degree_of_parallelism=degree_of_parallelism,
        progress=progress,
        executor=executor,
        path=_EXPOSURES.root_field,
    )
