from __future__ import annotations

from concurrent.futures import Executor
from typing import Iterator, List, Optional

from wiz_graphql.client import GraphQLClient

from ...canonical_models import WizProject
from ...cursors import CancellationToken, Page
from ...pagination import ErrorSink, collect_all, iter_lazy, validate_page_size
from ...progress import ProgressCallback
from ..gen import projects_api as api
from ..mappers.projects import map_project
from ._query import PagedQuery

_PROJECTS: PagedQuery = PagedQuery(
    query=api.PROJECTS_QUERY,
    operation_name="Projects",
    root_field="projects",
    parse=api.parse_projects_page,
    map_node=map_project,
)


def fetch_projects_page(
    client: GraphQLClient,
    *,
    first: int = 20,
    after: Optional[str] = None,
) -> Page[WizProject]:
    validate_page_size(first)
    return _PROJECTS.fetch(client, first, after, None)


def iter_projects(
    client: GraphQLClient,
    *,
    page_size: int = 20,
    max_results: Optional[int] = None,
    cancellation: Optional[CancellationToken] = None,
    degree_of_parallelism: Optional[int] = None,
    progress: Optional[ProgressCallback] = None,
    on_error: Optional[ErrorSink] = None,
    executor: Optional[Executor] = None,
) -> Iterator[WizProject]:
    validate_page_size(page_size)
    return iter_lazy(
        _PROJECTS.fetcher(client, page_size, None),
        max_results=max_results,
        cancellation=cancellation,
        degree_of_parallelism=degree_of_parallelism,
        progress=progress,
        on_error=on_error,
        executor=executor,
        path=_PROJECTS.root_field,
    )


def list_projects(
    client: GraphQLClient,
    *,
    page_size: int = 20,
    max_results: Optional[int] = None,
    degree_of_parallelism: Optional[int] = None,
    progress: Optional[ProgressCallback] = None,
    executor: Optional[Executor] = None,
) -> List[WizProject]:
    validate_page_size(page_size)
    return collect_all(
        _PROJECTS.fetcher(client, page_size, None),
        max_results=max_results,
        degree_of_parallelism=degree_of_parallelism,
        progress=progress,
        executor=executor,
        path=_PROJECTS.root_field,
    )
