from __future__ import annotations

from concurrent.futures import Executor
from typing import Iterator, List, Optional, Sequence, Union

from wiz_graphql.client import GraphQLClient

from ...canonical_models import WizUser
from ...cursors import CancellationToken, Page
from ...enums import WizUserType
from ...filters import FilterSet, user_filters
from ...pagination import (
    ErrorSink,
    collect_all,
    iter_lazy,
    validate_page_size,
    validate_paging_options,
)
from ...progress import ProgressCallback
from ..gen import users_api as api
from ..mappers.users import map_user
from ._query import PagedQuery, run_query

UserTypes = Optional[Sequence[Union[WizUserType, str]]]

_USERS: PagedQuery = PagedQuery(
    query=api.USERS_QUERY,
    operation_name="CloudIdentityPrincipals",
    root_field="cloudResourcesV2",
    parse=api.parse_users_page,
    map_node=map_user,
)


def fetch_users_page(
    client: GraphQLClient,
    *,
    first: int = 20,
    after: Optional[str] = None,
    types: UserTypes = None,
    project_id: Optional[str] = None,
) -> Page[WizUser]:
    validate_page_size(first)
    return _USERS.fetch(client, first, after, user_filters(types, project_id))


def _count(client: GraphQLClient, filter_by: Optional[FilterSet]) -> int:
    return run_query(
        client,
        api.USERS_COUNT_QUERY,
        variables={"filterBy": filter_by} if filter_by else {},
        operation_name="CloudIdentityPrincipalsCount",
        parse=api.parse_users_count,
    )


def count_users(
    client: GraphQLClient,
    *,
    types: UserTypes = None,
    project_id: Optional[str] = None,
) -> int:
    """Total number of principals matching the filters, from ``totalCount``."""
    return _count(client, user_filters(types, project_id))


def iter_users(
    client: GraphQLClient,
    *,
    page_size: int = 20,
    types: UserTypes = None,
    project_id: Optional[str] = None,
    max_results: Optional[int] = None,
    cancellation: Optional[CancellationToken] = None,
    degree_of_parallelism: Optional[int] = None,
    progress: Optional[ProgressCallback] = None,
    on_error: Optional[ErrorSink] = None,
    executor: Optional[Executor] = None,
) -> Iterator[WizUser]:
    validate_page_size(page_size)
    filter_by = user_filters(types, project_id)
    return iter_lazy(
        _USERS.fetcher(client, page_size, filter_by),
        max_results=max_results,
        cancellation=cancellation,
        degree_of_parallelism=degree_of_parallelism,
        progress=progress,
        on_error=on_error,
        executor=executor,
        path=_USERS.root_field,
    )


def list_users(
    client: GraphQLClient,
    *,
    page_size: int = 20,
    types: UserTypes = None,
    project_id: Optional[str] = None,
    max_results: Optional[int] = None,
    degree_of_parallelism: Optional[int] = None,
    progress: Optional[ProgressCallback] = None,
    executor: Optional[Executor] = None,
) -> List[WizUser]:
    validate_page_size(page_size)
    filter_by = user_filters(types, project_id)
    return collect_all(
        _USERS.fetcher(client, page_size, filter_by),
        max_results=max_results,
        degree_of_parallelism=degree_of_parallelism,
        progress=progress,
        executor=executor,
        path=_USERS.root_field,
    )


def iter_users_with_progress(
    client: GraphQLClient,
    *,
    page_size: int = 500,
    types: UserTypes = None,
    project_id: Optional[str] = None,
    max_results: Optional[int] = None,
    progress: Optional[ProgressCallback] = None,
    include_total: bool = True,
    cancellation: Optional[CancellationToken] = None,
    degree_of_parallelism: Optional[int] = None,
    on_error: Optional[ErrorSink] = None,
    executor: Optional[Executor] = None,
) -> Iterator[WizUser]:
    """Stream users while reporting Progress to ``progress``.

    With ``include_total`` the count query runs first, on the first pull, and
    its errors propagate. The reported total is ``min(max_results, count)``.
    """
    validate_page_size(page_size)
    validate_paging_options(max_results=max_results, degree_of_parallelism=degree_of_parallelism)
    filter_by = user_filters(types, project_id)

    def stream() -> Iterator[WizUser]:
        total: Optional[int] = None
        if include_total:
            count = _count(client, filter_by)
            total = min(max_results, count) if max_results is not None else count
        yield from iter_lazy(
            _USERS.fetcher(client, page_size, filter_by),
            max_results=max_results,
            cancellation=cancellation,
            degree_of_parallelism=degree_of_parallelism,
            progress=progress,
            total=total,
            on_error=on_error,
            executor=executor,
            path=_USERS.root_field,
        )

    return stream()
