from __future__ import annotations

from concurrent.futures import Executor
from typing import Iterator, List, Optional

from wiz_graphql.client import GraphQLClient

from ...canonical_models import WizCloudAccount
from ...cursors import CancellationToken, Page
from ...pagination import ErrorSink, collect_all, iter_lazy, validate_page_size
from ...progress import ProgressCallback
from ..gen import cloud_accounts_api as api
from ..mappers.cloud_accounts import map_cloud_account
from ._query import PagedQuery

_CLOUD_ACCOUNTS: PagedQuery = PagedQuery(
    query=api.CLOUD_ACCOUNTS_QUERY,
    operation_name="CloudAccounts",
    root_field="cloudAccounts",
    parse=api.parse_cloud_accounts_page,
    map_node=map_cloud_account,
)


def fetch_cloud_accounts_page(
    client: GraphQLClient,
    *,
    first: int = 20,
    after: Optional[str] = None,
) -> Page[WizCloudAccount]:
    validate_page_size(first)
    return _CLOUD_ACCOUNTS.fetch(client, first, after, None)


def iter_cloud_accounts(
    client: GraphQLClient,
    *,
    page_size: int = 20,
    max_results: Optional[int] = None,
    cancellation: Optional[CancellationToken] = None,
    degree_of_parallelism: Optional[int] = None,
    progress: Optional[ProgressCallback] = None,
    on_error: Optional[ErrorSink] = None,
    executor: Optional[Executor] = None,
) -> Iterator[WizCloudAccount]:
    validate_page_size(page_size)
    return iter_lazy(
        _CLOUD_ACCOUNTS.fetcher(client, page_size, None),
        max_results=max_results,
        cancellation=cancellation,
        degree_of_parallelism=degree_of_parallelism,
        progress=progress,
        on_error=on_error,
        executor=executor,
        path=_CLOUD_ACCOUNTS.root_field,
    )


def list_cloud_accounts(
    client: GraphQLClient,
    *,
    page_size: int = 20,
    max_results: Optional[int] = None,
    degree_of_parallelism: Optional[int] = None,
    progress: Optional[ProgressCallback] = None,
    executor: Optional[Executor] = None,
) -> List[WizCloudAccount]:
    validate_page_size(page_size)
    return collect_all(
        _CLOUD_ACCOUNTS.fetcher(client, page_size, None),
        max_results=max_results,
        degree_of_parallelism=degree_of_parallelism,
        progress=progress,
        executor=executor,
        path=_CLOUD_ACCOUNTS.root_field,
    )
