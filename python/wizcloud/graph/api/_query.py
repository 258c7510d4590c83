from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Mapping, Optional, TypeVar

from wiz_graphql.client import GraphQLClient
from wiz_graphql.errors import GraphQLOperationError, SerializationError

from ...cursors import FetchPage, Page
from ..gen._common import Connection

N = TypeVar("N")
T = TypeVar("T")
R = TypeVar("R")


def run_query(
    client: GraphQLClient,
    query: str,
    *,
    variables: Mapping[str, Any],
    operation_name: str,
    parse: Callable[[Any], R],
) -> R:
    result = client.execute(query, variables=variables, operation_name=operation_name)
    if result.data is None:
        if result.errors:
            raise GraphQLOperationError(errors=result.errors)
        raise SerializationError("Missing GraphQL data in response")

    try:
        return parse(result.data)
    except SerializationError as exc:
        if result.errors:
            raise GraphQLOperationError(errors=result.errors, partial_data=result.data) from exc
        raise


def page_variables(
    first: int, after: Optional[str], filter_by: Optional[Mapping[str, Any]]
) -> Dict[str, Any]:
    variables: Dict[str, Any] = {"first": first, "after": after}
    if filter_by:
        variables["filterBy"] = filter_by
    return variables


@dataclass(frozen=True)
class PagedQuery(Generic[N, T]):
    """A cursor-paginated Wiz query plus the parser and mapper for its nodes."""

    query: str
    operation_name: str
    root_field: str
    parse: Callable[[Any], Connection[N]]
    map_node: Callable[[N], T]

    def fetch(
        self,
        client: GraphQLClient,
        first: int,
        after: Optional[str],
        filter_by: Optional[Mapping[str, Any]],
    ) -> Page[T]:
        conn = run_query(
            client,
            self.query,
            variables=page_variables(first, after, filter_by),
            operation_name=self.operation_name,
            parse=self.parse,
        )
        return Page(
            items=[self.map_node(node) for node in conn.nodes],
            has_next_page=conn.page_info.has_next_page,
            end_cursor=conn.page_info.end_cursor,
        )

    def fetcher(
        self,
        client: GraphQLClient,
        first: int,
        filter_by: Optional[Mapping[str, Any]],
    ) -> FetchPage[T]:
        def fetch_page(after: Optional[str]) -> Page[T]:
            return self.fetch(client, first, after, filter_by)

        return fetch_page
