# Shared helpers for the hand-maintained Wiz GraphQL wire models.
# Each parser checks shapes strictly and raises SerializationError with the
# JSON path of the first mismatch.
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

from wiz_graphql.errors import SerializationError

N = TypeVar("N")


def _expect_dict(obj: Any, path: str) -> Dict[str, Any]:
    if not isinstance(obj, dict):
        raise SerializationError(f"Expected object at {path}")
    return obj


def _expect_list(obj: Any, path: str) -> List[Any]:
    if not isinstance(obj, list):
        raise SerializationError(f"Expected list at {path}")
    return obj


def _expect_str(obj: Any, path: str) -> str:
    if not isinstance(obj, str):
        raise SerializationError(f"Expected string at {path}")
    return obj


def _expect_bool(obj: Any, path: str) -> bool:
    if not isinstance(obj, bool):
        raise SerializationError(f"Expected boolean at {path}")
    return obj


def _expect_int(obj: Any, path: str) -> int:
    if isinstance(obj, bool) or not isinstance(obj, int):
        raise SerializationError(f"Expected integer at {path}")
    return obj


def _expect_number(obj: Any, path: str) -> float:
    if isinstance(obj, bool) or not isinstance(obj, (int, float)):
        raise SerializationError(f"Expected number at {path}")
    return float(obj)


def opt_str(raw: Dict[str, Any], key: str, path: str) -> Optional[str]:
    value = raw.get(key)
    return None if value is None else _expect_str(value, f"{path}.{key}")


def opt_bool(raw: Dict[str, Any], key: str, path: str) -> Optional[bool]:
    value = raw.get(key)
    return None if value is None else _expect_bool(value, f"{path}.{key}")


def opt_int(raw: Dict[str, Any], key: str, path: str) -> Optional[int]:
    value = raw.get(key)
    return None if value is None else _expect_int(value, f"{path}.{key}")


def opt_number(raw: Dict[str, Any], key: str, path: str) -> Optional[float]:
    value = raw.get(key)
    return None if value is None else _expect_number(value, f"{path}.{key}")


def opt_obj(
    raw: Dict[str, Any], key: str, path: str, parse: Callable[[Any, str], N]
) -> Optional[N]:
    value = raw.get(key)
    return None if value is None else parse(value, f"{path}.{key}")


def list_of(
    raw: Dict[str, Any], key: str, path: str, parse: Callable[[Any, str], N]
) -> List[N]:
    value = raw.get(key)
    if value is None:
        return []
    out: List[N] = []
    for idx, item in enumerate(_expect_list(value, f"{path}.{key}")):
        if item is None:
            continue
        out.append(parse(item, f"{path}.{key}[{idx}]"))
    return out


def list_of_str(raw: Dict[str, Any], key: str, path: str) -> List[str]:
    return list_of(raw, key, path, _expect_str)


def list_of_int(raw: Dict[str, Any], key: str, path: str) -> List[int]:
    return list_of(raw, key, path, _expect_int)


@dataclass(frozen=True)
class PageInfo:
    has_next_page: bool
    end_cursor: Optional[str]

    @staticmethod
    def from_dict(obj: Any, path: str) -> "PageInfo":
        raw = _expect_dict(obj, path)
        return PageInfo(
            has_next_page=_expect_bool(raw.get("hasNextPage"), f"{path}.hasNextPage"),
            end_cursor=opt_str(raw, "endCursor", path),
        )


@dataclass(frozen=True)
class Connection(Generic[N]):
    page_info: PageInfo
    nodes: List[N] = field(default_factory=list)
    total_count: Optional[int] = None


def parse_connection(
    data: Any, root_field: str, parse_node: Callable[[Any, str], N]
) -> Connection[N]:
    root = _expect_dict(data, "data")
    path = f"data.{root_field}"
    conn = _expect_dict(root.get(root_field), path)
    return Connection(
        page_info=PageInfo.from_dict(conn.get("pageInfo"), f"{path}.pageInfo"),
        nodes=list_of(conn, "nodes", path, parse_node),
        total_count=opt_int(conn, "totalCount", path),
    )
