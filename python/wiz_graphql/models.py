from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass
class GraphQLErrorItem:
    message: str
    path: Optional[List[Any]] = None
    extensions: Optional[Dict[str, Any]] = None
    locations: Optional[List[Dict[str, Any]]] = None


@dataclass
class GraphQLResult:
    data: Optional[Dict[str, Any]]
    errors: Optional[List[GraphQLErrorItem]]
    extensions: Optional[Dict[str, Any]]

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "GraphQLResult":
        data = payload.get("data")
        extensions = payload.get("extensions")
        return cls(
            data=data if isinstance(data, dict) else None,
            errors=parse_error_items(payload.get("errors")),
            extensions=extensions if isinstance(extensions, dict) else None,
        )


def parse_error_items(raw_errors: Any) -> Optional[List[GraphQLErrorItem]]:
    if raw_errors is None or not isinstance(raw_errors, list):
        return None
    items: List[GraphQLErrorItem] = []
    for err in raw_errors:
        if not isinstance(err, dict):
            continue
        message = err.get("message")
        if not isinstance(message, str):
            continue
        items.append(
            GraphQLErrorItem(
                message=message,
                path=err.get("path"),
                extensions=err.get("extensions"),
                locations=err.get("locations"),
            )
        )
    return items or None
