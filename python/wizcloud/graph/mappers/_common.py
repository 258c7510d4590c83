from __future__ import annotations

from typing import Any, Optional

from wiz_graphql.errors import SerializationError


def _require_non_empty(value: Optional[str], path: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise SerializationError(f"{path} is required")
    return value.strip()


def _optional_str(value: Any) -> Optional[str]:
    return value.strip() if isinstance(value, str) and value.strip() else None


def _str_or_empty(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _int_or_zero(value: Optional[int]) -> int:
    return value if isinstance(value, int) and not isinstance(value, bool) else 0


def _bool_or_false(value: Optional[bool]) -> bool:
    return value is True
