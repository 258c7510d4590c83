from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from .models import GraphQLErrorItem


def format_status_message(
    prefix: str,
    status_code: int,
    reason: Optional[str],
    body: Optional[str],
) -> str:
    message = f"{prefix} with status code {status_code} ({reason or 'Unknown'})."
    if body is not None and body.strip():
        message = f"{message} Body: {body}"
    return message


class ValidationError(ValueError):
    pass


class TransientError(Exception):
    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        attempts: int = 1,
        body_snippet: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.attempts = attempts
        self.body_snippet = body_snippet


class RateLimitError(TransientError):
    def __init__(
        self,
        retry_after: Optional[datetime],
        attempts: int,
        header_value: Optional[str],
        body_snippet: Optional[str] = None,
    ):
        message = "Rate limited"
        if retry_after:
            message = f"{message}; retry_at={retry_after.isoformat()}"
        if header_value:
            message = f"{message}; Retry-After={header_value}"
        message = f"{message}; attempts={attempts}"
        super().__init__(
            message,
            status_code=429,
            attempts=attempts,
            body_snippet=body_snippet,
        )
        self.retry_after = retry_after
        self.header_value = header_value


class AuthError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RequestError(Exception):
    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        reason: Optional[str] = None,
        body: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason
        self.body = body

    @classmethod
    def from_status(
        cls, status_code: int, reason: Optional[str], body: Optional[str]
    ) -> "RequestError":
        return cls(
            format_status_message("Request failed", status_code, reason, body),
            status_code=status_code,
            reason=reason,
            body=body,
        )


class SerializationError(RequestError):
    def __init__(self, message: str):
        super().__init__(message)


class GraphQLOperationError(RequestError):
    def __init__(
        self,
        errors: List[GraphQLErrorItem],
        partial_data: Optional[Any] = None,
    ):
        first = errors[0].message if errors else "GraphQL operation failed"
        super().__init__(first)
        self.errors = errors
        self.partial_data = partial_data


GraphQLError = GraphQLOperationError


class PaginationError(Exception):
    pass
