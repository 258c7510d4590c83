from __future__ import annotations

import json
import logging
import time
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Mapping, Optional

import httpx

from .auth import AuthProvider
from .errors import (
    AuthError,
    RateLimitError,
    RequestError,
    TransientError,
    ValidationError,
    format_status_message,
)
from .logging import body_snippet, get_logger, sanitize_headers
from .models import GraphQLResult
from .retry import backoff_delay, is_transient_status, retry_after_seconds
from .transport import DEFAULT_TIMEOUT_SECONDS, shared_http_client


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class GraphQLClient:
    """Sends GraphQL POSTs with transient-failure retry and one-shot token refresh.

    The HTTP transport is injectable through ``http_client``; when omitted the
    process-wide shared client is used. Closing a GraphQLClient never closes
    the transport.
    """

    def __init__(
        self,
        base_url: str,
        *,
        auth: AuthProvider,
        http_client: Optional[httpx.Client] = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        retry_count: int = 3,
        retry_delay_seconds: float = 1.0,
        logger: Optional[logging.Logger] = None,
        sleeper: Callable[[float], None] = time.sleep,
        now: Callable[[], datetime] = _utcnow,
    ):
        base_url_clean = (base_url or "").strip().rstrip("/")
        if not base_url_clean:
            raise ValidationError("base_url is required")
        if auth is None:
            raise ValidationError("auth is required")
        if retry_count < 0:
            raise ValidationError("retry_count must be >= 0")
        if retry_delay_seconds < 0:
            raise ValidationError("retry_delay_seconds must be >= 0")

        self.base_url = base_url_clean
        self.endpoint = f"{base_url_clean}/graphql"
        self.auth = auth
        self.timeout_seconds = timeout_seconds
        self.retry_count = retry_count
        self.retry_delay_seconds = retry_delay_seconds
        self.logger = get_logger(logger)
        self._http = http_client if http_client is not None else shared_http_client()
        self._sleeper = sleeper
        self._now = now
        self._closed = False

    def __enter__(self) -> "GraphQLClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        self._closed = True

    def execute(
        self,
        query: str,
        variables: Optional[Mapping[str, Any]] = None,
        operation_name: Optional[str] = None,
    ) -> GraphQLResult:
        body: Dict[str, Any] = {"query": query, "variables": dict(variables or {})}
        if operation_name:
            body["operationName"] = operation_name
        return GraphQLResult.from_payload(self.send_request(body))

    def send_request(self, body: Mapping[str, Any]) -> Dict[str, Any]:
        if self._closed:
            raise ValidationError("GraphQLClient is closed")
        content = json.dumps(body).encode("utf-8")

        refreshed = False
        while True:
            response = self._send_with_retry(content)
            if response.status_code == 401:
                if not refreshed and self.auth.can_refresh:
                    self.logger.warning("Unauthorized response; refreshing access token")
                    self.auth.refresh()
                    refreshed = True
                    continue
                raise AuthError(
                    format_status_message(
                        "Request failed",
                        response.status_code,
                        response.reason_phrase,
                        response.text,
                    ),
                    status_code=401,
                )
            if not response.is_success:
                raise RequestError.from_status(
                    response.status_code, response.reason_phrase, response.text
                )
            return self._parse_json(response)

    def _parse_json(self, response: httpx.Response) -> Dict[str, Any]:
        try:
            payload = response.json()
        except ValueError as exc:
            raise RequestError(
                "Received null or invalid response from API",
                status_code=response.status_code,
                reason=response.reason_phrase,
                body=body_snippet(response.text),
            ) from exc
        if not isinstance(payload, dict):
            raise RequestError(
                "Received null or invalid response from API",
                status_code=response.status_code,
                reason=response.reason_phrase,
                body=body_snippet(response.text),
            )
        return payload

    def _send_with_retry(self, content: bytes) -> httpx.Response:
        attempt = 0
        while True:
            headers = {"Content-Type": "application/json", "Accept": "application/json"}
            self.auth.apply(headers)
            self.logger.debug(
                "POST %s attempt=%d headers=%s",
                self.endpoint,
                attempt + 1,
                sanitize_headers(headers),
            )
            try:
                response = self._http.post(
                    self.endpoint,
                    content=content,
                    headers=headers,
                    timeout=self.timeout_seconds,
                )
            except httpx.TransportError as exc:
                if attempt < self.retry_count:
                    delay = backoff_delay(self.retry_delay_seconds, attempt)
                    self.logger.warning(
                        "Transport error (%s); retrying in %.3fs (attempt %d of %d)",
                        exc,
                        delay,
                        attempt + 1,
                        self.retry_count + 1,
                    )
                    self._sleeper(delay)
                    attempt += 1
                    continue
                raise TransientError(
                    f"Request failed after {attempt + 1} attempts: {exc}",
                    attempts=attempt + 1,
                ) from exc

            if not is_transient_status(response.status_code):
                return response

            if attempt < self.retry_count:
                delay = backoff_delay(self.retry_delay_seconds, attempt)
                if response.status_code == 429:
                    wait, _ = retry_after_seconds(
                        response.headers.get("Retry-After"), self._now()
                    )
                    if wait is not None:
                        delay = wait
                self.logger.warning(
                    "Transient HTTP %d; retrying in %.3fs (attempt %d of %d)",
                    response.status_code,
                    delay,
                    attempt + 1,
                    self.retry_count + 1,
                )
                self._sleeper(delay)
                attempt += 1
                continue

            if response.status_code == 429:
                header_value = response.headers.get("Retry-After")
                _, retry_at = retry_after_seconds(header_value, self._now())
                raise RateLimitError(
                    retry_at,
                    attempts=attempt + 1,
                    header_value=header_value,
                    body_snippet=body_snippet(response.text),
                )
            raise TransientError(
                format_status_message(
                    "Request failed",
                    response.status_code,
                    response.reason_phrase,
                    response.text,
                ),
                status_code=response.status_code,
                attempts=attempt + 1,
                body_snippet=body_snippet(response.text),
            )
