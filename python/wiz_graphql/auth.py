from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, Optional

import httpx

from .errors import (
    AuthError,
    SerializationError,
    TransientError,
    ValidationError,
    format_status_message,
)
from .logging import body_snippet, get_logger, sanitize_form
from .transport import DEFAULT_TIMEOUT_SECONDS, shared_http_client

DEFAULT_TOKEN_URL = "https://auth.app.wiz.io/oauth/token"
DEFAULT_AUDIENCE = "wiz-api"

TokenFetcher = Callable[[str, str], str]


def _require(value: Optional[str], name: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationError(f"{name} is required")
    return cleaned


def acquire_token(
    client_id: str,
    client_secret: str,
    *,
    token_url: str = DEFAULT_TOKEN_URL,
    audience: str = DEFAULT_AUDIENCE,
    http_client: Optional[httpx.Client] = None,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    logger: Optional[logging.Logger] = None,
) -> str:
    """Exchange a service account client id/secret for a bearer token.

    Raises:
        ValidationError: client_id or client_secret is blank.
        AuthError: the token endpoint rejected the credentials.
        TransientError: the token endpoint is unreachable or returned 5xx.
        SerializationError: the response did not carry ``access_token``.
    """
    client_id_clean = _require(client_id, "client_id")
    client_secret_clean = _require(client_secret, "client_secret")
    log = get_logger(logger)

    form = {
        "client_id": client_id_clean,
        "client_secret": client_secret_clean,
        "grant_type": "client_credentials",
        "audience": audience,
    }
    log.debug("Requesting access token from %s form=%s", token_url, sanitize_form(form))

    http = http_client if http_client is not None else shared_http_client()
    try:
        response = http.post(token_url, data=form, timeout=timeout_seconds)
    except httpx.TransportError as exc:
        raise TransientError(f"Authentication request failed: {exc}") from exc

    if response.status_code >= 500:
        raise TransientError(
            format_status_message(
                "Authentication failed",
                response.status_code,
                response.reason_phrase,
                response.text,
            ),
            status_code=response.status_code,
            body_snippet=body_snippet(response.text),
        )
    if not response.is_success:
        raise AuthError(
            format_status_message(
                "Authentication failed",
                response.status_code,
                response.reason_phrase,
                response.text,
            ),
            status_code=response.status_code,
        )

    try:
        payload = response.json()
    except ValueError as exc:
        raise SerializationError("Authentication response was not valid JSON") from exc
    if not isinstance(payload, dict) or "access_token" not in payload:
        raise SerializationError("Token was not found in the authentication response.")
    token = payload.get("access_token")
    if not isinstance(token, str) or not token.strip():
        raise SerializationError("Token was null in the authentication response.")
    return token


class AuthProvider:
    def apply(self, headers: Dict[str, str]) -> None:
        raise NotImplementedError

    @property
    def can_refresh(self) -> bool:
        return False

    def refresh(self) -> None:
        raise AuthError("Credentials cannot be refreshed", status_code=401)


class BearerTokenAuth(AuthProvider):
    def __init__(self, token: str):
        self._token = _require(token, "token")

    @property
    def token(self) -> str:
        return self._token

    def apply(self, headers: Dict[str, str]) -> None:
        headers["Authorization"] = f"Bearer {self._token}"


class ClientCredentialsAuth(AuthProvider):
    """Bearer auth that can re-run the client credentials exchange.

    A missing initial token is acquired on first use. ``refresh`` replaces the
    stored token in place; concurrent refreshes are allowed and each simply
    stores the newest token.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        token: Optional[str] = None,
        *,
        token_fetcher: Optional[TokenFetcher] = None,
    ):
        self.client_id = _require(client_id, "client_id")
        self._client_secret = _require(client_secret, "client_secret")
        self._token = (token or "").strip() or None
        self._fetch = token_fetcher if token_fetcher is not None else acquire_token
        self._lock = threading.Lock()

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def can_refresh(self) -> bool:
        return True

    def apply(self, headers: Dict[str, str]) -> None:
        token = self._token
        if token is None:
            self.refresh()
            token = self._token
        headers["Authorization"] = f"Bearer {token}"

    def refresh(self) -> None:
        token = self._fetch(self.client_id, self._client_secret)
        with self._lock:
            self._token = token
