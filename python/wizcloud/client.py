from __future__ import annotations

import functools
import logging
import time
from typing import Mapping, Optional, Union

import httpx

from wiz_graphql.auth import (
    DEFAULT_TOKEN_URL,
    AuthProvider,
    BearerTokenAuth,
    ClientCredentialsAuth,
    TokenFetcher,
    acquire_token,
)
from wiz_graphql.client import GraphQLClient
from wiz_graphql.errors import ValidationError
from wiz_graphql.transport import DEFAULT_TIMEOUT_SECONDS

from .env import load_settings
from .regions import WizRegion
from .session import session

RegionLike = Union[WizRegion, str]


class WizClient(GraphQLClient):
    """GraphQL client bound to one Wiz region.

    Token and region fall back to the process-wide session defaults. When a
    client id and secret are supplied the token is refreshed automatically on
    the first 401 of a request.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        region: Optional[RegionLike] = None,
        *,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        auth: Optional[AuthProvider] = None,
        http_client: Optional[httpx.Client] = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        retry_count: int = 3,
        retry_delay_seconds: float = 1.0,
        logger: Optional[logging.Logger] = None,
        sleeper=time.sleep,
        base_url: Optional[str] = None,
        token_url: str = DEFAULT_TOKEN_URL,
        token_fetcher: Optional[TokenFetcher] = None,
    ):
        resolved_region = WizRegion.parse(region) if region is not None else session.default_region
        if auth is None:
            token = token if token is not None else session.default_token
            if client_id is None and client_secret is None:
                client_id, client_secret = session.client_id, session.client_secret
            if client_id and client_secret:
                fetcher = token_fetcher or functools.partial(
                    acquire_token,
                    token_url=token_url,
                    http_client=http_client,
                    timeout_seconds=timeout_seconds,
                    logger=logger,
                )
                auth = ClientCredentialsAuth(
                    client_id, client_secret, token, token_fetcher=fetcher
                )
            else:
                if not (token or "").strip():
                    raise ValidationError("Token cannot be null or empty")
                auth = BearerTokenAuth(token)

        super().__init__(
            base_url or resolved_region.base_url,
            auth=auth,
            http_client=http_client,
            timeout_seconds=timeout_seconds,
            retry_count=retry_count,
            retry_delay_seconds=retry_delay_seconds,
            logger=logger,
            sleeper=sleeper,
        )
        self.region = resolved_region

    @classmethod
    def create(
        cls,
        client_id: str,
        client_secret: str,
        region: Optional[RegionLike] = None,
        *,
        http_client: Optional[httpx.Client] = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        retry_count: int = 3,
        retry_delay_seconds: float = 1.0,
        token_url: str = DEFAULT_TOKEN_URL,
        logger: Optional[logging.Logger] = None,
        **kwargs,
    ) -> "WizClient":
        """Acquire a token with client credentials and build a refreshing client."""
        resolved_region = WizRegion.parse(region) if region is not None else session.default_region
        token = acquire_token(
            client_id,
            client_secret,
            token_url=token_url,
            http_client=http_client,
            timeout_seconds=timeout_seconds,
            logger=logger,
        )
        return cls(
            token,
            resolved_region,
            client_id=client_id,
            client_secret=client_secret,
            http_client=http_client,
            timeout_seconds=timeout_seconds,
            retry_count=retry_count,
            retry_delay_seconds=retry_delay_seconds,
            token_url=token_url,
            logger=logger,
            **kwargs,
        )

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        **kwargs,
    ) -> "WizClient":
        """Build a client from ``WIZ_*`` environment variables.

        A ``WIZ_TOKEN`` is used as-is (refreshable when client credentials are
        also set); otherwise ``WIZ_CLIENT_ID``/``WIZ_CLIENT_SECRET`` are
        exchanged for a token up front.
        """
        settings = load_settings(environ)
        options = dict(
            timeout_seconds=settings.timeout_seconds,
            retry_count=settings.retry_count,
            retry_delay_seconds=settings.retry_delay_seconds,
        )
        options.update(kwargs)
        if settings.token:
            return cls(
                settings.token,
                settings.region,
                client_id=settings.client_id,
                client_secret=settings.client_secret,
                **options,
            )
        if settings.has_client_credentials:
            return cls.create(
                settings.client_id,
                settings.client_secret,
                settings.region,
                **options,
            )
        raise ValidationError(
            "Missing Wiz credentials. Set WIZ_TOKEN, or WIZ_CLIENT_ID + WIZ_CLIENT_SECRET."
        )
