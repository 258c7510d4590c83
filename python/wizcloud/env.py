from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from wiz_graphql.errors import ValidationError
from wiz_graphql.transport import DEFAULT_TIMEOUT_SECONDS

from .regions import DEFAULT_REGION, WizRegion

ENV_TOKEN = "WIZ_TOKEN"
ENV_CLIENT_ID = "WIZ_CLIENT_ID"
ENV_CLIENT_SECRET = "WIZ_CLIENT_SECRET"
ENV_REGION = "WIZ_REGION"
ENV_RETRY_COUNT = "WIZ_RETRY_COUNT"
ENV_RETRY_DELAY_SECONDS = "WIZ_RETRY_DELAY_SECONDS"
ENV_TIMEOUT_SECONDS = "WIZ_TIMEOUT_SECONDS"


@dataclass(frozen=True)
class WizSettings:
    token: Optional[str] = None
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    region: WizRegion = DEFAULT_REGION
    retry_count: int = 3
    retry_delay_seconds: float = 1.0
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @property
    def has_client_credentials(self) -> bool:
        return bool(self.client_id and self.client_secret)


def _get(environ: Mapping[str, str], name: str) -> Optional[str]:
    value = environ.get(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _get_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = _get(environ, name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValidationError(f"{name} must be an integer, got {raw!r}") from exc
    if value < 0:
        raise ValidationError(f"{name} must be >= 0")
    return value


def _get_float(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = _get(environ, name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValidationError(f"{name} must be a number, got {raw!r}") from exc
    if value < 0:
        raise ValidationError(f"{name} must be >= 0")
    return value


def load_settings(environ: Optional[Mapping[str, str]] = None) -> WizSettings:
    env = os.environ if environ is None else environ
    token = _get(env, ENV_TOKEN)
    client_id = _get(env, ENV_CLIENT_ID)
    client_secret = _get(env, ENV_CLIENT_SECRET)
    if token and client_secret and token == client_secret:
        raise ValidationError(
            f"{ENV_TOKEN} appears to be set to {ENV_CLIENT_SECRET}; "
            "set an access token (not the client secret)."
        )
    region_raw = _get(env, ENV_REGION)
    return WizSettings(
        token=token,
        client_id=client_id,
        client_secret=client_secret,
        region=WizRegion.parse(region_raw) if region_raw else DEFAULT_REGION,
        retry_count=_get_int(env, ENV_RETRY_COUNT, 3),
        retry_delay_seconds=_get_float(env, ENV_RETRY_DELAY_SECONDS, 1.0),
        timeout_seconds=_get_float(env, ENV_TIMEOUT_SECONDS, DEFAULT_TIMEOUT_SECONDS),
    )
