from __future__ import annotations

import logging
import re
import threading
from enum import Enum
from typing import List, Optional, Union

import httpx

from wiz_graphql.errors import (
    RequestError,
    SerializationError,
    TransientError,
    ValidationError,
    format_status_message,
)
from wiz_graphql.logging import body_snippet, get_logger
from wiz_graphql.retry import is_transient_status
from wiz_graphql.transport import DEFAULT_TIMEOUT_SECONDS, shared_http_client

REGIONS_URL = "https://auth.app.wiz.io/regions"

_REGION_ID = re.compile(r"^[a-z]+[0-9]+$")


class WizRegion(str, Enum):
    EU1 = "eu1"
    EU2 = "eu2"
    EU17 = "eu17"
    US1 = "us1"
    US2 = "us2"
    USGOV1 = "usgov1"
    AP1 = "ap1"
    AP2 = "ap2"
    CA1 = "ca1"

    @classmethod
    def parse(cls, value: Union[str, "WizRegion", None]) -> "WizRegion":
        """Case-insensitive lookup; unknown names raise ValidationError."""
        if isinstance(value, WizRegion):
            return value
        cleaned = (value or "").strip().lower()
        for region in cls:
            if region.value == cleaned:
                return region
        raise ValidationError(f"Invalid region: {value}")

    @property
    def api_string(self) -> str:
        return self.value

    @property
    def base_url(self) -> str:
        return f"https://api.{self.value}.app.wiz.io"

    @property
    def graphql_endpoint(self) -> str:
        return f"{self.base_url}/graphql"


DEFAULT_REGION = WizRegion.EU17


class RegionResolver:
    """Discovers the regions the Wiz auth service advertises.

    The first successful lookup is cached for the lifetime of the resolver and
    concurrent first callers share one in-flight fetch. Failures are not cached.
    """

    def __init__(
        self,
        *,
        url: str = REGIONS_URL,
        http_client: Optional[httpx.Client] = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        logger: Optional[logging.Logger] = None,
    ):
        self.url = url
        self.timeout_seconds = timeout_seconds
        self.logger = get_logger(logger, "wizcloud")
        self._http = http_client
        self._lock = threading.Lock()
        self._cached: Optional[List[WizRegion]] = None

    def available_regions(self) -> List[WizRegion]:
        cached = self._cached
        if cached is not None:
            return list(cached)
        with self._lock:
            if self._cached is None:
                self._cached = self._fetch()
            return list(self._cached)

    def clear(self) -> None:
        with self._lock:
            self._cached = None

    def _fetch(self) -> List[WizRegion]:
        http = self._http if self._http is not None else shared_http_client()
        self.logger.debug("GET %s", self.url)
        try:
            response = http.get(
                self.url,
                headers={"Accept": "application/json"},
                timeout=self.timeout_seconds,
            )
        except httpx.TransportError as exc:
            raise TransientError(f"Region discovery failed: {exc}") from exc

        if is_transient_status(response.status_code):
            raise TransientError(
                format_status_message(
                    "Request failed",
                    response.status_code,
                    response.reason_phrase,
                    response.text,
                ),
                status_code=response.status_code,
                body_snippet=body_snippet(response.text),
            )
        if not response.is_success:
            raise RequestError.from_status(
                response.status_code, response.reason_phrase, response.text
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise SerializationError("Invalid regions response") from exc
        if not isinstance(payload, list):
            raise SerializationError("Invalid regions response")

        regions: List[WizRegion] = []
        for idx, raw in enumerate(payload):
            if raw is None:
                continue
            if not isinstance(raw, str):
                raise SerializationError(f"Expected string at regions[{idx}]")
            try:
                region = WizRegion.parse(raw)
            except ValidationError:
                if _REGION_ID.match(raw.strip().lower()):
                    self.logger.warning("Skipping region not known to this client: %s", raw)
                    continue
                raise SerializationError(f"Malformed region id at regions[{idx}]: {raw!r}")
            if region not in regions:
                regions.append(region)
        return regions


_default_resolver = RegionResolver()


def get_available_regions() -> List[WizRegion]:
    return _default_resolver.available_regions()
