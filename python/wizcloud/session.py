from __future__ import annotations

import threading
from typing import Optional, Union

from .regions import DEFAULT_REGION, WizRegion


class WizSession:
    """Process-wide defaults picked up by clients built without explicit values."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._default_token: Optional[str] = None
        self._default_region: WizRegion = DEFAULT_REGION
        self._client_id: Optional[str] = None
        self._client_secret: Optional[str] = None

    @property
    def default_token(self) -> Optional[str]:
        return self._default_token

    @default_token.setter
    def default_token(self, token: Optional[str]) -> None:
        with self._lock:
            self._default_token = (token or "").strip() or None

    @property
    def default_region(self) -> WizRegion:
        return self._default_region

    @default_region.setter
    def default_region(self, region: Union[WizRegion, str]) -> None:
        parsed = WizRegion.parse(region)
        with self._lock:
            self._default_region = parsed

    @property
    def client_id(self) -> Optional[str]:
        return self._client_id

    @property
    def client_secret(self) -> Optional[str]:
        return self._client_secret

    def set_client_credentials(self, client_id: Optional[str], client_secret: Optional[str]) -> None:
        with self._lock:
            self._client_id = (client_id or "").strip() or None
            self._client_secret = (client_secret or "").strip() or None

    def reset(self) -> None:
        with self._lock:
            self._default_token = None
            self._default_region = DEFAULT_REGION
            self._client_id = None
            self._client_secret = None


session = WizSession()
