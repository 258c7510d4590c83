from __future__ import annotations

import threading
from typing import Optional

import httpx

DEFAULT_TIMEOUT_SECONDS = 30.0

_shared_client: Optional[httpx.Client] = None
_shared_lock = threading.Lock()


def build_http_client(timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS) -> httpx.Client:
    return httpx.Client(
        timeout=timeout_seconds,
        headers={"Accept": "application/json"},
    )


def shared_http_client() -> httpx.Client:
    """Process-wide transport handle reused by every client for connection pooling.

    Clients never close it; a closed handle is replaced on the next call.
    """
    global _shared_client
    with _shared_lock:
        if _shared_client is None or _shared_client.is_closed:
            _shared_client = build_http_client()
        return _shared_client


def reset_shared_http_client() -> None:
    global _shared_client
    with _shared_lock:
        client, _shared_client = _shared_client, None
    if client is not None and not client.is_closed:
        client.close()
