from __future__ import annotations

from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Optional, Tuple

TRANSIENT_STATUS_CODES = frozenset({408, 429})


def is_transient_status(status_code: int) -> bool:
    return status_code >= 500 or status_code in TRANSIENT_STATUS_CODES


def backoff_delay(base_delay_seconds: float, attempt: int) -> float:
    """Delay before retry number ``attempt + 1``; doubles from the base delay."""
    if base_delay_seconds <= 0:
        return 0.0
    return base_delay_seconds * (2 ** attempt)


def parse_retry_after(header_value: str) -> Tuple[datetime, str]:
    if header_value is None:
        raise ValueError("Retry-After header is missing")
    candidate = header_value.strip()
    if not candidate:
        raise ValueError("Retry-After header is empty")

    cleaned = candidate
    if cleaned.endswith("Z"):
        cleaned = cleaned[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(cleaned)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc), "rfc3339"
    except ValueError:
        pass

    try:
        parsed = parsedate_to_datetime(candidate)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Unable to parse Retry-After header: {candidate}") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc), "http-date"


def retry_after_seconds(
    header_value: Optional[str], now: datetime
) -> Tuple[Optional[float], Optional[datetime]]:
    """Seconds to wait for a Retry-After value, plus the absolute time when known.

    Accepts delta-seconds, RFC 3339 timestamps and HTTP dates. Unparseable
    values yield ``(None, None)`` so callers fall back to their own backoff.
    """
    if header_value is None or not header_value.strip():
        return None, None
    candidate = header_value.strip()
    try:
        seconds = float(candidate)
    except ValueError:
        seconds = None
    if seconds is not None:
        return max(seconds, 0.0), None
    try:
        retry_at, _ = parse_retry_after(candidate)
    except ValueError:
        return None, None
    return max((retry_at - now).total_seconds(), 0.0), retry_at
