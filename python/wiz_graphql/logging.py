from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional

_SENSITIVE_HEADERS = {"authorization", "cookie", "set-cookie"}
_SENSITIVE_FORM_FIELDS = {"client_secret", "access_token"}


def get_logger(
    logger: logging.Logger | None = None, name: str = "wiz_graphql"
) -> logging.Logger:
    return logger if logger is not None else logging.getLogger(name)


def sanitize_headers(headers: Mapping[str, str]) -> Dict[str, str]:
    sanitized: Dict[str, str] = {}
    for key, value in headers.items():
        if key.lower() in _SENSITIVE_HEADERS:
            sanitized[key] = "<redacted>"
        else:
            sanitized[key] = value
    return sanitized


def sanitize_form(form: Mapping[str, str]) -> Dict[str, str]:
    return {
        key: "<redacted>" if key in _SENSITIVE_FORM_FIELDS else value
        for key, value in form.items()
    }


def body_snippet(text: Optional[str], limit: int = 300) -> str:
    if not text:
        return ""
    return text if len(text) <= limit else text[:limit]
