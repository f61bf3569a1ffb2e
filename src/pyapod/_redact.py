"""Helpers for safe debug logging.

Every APOD request carries the caller's API key as a query parameter, so
both the parameter mapping and the final request URL contain the secret.
This module redacts it before request details reach DEBUG logs.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from yarl import URL

REDACTED = "<redacted>"

_SENSITIVE_KEYS: frozenset[str] = frozenset({"api_key", "apikey", "x-api-key", "authorization", "token"})


def _is_sensitive(key: Any) -> bool:
    return str(key).lower() in _SENSITIVE_KEYS


def redact_for_log(value: Any, *, max_string: int = 512) -> Any:
    """Return a redacted copy of *value* suitable for debug logs.

    Mappings have credential keys masked (recursively); long strings are
    truncated; URLs have credential query parameters masked.
    """
    if isinstance(value, URL):
        return redact_url(value)

    if isinstance(value, str):
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated>"
        return value

    if isinstance(value, Mapping):
        return {
            str(k): REDACTED if _is_sensitive(k) else redact_for_log(v, max_string=max_string)
            for k, v in value.items()
        }

    if isinstance(value, (list, tuple)):
        return [redact_for_log(v, max_string=max_string) for v in value]

    return value


def redact_url(url: str | URL) -> str:
    """Mask credential query parameters in *url*."""
    parsed = url if isinstance(url, URL) else URL(url)
    if not any(_is_sensitive(key) for key in parsed.query):
        return str(parsed)
    query = [(key, REDACTED if _is_sensitive(key) else value) for key, value in parsed.query.items()]
    return str(parsed.with_query(query))
