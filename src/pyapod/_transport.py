"""HTTP transport for the APOD endpoint."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from pyapod._redact import redact_for_log, redact_url
from pyapod.config import ApodConfig
from pyapod.exceptions import ApodDecodeError, ApodHttpError, ApodTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by :class:`~pyapod.client.ApodClient`.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def get_json(self, url: str, params: Mapping[str, str]) -> Any:
        ...


def _error_detail(text: str) -> str | None:
    """Pull the human-readable message out of an APOD error body.

    The APOD service answers ``{"code": 400, "msg": "..."}``; the
    api.nasa.gov gateway answers ``{"error": {"code": "...", "message": "..."}}``.
    """
    try:
        body = json.loads(text)
    except json.JSONDecodeError:
        return None
    if not isinstance(body, dict):
        return None
    msg = body.get("msg")
    if isinstance(msg, str) and msg:
        return msg
    error = body.get("error")
    if isinstance(error, dict):
        message = error.get("message")
        if isinstance(message, str) and message:
            return message
    return None


class HttpTransport:
    """aiohttp-backed transport that maps failures onto the pyapod error taxonomy."""

    def __init__(self, config: ApodConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session

    async def get_json(self, url: str, params: Mapping[str, str]) -> Any:
        """GET *url* with *params* and return the decoded JSON body.

        Raises
        ------
        ApodTransportError
            Connection, DNS, timeout or URL failure.
        ApodHttpError
            Non-2xx status.
        ApodDecodeError
            Body is not valid JSON.
        """
        headers = {
            "accept": "application/json",
            "user-agent": self._config.user_agent,
        }

        _logger.debug("GET %s params=%s", url, redact_for_log(params))

        try:
            async with self._http.get(url, params=dict(params), headers=headers) as resp:
                text = await resp.text()
                _logger.debug("HTTP %s from %s", resp.status, redact_url(resp.url))
                if not 200 <= resp.status < 300:
                    detail = _error_detail(text)
                    raise ApodHttpError(
                        f"HTTP {resp.status} from {url}: {detail or text[:200]}",
                        status_code=resp.status,
                        endpoint=url,
                        detail=detail,
                    )
        except ApodHttpError:
            raise
        except UnicodeDecodeError as exc:
            raise ApodDecodeError(f"Undecodable body from {url}", endpoint=url) from exc
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as exc:
            # ValueError: URLs yarl rejects before a connection is attempted.
            raise ApodTransportError(f"Request to {url} failed: {exc!r}", endpoint=url) from exc

        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise ApodDecodeError(f"Invalid JSON from {url}: {text[:200]}", endpoint=url) from exc
