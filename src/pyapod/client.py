"""High-level async client for the APOD API."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date
from typing import Any

import aiohttp
from pydantic import ValidationError

from pyapod._constants import DATE_FORMAT
from pyapod._transport import HttpTransport, Transport
from pyapod.config import ApodConfig
from pyapod.exceptions import ApodDecodeError, ApodError
from pyapod.models.picture import PictureRecord

_logger = logging.getLogger(__name__)


def format_query_date(day: date) -> str:
    """Format *day* for the ``date`` query parameter.

    The value is the caller's local calendar day as-is; no timezone
    conversion happens, so the feed day requested is exactly the day
    the user picked.
    """
    return day.strftime(DATE_FORMAT)


class ApodClient:
    """Async client for the Astronomy Picture of the Day API.

    Usage::

        async with ApodClient(config) as client:
            record = await client.fetch(date(2024, 3, 1))

    A ready :class:`~pyapod._transport.Transport` can be passed instead
    of an HTTP session, in which case no session is opened or closed.
    """

    def __init__(
        self,
        config: ApodConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport = transport
        self._external_transport = transport is not None
        self._clock = clock

    async def __aenter__(self) -> ApodClient:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = HttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if not self._external_transport:
            self._transport = None

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise ApodError("Client not initialized. Use 'async with ApodClient(...) as client:'")
        return self._transport

    def build_params(self, day: date | None = None) -> dict[str, str]:
        """Query parameters for a request for *day* (or the feed's latest day)."""
        params = {"api_key": self._config.api_key}
        if day is not None:
            params["date"] = format_query_date(day)
        return params

    async def fetch(self, day: date | None = None) -> PictureRecord:
        """Fetch the record for *day*, or the most recent one when omitted.

        Raises
        ------
        ApodTransportError
            The request never got an HTTP answer.
        ApodHttpError
            The server answered with a non-success status.
        ApodDecodeError
            The body is not a JSON object matching :class:`PictureRecord`.
        """
        transport = self._require_transport()
        url = self._config.base_url
        body = await transport.get_json(url, self.build_params(day))
        # Undated requests return the server's current day, which may be ahead of ours.
        return self.decode(body, endpoint=url, today=self._clock() if day is not None else None)

    def decode(self, body: Any, *, endpoint: str = "", today: date | None = None) -> PictureRecord:
        """Validate a response body into a :class:`PictureRecord`.

        When *today* is given, records dated after it are rejected.
        """
        if not isinstance(body, dict):
            raise ApodDecodeError(
                f"Expected a JSON object from {endpoint}, got {type(body).__name__}",
                endpoint=endpoint,
            )
        try:
            return PictureRecord.model_validate(body, context={"today": today})
        except ValidationError as exc:
            fields = sorted({".".join(str(p) for p in err["loc"]) for err in exc.errors()})
            _logger.debug("APOD payload rejected (%s): %s", ", ".join(fields), exc)
            raise ApodDecodeError(
                f"Unexpected APOD payload from {endpoint}: invalid {', '.join(fields)}",
                endpoint=endpoint,
            ) from exc
