"""Custom exception hierarchy for pyapod."""

from __future__ import annotations

from enum import StrEnum


class FetchErrorKind(StrEnum):
    """Classification of a failed fetch, kept on every fetch error."""

    TRANSPORT = "transport"
    HTTP = "http"
    DECODE = "decode"
    INVALID_DATE = "invalid_date"


class ApodError(Exception):
    """Base exception for all pyapod errors."""


class ApodConfigError(ApodError):
    """Invalid or missing configuration."""


class ApodFetchError(ApodError):
    """A picture could not be fetched.

    Subclasses set :attr:`kind`; the store only needs the kind and the
    message, callers that care can still catch the concrete type.
    """

    kind: FetchErrorKind = FetchErrorKind.TRANSPORT

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)


class ApodTransportError(ApodFetchError):
    """Network-level failure (unreachable host, DNS, reset, timeout, bad URL)."""

    kind = FetchErrorKind.TRANSPORT


class ApodHttpError(ApodFetchError):
    """The server answered with a non-success status code."""

    kind = FetchErrorKind.HTTP

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        endpoint: str = "",
        detail: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(message, endpoint=endpoint)


class ApodDecodeError(ApodFetchError):
    """Response body is not JSON or does not match the record contract."""

    kind = FetchErrorKind.DECODE


class ApodInvalidDateError(ApodFetchError):
    """Requested date lies outside the range the feed publishes.

    Raised client-side before any request is made.
    """

    kind = FetchErrorKind.INVALID_DATE
