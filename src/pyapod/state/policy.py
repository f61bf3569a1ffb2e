"""Selection bounds and user-facing error policy.

Out-of-range selections are rejected, never clamped: the store reports
them as a failed load and keeps the previous selection.
"""

from __future__ import annotations

from datetime import date

from pyapod._constants import FEED_EPOCH
from pyapod.exceptions import ApodError, ApodFetchError, ApodHttpError, ApodInvalidDateError, FetchErrorKind


def min_date() -> date:
    return FEED_EPOCH


def max_date(today: date) -> date:
    """Latest selectable day. Callers pass a fresh ``today`` on every check."""
    return today


def validate_selection(day: date, today: date) -> date:
    """Return *day* unchanged if it is selectable, else raise.

    Raises
    ------
    ApodInvalidDateError
        *day* is before the feed epoch or after *today*.
    """
    low, high = min_date(), max_date(today)
    if day < low or day > high:
        raise ApodInvalidDateError(f"{day.isoformat()} is outside {low.isoformat()}..{high.isoformat()}")
    return day


_HTTP_MESSAGES: dict[int, str] = {
    400: "No picture is available for this date.",
    401: "The NASA API key was rejected.",
    403: "The NASA API key was rejected.",
    404: "No picture is available for this date.",
    429: "Too many requests to NASA. Please wait a while and try again.",
}

_GENERIC_MESSAGE = "The picture could not be loaded. Please try again."


def describe_error(exc: ApodError, *, today: date | None = None) -> str:
    """Turn a load failure into the single message shown to the user."""
    if not isinstance(exc, ApodFetchError):
        return _GENERIC_MESSAGE
    if exc.kind is FetchErrorKind.TRANSPORT:
        return "Could not reach NASA. Check your connection and try again."
    if exc.kind is FetchErrorKind.DECODE:
        return "NASA sent a response that could not be read."
    if exc.kind is FetchErrorKind.INVALID_DATE:
        high = max_date(today).isoformat() if today is not None else "today"
        return f"Choose a date between {min_date().isoformat()} and {high}."
    if isinstance(exc, ApodHttpError):
        message = _HTTP_MESSAGES.get(exc.status_code)
        if message is None:
            if exc.status_code >= 500:
                message = f"The picture service is unavailable (HTTP {exc.status_code})."
            else:
                message = f"The request failed (HTTP {exc.status_code})."
        if exc.detail and exc.status_code in (400, 404):
            message = f"{message} {exc.detail}"
        return message
    return _GENERIC_MESSAGE
