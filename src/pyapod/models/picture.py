"""Astronomy Picture of the Day record model."""

from __future__ import annotations

import datetime as dt
from collections.abc import Mapping
from enum import StrEnum
from types import MappingProxyType
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

from pyapod._constants import DATE_FORMAT, FEED_EPOCH


class MediaType(StrEnum):
    """Kind of asset a record points at.

    Values the API sends that have no mapped member resolve to
    ``UNSUPPORTED`` instead of raising ``ValueError``.
    """

    IMAGE = "image"
    VIDEO = "video"
    UNSUPPORTED = "unsupported"

    @classmethod
    def _missing_(cls, value: object) -> MediaType:
        return cls.UNSUPPORTED


def parse_feed_date(value: str) -> dt.date:
    """Parse a strict ``YYYY-MM-DD`` feed date.

    Raises :class:`ValueError` for anything else, including impossible
    calendar days such as ``2023-02-30``.
    """
    parsed = dt.datetime.strptime(value, DATE_FORMAT).date()
    # strptime accepts unpadded fields ("2024-3-1"); the feed never sends them.
    if parsed.strftime(DATE_FORMAT) != value:
        raise ValueError(f"date must be formatted as YYYY-MM-DD, got {value!r}")
    return parsed


def _freeze(value: Any) -> Any:
    """Read-only deep copy of a decoded JSON value."""
    if isinstance(value, Mapping):
        return MappingProxyType({str(k): _freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    return value


class PictureRecord(BaseModel):
    """One day of the APOD feed.

    Built from the ``/planetary/apod`` response. Wire keys use the
    feed's underscore names (``media_type``, ``service_version``) and
    its short URL names (``url``, ``hdurl``).

    When validated with ``context={"today": <date>}`` the record's date
    is also checked against that upper bound.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    date: str
    """Feed day, ``YYYY-MM-DD``."""
    title: str
    explanation: str
    media_url: str = Field(validation_alias=AliasChoices("url", "media_url"))
    """Standard-resolution asset."""
    hd_url: str | None = Field(default=None, validation_alias=AliasChoices("hdurl", "hd_url"))
    """High-resolution asset; absent for videos and some older entries."""
    media_type: MediaType
    service_version: str
    copyright: str | None = None
    """Credit line, sent only for images that are not public domain."""
    raw: Mapping[str, Any] = Field(default_factory=lambda: MappingProxyType({}), repr=False, exclude=True)
    """Original API response, as a read-only copy."""

    @model_validator(mode="before")
    @classmethod
    def _stash_raw(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        # A wire key named "raw" is part of the payload, not a replacement for it.
        return {**values, "raw": values}

    @field_validator("raw")
    @classmethod
    def _freeze_raw(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return _freeze(value)

    @field_validator("date")
    @classmethod
    def _check_date(cls, value: str, info: ValidationInfo) -> str:
        day = parse_feed_date(value)
        if day < FEED_EPOCH:
            raise ValueError(f"date {value} is before the feed epoch {FEED_EPOCH.isoformat()}")
        today = info.context.get("today") if isinstance(info.context, dict) else None
        if today is not None and day > today:
            raise ValueError(f"date {value} is after today ({today.isoformat()})")
        return value

    @field_validator("media_type", mode="before")
    @classmethod
    def _coerce_media_type(cls, value: Any) -> MediaType:
        if not isinstance(value, str):
            raise ValueError(f"media_type must be a string, got {type(value).__name__}")
        return MediaType(value.strip().lower())

    @property
    def day(self) -> dt.date:
        return parse_feed_date(self.date)

    @property
    def preferred_url(self) -> str:
        """High-resolution URL when the feed has one, else the standard URL."""
        return self.hd_url or self.media_url

    @property
    def is_image(self) -> bool:
        return self.media_type is MediaType.IMAGE

    @property
    def is_video(self) -> bool:
        return self.media_type is MediaType.VIDEO
