"""Data models for APOD API responses."""

from pyapod.models.picture import MediaType, PictureRecord, parse_feed_date

__all__ = [
    "MediaType",
    "PictureRecord",
    "parse_feed_date",
]
