"""Internal constants shared across the library."""

from __future__ import annotations

from datetime import date

BASE_URL = "https://api.nasa.gov/planetary/apod"
USER_AGENT = "pyapod/0.1 (+https://api.nasa.gov)"

#: Wire format of the ``date`` query parameter and response field.
DATE_FORMAT = "%Y-%m-%d"

#: First day published by the APOD feed.
FEED_EPOCH = date(1995, 6, 16)
