"""pyapod - Async Python client and state store for NASA's Astronomy Picture of the Day."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyapod")
except PackageNotFoundError:
    __version__ = "0+local"
from pyapod.client import ApodClient, format_query_date
from pyapod.config import ApodConfig
from pyapod.exceptions import (
    ApodConfigError,
    ApodDecodeError,
    ApodError,
    ApodFetchError,
    ApodHttpError,
    ApodInvalidDateError,
    ApodTransportError,
    FetchErrorKind,
)
from pyapod.models import MediaType, PictureRecord
from pyapod.state import LoadPhase, PictureStore, SelectionState

__all__ = [
    "__version__",
    "ApodClient",
    "ApodConfig",
    "ApodConfigError",
    "ApodDecodeError",
    "ApodError",
    "ApodFetchError",
    "ApodHttpError",
    "ApodInvalidDateError",
    "ApodTransportError",
    "FetchErrorKind",
    "LoadPhase",
    "MediaType",
    "PictureRecord",
    "PictureStore",
    "SelectionState",
    "format_query_date",
]
