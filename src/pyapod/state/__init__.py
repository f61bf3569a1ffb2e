"""State/store layer.

This package owns the single piece of mutable state in pyapod: which day
is selected, whether a load is running, and the outcome of the most
recent load. Observers only ever see immutable snapshots of it.
"""

from pyapod.state.policy import describe_error, max_date, min_date, validate_selection
from pyapod.state.snapshot import LoadPhase, SelectionState
from pyapod.state.store import Observer, PictureFetcher, PictureStore

__all__ = [
    "LoadPhase",
    "Observer",
    "PictureFetcher",
    "PictureStore",
    "SelectionState",
    "describe_error",
    "max_date",
    "min_date",
    "validate_selection",
]
