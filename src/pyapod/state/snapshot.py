"""Immutable snapshots of the store's selection state."""

from __future__ import annotations

from datetime import date
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict

from pyapod.exceptions import FetchErrorKind
from pyapod.models.picture import PictureRecord


class LoadPhase(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


class SelectionState(BaseModel):
    """What the presentation layer renders from.

    ``record`` survives a failed load so stale content can stay visible
    behind the error; ``phase`` says which outcome is current.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    selected_date: date
    phase: LoadPhase = LoadPhase.IDLE
    loading: bool = False
    record: PictureRecord | None = None
    error: str | None = None
    error_kind: FetchErrorKind | None = None

    def evolve(self, **changes: Any) -> SelectionState:
        """Return a copy with *changes* applied."""
        return self.model_copy(update=changes)
