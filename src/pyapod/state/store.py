"""Observable store for the selected picture of the day.

This is the only component allowed to mutate :class:`SelectionState`.
Every mutation replaces the snapshot as a whole and is pushed to
observers synchronously, so nobody sees a half-applied update.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from typing import Protocol

from pyapod.exceptions import ApodError, ApodFetchError, ApodInvalidDateError
from pyapod.models.picture import PictureRecord
from pyapod.state.policy import describe_error, max_date, min_date, validate_selection
from pyapod.state.snapshot import LoadPhase, SelectionState

_logger = logging.getLogger(__name__)

Observer = Callable[[SelectionState], None]


class PictureFetcher(Protocol):
    """What the store needs from a client; :class:`~pyapod.client.ApodClient` fits."""

    async def fetch(self, day: date | None = None) -> PictureRecord:
        ...


@dataclass(frozen=True, slots=True)
class _LoadRequest:
    token: int
    day: date


class PictureStore:
    """Selected day, load status and last loaded record.

    Construction starts a load for today unless ``autoload=False``; with
    autoload the store must be created inside a running event loop.

    Overlapping loads are never cancelled. With ``discard_stale=True``
    a completion that belongs to a superseded load is dropped, so the
    most recently issued load decides the final state. With
    ``discard_stale=False`` every completion is applied in the order it
    arrives, and a slow early request can overwrite a later one.

    Usage::

        async with ApodClient(config) as client:
            store = PictureStore(client, discard_stale=config.discard_stale)
            unsubscribe = store.subscribe(render)
            await store.wait_idle()
            await store.select_date(date(2024, 3, 1))
    """

    def __init__(
        self,
        fetcher: PictureFetcher,
        *,
        clock: Callable[[], date] = date.today,
        discard_stale: bool = True,
        autoload: bool = True,
    ) -> None:
        self._fetcher = fetcher
        self._clock = clock
        self._discard_stale = discard_stale
        self._observers: list[Observer] = []
        self._state = SelectionState(selected_date=clock())
        self._generation = 0
        self._tasks: set[asyncio.Task[None]] = set()

        if autoload:
            request = self._begin(None)
            task = asyncio.get_running_loop().create_task(self._complete(request))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def snapshot(self) -> SelectionState:
        return self._state

    @property
    def min_date(self) -> date:
        return min_date()

    @property
    def max_date(self) -> date:
        """Latest selectable day, re-read from the clock on every access."""
        return max_date(self._clock())

    def subscribe(self, observer: Observer, *, replay: bool = False) -> Callable[[], None]:
        """Register *observer* for every future snapshot.

        With ``replay=True`` the observer is also called once, right away,
        with the current snapshot. Returns a callable that unsubscribes.
        """
        self._observers.append(observer)
        if replay:
            self._notify(observer, self._state)

        def _unsubscribe() -> None:
            try:
                self._observers.remove(observer)
            except ValueError:
                pass

        return _unsubscribe

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def load(self, day: date | None = None) -> None:
        """Load *day*, or reload the current selection when omitted.

        Failures never raise; they end up in ``snapshot.error``.
        """
        if day is not None:
            try:
                validate_selection(day, self._clock())
            except ApodInvalidDateError as exc:
                self._reject(exc)
                return
        request = self._begin(day)
        await self._complete(request)

    async def select_date(self, day: date) -> None:
        """Switch to *day*; does nothing when it is already selected."""
        if day == self._state.selected_date:
            return
        await self.load(day)

    async def load_today(self) -> None:
        await self.load(self._clock())

    async def retry(self) -> None:
        await self.load()

    async def wait_idle(self) -> None:
        """Wait for loads the store started on its own (the startup load)."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _begin(self, day: date | None) -> _LoadRequest:
        target = self._state.selected_date if day is None else day
        self._generation += 1
        self._publish(
            self._state.evolve(
                selected_date=target,
                phase=LoadPhase.LOADING,
                loading=True,
                error=None,
                error_kind=None,
            )
        )
        return _LoadRequest(token=self._generation, day=target)

    async def _complete(self, request: _LoadRequest) -> None:
        try:
            record = await self._fetcher.fetch(request.day)
        except ApodError as exc:
            if self._is_stale(request):
                return
            _logger.warning("Loading APOD for %s failed (%s): %s", request.day, getattr(exc, "kind", "error"), exc)
            self._publish(self._failed(exc))
            return

        if self._is_stale(request):
            return
        self._publish(
            self._state.evolve(
                phase=LoadPhase.LOADED,
                loading=False,
                record=record,
                error=None,
                error_kind=None,
            )
        )

    def _is_stale(self, request: _LoadRequest) -> bool:
        if not self._discard_stale or request.token == self._generation:
            return False
        _logger.debug(
            "Dropping stale APOD completion for %s (load %d, latest %d)",
            request.day,
            request.token,
            self._generation,
        )
        return True

    def _reject(self, exc: ApodInvalidDateError) -> None:
        # The selection is unchanged, so a load still in flight for it stays current.
        _logger.warning("Rejected APOD selection: %s", exc)
        self._publish(self._failed(exc))

    def _failed(self, exc: ApodError) -> SelectionState:
        return self._state.evolve(
            phase=LoadPhase.FAILED,
            loading=False,
            error=describe_error(exc, today=self._clock()),
            error_kind=exc.kind if isinstance(exc, ApodFetchError) else None,
        )

    def _publish(self, state: SelectionState) -> None:
        self._state = state
        for observer in list(self._observers):
            self._notify(observer, state)

    @staticmethod
    def _notify(observer: Observer, state: SelectionState) -> None:
        try:
            observer(state)
        except Exception:
            _logger.exception("APOD state observer %r failed", observer)
