"""View state controller wiring user actions to derived views."""

from __future__ import annotations

import logging
from collections.abc import Callable

from farmlands.gis.models import FarmEntry, GeoRecord, OwnerCount
from farmlands.gis.store import GeoRecordStore
from farmlands.viewer.aggregation import aggregate_owners, rank_farms
from farmlands.viewer.derived import Derivation
from farmlands.viewer.filtering import filter_records
from farmlands.viewer.selection import Found, SearchResult, resolve
from farmlands.viewer.state import (
    NOT_FOUND_MESSAGE,
    YEAR_MAX,
    YEAR_MIN,
    Action,
    FilterState,
    SearchFailed,
    SearchSucceeded,
    SetQuery,
    ViewState,
    reduce,
)

logger = logging.getLogger(__name__)

Listener = Callable[[ViewState, ViewState], None]


class ViewController:
    """Owns one viewer session's state over a shared record store.

    All changes go through ``dispatch``. Subscribers are called with
    ``(previous, current)`` after every change that produced a new state.
    """

    def __init__(
        self,
        store: GeoRecordStore,
        state: ViewState | None = None,
        *,
        year_range: tuple[int, int] = (YEAR_MIN, YEAR_MAX),
        not_found_message: str = NOT_FOUND_MESSAGE,
    ) -> None:
        self._store = store
        self._state = state if state is not None else ViewState()
        self._year_range = year_range
        self._not_found_message = not_found_message
        self._listeners: list[Listener] = []

        self._filtered: Derivation[tuple[GeoRecord, ...]] = Derivation(
            "filtered",
            lambda ctl: (
                ctl._store.records,
                ctl._state.filter.year_enabled,
                ctl._state.filter.year,
            ),
            lambda records, enabled, year: filter_records(
                records, FilterState(year_enabled=enabled, year=year)
            ),
        )
        self._owners: Derivation[list[OwnerCount]] = Derivation(
            "owners",
            lambda ctl: (ctl.filtered,),
            aggregate_owners,
        )
        self._farms: Derivation[list[FarmEntry]] = Derivation(
            "farms",
            lambda ctl: (ctl.filtered, ctl._state.aggregation.rank_by_size),
            lambda records, by_size: rank_farms(records, by_size, self._store.bounds_for),
        )

    @property
    def store(self) -> GeoRecordStore:
        return self._store

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def year_range(self) -> tuple[int, int]:
        return self._year_range

    # -- derived views -----------------------------------------------------

    @property
    def filtered(self) -> tuple[GeoRecord, ...]:
        return self._filtered.get(self)

    @property
    def owners(self) -> list[OwnerCount]:
        return self._owners.get(self)

    @property
    def farms(self) -> list[FarmEntry]:
        return self._farms.get(self)

    def derivation_counts(self) -> dict[str, int]:
        """How many times each derived view has been recomputed."""
        return {
            d.name: d.recomputations
            for d in (self._filtered, self._owners, self._farms)
        }

    # -- state changes -----------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, action: Action) -> ViewState:
        previous = self._state
        self._state = reduce(previous, action, self._year_range)
        logger.debug("Applied %s", type(action).__name__)
        if self._state.model_dump() != previous.model_dump():
            for listener in list(self._listeners):
                listener(previous, self._state)
        return self._state

    def search(self, query: str | None = None) -> SearchResult:
        """Run a search over the visible farms and record the outcome.

        A miss raises the not-found notice and keeps the previously
        matched bounds.
        """
        if query is not None:
            self.dispatch(SetQuery(query=query))
        text = self._state.selection.query

        result = resolve(self.filtered, text, self._store.bounds_for)
        if isinstance(result, Found):
            self.dispatch(SearchSucceeded(name=result.record.name, bounds=result.bounds))
        else:
            logger.info("No visible farm named %r", text)
            self.dispatch(SearchFailed(query=text, message=self._not_found_message))
        return result
