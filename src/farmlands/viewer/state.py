"""View state records, user actions, and the reducer that applies them.

State is a flat, frozen record. Every user action is a small model and
``reduce`` returns a new state for it; nothing here mutates in place.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from farmlands.core.types import Bounds

YEAR_MIN = 1650
YEAR_MAX = 1780
DEFAULT_YEAR = 1900
NOT_FOUND_MESSAGE = "Region not found!"


class FilterState(BaseModel):
    model_config = ConfigDict(frozen=True)

    year_enabled: bool = False
    year: int = DEFAULT_YEAR


class AggregationState(BaseModel):
    model_config = ConfigDict(frozen=True)

    rank_by_size: bool = False


class SelectionState(BaseModel):
    """Search text and the outcome of the last successful search.

    ``fit_sequence`` increases once per successful search so the map fits
    to ``matched_bounds`` exactly once for each.
    """

    model_config = ConfigDict(frozen=True)

    query: str = ""
    matched_bounds: Bounds | None = None
    matched_name: str | None = None
    fit_sequence: int = 0
    notice: str | None = None


class HighlightState(BaseModel):
    model_config = ConfigDict(frozen=True)

    highlighted_owner: str | None = None
    owners_visible: bool = False
    farms_visible: bool = False


class ViewState(BaseModel):
    """Everything the user can adjust in one viewer session."""

    model_config = ConfigDict(frozen=True)

    filter: FilterState = Field(default_factory=FilterState)
    aggregation: AggregationState = Field(default_factory=AggregationState)
    selection: SelectionState = Field(default_factory=SelectionState)
    highlight: HighlightState = Field(default_factory=HighlightState)


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------


class Action(BaseModel):
    model_config = ConfigDict(frozen=True)


class SetQuery(Action):
    query: str


class SearchSucceeded(Action):
    name: str
    bounds: Bounds | None = None


class SearchFailed(Action):
    query: str
    message: str = NOT_FOUND_MESSAGE


class DismissNotice(Action):
    pass


class SetYearFilterEnabled(Action):
    enabled: bool


class SetYear(Action):
    year: int


class SetOwnersVisible(Action):
    visible: bool


class SelectOwner(Action):
    owner: str


class SetFarmsVisible(Action):
    visible: bool


class SetRankBySize(Action):
    enabled: bool


# ---------------------------------------------------------------------------
# Reducer
# ---------------------------------------------------------------------------


def clamp_year(year: int, year_range: tuple[int, int] = (YEAR_MIN, YEAR_MAX)) -> int:
    low, high = year_range
    return max(low, min(high, year))


def reduce(
    state: ViewState,
    action: Action,
    year_range: tuple[int, int] = (YEAR_MIN, YEAR_MAX),
) -> ViewState:
    """Apply one user action and return the resulting state.

    Raises:
        TypeError: If the action type is not recognised.
    """
    if isinstance(action, SetQuery):
        return _update(state, selection={"query": action.query})

    if isinstance(action, SearchSucceeded):
        selection: dict[str, object] = {"matched_name": action.name, "notice": None}
        # A hit without geometry leaves the previous view untouched.
        if action.bounds is not None:
            selection["matched_bounds"] = action.bounds
            selection["fit_sequence"] = state.selection.fit_sequence + 1
        return _update(state, selection=selection)

    if isinstance(action, SearchFailed):
        return _update(state, selection={"notice": action.message})

    if isinstance(action, DismissNotice):
        return _update(state, selection={"notice": None})

    if isinstance(action, SetYearFilterEnabled):
        return _update(state, filter={"year_enabled": action.enabled})

    if isinstance(action, SetYear):
        return _update(state, filter={"year": clamp_year(action.year, year_range)})

    if isinstance(action, SetOwnersVisible):
        highlight: dict[str, object] = {"owners_visible": action.visible}
        if not action.visible:
            highlight["highlighted_owner"] = None
        return _update(state, highlight=highlight)

    if isinstance(action, SelectOwner):
        return _update(state, highlight={"highlighted_owner": action.owner})

    if isinstance(action, SetFarmsVisible):
        return _update(state, highlight={"farms_visible": action.visible})

    if isinstance(action, SetRankBySize):
        return _update(state, aggregation={"rank_by_size": action.enabled})

    raise TypeError(f"Unknown view action: {type(action).__name__}")


def _update(state: ViewState, **parts: dict[str, object]) -> ViewState:
    changes = {
        field: getattr(state, field).model_copy(update=values)
        for field, values in parts.items()
    }
    return state.model_copy(update=changes)
