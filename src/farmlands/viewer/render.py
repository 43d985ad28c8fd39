"""Render boundary: turns controller state into what the map widget draws.

The browser-side Leaflet map consumes the dictionaries built here. It does
the tile fetching, drawing and hit-testing; this module only decides what
is drawn, how it is styled, what each popup says and when to fit bounds.
"""

from __future__ import annotations

import html
from typing import Any

from farmlands.core.config import MapConfig, Settings, StyleConfig
from farmlands.gis.models import GeoRecord
from farmlands.viewer.controller import ViewController
from farmlands.viewer.state import SelectionState


def feature_style(
    record: GeoRecord,
    highlighted_owner: str | None,
    palette: StyleConfig | None = None,
) -> dict[str, Any]:
    """Leaflet path options for one feature.

    Only varies on whether the record's owner is the highlighted owner.
    """
    palette = palette or StyleConfig()
    if highlighted_owner is not None and record.owner == highlighted_owner:
        return {
            "color": palette.highlight_stroke_color,
            "weight": palette.highlight_stroke_weight,
            "fillColor": palette.highlight_fill_color,
            "fillOpacity": palette.highlight_fill_opacity,
        }
    return {
        "color": palette.stroke_color,
        "weight": palette.stroke_weight,
        "fillColor": palette.fill_color,
        "fillOpacity": palette.fill_opacity,
    }


def popup_content(record: GeoRecord) -> str | None:
    """HTML popup for a feature; unnamed features get no popup."""
    if record.name is None:
        return None
    parts = [f"<b>{html.escape(record.name)}</b><br/>"]
    if record.owner is not None:
        parts.append(f"Owner: {html.escape(record.owner)}<br/>")
    if record.date is not None:
        parts.append(f"Date: {html.escape(record.date)}")
    return "".join(parts)


def fit_bounds_directive(
    selection: SelectionState, padding: tuple[int, int] = (50, 50)
) -> dict[str, Any] | None:
    """Instruction to fit the map to the last matched farm, if any.

    ``sequence`` lets the client apply each directive exactly once.
    """
    if selection.matched_bounds is None:
        return None
    return {
        "bounds": selection.matched_bounds.as_leaflet(),
        "padding": list(padding),
        "sequence": selection.fit_sequence,
    }


def feature_collection(controller: ViewController, palette: StyleConfig | None = None) -> dict[str, Any]:
    """The filtered records as a GeoJSON FeatureCollection.

    Each feature carries its computed ``style`` and ``popup`` in a private
    ``_render`` member next to the original properties.
    """
    highlighted = controller.state.highlight.highlighted_owner
    features = []
    for record in controller.filtered:
        feature = record.to_feature()
        feature["id"] = record.index
        feature["_render"] = {
            "style": feature_style(record, highlighted, palette),
            "popup": popup_content(record),
        }
        features.append(feature)
    return {"type": "FeatureCollection", "features": features}


def map_options(config: MapConfig) -> dict[str, Any]:
    return {
        "center": [config.center_lat, config.center_lng],
        "zoom": config.zoom,
        "tile_url": config.tile_url,
        "attribution": config.attribution,
    }


def build_view_model(
    controller: ViewController, settings: Settings | None = None
) -> dict[str, Any]:
    """Assemble everything the page needs to render one viewer session."""
    settings = settings or Settings()
    state = controller.state
    year_min, year_max = controller.year_range

    return {
        "map": map_options(settings.map),
        "features": feature_collection(controller, settings.style),
        "fit_bounds": fit_bounds_directive(state.selection, settings.map.fit_padding),
        "search": {
            "query": state.selection.query,
            "matched_name": state.selection.matched_name,
            "notice": state.selection.notice,
        },
        "year_filter": {
            "enabled": state.filter.year_enabled,
            "year": state.filter.year,
            "min": year_min,
            "max": year_max,
            "step": 1,
        },
        "owners": {
            "visible": state.highlight.owners_visible,
            "highlighted": state.highlight.highlighted_owner,
            "items": [o.model_dump() for o in controller.owners],
        },
        "farms": {
            "visible": state.highlight.farms_visible,
            "rank_by_size": state.aggregation.rank_by_size,
            "items": [f.model_dump() for f in controller.farms],
        },
    }
