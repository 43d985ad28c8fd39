"""FastAPI application for the Early Colonial Farmlands viewer.

Serves the browser map page and the JSON view model it renders from.
Run with::

    uvicorn farmlands.web.app:create_app --factory --port 8080
"""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel

from farmlands.core.config import Settings
from farmlands.gis.models import DatasetSummary
from farmlands.gis.store import GeoRecordStore
from farmlands.viewer.session import ViewSessionManager
from farmlands.web.presentation import Presentation
from farmlands.web.viewer_router import router as viewer_router

logger = logging.getLogger(__name__)

_WEB_DIR = Path(__file__).parent
_TEMPLATES_DIR = _WEB_DIR / "templates"
_STATIC_DIR = _WEB_DIR / "static"
_DEFAULT_DATASET_PATH = Path(__file__).resolve().parents[3] / "data" / "locations.json"


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    service: str
    records: int
    version: str = "0.1.0"


def load_store(settings: Settings) -> GeoRecordStore:
    """Load the configured dataset, or the bundled one if none is set."""
    path = Path(settings.dataset.path) if settings.dataset.path else _DEFAULT_DATASET_PATH
    return GeoRecordStore.from_file(path)


# --- Application factory ---


def create_app(
    settings: Settings | None = None,
    store: GeoRecordStore | None = None,
    presentation: Presentation | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Uses the factory pattern so tests can create isolated app instances
    with their own record store.

    Args:
        settings: Application settings. Defaults to Settings().
        store: Optional pre-built record store. Loaded from the configured
            dataset path when omitted.
        presentation: Optional info-pane text.

    Returns:
        A configured FastAPI instance.
    """
    if settings is None:
        settings = Settings()

    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(
        title="Early Colonial Farmlands",
        description="Interactive map of freehold land grants in the south-western Cape, 1657-1750",
        version="0.1.0",
        debug=settings.debug,
    )

    if store is None:
        store = load_store(settings)
    if presentation is None:
        presentation = Presentation(settings.map.presentation_path)

    view_sessions = ViewSessionManager(store, settings)

    # Store on app state for access in route handlers
    app.state.settings = settings
    app.state.store = store
    app.state.view_sessions = view_sessions
    app.state.presentation = presentation

    app.include_router(viewer_router)

    templates = Jinja2Templates(directory=str(_TEMPLATES_DIR))

    if _STATIC_DIR.exists():
        app.mount("/static", StaticFiles(directory=str(_STATIC_DIR)), name="static")

    # --- Routes ---

    @app.get("/", response_class=HTMLResponse)
    async def serve_viewer(request: Request) -> HTMLResponse:
        """Serve the map viewer page."""
        return templates.TemplateResponse(
            request,
            "viewer.html",
            {
                "presentation": presentation,
                "map_config": settings.map,
            },
        )

    @app.get("/api/dataset", response_model=DatasetSummary)
    async def dataset_summary() -> DatasetSummary:
        """Record counts for the loaded dataset."""
        return store.summary()

    @app.get("/api/health", response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(
            status="healthy",
            service="farmlands-viewer",
            records=store.count,
        )

    logger.info("Viewer ready with %d farm records", store.count)
    return app
