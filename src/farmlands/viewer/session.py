"""Viewer session management with in-memory storage.

Each browser tab gets its own ViewController over the shared record
store. Sessions live only as long as the process; nothing is persisted.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from farmlands.core.config import Settings
from farmlands.gis.store import GeoRecordStore
from farmlands.viewer.controller import ViewController
from farmlands.viewer.state import FilterState, ViewState


@dataclass
class ViewSession:
    """A viewer session and its controller."""

    controller: ViewController
    session_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    last_active: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def touch(self) -> None:
        self.last_active = datetime.now(timezone.utc)


class ViewSessionManager:
    """In-memory store of viewer sessions sharing one record store."""

    def __init__(self, store: GeoRecordStore, settings: Settings | None = None) -> None:
        self._store = store
        self._settings = settings or Settings()
        self._sessions: dict[str, ViewSession] = {}

    @property
    def store(self) -> GeoRecordStore:
        return self._store

    def create_session(self) -> ViewSession:
        """Create a session with default view state.

        Returns:
            The newly created ViewSession.
        """
        map_config = self._settings.map
        initial = ViewState(filter=FilterState(year=map_config.default_year))
        controller = ViewController(
            self._store,
            initial,
            year_range=(map_config.year_min, map_config.year_max),
            not_found_message=map_config.not_found_message,
        )
        session = ViewSession(controller=controller)
        self._sessions[session.session_id] = session
        return session

    def get_session(self, session_id: str) -> ViewSession | None:
        return self._sessions.get(session_id)

    def end_session(self, session_id: str) -> bool:
        """Discard a session. Returns False if it did not exist."""
        return self._sessions.pop(session_id, None) is not None

    def list_sessions(self) -> list[ViewSession]:
        return sorted(
            self._sessions.values(),
            key=lambda s: s.last_active,
            reverse=True,
        )

    @property
    def count(self) -> int:
        return len(self._sessions)
