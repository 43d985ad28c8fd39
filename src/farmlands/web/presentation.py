"""Info-pane text for the viewer page, loaded from a YAML file."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

_DEFAULT_PATH = Path(__file__).resolve().parents[3] / "config" / "viewer.yml"

_DEFAULTS: dict[str, Any] = {
    "title": "Early Colonial Farmlands",
    "description": [],
    "credit": "",
    "search_placeholder": "Search farm...",
}


class Presentation:
    """Page title, description paragraphs and credit line.

    Missing file or missing keys fall back to built-in defaults.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        self._path = Path(path) if path else _DEFAULT_PATH
        self._data: dict[str, Any] = dict(_DEFAULTS)
        self._load()

    def _load(self) -> None:
        if not self._path.exists():
            return
        with open(self._path, encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        if not isinstance(data, dict):
            return
        for key in _DEFAULTS:
            if key in data and data[key] is not None:
                self._data[key] = data[key]
        if isinstance(self._data["description"], str):
            self._data["description"] = [self._data["description"]]

    @property
    def title(self) -> str:
        return str(self._data["title"])

    @property
    def description(self) -> list[str]:
        return [str(p) for p in self._data["description"]]

    @property
    def credit(self) -> str:
        return str(self._data["credit"])

    @property
    def search_placeholder(self) -> str:
        return str(self._data["search_placeholder"])

    def as_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "credit": self.credit,
            "search_placeholder": self.search_placeholder,
        }
