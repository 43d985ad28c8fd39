"""View-state derivation for the farmlands map viewer."""

from farmlands.viewer.controller import ViewController
from farmlands.viewer.session import ViewSession, ViewSessionManager
from farmlands.viewer.state import ViewState, reduce

__all__ = [
    "ViewController",
    "ViewSession",
    "ViewSessionManager",
    "ViewState",
    "reduce",
]
