"""Dashboard layer: view state, Rich rendering and the interactive loop."""

from .state import ExpandedCell, ViewState, ViewStateController

__all__ = ["ExpandedCell", "ViewState", "ViewStateController"]
