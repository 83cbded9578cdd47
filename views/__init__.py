"""Views package."""

from .diagram_canvas import DiagramCanvas, DiagramScene
from .tool_bar import DiagramToolBar
from .main_window import MainWindow

__all__ = [
    "DiagramCanvas",
    "DiagramScene",
    "DiagramToolBar",
    "MainWindow",
]
