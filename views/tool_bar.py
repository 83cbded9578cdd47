"""
Tool bar for choosing the active editing tool.

Offers Hand, Cursor, Shape (with a drop-down of shape kinds) and Line.
"""

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtGui import QAction, QActionGroup
from PyQt6.QtWidgets import QToolBar, QToolButton, QMenu

from models import Tool, ShapeKind


class DiagramToolBar(QToolBar):
    """Toolbar with one checkable button per tool."""

    toolSelected = pyqtSignal(object)        # Tool
    shapeKindSelected = pyqtSignal(object)   # ShapeKind

    LABELS = {
        Tool.HAND: "✋ Hand",
        Tool.CURSOR: "➤ Cursor",
        Tool.LINE: "Line",
    }

    def __init__(self, parent=None):
        super().__init__("Tools", parent)
        self.setMovable(False)
        self._actions: dict[Tool, QAction] = {}
        self._setup_ui()

    def _setup_ui(self):
        self.setStyleSheet("""
            QToolBar {
                background: #F9FAFB;
                border-bottom: 1px solid #E5E7EB;
                padding: 8px 16px;
                spacing: 8px;
            }
            QToolButton {
                padding: 6px 12px;
                border: 2px solid transparent;
                border-radius: 6px;
                font-size: 13px;
            }
            QToolButton:checked {
                border: 2px solid blue;
            }
        """)

        group = QActionGroup(self)
        group.setExclusive(True)

        for tool in (Tool.HAND, Tool.CURSOR):
            self._add_tool_action(tool, self.LABELS[tool], group)

        # Shape button: clicking activates the tool, the arrow picks a kind
        shape_action = self._add_tool_action(Tool.SHAPE, "Rectangle", group, add=False)
        self._shape_button = QToolButton()
        self._shape_button.setDefaultAction(shape_action)
        self._shape_button.setPopupMode(QToolButton.ToolButtonPopupMode.MenuButtonPopup)

        menu = QMenu(self._shape_button)
        for kind in ShapeKind:
            action = menu.addAction(kind.value.capitalize())
            action.triggered.connect(lambda checked=False, k=kind: self._on_kind_chosen(k))
        self._shape_button.setMenu(menu)
        self.addWidget(self._shape_button)

        self._add_tool_action(Tool.LINE, self.LABELS[Tool.LINE], group)

    def _add_tool_action(self, tool: Tool, label: str, group: QActionGroup, add: bool = True) -> QAction:
        action = QAction(label, self)
        action.setCheckable(True)
        action.triggered.connect(lambda checked=False, t=tool: self.toolSelected.emit(t))
        group.addAction(action)
        if add:
            self.addAction(action)
        self._actions[tool] = action
        return action

    def _on_kind_chosen(self, kind: ShapeKind):
        self._actions[Tool.SHAPE].setText(kind.value.capitalize())
        self._actions[Tool.SHAPE].setChecked(True)
        self.shapeKindSelected.emit(kind)
        self.toolSelected.emit(Tool.SHAPE)

    def set_active_tool(self, tool: Tool):
        """Reflect the active tool without emitting signals."""
        action = self._actions.get(tool)
        if action:
            action.setChecked(True)
