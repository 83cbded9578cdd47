"""
Main application window.

Assembles the tool bar and diagram canvas and wires them to the scene
store and interaction controller.
"""

from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import QMainWindow, QLabel, QStatusBar

from models import Tool, ShapeKind
from services import SceneStore, AttachmentResolver, InteractionController, get_settings
from views.diagram_canvas import DiagramCanvas
from views.tool_bar import DiagramToolBar


class MainWindow(QMainWindow):
    """
    Main application window for the diagram editor.

    Layout:
    ┌─────────────────────────────────────────────┐
    │  Toolbar: [Hand] [Cursor] [Shape ▾] [Line]  │
    ├─────────────────────────────────────────────┤
    │                                             │
    │               Diagram Canvas                │
    │                                             │
    ├─────────────────────────────────────────────┤
    │  Status Bar                                 │
    └─────────────────────────────────────────────┘
    """

    def __init__(self):
        super().__init__()

        # Settings manager (JSON file based)
        self.settings_manager = get_settings()
        settings = self.settings_manager.settings

        # Scene state
        self.store = SceneStore()
        self.resolver = AttachmentResolver()
        self.controller = InteractionController(self.store, self.resolver, settings)

        # Setup
        self._setup_window()
        self._setup_menu()
        self._setup_toolbar()
        self._setup_central_widget()
        self._setup_status_bar()
        self._connect_signals()

        # Restore window geometry
        self._load_window_settings()

    def _load_window_settings(self):
        """Restore window geometry and state."""
        geometry, state = self.settings_manager.get_window_geometry()
        if geometry:
            self.restoreGeometry(geometry)
        if state:
            self.restoreState(state)

    def _save_window_settings(self):
        """Save window geometry and state."""
        self.settings_manager.save_window_geometry(
            self.saveGeometry(),
            self.saveState()
        )

    def closeEvent(self, event):
        """Handle window close - save settings."""
        self._save_window_settings()
        super().closeEvent(event)

    def _setup_window(self):
        """Configure window properties."""
        self.setWindowTitle("ShapeLink")
        self.setMinimumSize(800, 600)
        self.resize(1200, 800)

    def _setup_menu(self):
        """Create menu bar."""
        menubar = self.menuBar()

        # File menu
        file_menu = menubar.addMenu("&File")

        exit_action = QAction("E&xit", self)
        exit_action.setShortcut(QKeySequence.StandardKey.Quit)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        # Edit menu
        edit_menu = menubar.addMenu("&Edit")

        self._follow_action = QAction("&Lines Follow Moved Shapes", self)
        self._follow_action.setCheckable(True)
        self._follow_action.setChecked(self.settings_manager.follow_attached_shapes)
        self._follow_action.toggled.connect(self._on_toggle_follow)
        edit_menu.addAction(self._follow_action)

        # View menu
        view_menu = menubar.addMenu("&View")

        fit_action = QAction("&Fit to Contents", self)
        fit_action.setShortcut("Ctrl+0")
        fit_action.triggered.connect(lambda: self.canvas.fit_contents())
        view_menu.addAction(fit_action)

        reset_view_action = QAction("&Reset View", self)
        reset_view_action.setShortcut("Ctrl+R")
        reset_view_action.triggered.connect(lambda: self.canvas.reset_view())
        view_menu.addAction(reset_view_action)

    def _setup_toolbar(self):
        self.toolbar = DiagramToolBar(self)
        self.addToolBar(self.toolbar)

    def _setup_central_widget(self):
        self.canvas = DiagramCanvas(self.store, self.controller)
        self.setCentralWidget(self.canvas)
        self.toolbar.set_active_tool(self.controller.tool)

    def _setup_status_bar(self):
        status_bar = QStatusBar()
        self.setStatusBar(status_bar)
        self._counts_label = QLabel()
        status_bar.addPermanentWidget(self._counts_label)
        self._update_status()

    def _connect_signals(self):
        self.toolbar.toolSelected.connect(self._on_tool_selected)
        self.toolbar.shapeKindSelected.connect(self._on_shape_kind_selected)
        self.canvas.diagram_scene.contentsChanged.connect(self._update_status)

    def _on_tool_selected(self, tool: Tool):
        self.canvas.set_tool(tool)
        self._update_status()

    def _on_shape_kind_selected(self, kind: ShapeKind):
        self.controller.select_shape_kind(kind)

    def _on_toggle_follow(self, checked: bool):
        self.settings_manager.follow_attached_shapes = checked

    def _update_status(self):
        """Show active tool and item counts."""
        tool = self.controller.tool.value.capitalize()
        if self.controller.tool == Tool.SHAPE and self.controller.selected_shape_kind:
            tool = f"{tool} ({self.controller.selected_shape_kind.value})"
        shapes = len(self.store.list_shapes())
        lines = len(self.store.list_lines())
        self._counts_label.setText(f"{tool}  |  {shapes} shapes, {lines} lines")
