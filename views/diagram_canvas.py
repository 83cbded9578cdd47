"""
Diagram canvas for visual shape and connector editing.

Uses Qt's Graphics View Framework for rendering. The scene is a view of
the SceneStore: it is rebuilt whenever the store changes, and all mouse
gestures are forwarded to the InteractionController in scene
coordinates (pan and zoom are handled here, by the view).
"""

import logging
from typing import Optional
from PyQt6.QtCore import Qt, QPointF, QRectF, QLineF, pyqtSignal
from PyQt6.QtGui import (
    QPainter, QPen, QBrush, QColor, QPolygonF, QWheelEvent, QMouseEvent,
)
from PyQt6.QtWidgets import (
    QGraphicsView, QGraphicsScene, QGraphicsItem,
    QGraphicsRectItem, QGraphicsEllipseItem, QGraphicsPolygonItem, QGraphicsLineItem,
)

from models import (
    Tool, ShapeModel, RectangleShape, CircleShape, StarShape, TriangleShape,
    ConnectorLine, START, END,
)
from services import InteractionController, SceneStore, outline_of
from services.settings_manager import AppSettings

# Setup logger for this module
logger = logging.getLogger(__name__)


# Color scheme
COLORS = {
    "grid": QColor("#E5E7EB"),             # Light gray
    "background": QColor("#FAFAFA"),       # Off-white
    "handle": QColor("#9CA3AF"),           # Gray
}

CURSORS = {
    "grab": Qt.CursorShape.OpenHandCursor,
    "grabbing": Qt.CursorShape.ClosedHandCursor,
    "default": Qt.CursorShape.ArrowCursor,
    "cell": Qt.CursorShape.PointingHandCursor,
    "crosshair": Qt.CursorShape.CrossCursor,
}


def _shape_item(shape: ShapeModel) -> QGraphicsItem:
    """Create the graphics item for a shape."""
    if isinstance(shape, RectangleShape):
        item = QGraphicsRectItem(shape.position.x, shape.position.y, shape.width, shape.height)
    elif isinstance(shape, CircleShape):
        r = shape.radius
        item = QGraphicsEllipseItem(shape.position.x - r, shape.position.y - r, 2 * r, 2 * r)
    elif isinstance(shape, (StarShape, TriangleShape)):
        polygon = QPolygonF([QPointF(v.x, v.y) for v in outline_of(shape)])
        item = QGraphicsPolygonItem(polygon)
    else:
        raise TypeError(f"Unknown shape record: {type(shape).__name__}")

    item.setBrush(QBrush(QColor(shape.fill)))
    # No outline, so the drawn extent matches the model bounding box
    item.setPen(QPen(Qt.PenStyle.NoPen))
    if shape.is_dragging:
        item.setOpacity(0.7)
    return item


class DiagramScene(QGraphicsScene):
    """
    Scene showing the contents of a SceneStore.

    Lines are drawn above shapes; free endpoints get a small handle.
    """

    # Signals
    contentsChanged = pyqtSignal()

    def __init__(self, store: SceneStore, controller: InteractionController, parent=None):
        super().__init__(parent)
        self.store = store
        self.controller = controller

        self.setBackgroundBrush(COLORS["background"])
        self.setSceneRect(QRectF(-2000, -2000, 4000, 4000))

        self.store.subscribe(self._on_store_changed)
        self.rebuild()

    def _on_store_changed(self, store: SceneStore):
        self.rebuild()

    def rebuild(self):
        """Recreate all items from the current store snapshot."""
        self.clear()

        for shape in self.store.list_shapes():
            self.addItem(_shape_item(shape))

        lines = list(self.store.list_lines())
        pending = self.controller.pending_line
        if pending is not None:
            lines.append(pending)

        handle_radius = self.controller.settings.connectors.handle_radius
        for line in lines:
            self._add_line(line, handle_radius)

        self.contentsChanged.emit()

    def _add_line(self, line: ConnectorLine, handle_radius: float):
        ox, oy = line.offset.x, line.offset.y
        x1, y1, x2, y2 = line.points
        item = QGraphicsLineItem(QLineF(x1 + ox, y1 + oy, x2 + ox, y2 + oy))
        pen = QPen(QColor(line.stroke), line.stroke_width)
        pen.setCapStyle(Qt.PenCapStyle.RoundCap)
        pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
        item.setPen(pen)
        item.setZValue(1)  # Above shapes
        self.addItem(item)

        for index in (START, END):
            if line.attachment(index).is_attached:
                continue
            point = line.endpoint(index)
            handle = QGraphicsEllipseItem(
                point.x + ox - handle_radius, point.y + oy - handle_radius,
                handle_radius * 2, handle_radius * 2,
            )
            handle.setBrush(QBrush(Qt.GlobalColor.transparent))
            handle.setPen(QPen(COLORS["handle"], 1))
            handle.setZValue(2)
            self.addItem(handle)


class DiagramCanvas(QGraphicsView):
    """
    Main canvas widget for viewing and editing the diagram.

    Provides zooming, panning (hand tool), and forwards left-button
    gestures to the interaction controller.
    """

    def __init__(self, store: SceneStore, controller: InteractionController,
                 settings: Optional[AppSettings] = None, parent=None):
        super().__init__(parent)
        self.controller = controller
        self.settings = settings or controller.settings

        # Create scene
        self.diagram_scene = DiagramScene(store, controller)
        self.setScene(self.diagram_scene)

        # View settings
        self.setRenderHint(QPainter.RenderHint.Antialiasing)
        self.setViewportUpdateMode(QGraphicsView.ViewportUpdateMode.FullViewportUpdate)
        self.setTransformationAnchor(QGraphicsView.ViewportAnchor.AnchorUnderMouse)
        self.setResizeAnchor(QGraphicsView.ViewportAnchor.AnchorViewCenter)

        # State
        self._zoom_factor = 1.0

        self.set_tool(controller.tool)

    def set_tool(self, tool: Tool):
        """Activate a tool on the controller and adjust the view mode."""
        self.controller.set_tool(tool)
        if tool == Tool.HAND:
            self.setDragMode(QGraphicsView.DragMode.ScrollHandDrag)
        else:
            self.setDragMode(QGraphicsView.DragMode.NoDrag)
        self._update_cursor()

    def _update_cursor(self):
        shape = CURSORS.get(self.controller.cursor_style, Qt.CursorShape.ArrowCursor)
        self.viewport().setCursor(shape)

    def drawBackground(self, painter: QPainter, rect: QRectF):
        """Draw grid background."""
        super().drawBackground(painter, rect)

        if not self.settings.ui.show_grid:
            return

        grid_size = self.settings.ui.grid_size

        left = int(rect.left()) - (int(rect.left()) % grid_size)
        top = int(rect.top()) - (int(rect.top()) % grid_size)

        painter.setPen(QPen(COLORS["grid"], 1))

        # Vertical lines
        x = left
        while x < rect.right():
            painter.drawLine(int(x), int(rect.top()), int(x), int(rect.bottom()))
            x += grid_size

        # Horizontal lines
        y = top
        while y < rect.bottom():
            painter.drawLine(int(rect.left()), int(y), int(rect.right()), int(y))
            y += grid_size

    def wheelEvent(self, event: QWheelEvent):
        """Handle zoom with mouse wheel."""
        factor = 1.15

        if event.angleDelta().y() > 0:
            if self._zoom_factor * factor > 5:
                return
            self._zoom_factor *= factor
            self.scale(factor, factor)
        else:
            if self._zoom_factor / factor < 0.1:
                return
            self._zoom_factor /= factor
            self.scale(1 / factor, 1 / factor)

    def mousePressEvent(self, event: QMouseEvent):
        """Handle mouse press."""
        if event.button() != Qt.MouseButton.LeftButton:
            super().mousePressEvent(event)
            return

        if self.controller.tool == Tool.HAND:
            self.controller.canvas_drag_started()
            self._update_cursor()
            super().mousePressEvent(event)
            return

        scene_pos = self.mapToScene(event.position().toPoint())
        self.controller.pointer_down(scene_pos.x(), scene_pos.y())
        self.diagram_scene.rebuild()
        event.accept()

    def mouseMoveEvent(self, event: QMouseEvent):
        """Handle mouse move."""
        if self.controller.tool == Tool.HAND or self.controller.is_idle:
            super().mouseMoveEvent(event)
            return

        scene_pos = self.mapToScene(event.position().toPoint())
        self.controller.pointer_move(scene_pos.x(), scene_pos.y())
        self.diagram_scene.rebuild()
        event.accept()

    def mouseReleaseEvent(self, event: QMouseEvent):
        """Handle mouse release."""
        if event.button() != Qt.MouseButton.LeftButton:
            super().mouseReleaseEvent(event)
            return

        if self.controller.tool == Tool.HAND:
            self.controller.canvas_drag_finished()
            super().mouseReleaseEvent(event)
            self._update_cursor()
            return

        scene_pos = self.mapToScene(event.position().toPoint())
        self.controller.pointer_up(scene_pos.x(), scene_pos.y())
        self.diagram_scene.rebuild()
        event.accept()

    def fit_contents(self):
        """Fit view to show all items."""
        self.fitInView(self.diagram_scene.itemsBoundingRect().adjusted(-50, -50, 50, 50),
                       Qt.AspectRatioMode.KeepAspectRatio)

    def reset_view(self):
        """Reset to default zoom and position."""
        self.resetTransform()
        self._zoom_factor = 1.0
        self.centerOn(0, 0)
