"""
Interaction controller.

A state machine that turns pointer gestures into scene store updates.
Pointer positions arrive in scene coordinates, with any pan/zoom already
applied by the canvas widget.

States:
    Idle
    DrawingLine        - a new connector follows the pointer
    DraggingShape      - a shape follows the pointer
    DraggingWholeLine  - a free line is translated as a whole
    DraggingEndpoint   - one free endpoint follows the pointer

Attachment is resolved only when a gesture ends. Moving a shape does not
move the lines attached to it unless the follow_attached_shapes setting
is on; otherwise those endpoints stay where they are until the line is
resolved again.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Union

from models import (
    Tool, ShapeKind, Position, ConnectorLine, START, END, create_shape,
)
from .attachment import AttachmentResolver
from .geometry import distance_to_segment, shape_contains_point
from .scene_store import SceneStore
from .settings_manager import AppSettings

logger = logging.getLogger(__name__)


class HitKind(Enum):
    """What lies under the pointer."""
    NONE = auto()
    SHAPE = auto()
    LINE = auto()
    ENDPOINT = auto()   # Endpoint handle of a line


@dataclass(frozen=True)
class HitTarget:
    kind: HitKind = HitKind.NONE
    item_id: Optional[str] = None
    endpoint_index: Optional[int] = None


NOTHING = HitTarget()


# ---- States ----

@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class DrawingLine:
    """The line being drawn; it joins the store when the gesture ends."""
    line: ConnectorLine


@dataclass(frozen=True)
class DraggingShape:
    shape_id: str
    grab_dx: float   # Pointer offset from the shape position
    grab_dy: float


@dataclass(frozen=True)
class DraggingWholeLine:
    line_id: str
    origin: Position  # Pointer position at drag start


@dataclass(frozen=True)
class DraggingEndpoint:
    line_id: str
    endpoint_index: int


InteractionState = Union[Idle, DrawingLine, DraggingShape, DraggingWholeLine, DraggingEndpoint]

IDLE = Idle()

# Cursor names per tool
CURSOR_STYLES = {
    Tool.HAND: "grab",
    Tool.CURSOR: "default",
    Tool.SHAPE: "cell",
    Tool.LINE: "crosshair",
}


class InteractionController:
    """
    Routes pointer events to the scene store.

    Call pointer_down(), pointer_move() and pointer_up() in the order the
    host delivers them. A pointer_down while a gesture is already in
    progress is ignored, as is any move or release while idle.
    """

    # Tools under which free endpoint handles can be grabbed
    ENDPOINT_TOOLS = (Tool.CURSOR, Tool.LINE)

    def __init__(
        self,
        store: SceneStore,
        resolver: Optional[AttachmentResolver] = None,
        settings: Optional[AppSettings] = None,
    ):
        self.store = store
        self.resolver = resolver or AttachmentResolver()
        self.settings = settings or AppSettings()

        self._state: InteractionState = IDLE
        self._tool = self.settings.ui.initial_tool
        self._selected_shape_kind: Optional[ShapeKind] = None
        self._is_canvas_dragging = False

    # ---- Tool state ----

    @property
    def state(self) -> InteractionState:
        return self._state

    @property
    def is_idle(self) -> bool:
        return isinstance(self._state, Idle)

    @property
    def tool(self) -> Tool:
        return self._tool

    def set_tool(self, tool: Tool):
        """Activate a tool. The shape tool falls back to rectangles."""
        self._tool = tool
        if tool == Tool.SHAPE and self._selected_shape_kind is None:
            self._selected_shape_kind = ShapeKind.RECTANGLE
        logger.debug(f"Tool set to {tool.value}")

    @property
    def selected_shape_kind(self) -> Optional[ShapeKind]:
        return self._selected_shape_kind

    def select_shape_kind(self, kind: ShapeKind):
        self._selected_shape_kind = kind

    # The canvas widget pans the view itself; only the flag lives here.
    def canvas_drag_started(self):
        self._is_canvas_dragging = True

    def canvas_drag_finished(self):
        self._is_canvas_dragging = False

    @property
    def is_canvas_dragging(self) -> bool:
        return self._is_canvas_dragging

    @property
    def cursor_style(self) -> str:
        if self._tool == Tool.HAND and self._is_canvas_dragging:
            return "grabbing"
        return CURSOR_STYLES.get(self._tool, "default")

    @property
    def pending_line(self) -> Optional[ConnectorLine]:
        """The line currently being drawn, not yet in the store."""
        if isinstance(self._state, DrawingLine):
            return self._state.line
        return None

    # ---- Hit testing ----

    def hit_test(self, x: float, y: float) -> HitTarget:
        """
        Find the topmost target at (x, y).

        Free endpoint handles come first, then lines, then shapes, each
        searched from the most recently added.
        """
        connectors = self.settings.connectors
        lines = self.store.list_lines()

        for line in reversed(lines):
            for index in (END, START):
                if line.attachment(index).is_attached:
                    continue
                point = line.endpoint(index)
                if math.hypot(x - point.x, y - point.y) <= connectors.handle_radius:
                    return HitTarget(HitKind.ENDPOINT, line.id, index)

        for line in reversed(lines):
            reach = line.stroke_width / 2 + connectors.hit_tolerance
            if distance_to_segment(x, y, *line.points) <= reach:
                return HitTarget(HitKind.LINE, line.id)

        for shape in reversed(self.store.list_shapes()):
            if shape_contains_point(shape, x, y):
                return HitTarget(HitKind.SHAPE, shape.id)

        return NOTHING

    # ---- Pointer events ----

    def pointer_down(self, x: float, y: float, target: Optional[HitTarget] = None):
        """
        Start a gesture at (x, y).

        Args:
            x, y: Pointer position in scene coordinates
            target: What the host found under the pointer, or None to
                    use hit_test()
        """
        if not self.is_idle:
            logger.debug(f"Ignoring pointer down while {type(self._state).__name__}")
            return

        tool = self._tool
        if tool == Tool.HAND:
            return
        if tool == Tool.SHAPE:
            self._place_shape(x, y)
            return

        if target is None:
            target = self.hit_test(x, y)

        if target.kind == HitKind.ENDPOINT and tool in self.ENDPOINT_TOOLS:
            if self._begin_endpoint_drag(target):
                return

        if tool == Tool.LINE:
            connectors = self.settings.connectors
            line = ConnectorLine.starting_at(
                x, y, stroke=connectors.stroke, stroke_width=connectors.stroke_width
            )
            self._set_state(DrawingLine(line))
        elif tool == Tool.CURSOR:
            if target.kind == HitKind.SHAPE:
                self._begin_shape_drag(target.item_id, x, y)
            elif target.kind == HitKind.LINE:
                self._begin_line_drag(target.item_id, x, y)

    def pointer_move(self, x: float, y: float):
        state = self._state

        if isinstance(state, DrawingLine):
            self._state = DrawingLine(state.line.with_endpoint(END, x, y))

        elif isinstance(state, DraggingShape):
            self.store.update_shape_position(state.shape_id, x - state.grab_dx, y - state.grab_dy)
            if self.settings.connectors.follow_attached_shapes:
                self._reanchor_lines(state.shape_id)

        elif isinstance(state, DraggingWholeLine):
            dx = x - state.origin.x
            dy = y - state.origin.y
            self.store.update_line(state.line_id, lambda line: line.with_offset(dx, dy))

        elif isinstance(state, DraggingEndpoint):
            index = state.endpoint_index
            self.store.update_line(state.line_id, lambda line: line.with_endpoint(index, x, y))

    def pointer_up(self, x: Optional[float] = None, y: Optional[float] = None):
        """
        Finish the current gesture.

        If a position is given it is applied as a last move first. There
        is no rollback: the gesture commits its last known position.
        """
        if self.is_idle:
            return
        if x is not None and y is not None:
            self.pointer_move(x, y)

        state = self._state
        shapes = self.store.list_shapes()

        if isinstance(state, DrawingLine):
            line = self.resolver.resolve(state.line, shapes)
            self.store.add_line(line)

        elif isinstance(state, DraggingShape):
            self.store.set_dragging(state.shape_id, False)
            if self.settings.connectors.follow_attached_shapes:
                self._reanchor_lines(state.shape_id)

        elif isinstance(state, DraggingWholeLine):
            def bake(line: ConnectorLine) -> ConnectorLine:
                moved = line.translated(line.offset.x, line.offset.y).with_offset(0.0, 0.0)
                return self.resolver.resolve(moved, shapes)
            self.store.update_line(state.line_id, bake)

        elif isinstance(state, DraggingEndpoint):
            index = state.endpoint_index
            self.store.update_line(
                state.line_id,
                lambda line: self.resolver.resolve_endpoint(line, index, shapes),
            )

        self._set_state(IDLE)

    # ---- Helpers ----

    def _set_state(self, state: InteractionState):
        logger.debug(f"{type(self._state).__name__} -> {type(state).__name__}")
        self._state = state

    def _place_shape(self, x: float, y: float):
        kind = self._selected_shape_kind or ShapeKind.RECTANGLE
        defaults = self.settings.shapes
        shape = create_shape(kind, x, y, fill=defaults.fill_for(kind), **defaults.geometry_for(kind))
        self.store.add_shape(shape)

    def _begin_endpoint_drag(self, target: HitTarget) -> bool:
        line = self.store.get_line(target.item_id)
        if line is None or target.endpoint_index not in (START, END):
            return False
        if line.attachment(target.endpoint_index).is_attached:
            return False
        self._set_state(DraggingEndpoint(line.id, target.endpoint_index))
        return True

    def _begin_shape_drag(self, shape_id: str, x: float, y: float):
        shape = self.store.get_shape(shape_id)
        if shape is None:
            return
        self.store.set_dragging(shape_id, True)
        self._set_state(DraggingShape(shape_id, x - shape.position.x, y - shape.position.y))

    def _begin_line_drag(self, line_id: str, x: float, y: float):
        line = self.store.get_line(line_id)
        if line is None or not line.draggable:
            return
        self._set_state(DraggingWholeLine(line_id, Position(x, y)))

    def _reanchor_lines(self, shape_id: str):
        shapes = self.store.list_shapes()
        for line in self.store.lines_attached_to(shape_id):
            self.store.update_line(line.id, lambda l: self.resolver.reanchor(l, shapes))
