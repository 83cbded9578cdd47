"""
Diagram data models.

These models describe the shapes and connector lines placed on the
drawing surface. Records are immutable: every update produces a
replacement object, so a renderer holding an older snapshot never sees
a half-updated shape or line.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, ClassVar
import uuid


class ShapeKind(Enum):
    """Shape variants available in the palette."""
    RECTANGLE = "rectangle"
    CIRCLE = "circle"
    STAR = "star"
    TRIANGLE = "triangle"


class Tool(Enum):
    """
    Active editing tool.

    - HAND: pan the canvas (handled by the canvas widget)
    - CURSOR: drag shapes, lines and line endpoints
    - SHAPE: click to place a shape of the selected kind
    - LINE: press and drag to draw a connector
    """
    HAND = "hand"
    CURSOR = "cursor"
    SHAPE = "shape"
    LINE = "line"


def _short_id() -> str:
    return uuid.uuid4().hex[:8]


@dataclass(frozen=True)
class Position:
    """2D position in scene coordinates."""
    x: float = 0.0
    y: float = 0.0

    def to_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)

    def translated(self, dx: float, dy: float) -> "Position":
        return Position(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box with its origin at the top-left corner."""
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Position:
        return Position(self.x + self.width / 2, self.y + self.height / 2)


@dataclass(frozen=True)
class ShapeModel:
    """
    Common fields of every shape.

    Only the concrete variants below are placed in a diagram; each one
    carries just the geometry its kind needs. ``position`` is the
    top-left corner for rectangles and the center for every other kind.
    """
    KIND: ClassVar[Optional[ShapeKind]] = None

    id: str
    position: Position
    fill: str = "gray"
    is_dragging: bool = False

    @property
    def kind(self) -> ShapeKind:
        return self.KIND

    def moved_to(self, x: float, y: float) -> "ShapeModel":
        return replace(self, position=Position(x, y))

    def with_dragging(self, dragging: bool) -> "ShapeModel":
        return replace(self, is_dragging=dragging)


@dataclass(frozen=True)
class RectangleShape(ShapeModel):
    KIND: ClassVar[ShapeKind] = ShapeKind.RECTANGLE

    width: float = 100.0
    height: float = 100.0


@dataclass(frozen=True)
class CircleShape(ShapeModel):
    KIND: ClassVar[ShapeKind] = ShapeKind.CIRCLE

    radius: float = 50.0


@dataclass(frozen=True)
class StarShape(ShapeModel):
    KIND: ClassVar[ShapeKind] = ShapeKind.STAR

    num_points: int = 5
    inner_radius: float = 20.0
    outer_radius: float = 50.0


@dataclass(frozen=True)
class TriangleShape(ShapeModel):
    """Regular triangle with its apex pointing up."""
    KIND: ClassVar[ShapeKind] = ShapeKind.TRIANGLE

    radius: float = 50.0  # Circumradius


SHAPE_CLASSES = {
    ShapeKind.RECTANGLE: RectangleShape,
    ShapeKind.CIRCLE: CircleShape,
    ShapeKind.STAR: StarShape,
    ShapeKind.TRIANGLE: TriangleShape,
}

# Fill colors per kind
DEFAULT_FILLS = {
    ShapeKind.RECTANGLE: "red",
    ShapeKind.CIRCLE: "green",
    ShapeKind.STAR: "blue",
    ShapeKind.TRIANGLE: "orange",
}


def create_shape(
    kind: ShapeKind,
    x: float,
    y: float,
    shape_id: Optional[str] = None,
    fill: Optional[str] = None,
    **geometry,
) -> ShapeModel:
    """
    Create a new shape of the given kind at (x, y).

    Args:
        kind: Shape variant to create
        x, y: Position (top-left for rectangles, center otherwise)
        shape_id: Explicit id, or None to generate "<kind>-<hex>"
        fill: Fill color, or None for the kind's default
        **geometry: Kind-specific size fields (width, radius, ...)
    """
    cls = SHAPE_CLASSES[kind]
    return cls(
        id=shape_id or f"{kind.value}-{_short_id()}",
        position=Position(x, y),
        fill=fill or DEFAULT_FILLS[kind],
        **geometry,
    )


@dataclass(frozen=True)
class Attachment:
    """
    Binding of a connector endpoint to a shape.

    An attachment with no shape id is a free endpoint.
    """
    shape_id: Optional[str] = None

    @property
    def is_attached(self) -> bool:
        return self.shape_id is not None

    @property
    def is_free(self) -> bool:
        return self.shape_id is None

    @classmethod
    def to(cls, shape_id: str) -> "Attachment":
        return cls(shape_id=shape_id)


FREE = Attachment()

START = 0
END = 1


@dataclass(frozen=True)
class ConnectorLine:
    """
    A straight connector between two endpoints.

    ``points`` is (x1, y1, x2, y2) in scene coordinates. ``offset`` is
    the rendered translation applied while the whole line is being
    dragged; it is folded back into ``points`` when the drag ends.
    """
    id: str
    points: tuple[float, float, float, float]
    start_attachment: Attachment = FREE
    end_attachment: Attachment = FREE
    offset: Position = field(default_factory=Position)
    stroke: str = "black"
    stroke_width: float = 5.0

    @classmethod
    def starting_at(cls, x: float, y: float, line_id: Optional[str] = None, **style) -> "ConnectorLine":
        """Create a zero-length line at (x, y), the state at the start of drawing."""
        return cls(id=line_id or f"line-{_short_id()}", points=(x, y, x, y), **style)

    @property
    def draggable(self) -> bool:
        """The whole line moves only while neither endpoint is attached."""
        return self.start_attachment.is_free and self.end_attachment.is_free

    @property
    def start(self) -> Position:
        return Position(self.points[0], self.points[1])

    @property
    def end(self) -> Position:
        return Position(self.points[2], self.points[3])

    def endpoint(self, index: int) -> Position:
        _check_index(index)
        return self.start if index == START else self.end

    def attachment(self, index: int) -> Attachment:
        _check_index(index)
        return self.start_attachment if index == START else self.end_attachment

    def with_endpoint(self, index: int, x: float, y: float) -> "ConnectorLine":
        _check_index(index)
        if index == START:
            points = (x, y, self.points[2], self.points[3])
        else:
            points = (self.points[0], self.points[1], x, y)
        return replace(self, points=points)

    def with_attachment(self, index: int, attachment: Attachment) -> "ConnectorLine":
        _check_index(index)
        if index == START:
            return replace(self, start_attachment=attachment)
        return replace(self, end_attachment=attachment)

    def with_offset(self, dx: float, dy: float) -> "ConnectorLine":
        return replace(self, offset=Position(dx, dy))

    def translated(self, dx: float, dy: float) -> "ConnectorLine":
        x1, y1, x2, y2 = self.points
        return replace(self, points=(x1 + dx, y1 + dy, x2 + dx, y2 + dy))

    def is_attached_to(self, shape_id: str) -> bool:
        return (self.start_attachment.shape_id == shape_id or
                self.end_attachment.shape_id == shape_id)


def _check_index(index: int):
    if index not in (START, END):
        raise ValueError(f"Endpoint index must be 0 or 1, got {index!r}")
