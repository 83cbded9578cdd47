"""
Geometry helpers for shapes and connectors.

Containment uses closed intervals: a point on the edge of a box is
inside it. Bounding boxes are tight around the drawn outline of each
shape kind.
"""

import math
from typing import List, Optional

from models import (
    Position, BoundingBox, ShapeModel,
    RectangleShape, CircleShape, StarShape, TriangleShape,
)


def contains_point(box: BoundingBox, x: float, y: float) -> bool:
    """Return whether (x, y) lies inside or on the edge of the box."""
    return box.x <= x <= box.x + box.width and box.y <= y <= box.y + box.height


def star_vertices(center: Position, num_points: int, inner_radius: float,
                  outer_radius: float) -> List[Position]:
    """
    Outline of a star, outer and inner points alternating.

    The first outer point sits straight above the center.
    """
    vertices = []
    step = math.pi / num_points
    for i in range(num_points * 2):
        radius = outer_radius if i % 2 == 0 else inner_radius
        angle = -math.pi / 2 + i * step
        vertices.append(Position(
            center.x + math.cos(angle) * radius,
            center.y + math.sin(angle) * radius,
        ))
    return vertices


def triangle_vertices(center: Position, radius: float) -> List[Position]:
    """Vertices of a regular triangle with its apex pointing up."""
    vertices = []
    for i in range(3):
        angle = -math.pi / 2 + i * 2 * math.pi / 3
        vertices.append(Position(
            center.x + math.cos(angle) * radius,
            center.y + math.sin(angle) * radius,
        ))
    return vertices


def polygon_bounds(vertices: List[Position]) -> BoundingBox:
    """Tight box around a list of vertices."""
    xs = [v.x for v in vertices]
    ys = [v.y for v in vertices]
    return BoundingBox(min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))


def outline_of(shape: ShapeModel) -> List[Position]:
    """Polygon outline for star and triangle shapes."""
    if isinstance(shape, StarShape):
        return star_vertices(shape.position, shape.num_points,
                             shape.inner_radius, shape.outer_radius)
    if isinstance(shape, TriangleShape):
        return triangle_vertices(shape.position, shape.radius)
    raise TypeError(f"{type(shape).__name__} has no polygon outline")


def bounding_box_of(shape: ShapeModel) -> BoundingBox:
    """Bounding box of a shape in scene coordinates."""
    if isinstance(shape, RectangleShape):
        return BoundingBox(shape.position.x, shape.position.y, shape.width, shape.height)
    if isinstance(shape, CircleShape):
        r = shape.radius
        return BoundingBox(shape.position.x - r, shape.position.y - r, 2 * r, 2 * r)
    if isinstance(shape, (StarShape, TriangleShape)):
        return polygon_bounds(outline_of(shape))
    raise TypeError(f"Unknown shape record: {type(shape).__name__}")


def anchor_of(shape: ShapeModel, box: Optional[BoundingBox] = None) -> Position:
    """
    Point that attached connector endpoints snap to.

    Rectangles use the center of their bounding box (``box`` if given,
    otherwise the box computed from the model). Every other kind is
    positioned by its center already.
    """
    if isinstance(shape, RectangleShape):
        if box is None:
            box = bounding_box_of(shape)
        return box.center
    if isinstance(shape, (CircleShape, StarShape, TriangleShape)):
        return shape.position
    raise TypeError(f"Unknown shape record: {type(shape).__name__}")


def point_in_polygon(x: float, y: float, vertices: List[Position]) -> bool:
    """Even-odd rule test; works for the concave star outline."""
    inside = False
    j = len(vertices) - 1
    for i in range(len(vertices)):
        vi, vj = vertices[i], vertices[j]
        if (vi.y > y) != (vj.y > y):
            cross_x = vi.x + (y - vi.y) * (vj.x - vi.x) / (vj.y - vi.y)
            if x < cross_x:
                inside = not inside
        j = i
    return inside


def shape_contains_point(shape: ShapeModel, x: float, y: float) -> bool:
    """Whether (x, y) is on the drawn area of the shape (used for picking)."""
    if isinstance(shape, RectangleShape):
        return contains_point(bounding_box_of(shape), x, y)
    if isinstance(shape, CircleShape):
        return math.hypot(x - shape.position.x, y - shape.position.y) <= shape.radius
    if isinstance(shape, (StarShape, TriangleShape)):
        return point_in_polygon(x, y, outline_of(shape))
    raise TypeError(f"Unknown shape record: {type(shape).__name__}")


def distance_to_segment(px: float, py: float,
                        x1: float, y1: float, x2: float, y2: float) -> float:
    """Shortest distance from a point to the segment (x1, y1)-(x2, y2)."""
    dx = x2 - x1
    dy = y2 - y1
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return math.hypot(px - x1, py - y1)
    t = ((px - x1) * dx + (py - y1) * dy) / length_sq
    t = max(0.0, min(1.0, t))
    return math.hypot(px - (x1 + t * dx), py - (y1 + t * dy))


class GeometryProvider:
    """
    Source of shape bounding boxes for attachment resolution.

    Subclasses may measure rendered items instead of the stored model.
    Return None when a shape can no longer be measured; the resolver
    then skips it.
    """

    def bounding_box(self, shape: ShapeModel) -> Optional[BoundingBox]:
        raise NotImplementedError


class ModelGeometry(GeometryProvider):
    """Bounding boxes computed from the stored shape fields."""

    def bounding_box(self, shape: ShapeModel) -> Optional[BoundingBox]:
        return bounding_box_of(shape)
