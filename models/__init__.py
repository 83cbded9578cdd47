"""
Models package.

This package contains the data models of the diagram editor:
- Shapes (RectangleShape, CircleShape, StarShape, TriangleShape)
- Connector lines and endpoint attachments
- Value types (Position, BoundingBox) and enums (ShapeKind, Tool)
"""

from .diagram import (
    ShapeKind,
    Tool,
    Position,
    BoundingBox,
    ShapeModel,
    RectangleShape,
    CircleShape,
    StarShape,
    TriangleShape,
    SHAPE_CLASSES,
    DEFAULT_FILLS,
    create_shape,
    Attachment,
    FREE,
    START,
    END,
    ConnectorLine,
)


__all__ = [
    "ShapeKind",
    "Tool",
    "Position",
    "BoundingBox",
    "ShapeModel",
    "RectangleShape",
    "CircleShape",
    "StarShape",
    "TriangleShape",
    "SHAPE_CLASSES",
    "DEFAULT_FILLS",
    "create_shape",
    "Attachment",
    "FREE",
    "START",
    "END",
    "ConnectorLine",
]
