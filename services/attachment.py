"""
Attachment resolution for connector endpoints.

An endpoint lying inside a shape's bounding box (edges included) is
attached to that shape and snapped to the shape's anchor point. Shapes
are tested in store order and the first match wins for each endpoint;
the two endpoints are resolved independently.

Resolution is idempotent: resolving an already resolved line against
unchanged shapes returns an equal line.
"""

import logging
from typing import Iterable, Optional

from models import ConnectorLine, ShapeModel, Attachment, FREE, START, END
from .geometry import GeometryProvider, ModelGeometry, contains_point, anchor_of

logger = logging.getLogger(__name__)


class AttachmentResolver:
    """
    Computes endpoint attachments and snapped coordinates for lines.

    Bounding boxes come from a GeometryProvider (the stored model by
    default). Shapes the provider cannot measure are skipped.
    """

    def __init__(self, geometry: Optional[GeometryProvider] = None):
        self.geometry = geometry or ModelGeometry()

    def resolve(self, line: ConnectorLine, shapes: Iterable[ShapeModel]) -> ConnectorLine:
        """Resolve both endpoints of a line."""
        shapes = tuple(shapes)
        line = self.resolve_endpoint(line, START, shapes)
        return self.resolve_endpoint(line, END, shapes)

    def resolve_endpoint(
        self,
        line: ConnectorLine,
        index: int,
        shapes: Iterable[ShapeModel],
    ) -> ConnectorLine:
        """
        Re-evaluate one endpoint against all shapes.

        An endpoint already attached to a shape, sitting exactly on that
        shape's anchor while still inside its box, keeps the attachment
        even if an earlier shape also covers the anchor.
        """
        shapes = tuple(shapes)
        point = line.endpoint(index)

        current = line.attachment(index)
        if current.is_attached:
            kept = self._keep_current(line, index, current, shapes)
            if kept is not None:
                return kept

        for shape in shapes:
            box = self.geometry.bounding_box(shape)
            if box is None:
                continue
            if contains_point(box, point.x, point.y):
                anchor = anchor_of(shape, box)
                logger.debug(
                    f"Line {line.id} endpoint {index} attached to {shape.id} "
                    f"at {anchor.to_tuple()}"
                )
                return (line
                        .with_endpoint(index, anchor.x, anchor.y)
                        .with_attachment(index, Attachment.to(shape.id)))

        if current.is_attached:
            logger.debug(f"Line {line.id} endpoint {index} detached from {current.shape_id}")
        return line.with_attachment(index, FREE)

    def _keep_current(self, line, index, current, shapes) -> Optional[ConnectorLine]:
        shape = _find(shapes, current.shape_id)
        if shape is None:
            return None
        box = self.geometry.bounding_box(shape)
        if box is None:
            return None
        point = line.endpoint(index)
        if point == anchor_of(shape, box) and contains_point(box, point.x, point.y):
            return line
        return None

    def reanchor(self, line: ConnectorLine, shapes: Iterable[ShapeModel]) -> ConnectorLine:
        """
        Move attached endpoints onto their shapes' current anchors.

        Endpoints whose shape is missing or cannot be measured become
        free and stay where they are.
        """
        shapes = tuple(shapes)
        for index in (START, END):
            current = line.attachment(index)
            if current.is_free:
                continue
            shape = _find(shapes, current.shape_id)
            box = self.geometry.bounding_box(shape) if shape is not None else None
            if box is None:
                line = line.with_attachment(index, FREE)
                continue
            anchor = anchor_of(shape, box)
            line = line.with_endpoint(index, anchor.x, anchor.y)
        return line


def _find(shapes, shape_id: str) -> Optional[ShapeModel]:
    for shape in shapes:
        if shape.id == shape_id:
            return shape
    return None
