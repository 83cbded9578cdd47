"""
Unit tests for diagram model classes.

Tests:
- Shape creation and defaults per kind
- Attachment values
- ConnectorLine endpoint updates and derived draggable flag
"""

import pytest
from dataclasses import FrozenInstanceError

from models.diagram import (
    ShapeKind, Position, BoundingBox, RectangleShape, CircleShape, StarShape,
    TriangleShape, create_shape, Attachment, FREE, START, END, ConnectorLine,
)


class TestShapes:
    """Tests for shape records."""

    def test_create_rectangle_defaults(self):
        shape = create_shape(ShapeKind.RECTANGLE, 10, 20)
        assert isinstance(shape, RectangleShape)
        assert shape.kind == ShapeKind.RECTANGLE
        assert shape.position == Position(10, 20)
        assert (shape.width, shape.height) == (100.0, 100.0)
        assert shape.fill == "red"
        assert shape.is_dragging is False

    def test_create_each_kind(self):
        assert isinstance(create_shape(ShapeKind.CIRCLE, 0, 0), CircleShape)
        assert isinstance(create_shape(ShapeKind.STAR, 0, 0), StarShape)
        assert isinstance(create_shape(ShapeKind.TRIANGLE, 0, 0), TriangleShape)

    def test_star_defaults(self):
        star = create_shape(ShapeKind.STAR, 0, 0)
        assert star.num_points == 5
        assert star.inner_radius == 20.0
        assert star.outer_radius == 50.0
        assert star.fill == "blue"

    def test_generated_ids_are_prefixed_and_unique(self):
        a = create_shape(ShapeKind.CIRCLE, 0, 0)
        b = create_shape(ShapeKind.CIRCLE, 0, 0)
        assert a.id.startswith("circle-")
        assert a.id != b.id

    def test_explicit_geometry_and_id(self):
        shape = create_shape(ShapeKind.CIRCLE, 1, 2, shape_id="c", fill="pink", radius=7)
        assert shape.id == "c"
        assert shape.fill == "pink"
        assert shape.radius == 7

    def test_shapes_are_immutable(self, rect):
        with pytest.raises(FrozenInstanceError):
            rect.width = 5

    def test_moved_to_returns_new_record(self, rect):
        moved = rect.moved_to(1, 2)
        assert moved.position == Position(1, 2)
        assert rect.position == Position(100, 100)
        assert moved.id == rect.id

    def test_with_dragging(self, circle):
        assert circle.with_dragging(True).is_dragging is True
        assert circle.is_dragging is False


class TestBoundingBox:
    def test_edges_and_center(self):
        box = BoundingBox(10, 20, 30, 40)
        assert box.right == 40
        assert box.bottom == 60
        assert box.center == Position(25, 40)


class TestAttachment:
    def test_free(self):
        assert FREE.is_free
        assert not FREE.is_attached

    def test_attached(self):
        att = Attachment.to("rect1")
        assert att.is_attached
        assert att.shape_id == "rect1"
        assert att == Attachment("rect1")


class TestConnectorLine:
    """Tests for ConnectorLine."""

    def test_starting_at_is_zero_length_and_draggable(self):
        line = ConnectorLine.starting_at(5, 6)
        assert line.points == (5, 6, 5, 6)
        assert line.id.startswith("line-")
        assert line.draggable is True

    def test_draggable_requires_both_endpoints_free(self):
        line = ConnectorLine(id="l", points=(0, 0, 1, 1))
        assert line.with_attachment(START, Attachment.to("a")).draggable is False
        assert line.with_attachment(END, Attachment.to("a")).draggable is False
        both = line.with_attachment(START, Attachment.to("a")).with_attachment(END, Attachment.to("b"))
        assert both.draggable is False
        assert both.with_attachment(START, FREE).with_attachment(END, FREE).draggable is True

    def test_with_endpoint(self):
        line = ConnectorLine(id="l", points=(0, 0, 1, 1))
        assert line.with_endpoint(START, 7, 8).points == (7, 8, 1, 1)
        assert line.with_endpoint(END, 7, 8).points == (0, 0, 7, 8)

    def test_endpoint_accessors(self):
        line = ConnectorLine(id="l", points=(1, 2, 3, 4))
        assert line.endpoint(START) == Position(1, 2)
        assert line.endpoint(END) == Position(3, 4)

    def test_invalid_endpoint_index(self):
        line = ConnectorLine(id="l", points=(0, 0, 1, 1))
        with pytest.raises(ValueError):
            line.with_endpoint(2, 0, 0)
        with pytest.raises(ValueError):
            line.attachment(-1)

    def test_translated(self):
        line = ConnectorLine(id="l", points=(0, 0, 50, 50))
        assert line.translated(10, 10).points == (10, 10, 60, 60)

    def test_offset_defaults_to_zero(self):
        line = ConnectorLine(id="l", points=(0, 0, 1, 1))
        assert line.offset == Position(0, 0)
        assert line.with_offset(3, 4).offset == Position(3, 4)

    def test_is_attached_to(self):
        line = ConnectorLine(id="l", points=(0, 0, 1, 1)).with_attachment(END, Attachment.to("s"))
        assert line.is_attached_to("s")
        assert not line.is_attached_to("other")
