"""
Unit tests for attachment resolution.

Tests:
- Snapping endpoints to anchors
- First-listed shape wins for overlapping shapes
- Idempotence and the draggable derivation
- Missing shapes and degenerate lines
- Re-anchoring after a shape moved
"""

import pytest

from models.diagram import (
    ConnectorLine, RectangleShape, CircleShape, Position, Attachment, FREE, START, END,
)
from services.attachment import AttachmentResolver
from services.geometry import GeometryProvider, bounding_box_of


class SkippingGeometry(GeometryProvider):
    """Provider that cannot measure some shapes."""

    def __init__(self, missing):
        self.missing = set(missing)

    def bounding_box(self, shape):
        if shape.id in self.missing:
            return None
        return bounding_box_of(shape)


def make_line(x1, y1, x2, y2, line_id="l1"):
    return ConnectorLine(id=line_id, points=(x1, y1, x2, y2))


class TestResolve:
    """Tests for AttachmentResolver.resolve()."""

    def test_end_inside_rectangle_snaps_to_center(self, resolver, rect):
        line = resolver.resolve(make_line(50, 50, 180, 180), [rect])
        assert line.end_attachment == Attachment.to("rect1")
        assert line.end == Position(150, 150)
        assert line.start_attachment == FREE
        assert line.start == Position(50, 50)
        assert line.draggable is False

    def test_line_outside_everything_stays_free(self, resolver, rect, circle):
        line = resolver.resolve(make_line(0, 0, 50, 50), [rect, circle])
        assert line.points == (0, 0, 50, 50)
        assert line.start_attachment == FREE
        assert line.end_attachment == FREE
        assert line.draggable is True

    def test_both_endpoints_to_different_shapes(self, resolver, rect, circle):
        line = resolver.resolve(make_line(110, 190, 330, 280), [rect, circle])
        assert line.start_attachment == Attachment.to("rect1")
        assert line.end_attachment == Attachment.to("circle1")
        assert line.points == (150, 150, 300, 300)

    def test_both_endpoints_in_same_shape(self, resolver, rect):
        line = resolver.resolve(make_line(101, 101, 199, 199), [rect])
        assert line.start_attachment == line.end_attachment == Attachment.to("rect1")
        assert line.points == (150, 150, 150, 150)

    def test_boundary_point_attaches(self, resolver, rect):
        line = resolver.resolve(make_line(0, 0, 200, 200), [rect])
        assert line.end_attachment == Attachment.to("rect1")

    def test_point_just_outside_does_not_attach(self, resolver, rect):
        line = resolver.resolve(make_line(0, 0, 201, 200), [rect])
        assert line.end_attachment == FREE

    def test_circle_anchor_is_center(self, resolver, circle):
        line = resolver.resolve(make_line(0, 0, 300, 300), [circle])
        assert line.end_attachment == Attachment.to("circle1")
        assert line.end == Position(300, 300)

    def test_circle_box_corner_attaches_to_center(self, resolver, circle):
        # Containment is tested against the bounding box
        line = resolver.resolve(make_line(0, 0, 251, 251), [circle])
        assert line.end == Position(300, 300)

    def test_first_listed_shape_wins(self, resolver):
        a = RectangleShape(id="A", position=Position(0, 0), width=100, height=100)
        b = RectangleShape(id="B", position=Position(50, 50), width=100, height=100)
        line = resolver.resolve(make_line(500, 500, 75, 75), [a, b])
        assert line.end_attachment == Attachment.to("A")
        assert line.end == Position(50, 50)

        line = resolver.resolve(make_line(500, 500, 75, 75), [b, a])
        assert line.end_attachment == Attachment.to("B")
        assert line.end == Position(100, 100)

    def test_endpoints_tie_break_independently(self, resolver):
        a = RectangleShape(id="A", position=Position(0, 0), width=100, height=100)
        b = RectangleShape(id="B", position=Position(50, 50), width=100, height=100)
        line = resolver.resolve(make_line(140, 140, 75, 75), [a, b])
        assert line.start_attachment == Attachment.to("B")
        assert line.end_attachment == Attachment.to("A")

    def test_previous_attachment_cleared_when_moved_off(self, resolver, rect):
        line = make_line(0, 0, 500, 500).with_attachment(END, Attachment.to("rect1"))
        resolved = resolver.resolve(line, [rect])
        assert resolved.end_attachment == FREE
        assert resolved.draggable is True

    def test_degenerate_line_uses_single_point(self, resolver, rect):
        line = resolver.resolve(make_line(120, 120, 120, 120), [rect])
        assert line.start_attachment == line.end_attachment == Attachment.to("rect1")
        assert line.points == (150, 150, 150, 150)

    def test_degenerate_line_outside(self, resolver, rect):
        line = resolver.resolve(make_line(5, 5, 5, 5), [rect])
        assert line.draggable is True
        assert line.points == (5, 5, 5, 5)

    def test_no_shapes(self, resolver):
        line = resolver.resolve(make_line(1, 2, 3, 4), [])
        assert line.draggable is True

    def test_unmeasurable_shape_is_skipped(self, rect):
        resolver = AttachmentResolver(SkippingGeometry(["rect1"]))
        line = resolver.resolve(make_line(0, 0, 150, 150), [rect])
        assert line.end_attachment == FREE
        assert line.end == Position(150, 150)

    def test_unmeasurable_shape_falls_through_to_next(self, rect):
        behind = RectangleShape(id="behind", position=Position(0, 0), width=300, height=300)
        resolver = AttachmentResolver(SkippingGeometry(["rect1"]))
        line = resolver.resolve(make_line(500, 500, 150, 150), [rect, behind])
        assert line.end_attachment == Attachment.to("behind")


class TestIdempotence:
    """resolve(resolve(line)) == resolve(line)."""

    @pytest.mark.parametrize("points", [
        (50, 50, 180, 180),
        (0, 0, 50, 50),
        (110, 190, 330, 280),
        (120, 120, 120, 120),
        (200, 200, 250, 250),
    ])
    def test_resolve_twice(self, resolver, rect, circle, points):
        shapes = [rect, circle]
        once = resolver.resolve(make_line(*points), shapes)
        assert resolver.resolve(once, shapes) == once

    def test_sticky_when_earlier_shape_covers_anchor(self, resolver):
        # A covers B's anchor (150, 150) but not the original endpoint
        a = RectangleShape(id="A", position=Position(0, 0), width=160, height=160)
        b = RectangleShape(id="B", position=Position(100, 100), width=100, height=100)
        once = resolver.resolve(make_line(500, 500, 190, 190), [a, b])
        assert once.end_attachment == Attachment.to("B")
        assert once.end == Position(150, 150)

        assert resolver.resolve(once, [a, b]) == once

    def test_draggable_matches_attachments(self, resolver, rect, circle):
        for points in [(0, 0, 1, 1), (150, 150, 0, 0), (0, 0, 300, 300), (150, 150, 300, 300)]:
            line = resolver.resolve(make_line(*points), [rect, circle])
            expected = line.start_attachment.is_free and line.end_attachment.is_free
            assert line.draggable == expected


class TestResolveEndpoint:
    """Tests for single-endpoint resolution."""

    def test_only_given_endpoint_changes(self, resolver, rect):
        line = make_line(120, 120, 180, 180)
        resolved = resolver.resolve_endpoint(line, END, [rect])
        assert resolved.end_attachment == Attachment.to("rect1")
        assert resolved.end == Position(150, 150)
        assert resolved.start_attachment == FREE
        assert resolved.start == Position(120, 120)

    def test_invalid_index(self, resolver, rect):
        with pytest.raises(ValueError):
            resolver.resolve_endpoint(make_line(0, 0, 1, 1), 3, [rect])


class TestReanchor:
    """Tests for AttachmentResolver.reanchor()."""

    def test_follows_moved_shape(self, resolver, rect):
        line = resolver.resolve(make_line(0, 0, 150, 150), [rect])
        moved = rect.moved_to(300, 0)
        reanchored = resolver.reanchor(line, [moved])
        assert reanchored.end == Position(350, 50)
        assert reanchored.end_attachment == Attachment.to("rect1")
        assert reanchored.start == Position(0, 0)

    def test_missing_shape_frees_endpoint(self, resolver, rect):
        line = resolver.resolve(make_line(0, 0, 150, 150), [rect])
        reanchored = resolver.reanchor(line, [])
        assert reanchored.end_attachment == FREE
        assert reanchored.end == Position(150, 150)
        assert reanchored.draggable is True

    def test_free_line_unchanged(self, resolver, rect):
        line = make_line(0, 0, 10, 10)
        assert resolver.reanchor(line, [rect]) == line
