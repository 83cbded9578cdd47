"""
Scene store.

Owns the authoritative shape and line collections. Every mutation
replaces the affected collection with a new tuple, so a snapshot
returned by list_shapes()/list_lines() never changes underneath the
caller.
"""

import logging
from typing import Callable, List, Optional, Tuple

from models import ShapeModel, ConnectorLine

logger = logging.getLogger(__name__)


class DuplicateIdError(ValueError):
    """Raised when a shape or line id is already present in the store."""


StoreListener = Callable[["SceneStore"], None]


class SceneStore:
    """
    Shapes and connector lines of one diagram.

    Listeners registered with subscribe() are called after every
    successful mutation so the renderer can redraw.
    """

    def __init__(self):
        self._shapes: Tuple[ShapeModel, ...] = ()
        self._lines: Tuple[ConnectorLine, ...] = ()
        self._listeners: List[StoreListener] = []

    # ---- Listeners ----

    def subscribe(self, listener: StoreListener):
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: StoreListener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self):
        for listener in list(self._listeners):
            listener(self)

    # ---- Queries ----

    def list_shapes(self) -> Tuple[ShapeModel, ...]:
        """Shapes in placement order."""
        return self._shapes

    def list_lines(self) -> Tuple[ConnectorLine, ...]:
        """Lines in creation order."""
        return self._lines

    def get_shape(self, shape_id: str) -> Optional[ShapeModel]:
        for shape in self._shapes:
            if shape.id == shape_id:
                return shape
        return None

    def get_line(self, line_id: str) -> Optional[ConnectorLine]:
        for line in self._lines:
            if line.id == line_id:
                return line
        return None

    def lines_attached_to(self, shape_id: str) -> Tuple[ConnectorLine, ...]:
        """Lines with at least one endpoint attached to the shape."""
        return tuple(line for line in self._lines if line.is_attached_to(shape_id))

    # ---- Mutations ----

    def add_shape(self, shape: ShapeModel) -> ShapeModel:
        if self.get_shape(shape.id) is not None:
            raise DuplicateIdError(f"Shape id already in use: {shape.id}")
        self._shapes = self._shapes + (shape,)
        logger.debug(f"Added shape {shape.id} at {shape.position.to_tuple()}")
        self._notify()
        return shape

    def add_line(self, line: ConnectorLine) -> ConnectorLine:
        if self.get_line(line.id) is not None:
            raise DuplicateIdError(f"Line id already in use: {line.id}")
        self._lines = self._lines + (line,)
        logger.debug(f"Added line {line.id} with points {line.points}")
        self._notify()
        return line

    def update_line(
        self,
        line_id: str,
        mutator: Callable[[ConnectorLine], ConnectorLine],
    ) -> Optional[ConnectorLine]:
        """
        Replace a line with mutator(line).

        Returns the new line, or None if no line has that id.
        """
        for i, line in enumerate(self._lines):
            if line.id == line_id:
                updated = mutator(line)
                self._lines = self._lines[:i] + (updated,) + self._lines[i + 1:]
                self._notify()
                return updated
        logger.debug(f"update_line: no line with id {line_id}")
        return None

    def update_shape_position(self, shape_id: str, x: float, y: float) -> Optional[ShapeModel]:
        return self._replace_shape(shape_id, lambda s: s.moved_to(x, y))

    def set_dragging(self, shape_id: str, dragging: bool) -> Optional[ShapeModel]:
        return self._replace_shape(shape_id, lambda s: s.with_dragging(dragging))

    def _replace_shape(
        self,
        shape_id: str,
        mutator: Callable[[ShapeModel], ShapeModel],
    ) -> Optional[ShapeModel]:
        for i, shape in enumerate(self._shapes):
            if shape.id == shape_id:
                updated = mutator(shape)
                self._shapes = self._shapes[:i] + (updated,) + self._shapes[i + 1:]
                self._notify()
                return updated
        logger.debug(f"No shape with id {shape_id}")
        return None
