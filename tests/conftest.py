"""
Pytest configuration and shared fixtures for diagram editor tests.
"""

import pytest
import tempfile
import shutil
from pathlib import Path
from typing import Generator

# Add parent directory to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from models.diagram import (
    RectangleShape, CircleShape, StarShape, TriangleShape, Position, Tool,
)
from services.scene_store import SceneStore
from services.attachment import AttachmentResolver
from services.interaction import InteractionController
from services.settings_manager import AppSettings


# ============== Temporary Directory Fixtures ==============

@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    tmp = tempfile.mkdtemp(prefix="shapelink_test_")
    yield Path(tmp)
    shutil.rmtree(tmp, ignore_errors=True)


# ============== Model Fixtures ==============

@pytest.fixture
def rect() -> RectangleShape:
    """100x100 rectangle spanning x,y in [100, 200]; anchor (150, 150)."""
    return RectangleShape(id="rect1", position=Position(100, 100), width=100, height=100)


@pytest.fixture
def circle() -> CircleShape:
    """Circle centered at (300, 300) with radius 50."""
    return CircleShape(id="circle1", position=Position(300, 300), radius=50)


@pytest.fixture
def star() -> StarShape:
    return StarShape(id="star1", position=Position(500, 100))


@pytest.fixture
def triangle() -> TriangleShape:
    return TriangleShape(id="tri1", position=Position(500, 400), radius=50)


# ============== Scene Fixtures ==============

@pytest.fixture
def empty_store() -> SceneStore:
    """Create an empty scene store."""
    return SceneStore()


@pytest.fixture
def store(rect, circle) -> SceneStore:
    """Store holding the rectangle and circle fixtures."""
    s = SceneStore()
    s.add_shape(rect)
    s.add_shape(circle)
    return s


@pytest.fixture
def resolver() -> AttachmentResolver:
    return AttachmentResolver()


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings()


@pytest.fixture
def controller(store, resolver, settings) -> InteractionController:
    """Controller over the populated store, cursor tool active."""
    return InteractionController(store, resolver, settings)


# ============== Helper Functions ==============

def _draw_line(controller: InteractionController, start: tuple, end: tuple):
    """Draw a line with the line tool and return the committed line."""
    controller.set_tool(Tool.LINE)
    controller.pointer_down(*start)
    controller.pointer_move(*end)
    controller.pointer_up(*end)
    return controller.store.list_lines()[-1]


@pytest.fixture
def draw_line():
    """Helper that performs a complete line-drawing gesture."""
    return _draw_line
