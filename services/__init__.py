"""Services package."""

from .geometry import (
    contains_point,
    anchor_of,
    bounding_box_of,
    shape_contains_point,
    distance_to_segment,
    star_vertices,
    triangle_vertices,
    outline_of,
    GeometryProvider,
    ModelGeometry,
)
from .scene_store import SceneStore, DuplicateIdError
from .attachment import AttachmentResolver
from .interaction import (
    InteractionController,
    HitKind,
    HitTarget,
    Idle,
    DrawingLine,
    DraggingShape,
    DraggingWholeLine,
    DraggingEndpoint,
)
from .settings_manager import (
    SettingsManager,
    AppSettings,
    ShapeDefaults,
    ConnectorSettings,
    UISettings,
    get_settings,
    reset_settings_manager,
)

__all__ = [
    # Geometry
    "contains_point",
    "anchor_of",
    "bounding_box_of",
    "shape_contains_point",
    "distance_to_segment",
    "star_vertices",
    "triangle_vertices",
    "outline_of",
    "GeometryProvider",
    "ModelGeometry",
    # Scene
    "SceneStore",
    "DuplicateIdError",
    "AttachmentResolver",
    # Interaction
    "InteractionController",
    "HitKind",
    "HitTarget",
    "Idle",
    "DrawingLine",
    "DraggingShape",
    "DraggingWholeLine",
    "DraggingEndpoint",
    # Settings
    "SettingsManager",
    "AppSettings",
    "ShapeDefaults",
    "ConnectorSettings",
    "UISettings",
    "get_settings",
    "reset_settings_manager",
]
