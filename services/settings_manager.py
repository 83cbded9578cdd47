"""
Settings Manager.

Handles application settings with JSON file storage.
"""

import json
import logging
import os
from dataclasses import dataclass, field, asdict
from typing import Optional
from pathlib import Path

from models import ShapeKind, Tool

logger = logging.getLogger(__name__)


@dataclass
class ShapeDefaults:
    """Geometry and fill used when placing new shapes."""
    rectangle_width: float = 100.0
    rectangle_height: float = 100.0
    circle_radius: float = 50.0
    star_points: int = 5
    star_inner_radius: float = 20.0
    star_outer_radius: float = 50.0
    triangle_radius: float = 50.0
    rectangle_fill: str = "red"
    circle_fill: str = "green"
    star_fill: str = "blue"
    triangle_fill: str = "orange"

    def geometry_for(self, kind: ShapeKind) -> dict:
        """Keyword arguments for models.create_shape()."""
        if kind == ShapeKind.RECTANGLE:
            return {"width": self.rectangle_width, "height": self.rectangle_height}
        if kind == ShapeKind.CIRCLE:
            return {"radius": self.circle_radius}
        if kind == ShapeKind.STAR:
            return {
                "num_points": self.star_points,
                "inner_radius": self.star_inner_radius,
                "outer_radius": self.star_outer_radius,
            }
        if kind == ShapeKind.TRIANGLE:
            return {"radius": self.triangle_radius}
        raise ValueError(f"Unknown shape kind: {kind!r}")

    def fill_for(self, kind: ShapeKind) -> str:
        return getattr(self, f"{kind.value}_fill")


@dataclass
class ConnectorSettings:
    """Connector drawing and hit-testing settings."""
    stroke: str = "black"
    stroke_width: float = 5.0
    handle_radius: float = 5.0
    hit_tolerance: float = 3.0
    # Re-snap attached endpoints while a shape is dragged
    follow_attached_shapes: bool = False


@dataclass
class UISettings:
    """User interface settings."""
    theme: str = "light"
    show_grid: bool = True
    grid_size: int = 50
    default_tool: str = Tool.CURSOR.value

    @property
    def initial_tool(self) -> Tool:
        try:
            return Tool(self.default_tool)
        except ValueError:
            return Tool.CURSOR


@dataclass
class AppSettings:
    """Complete application settings."""
    shapes: ShapeDefaults = field(default_factory=ShapeDefaults)
    connectors: ConnectorSettings = field(default_factory=ConnectorSettings)
    ui: UISettings = field(default_factory=UISettings)
    window_geometry: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "shapes": asdict(self.shapes),
            "connectors": asdict(self.connectors),
            "ui": asdict(self.ui),
            "window_geometry": self.window_geometry,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AppSettings":
        """Create from dictionary."""
        settings = cls()

        if "shapes" in data:
            settings.shapes = ShapeDefaults(**data["shapes"])
        if "connectors" in data:
            settings.connectors = ConnectorSettings(**data["connectors"])
        if "ui" in data:
            settings.ui = UISettings(**data["ui"])
        if "window_geometry" in data:
            settings.window_geometry = data["window_geometry"]

        return settings


class SettingsManager:
    """
    Manages application settings with JSON file storage.

    Settings file location:
    - Windows: %APPDATA%/ShapeLink/settings.json
    - Linux: ~/.config/ShapeLink/settings.json
    - macOS: ~/Library/Application Support/ShapeLink/settings.json
    """

    APP_NAME = "ShapeLink"
    SETTINGS_FILE = "settings.json"

    def __init__(self, config_override: Optional[str] = None):
        """
        Initialize settings manager.

        Args:
            config_override: Optional path to override config file location.
                            Useful for testing.
        """
        self._settings = AppSettings()
        self._config_override = config_override
        self._settings_path = self._get_settings_path()
        self._ensure_settings_dir()
        self.load()

    @property
    def settings(self) -> AppSettings:
        """Get current settings."""
        return self._settings

    @property
    def settings_path(self) -> str:
        """Get the settings file path."""
        return str(self._settings_path)

    @property
    def follow_attached_shapes(self) -> bool:
        return self._settings.connectors.follow_attached_shapes

    @follow_attached_shapes.setter
    def follow_attached_shapes(self, value: bool):
        self._settings.connectors.follow_attached_shapes = value
        self.save()

    def _get_settings_path(self) -> Path:
        """Get platform-specific settings directory."""
        if self._config_override:
            return Path(self._config_override)

        import platform
        system = platform.system()

        if system == "Windows":
            base = os.environ.get("APPDATA", os.path.expanduser("~"))
            config_dir = Path(base) / self.APP_NAME
        elif system == "Darwin":  # macOS
            config_dir = Path.home() / "Library" / "Application Support" / self.APP_NAME
        else:  # Linux and others
            xdg_config = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
            config_dir = Path(xdg_config) / self.APP_NAME

        return config_dir / self.SETTINGS_FILE

    def _ensure_settings_dir(self):
        """Create settings directory if it doesn't exist."""
        self._settings_path.parent.mkdir(parents=True, exist_ok=True)

    def load(self) -> bool:
        """Load settings from file."""
        if not self._settings_path.exists():
            return False

        try:
            with open(self._settings_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            self._settings = AppSettings.from_dict(data)
            return True
        except (OSError, ValueError, TypeError) as e:
            logger.warning(f"Error loading settings from {self._settings_path}: {e}")
            return False

    def save(self) -> bool:
        """Save settings to file."""
        try:
            self._ensure_settings_dir()
            with open(self._settings_path, "w", encoding="utf-8") as f:
                json.dump(self._settings.to_dict(), f, indent=2)
            return True
        except OSError as e:
            logger.warning(f"Error saving settings to {self._settings_path}: {e}")
            return False

    def reset(self):
        """Reset settings to defaults."""
        self._settings = AppSettings()
        self.save()

    def save_window_geometry(self, geometry: bytes, state: bytes):
        """Save window geometry and state."""
        import base64
        self._settings.window_geometry = {
            "geometry": base64.b64encode(geometry).decode("ascii"),
            "state": base64.b64encode(state).decode("ascii"),
        }
        self.save()

    def get_window_geometry(self) -> tuple:
        """Get saved window geometry and state."""
        import base64
        geo = self._settings.window_geometry
        if not geo:
            return None, None

        try:
            geometry = base64.b64decode(geo.get("geometry", ""))
            state = base64.b64decode(geo.get("state", ""))
            return geometry, state
        except ValueError:
            return None, None


# Global settings instance
_settings_manager: Optional[SettingsManager] = None


def get_settings(config_override: Optional[str] = None) -> SettingsManager:
    """
    Get the global settings manager instance.

    Args:
        config_override: Optional path to override config location.
                        Only used on first call to initialize.
    """
    global _settings_manager
    if _settings_manager is None:
        _settings_manager = SettingsManager(config_override)
    return _settings_manager


def reset_settings_manager():
    """Reset the global settings manager (useful for testing)."""
    global _settings_manager
    _settings_manager = None
