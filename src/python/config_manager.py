import json
import pathlib
import sys
import logging
from typing import Any

from custom_types import ColorHex, LaneConfig, TooltipConfig, WindowConfig
from enums import Palette, ViewCommand

logger = logging.getLogger(__name__)

DEFAULT_KEY_BINDINGS: dict[str, str] = {
    ViewCommand.ZOOM_IN: "q",
    ViewCommand.ZOOM_OUT: "w",
    ViewCommand.RESET_ZOOM: "e",
    ViewCommand.PAN_LEFT: "a",
    ViewCommand.PAN_RIGHT: "s",
    ViewCommand.RESET_PAN: "d",
}


class ConfigManager:
    """Manages application configuration, including colors, fonts, geometry and key bindings"""

    colors: dict[str, Any]
    fonts: dict[str, str]
    ui: dict[str, Any]
    keys: dict[str, str]
    exit_on_error: bool
    _cfg: dict[str, Any]
    cfg_path: str | pathlib.Path

    def __init__(
        self,
        cfg_path: str | pathlib.Path | None = None,
        exit_on_error: bool = True
    ) -> None:
        """Initialize the ConfigManager with an optional custom path.

        Args:
            cfg_path: Path to the config.json file (defaults to standard location if None)
            exit_on_error: Whether to exit the program on configuration errors
        """
        self.colors = {}
        self.fonts = {}
        self.ui = {}
        self.keys = {}
        self.exit_on_error = exit_on_error
        self._cfg = {}

        self.cfg_path = cfg_path if cfg_path is not None else self._default_config_path()

        self.load_config()

    def _default_config_path(self) -> pathlib.Path:
        """Get the default path to the config.json file."""
        base = pathlib.Path(__file__).parent.parent.parent
        return base / "config" / "config.json"

    def load_config(self) -> None:
        """Load master configuration from the configured path."""
        try:
            with open(self.cfg_path, 'r') as f:
                self._cfg = json.load(f)
        except Exception as e:
            error_msg = "Critical error loading configuration '%s': %s"
            logger.error(error_msg, self.cfg_path, e)
            if self.exit_on_error:
                sys.exit(1)
            else:
                raise RuntimeError(f"Critical error loading configuration '{self.cfg_path}': {e}")

        # Validate and assign sections
        try:
            c = self._cfg["colors"]
            self.colors = c
            self.fonts = c["fonts"]
            self.ui = self._cfg["ui"]
            self.keys = self._cfg["keys"]
        except KeyError as e:
            error_msg = "Configuration missing key: %s"
            logger.error(error_msg, e)
            if self.exit_on_error:
                sys.exit(1)
            else:
                raise KeyError(f"Configuration missing key: {e}")

    def get_color(self, key: str, default: ColorHex | None = None) -> ColorHex:
        """Get a color hex string by key"""
        value = self.colors.get(key)
        return value if isinstance(value, str) else (default or "#000000")

    def get_palette(self, name: str | Palette) -> list[ColorHex]:
        """Get one of the span palettes ('saturated' or 'muted')"""
        palette = self.colors.get("palette", {}).get(str(name), [])
        if not palette:
            logger.warning("Palette '%s' is empty or missing, falling back to black", name)
            return ["#000000"]
        return list(palette)

    def get_font(self, key: str = "tooltip") -> str:
        """Get a font family by key"""
        return self.fonts.get(key, "Arial")

    def get_ui_setting(self, category: str, key: str, default: Any = None) -> Any:
        """Get a UI setting value by category and key"""
        if category in self.ui and key in self.ui[category]:
            return self.ui[category][key]
        return default

    def get_key_bindings(self) -> dict[str, ViewCommand]:
        """Get the key name -> command mapping.

        Commands missing from the ``keys`` section keep their default key.
        Unknown command names are ignored with a warning.
        """
        bindings = dict(DEFAULT_KEY_BINDINGS)
        for command_name, key in self.keys.items():
            try:
                command = ViewCommand(command_name)
            except ValueError:
                logger.warning("Ignoring binding for unknown command '%s'", command_name)
                continue
            bindings[command] = str(key).lower()
        return {key: ViewCommand(command) for command, key in bindings.items()}

    def get_logging_setting(self, key: str, default: Any = None) -> Any:
        """Get a logging configuration setting"""
        try:
            return self._cfg.get("logging", {}).get(key, default)
        except Exception:
            return default

    # ============================================================================
    # UI Configuration Accessors
    # ============================================================================

    def get_window_config(self) -> WindowConfig:
        """Get window geometry and title.

        Returns:
            dict: Window configuration with keys:
                - width: Initial window width in pixels (also the zoom-to-fit width)
                - height: Initial window height in pixels
                - title: Window title
        """
        window = self.ui.get("window", {})
        return {
            "width": window.get("width", 1600),
            "height": window.get("height", 600),
            "title": window.get("title", "tsc-trace viewer"),
        }

    def get_lane_config(self) -> LaneConfig:
        """Get lane geometry.

        Returns:
            dict: Lane configuration with keys:
                - height: Vertical pixels per span
                - spacing: Vertical pixels between lanes
        """
        lanes = self.ui.get("lanes", {})
        return {"height": lanes.get("height", 10), "spacing": lanes.get("spacing", 1)}

    def get_frame_rate(self, default: int = 30) -> int:
        """Get the target frames per second of the render loop."""
        return self.get_ui_setting("frame", "fps", default)

    def get_tooltip_config(self) -> TooltipConfig:
        """Get tooltip box geometry.

        Returns:
            dict: Tooltip configuration with keys:
                - charWidth: Box width in pixels per character of text
                - height: Box height in pixels
                - textAlpha: Alpha (0-255) of the tooltip text
        """
        tooltip = self.ui.get("tooltip", {})
        return {
            "charWidth": tooltip.get("charWidth", 20),
            "height": tooltip.get("height", 50),
            "textAlpha": tooltip.get("textAlpha", 128),
        }


# Create a singleton instance
config = ConfigManager()
