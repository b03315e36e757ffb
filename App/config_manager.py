"""Configuration persistence manager for the Magic Wand editor.

This module handles loading and saving of editor settings to/from JSON files.
"""

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Optional, Tuple

from models import CONFIG_FILE, EditorConfig, SelectionMode

logger = logging.getLogger(__name__)


class ConfigManager:
    """Handles loading and saving of editor configuration."""

    def __init__(self, config_path: Path = CONFIG_FILE):
        """Initialize config manager.

        Args:
            config_path: Path to configuration file (defaults to ~/.magicwand_config.json)
        """
        self.config_path = config_path

    def load(self) -> EditorConfig:
        """Load configuration from file, returning defaults if not found.

        Returns:
            EditorConfig with loaded or default values
        """
        config = EditorConfig()

        try:
            if self.config_path.exists():
                with open(self.config_path, "r") as f:
                    data = json.load(f)
                    if not isinstance(data, dict):
                        raise ValueError("expected a JSON object")
                    # Update config with loaded values (fallback to defaults)
                    config = EditorConfig(
                        tolerance=data.get("tolerance", config.tolerance),
                        selection_mode=SelectionMode(
                            data.get("selection_mode", config.selection_mode.value)
                        ),
                        brush_size=data.get("brush_size", config.brush_size),
                        selection_opacity=data.get(
                            "selection_opacity", config.selection_opacity
                        ),
                        preview_scale=data.get("preview_scale", config.preview_scale),
                        feather_radius=data.get("feather_radius", config.feather_radius),
                    )
                logger.info("Loaded configuration from %s", self.config_path)
        except (OSError, ValueError, TypeError) as e:
            logger.warning("Could not load config file: %s", e)

        return config

    def save(self, config: EditorConfig) -> Tuple[bool, Optional[str]]:
        """Save configuration to file.

        Args:
            config: EditorConfig to save

        Returns:
            Tuple of (success: bool, error_message: Optional[str])
        """
        data = asdict(config)
        data["selection_mode"] = config.selection_mode.value
        try:
            with open(self.config_path, "w") as f:
                json.dump(data, f, indent=2)
            return True, None
        except OSError as e:
            return False, str(e)
