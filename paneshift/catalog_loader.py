"""Layout Catalog Loader Module

Loads user layout templates and settings from a YAML or JSON file and
merges them with the built-in templates.

Configuration files are named layouts.yaml, layouts.yml or layouts.json
and are searched for in:
1. ~/.config/paneshift/
2. ./layouts/

Example configuration structure:
settings:
  tmux_bin: tmux
  inherit_cwd: true
  default_layout: left + right stacked
layouts:
  - name: wide left
    panes:
      - {x: 0, y: 0, width: 0.7, height: 1}
      - {x: 0.7, y: 0, width: 0.3, height: 1}
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .config import PaneshiftConfig
from .layouts import ALL_LAYOUTS, SUPPORTED_PANE_COUNTS, create_template, validate_template
from .models import LayoutTemplate

CONFIG_FILE_NAMES = ["layouts.yaml", "layouts.yml", "layouts.json"]

KNOWN_SETTINGS = {"tmux_bin", "target", "inherit_cwd", "default_layout"}


class LayoutCatalog:
    """Built-in templates followed by user templates"""

    def __init__(self, custom_layouts: Optional[List[LayoutTemplate]] = None):
        self.layouts: List[LayoutTemplate] = list(ALL_LAYOUTS) + list(custom_layouts or [])

    def get(self, name: str) -> Optional[LayoutTemplate]:
        """Template by name (case-insensitive), or None"""
        for template in self.layouts:
            if template.name.lower() == name.lower():
                return template
        return None

    def for_count(self, count: int) -> List[LayoutTemplate]:
        return [template for template in self.layouts if template.pane_count == count]

    def names(self) -> List[str]:
        return [template.name for template in self.layouts]

    def __iter__(self):
        return iter(self.layouts)

    def __len__(self) -> int:
        return len(self.layouts)


class LayoutCatalogLoader:
    """Loads and parses layout configuration files."""

    def __init__(self, search_paths: Optional[List[Path]] = None):
        """Initialize the loader with search paths.

        Args:
            search_paths: Directories to search for config files.
                         Defaults to ['~/.config/paneshift', 'layouts/']
        """
        self.logger = logging.getLogger(__name__)

        if search_paths is None:
            self.search_paths = [Path.home() / ".config" / "paneshift", Path("layouts")]
        else:
            self.search_paths = search_paths

    def find_config_file(self) -> Optional[Path]:
        """First config file found in the search paths, or None"""
        for search_path in self.search_paths:
            for file_name in CONFIG_FILE_NAMES:
                config_path = search_path / file_name
                if config_path.exists():
                    self.logger.debug(f"Found config file: {config_path}")
                    return config_path
        return None

    def parse_config_data(self, config_data: str, file_path: Path) -> Dict[str, Any]:
        """Parse configuration data based on file extension.

        Raises:
            ValueError: If the format is invalid or unsupported
        """
        ext = file_path.suffix.lower()

        if ext == ".json":
            try:
                data = json.loads(config_data)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON format: {e}")
        elif ext in [".yaml", ".yml"]:
            try:
                data = yaml.safe_load(config_data)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML format: {e}")
        else:
            raise ValueError(f"Unsupported file format: {ext}")

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError("Configuration must be a mapping at the top level")
        return data

    def parse_layouts(self, layouts_data: Any) -> List[LayoutTemplate]:
        """Build templates from the 'layouts' section

        Raises:
            ValueError: If a template is malformed, has an unsupported pane
                count, does not tile the window, or reuses a name
        """
        if layouts_data is None:
            return []
        if not isinstance(layouts_data, list):
            raise ValueError("'layouts' must be a list")

        builtin_names = {template.name.lower() for template in ALL_LAYOUTS}
        seen = set()
        templates = []
        for layout_data in layouts_data:
            if not isinstance(layout_data, dict):
                raise ValueError(f"Invalid layout configuration: {layout_data}")

            template = create_template(layout_data)
            if template.pane_count not in SUPPORTED_PANE_COUNTS:
                raise ValueError(
                    f"Layout '{template.name}' has {template.pane_count} panes; "
                    f"supported counts are {SUPPORTED_PANE_COUNTS[0]}-{SUPPORTED_PANE_COUNTS[-1]}"
                )
            validate_template(template)

            key = template.name.lower()
            if key in seen or key in builtin_names:
                raise ValueError(f"Duplicate layout name: '{template.name}'")
            seen.add(key)
            templates.append(template)

        return templates

    def load_config(self, config_path: Optional[Path] = None) -> PaneshiftConfig:
        """Load settings and custom layouts.

        Args:
            config_path: Explicit config file; searched for when None

        Returns:
            PaneshiftConfig, with defaults when no config file exists

        Raises:
            FileNotFoundError: If an explicit config_path does not exist
            ValueError: If the config file is invalid
        """
        if config_path is None:
            config_path = self.find_config_file()
            if config_path is None:
                self.logger.debug("No layout config file found, using defaults")
                return PaneshiftConfig()
        elif not config_path.exists():
            raise FileNotFoundError(f"Configuration file '{config_path}' not found")

        try:
            config_data = self.parse_config_data(config_path.read_text(), config_path)
            settings = config_data.get("settings") or {}
            if not isinstance(settings, dict):
                raise ValueError("'settings' must be a mapping")
            layouts = self.parse_layouts(config_data.get("layouts"))
        except (OSError, ValueError) as e:
            raise ValueError(f"Error loading config file {config_path}: {e}")

        unknown = set(settings) - KNOWN_SETTINGS
        if unknown:
            self.logger.warning(f"Ignoring unknown settings in {config_path}: {', '.join(sorted(unknown))}")

        config = PaneshiftConfig(
            tmux_bin=settings.get("tmux_bin", "tmux"),
            target=settings.get("target"),
            inherit_cwd=bool(settings.get("inherit_cwd", True)),
            default_layout=settings.get("default_layout"),
            custom_layouts=layouts,
            config_path=config_path,
        )

        self.logger.info(f"Loaded layout configuration from {config_path} with {len(layouts)} custom layouts")
        return config

    def validate_config(self, config: PaneshiftConfig) -> List[str]:
        """Validate a loaded configuration.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not config.tmux_bin:
            errors.append("tmux_bin must not be empty")

        if config.default_layout:
            catalog = LayoutCatalog(config.custom_layouts)
            if catalog.get(config.default_layout) is None:
                errors.append(f"Unknown default_layout: '{config.default_layout}'")

        return errors
