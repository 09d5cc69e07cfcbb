"""Configuration management for the tolerant queens tools.

This module provides a thin, explicit wrapper around a JSON configuration file
to centralize board defaults, search budgets, and capacity sweep settings.

File format (high-level)
------------------------
- board_defaults: board_size, queen_count, allowed_intersections.
- search_limits: time_limit (seconds) and node_limit for a single solve;
  sweep_time_limit and sweep_node_limit for each attempt of a sweep.
- sweep_settings: board_sizes, tolerances, max_target, output_dir, parallel.

All methods return Python native types; the class does not validate semantics
beyond presence of keys to keep responsibilities minimal.
"""
import json
from pathlib import Path


class ConfigManager:
    """Load, query, and persist configuration.

    Parameters
    ----------
    config_path : str | os.PathLike, default "config.json"
        Path to the configuration file.
    """

    def __init__(self, config_path="config.json"):
        self.config_path = Path(config_path)
        self.config = self.load_config()

    def load_config(self):
        """Load and parse the JSON configuration file.

        Returns
        -------
        dict
            Root configuration object.
        """
        if not self.config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {self.config_path}\n"
                f"Create it or use the default config.json template"
            )

        with open(self.config_path, 'r') as f:
            return json.load(f)

    def save_config(self):
        """Persist the current in-memory configuration to disk."""
        with open(self.config_path, 'w') as f:
            json.dump(self.config, f, indent=2)

    def get_board_defaults(self):
        """Return default board size, queen count and allowed intersections."""
        return self.config.get("board_defaults", {})

    def get_search_limits(self):
        """Return per-solve and per-sweep-attempt search budgets."""
        return self.config.get("search_limits", {})

    def get_sweep_settings(self):
        """Return capacity sweep settings (sizes, tolerances, output dir)."""
        return self.config.get("sweep_settings", {})

    def update_setting(self, section, key, value):
        """Update a specific setting and persist the change immediately."""
        if section not in self.config:
            self.config[section] = {}
        self.config[section][key] = value
        self.save_config()
