"""Configuration loader for mssql-preset."""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from mssqlpreset.errors import PresetError


class ConfigLoader:
    """Loads YAML configuration files for CLI defaults."""

    SUPPORTED_KEYS = {
        "database",
        "password",
        "queries",
        "queries_files",
        "license",
        "port",
        "version",
        "wait_timeout",
        "detach",
        "verbose",
        "log_file",
    }
    LIST_KEYS = {"queries", "queries_files"}

    def load(self, config_path: Optional[str]) -> Dict[str, Any]:
        if not config_path:
            return {}

        path = Path(config_path)
        if not path.exists():
            raise PresetError(f"Config file not found: {config_path}")

        try:
            parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (yaml.YAMLError, OSError) as exc:
            raise PresetError(f"Invalid config file '{config_path}': {exc}") from exc

        if parsed is None:
            return {}
        if not isinstance(parsed, dict):
            raise PresetError("Config file must contain a YAML mapping at the root.")

        unknown = sorted(set(parsed.keys()) - self.SUPPORTED_KEYS)
        if unknown:
            unknown_list = ", ".join(unknown)
            raise PresetError(f"Unknown configuration keys: {unknown_list}")

        for key in self.LIST_KEYS & set(parsed.keys()):
            if not isinstance(parsed[key], list):
                raise PresetError(f"Configuration key '{key}' must be a YAML list.")

        return parsed
