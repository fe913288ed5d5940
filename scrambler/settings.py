"""
Settings file loading, validation, and normalization.

This module answers one question:
    "What defaults does the user want when a flag is not given?"

Responsibilities:
- Locate and load the optional YAML settings file
- Validate keys and value types
- Expose a clean Python representation

This module does NOT:
- Select files
- Encrypt or scramble data
- Parse CLI arguments
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .config import (
    DEFAULT_BACKUP,
    DEFAULT_LOG_FILE,
    DEFAULT_SCRAMBLE,
    DEFAULT_SETTINGS_FILE,
    ENV_SETTINGS_FILE,
)
from .errors import ConfigError


_BOOL_KEYS = ("scramble", "backup")
_PATH_KEYS = ("key_file", "log_file")


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Settings:
    key_file: Optional[Path] = None
    scramble: bool = DEFAULT_SCRAMBLE
    backup: bool = DEFAULT_BACKUP
    log_file: Path = Path(DEFAULT_LOG_FILE)

    # ------------------------------------------------------------------
    # Loading API
    # ------------------------------------------------------------------

    @classmethod
    def load(cls, path: Optional[str | Path] = None) -> "Settings":
        """
        Load and validate a settings file.

        When ``path`` is None the ``SCRAMBLER_CONFIG`` environment variable
        is consulted, then ``scrambler.yml`` in the working directory. Only
        an explicitly requested file has to exist.

        Raises:
            ConfigError: if the file is missing (when requested) or invalid

        Returns:
            Settings
        """

        explicit = path is not None or ENV_SETTINGS_FILE in os.environ
        path = Path(path or os.getenv(ENV_SETTINGS_FILE) or DEFAULT_SETTINGS_FILE)

        if not path.exists():
            if explicit:
                raise ConfigError(f"Settings file not found: {path}")
            return cls()

        try:
            with path.open("r", encoding="utf-8") as fh:
                raw = yaml.safe_load(fh) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to read settings file {path}: {e}") from e

        return cls._from_dict(raw, source=path)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @classmethod
    def _from_dict(cls, data: Any, source: Path) -> "Settings":
        if not isinstance(data, dict):
            raise ConfigError(f"Settings file {source} must contain a mapping")

        unknown = sorted(set(data) - set(_BOOL_KEYS) - set(_PATH_KEYS))
        if unknown:
            raise ConfigError(
                f"Unknown setting(s) in {source}: {', '.join(map(str, unknown))}"
            )

        values: Dict[str, Any] = {}

        for name in _BOOL_KEYS:
            if name in data:
                if not isinstance(data[name], bool):
                    raise ConfigError(f"Setting '{name}' must be true or false")
                values[name] = data[name]

        for name in _PATH_KEYS:
            value = data.get(name)
            if value is None:
                continue
            if not isinstance(value, str) or not value:
                raise ConfigError(f"Setting '{name}' must be a non-empty path")
            values[name] = Path(value)

        return cls(**values)
