"""
Global constants and defaults.

This module is responsible for:
- Cipher parameters (key size, IV size)
- Markdown eligibility triggers and file extensions
- Default values for every user-tunable option
- Environment variable names

Nothing in this file should depend on:
- the filesystem
- the settings file
- CLI arguments

If something here changes, the *entire tool* behavior changes.
"""

from __future__ import annotations

from typing import Final, Tuple

# ---------------------------------------------------------------------------
# Tool versioning
# ---------------------------------------------------------------------------

TOOL_VERSION: Final[str] = "0.1.0"

# ---------------------------------------------------------------------------
# AES-256-CBC
# ---------------------------------------------------------------------------

AES_KEY_SIZE: Final[int] = 32
AES_IV_SIZE: Final[int] = 16
AES_BLOCK_SIZE: Final[int] = 16

# ---------------------------------------------------------------------------
# Scrambling
# ---------------------------------------------------------------------------

SCRAMBLE_LETTER_PROBABILITY: Final[float] = 0.8
SCRAMBLE_RESIZE_PROBABILITY: Final[float] = 0.3
SCRAMBLE_GROW_PROBABILITY: Final[float] = 0.5
SCRAMBLE_SPECIAL_CHARS: Final[str] = "!@#$%^&*"

# ---------------------------------------------------------------------------
# File selection
# ---------------------------------------------------------------------------

MARKDOWN_EXTENSIONS: Final[Tuple[str, ...]] = (".md", ".markdown")
MARKUP_TRIGGERS: Final[str] = "#-*`"

BACKUP_TIMESTAMP_FORMAT: Final[str] = "%Y%m%d_%H%M%S"
BACKUP_SUFFIX: Final[str] = ".bak"

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_SCRAMBLE: Final[bool] = False
DEFAULT_BACKUP: Final[bool] = True
DEFAULT_LOG_FILE: Final[str] = "scrambler.log"
DEFAULT_SETTINGS_FILE: Final[str] = "scrambler.yml"

# ---------------------------------------------------------------------------
# Environment variable names
# ---------------------------------------------------------------------------

ENV_SETTINGS_FILE: Final[str] = "SCRAMBLER_CONFIG"
