"""
Input file selection.

This module is responsible for:
- expanding a glob pattern against the filesystem
- deciding which matches are markdown worth encrypting

This module does NOT:
- encrypt or scramble data
- modify files
- load settings
"""

from __future__ import annotations

import glob
import logging
from pathlib import Path
from typing import List

from .config import MARKDOWN_EXTENSIONS, MARKUP_TRIGGERS

logger = logging.getLogger(__name__)


def is_markdown_file(path: Path) -> bool:
    """
    Return True for a readable ``.md``/``.markdown`` file that contains at
    least one markup trigger character.
    """

    if not path.is_file():
        return False

    if not path.name.endswith(MARKDOWN_EXTENSIONS):
        return False

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Skipping unreadable file %s: %s", path, e)
        return False

    return any(char in content for char in MARKUP_TRIGGERS)


class FileScanner:
    def __init__(self, pattern: str):
        self.pattern = pattern

    def expand(self) -> List[Path]:
        """
        Return regular files matching the pattern, sorted.

        ``**`` matches any number of directories.
        """

        matches = sorted(glob.glob(self.pattern, recursive=True))
        files = [Path(match) for match in matches if Path(match).is_file()]

        logger.debug("Pattern %r matched %d file(s)", self.pattern, len(files))
        return files

    def markdown_files(self) -> List[Path]:
        """Return the matches eligible for encryption."""
        return [path for path in self.expand() if is_markdown_file(path)]
