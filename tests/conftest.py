"""Pytest configuration and fixtures."""

import random
from pathlib import Path

import pytest

from scrambler.cipher import generate_key


SAMPLE_MARKDOWN = "# Title\n\nSome *emphasis* text\n"


@pytest.fixture
def key() -> str:
    """Fresh base64 key."""
    return generate_key()


@pytest.fixture
def rng() -> random.Random:
    """Seeded randomness for structural scrambling assertions."""
    return random.Random(20240611)


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run in an isolated directory so log and settings files stay local."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("SCRAMBLER_CONFIG", raising=False)
    return tmp_path


@pytest.fixture
def docs_dir(workdir: Path) -> Path:
    """A small tree of markdown and non-markdown files."""
    docs = workdir / "docs"
    docs.mkdir()

    (docs / "intro.md").write_text(SAMPLE_MARKDOWN, encoding="utf-8")
    (docs / "guide.markdown").write_text(
        "## Guide\n\n- step one\n- step two\n", encoding="utf-8"
    )
    # No markup trigger characters.
    (docs / "plain.md").write_text("just words here\n", encoding="utf-8")
    (docs / "notes.txt").write_text("# not markdown by extension\n", encoding="utf-8")

    return docs
