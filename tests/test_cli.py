"""End-to-end tests for the encrypt/decrypt commands."""

from __future__ import annotations

from pathlib import Path

import pytest

from scrambler.cipher import CipherEngine, decode_key, generate_key
from scrambler.cli import build_parser, main
from scrambler.reporter import Colors


def read_key(path: Path) -> str:
    return path.read_text(encoding="utf-8").strip()


def test_encrypt_then_decrypt(docs_dir: Path, workdir: Path) -> None:
    key_file = workdir / "site.key"

    code = main([
        "encrypt", str(docs_dir / "*"), "out", "--key-file", str(key_file), "--no-backup",
    ])

    assert code == 0
    assert sorted(p.name for p in (workdir / "out").iterdir()) == ["guide.markdown", "intro.md"]
    key = read_key(key_file)
    assert len(decode_key(key)) == 32

    code = main(["decrypt", str(workdir / "out" / "*"), "plain", key, "--no-backup"])

    assert code == 0
    assert (workdir / "plain" / "intro.md").read_text(encoding="utf-8") == (
        docs_dir / "intro.md"
    ).read_text(encoding="utf-8")


def test_existing_key_file_is_reused(docs_dir: Path, workdir: Path) -> None:
    key_file = workdir / "site.key"
    key = generate_key()
    key_file.write_text(key, encoding="utf-8")

    assert main(["encrypt", str(docs_dir / "intro.md"), "out", "--key-file", str(key_file)]) == 0

    assert read_key(key_file) == key
    blob = (workdir / "out" / "intro.md").read_text(encoding="utf-8")
    assert CipherEngine().decrypt_text(blob, key).startswith("# Title")


def test_generated_key_is_printed_without_key_file(
    docs_dir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    assert main(["encrypt", str(docs_dir / "intro.md"), "out", "--no-backup"]) == 0
    assert "Encryption key" in capsys.readouterr().out


def test_backup_enabled_by_default(docs_dir: Path) -> None:
    assert main(["encrypt", str(docs_dir / "intro.md"), "out"]) == 0
    assert len(list(docs_dir.glob("intro.md.*.bak"))) == 1


def test_scramble_flag(docs_dir: Path, workdir: Path) -> None:
    key = generate_key()
    key_file = workdir / "k"
    key_file.write_text(key, encoding="utf-8")

    main(["encrypt", str(docs_dir / "intro.md"), "out", "--key-file", str(key_file),
          "--scramble", "--no-backup"])

    text = CipherEngine().decrypt_text(
        (workdir / "out" / "intro.md").read_text(encoding="utf-8"), key
    )
    assert text.startswith("# Title\n")
    assert "*emphasis*" in text
    assert "Some" not in text.split()


def test_settings_file_supplies_defaults(docs_dir: Path, workdir: Path) -> None:
    (workdir / "scrambler.yml").write_text(
        "backup: false\nkey_file: from-settings.key\nlog_file: logs/run.log\n",
        encoding="utf-8",
    )

    assert main(["encrypt", str(docs_dir / "intro.md"), "out"]) == 0

    assert (workdir / "from-settings.key").exists()
    assert list(docs_dir.glob("*.bak")) == []
    assert "Successfully processed" in (workdir / "logs" / "run.log").read_text(
        encoding="utf-8"
    )


def test_encrypt_without_matches_exits_non_zero(
    workdir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    code = main(["encrypt", "nothing/*.md", "out"])

    assert code == 1
    assert "No valid markdown files found" in capsys.readouterr().err
    assert (workdir / "out").is_dir()
    assert list((workdir / "out").iterdir()) == []


def test_encrypt_ignores_ineligible_files(docs_dir: Path) -> None:
    assert main(["encrypt", str(docs_dir / "plain.md"), "out"]) == 1


def test_decrypt_without_matches_exits_non_zero(workdir: Path) -> None:
    assert main(["decrypt", "nothing/*", "out", generate_key()]) == 1


def test_per_file_failures_do_not_change_exit_code(
    docs_dir: Path, workdir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    code = main(["decrypt", str(docs_dir / "*.md"), "out", generate_key(), "--no-backup"])
    out = capsys.readouterr().out

    assert code == 0
    assert "Failed to process: 2 files" in out
    assert str(docs_dir / "intro.md") in out


def test_log_file_records_run(docs_dir: Path, workdir: Path) -> None:
    main(["encrypt", str(docs_dir / "intro.md"), "out"])

    log = (workdir / "scrambler.log").read_text(encoding="utf-8")
    assert "[INFO] Created backup:" in log
    assert f"Successfully processed: {docs_dir / 'intro.md'}" in log


def test_bad_settings_file_exits_non_zero(workdir: Path) -> None:
    (workdir / "scrambler.yml").write_text("scramble: maybe\n", encoding="utf-8")
    assert main(["encrypt", "*.md", "out"]) == 1


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 1
    assert "usage:" in capsys.readouterr().out


def test_parser_flags_default_to_none() -> None:
    args = build_parser().parse_args(["encrypt", "*.md", "out"])
    assert args.scramble is None
    assert args.backup is None
    assert args.key_file is None


def test_colliding_basenames_are_reported_as_failures(
    workdir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    for name in ("a", "b"):
        folder = workdir / "docs" / name
        folder.mkdir(parents=True)
        (folder / "same.md").write_text(f"# {name}\n", encoding="utf-8")

    code = main(["encrypt", "docs/**/same.md", "out", "--no-backup"])
    out = capsys.readouterr().out

    assert code == 0
    assert "Successfully processed: 1 files" in out
    assert "Failed to process: 1 files" in out
    assert len(list((workdir / "out").iterdir())) == 1


def test_saved_key_is_logged_once(docs_dir: Path, workdir: Path) -> None:
    key_file = workdir / "site.key"
    assert main(["encrypt", str(docs_dir / "intro.md"), "out", "--key-file", str(key_file)]) == 0

    log = (workdir / "scrambler.log").read_text(encoding="utf-8")
    assert log.count("Saved key to") == 1


def test_key_is_printed_when_key_file_cannot_be_written(
    docs_dir: Path, workdir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    # A regular file where the key file's directory should be.
    (workdir / "blocker").write_text("", encoding="utf-8")
    key_file = workdir / "blocker" / "site.key"

    code = main([
        "encrypt", str(docs_dir / "intro.md"), "out", "--key-file", str(key_file), "--no-backup",
    ])
    out = capsys.readouterr().out

    assert code == 0
    assert "Could not save key" in out
    key = out.split("Encryption key (keep it to decrypt): ", 1)[1].split(Colors.RESET)[0]
    blob = (workdir / "out" / "intro.md").read_text(encoding="utf-8")
    assert CipherEngine().decrypt_text(blob, key).startswith("# Title")
