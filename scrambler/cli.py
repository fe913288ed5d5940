"""
Command-line interface for the scrambler tool.

This module orchestrates all other components and provides
the user-facing CLI commands:
- encrypt
- decrypt
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .cipher import load_or_generate_key, save_key
from .config import TOOL_VERSION
from .errors import ConfigError, ValidationError
from .file_scanner import FileScanner
from .pipeline import Direction, Pipeline
from .reporter import (
    Colors,
    RunLog,
    colored,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from .settings import Settings
from .utils import ensure_dir


# ---------------------------------------------------------------------------
# CLI context
# ---------------------------------------------------------------------------


class CLIContext:
    """Shared context for CLI commands."""

    def __init__(self, settings: Settings, verbose: bool, quiet: bool):
        self.settings = settings
        self.verbose = verbose
        self.quiet = quiet

    def run_log(self) -> RunLog:
        return RunLog(self.settings.log_file, verbose=self.verbose, quiet=self.quiet)

    def log(self, msg: str) -> None:
        """Log message if not quiet."""
        if not self.quiet:
            print(msg)

    def option(self, args: argparse.Namespace, name: str):
        """Return a flag value, falling back to the settings file."""
        value = getattr(args, name, None)
        return getattr(self.settings, name) if value is None else value


# ---------------------------------------------------------------------------
# Command implementations
# ---------------------------------------------------------------------------


def cmd_encrypt(ctx: CLIContext, args: argparse.Namespace) -> int:
    """
    Encrypt (and optionally scramble) markdown files matching a pattern.
    """
    output_dir = ensure_dir(Path(args.output_dir))
    key_file = Path(args.key_file) if args.key_file else ctx.settings.key_file
    scramble = ctx.option(args, "scramble")
    backup = ctx.option(args, "backup")

    with ctx.run_log() as run_log:
        key = load_or_generate_key(key_file)

        files = FileScanner(args.pattern).markdown_files()
        if not files:
            message = f"No valid markdown files found matching pattern: {args.pattern}"
            run_log.error(message)
            raise ValidationError(message)

        ctx.log(colored(f"Encrypting {len(files)} file(s)", Colors.BOLD))
        if scramble:
            ctx.log("  (scrambling enabled)")

        pipeline = Pipeline(output_dir, reporter=run_log, backup=backup)
        report = pipeline.process_all(files, Direction.ENCRYPT, key, scramble=scramble)
        run_log.summary(report)

        key_saved = False
        if key_file is not None:
            try:
                save_key(key_file, key)
                key_saved = True
            except OSError as e:
                run_log.error(f"Failed to save key to {key_file}: {e}")
                print_warning(f"Could not save key to {key_file}: {e}")

        if not key_saved:
            print_info(f"Encryption key (keep it to decrypt): {key}")

    _print_result(report)
    return 0


def cmd_decrypt(ctx: CLIContext, args: argparse.Namespace) -> int:
    """
    Decrypt files matching a pattern.
    """
    output_dir = ensure_dir(Path(args.output_dir))
    backup = ctx.option(args, "backup")

    with ctx.run_log() as run_log:
        files = FileScanner(args.pattern).expand()
        if not files:
            message = f"No files found matching pattern: {args.pattern}"
            run_log.error(message)
            raise ValidationError(message)

        ctx.log(colored(f"Decrypting {len(files)} file(s)", Colors.BOLD))

        pipeline = Pipeline(output_dir, reporter=run_log, backup=backup)
        report = pipeline.process_all(files, Direction.DECRYPT, args.key)
        run_log.summary(report)

    _print_result(report)
    return 0


def _print_result(report) -> None:
    if report.failed:
        print_warning(
            f"Processed {len(report.succeeded)} file(s), {len(report.failed)} failed"
        )
    else:
        print_success(f"Successfully processed {len(report.succeeded)} file(s)")


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="scrambler",
        description="Encrypt markdown files, optionally scrambling prose first",
    )

    # Global options
    parser.add_argument(
        "-c", "--config",
        default=None,
        help="Path to settings file (default: scrambler.yml)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {TOOL_VERSION}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # encrypt command
    encrypt_parser = subparsers.add_parser(
        "encrypt", help="Encrypt (and optionally scramble) markdown files"
    )
    encrypt_parser.add_argument("pattern", help="Glob pattern of files to encrypt")
    encrypt_parser.add_argument("output_dir", help="Directory for encrypted files")
    encrypt_parser.add_argument("--key-file", help="Path to save/load the encryption key")
    encrypt_parser.add_argument(
        "--scramble",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Scramble text before encryption",
    )
    encrypt_parser.add_argument(
        "--backup",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Create backups of original files",
    )

    # decrypt command
    decrypt_parser = subparsers.add_parser("decrypt", help="Decrypt encrypted files")
    decrypt_parser.add_argument("pattern", help="Glob pattern of files to decrypt")
    decrypt_parser.add_argument("output_dir", help="Directory for decrypted files")
    decrypt_parser.add_argument("key", help="Base64 encryption key")
    decrypt_parser.add_argument(
        "--backup",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Create backups of original files",
    )

    return parser


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    commands = {
        "encrypt": cmd_encrypt,
        "decrypt": cmd_decrypt,
    }

    try:
        ctx = CLIContext(
            settings=Settings.load(args.config),
            verbose=args.verbose,
            quiet=args.quiet,
        )
        return commands[args.command](ctx, args)
    except (ValidationError, ConfigError) as e:
        print_error(str(e))
        return 1
    except KeyboardInterrupt:
        print_error("Interrupted")
        return 130
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
