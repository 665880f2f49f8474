"""Command-line front door for committer.

Parses CLI options, opens the repository, and reads its status. Then either
prints the status or runs the interactive session and prints the message.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path

from .app import format_status_lines, run_ui
from .config import load_settings
from .errors import RepositoryAccessError, TerminalSetupError
from .git.repository import Repository
from .git.status import query_status
from .logs import configure_logging
from .ui_theme import available_theme_names, resolve_theme

logger = logging.getLogger(__name__)

CLEAN_MESSAGE = "Working directory is clean. Nothing to commit."


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="committer",
        description="Review, stage, and describe working-tree changes in a terminal UI.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Path inside the repository. Defaults to current directory.")
    parser.add_argument("--status", action="store_true", help="Print the change list and exit.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--diff-tool", default=None, help="Structural diff command (default: difft).")
    parser.add_argument("--log-file", default=None, help="Write diagnostic logs to this file.")
    parser.add_argument("--verbose", action="store_true", help="Log debug details (needs a log file).")
    return parser


def main(argv: list[str] | None = None, default_path: Path | None = None) -> None:
    """Parse CLI arguments and run committer against a repository.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args(argv)

    settings = load_settings()
    overrides: dict[str, object] = {}
    if args.theme:
        overrides["theme"] = args.theme
    if args.diff_tool:
        overrides["diff_tool"] = args.diff_tool
    if args.log_file:
        overrides["log_file"] = Path(args.log_file).expanduser()
    if overrides:
        settings = dataclasses.replace(settings, **overrides)

    configure_logging(settings.log_file, verbose=args.verbose)
    theme = resolve_theme(settings.theme, no_color=args.no_color)

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path) if args.path else default_path

    try:
        repository = Repository.discover(path)
        snapshot = query_status(repository)
    except RepositoryAccessError as exc:
        logger.error("cannot open repository at %s: %s", path, exc)
        raise SystemExit(str(exc)) from exc

    if args.status or not sys.stdin.isatty():
        for line in format_status_lines(snapshot, theme):
            print(line)
        return

    if snapshot.is_clean():
        print(CLEAN_MESSAGE)
        return

    try:
        message = run_ui(repository, snapshot, settings, theme=theme)
    except TerminalSetupError as exc:
        logger.error("terminal setup failed: %s", exc)
        raise SystemExit(str(exc)) from exc

    if message.strip():
        sys.stdout.write(message if message.endswith("\n") else message + "\n")


if __name__ == "__main__":
    main()
