"""Command-line front door for flakeviewer.

Parses CLI options, resolves the root flake reference and evaluator command,
configures logging, then dispatches into the interactive runtime.
"""

from __future__ import annotations

import argparse
import logging
import os
import shlex
import sys
from collections.abc import Sequence

from .errors import StartupError, ViewerError
from .evaluator import AttributeEvaluator, Internal, NixEvaluator
from .navigator import normalize_root_path
from .runtime import run_viewer
from .runtime.config import load_nix_args, load_nix_command, load_style_name, load_theme_name
from .ui_theme import available_theme_names

logger = logging.getLogger("flakeviewer")

LOG_FILE_ENV_VAR = "FLAKEVIEWER_LOG"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(log_file: str | None) -> None:
    """Send package logs to ``log_file``; the TUI owns stdout/stderr otherwise."""
    if not log_file:
        return
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flakeviewer",
        description="Browse the attributes of a Nix flake in a two-pane terminal view.",
    )
    parser.add_argument("flake", help="Flake reference, optionally with an attribute path (e.g. nixpkgs#lib).")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--style", default=None, help="Pygments style name for evaluated values.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--nix", default=None, metavar="CMD", help="Evaluator command (default: nix).")
    parser.add_argument(
        "--nix-arg",
        action="append",
        default=None,
        metavar="ARG",
        help="Extra argument passed after 'eval' (repeatable), e.g. --nix-arg=--impure.",
    )
    parser.add_argument("--log-file", default=None, metavar="PATH", help="Write debug logs to PATH.")
    parser.add_argument("--list", action="store_true", help="Print the attributes under FLAKE and exit.")
    return parser


def build_evaluator(nix: str | None, nix_args: Sequence[str] | None) -> NixEvaluator:
    """Combine CLI overrides with persisted config into a gateway."""
    command = tuple(shlex.split(nix)) if nix else load_nix_command()
    extra_args = tuple(nix_args) if nix_args is not None else load_nix_args()
    return NixEvaluator(command=command, extra_args=extra_args)


def list_attributes(root_path: str, evaluator: AttributeEvaluator) -> list[str]:
    """Return the child names of ``root_path`` for non-interactive output."""
    classification = evaluator.classify(root_path)
    if not isinstance(classification, Internal):
        raise StartupError(f"{root_path!r} has no attributes to explore")
    return list(classification.children)


def main(argv: Sequence[str] | None = None) -> None:
    """Parse CLI arguments and launch the viewer.

    Any ``ViewerError`` (bad root, evaluator failure) ends the process with a
    one-line message and exit status 1.
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file or os.environ.get(LOG_FILE_ENV_VAR))

    try:
        root_path = normalize_root_path(args.flake)
        evaluator = build_evaluator(args.nix, args.nix_arg)
        if args.list:
            names = list_attributes(root_path, evaluator)
            sys.stdout.write("".join(f"{name}\n" for name in names))
            return
        run_viewer(
            root_path,
            evaluator,
            theme_name=args.theme or load_theme_name(),
            style=args.style or load_style_name(),
            no_color=args.no_color,
        )
    except ViewerError as exc:
        logger.error("session ended: %s", exc)
        raise SystemExit(f"flakeviewer: {exc}") from exc


if __name__ == "__main__":
    main()
