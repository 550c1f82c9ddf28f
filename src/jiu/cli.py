from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Sequence

from jiu import __version__
from jiu.config import load_config, locate_config
from jiu.errors import JiuError
from jiu.listing import render_listing
from jiu.resolver import RecipeListing, ResolutionContext, list_recipes, resolve
from jiu.runner import run_command

DEBUG_ENV_VAR = "JIU_DEBUG"

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jiu",
        usage="%(prog)s [OPTION_OR_RECIPE] [ARGS]...",
        description="jiu: A minimal command runner.",
        epilog=(
            "Recipes are read from the closest .jiu.toml (or .jiu.yaml) in the current directory "
            f"or its parents. Set {DEBUG_ENV_VAR} to print diagnostics."
        ),
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"jiu@{__version__}",
        help="Show version information.",
    )
    parser.add_argument("-l", "--list", action="store_true", help="List all available recipes.")
    parser.add_argument(
        "invocation",
        nargs=argparse.REMAINDER,
        metavar="RECIPE [ARGS]",
        help="Recipe to run and the arguments passed to it.",
    )
    return parser


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        stream=sys.stderr,
        format="[jiu] %(name)s: %(message)s",
    )


def _print_error(e: JiuError) -> None:
    print(f"Error: {e}", file=sys.stderr)
    if e.hint:
        print(f"Hint: {e.hint}", file=sys.stderr)


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    if args.invocation and args.invocation[0].startswith("-"):
        # REMAINDER keeps a leading `--`; recipe names never start with a dash.
        parser.error(f'Unknown option "{args.invocation[0]}"')

    debug = DEBUG_ENV_VAR in os.environ
    _configure_logging(debug)
    context = ResolutionContext(debug=debug)

    try:
        config_path = locate_config()
        logger.debug("found config file: %s", config_path)
        config = load_config(config_path)

        if args.list:
            print(render_listing(list_recipes(config)))
            return 0

        result = resolve(config, args.invocation, context=context)
        if isinstance(result, RecipeListing):
            print(render_listing(result))
            return 0
        return run_command(result)
    except JiuError as e:
        logger.debug("failed with code=%s details=%r", e.code, e.details)
        _print_error(e)
        return 2
