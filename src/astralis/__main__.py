from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .console.view import ConsoleView
from .debug.facility import LogFacility, Severity
from .settings import build_console, build_facility, load_settings


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
    )


def run_demo_session(facility: LogFacility) -> None:
    """Emit a short, fixed burst of messages like a game start-up would."""
    facility.log("GameManager", "Game started")
    facility.log("Input", "Input controller ready")
    facility.log("Player", "Player spawned at (0.0, 1.0, 0.0)")
    facility.warn("Physics", "collision")
    facility.log("Animation", "Idle clip playing")
    facility.warn("Audio", "Missing clip 'footstep_grass'; using default")
    facility.error("Save", "Could not write save slot 1")
    facility.log("Save slot fallback engaged")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="astralis-console",
        description="Astralis log console - headless session",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", type=Path, default=None, help="YAML settings file")
    parser.add_argument("--search", default="", help="Only show messages containing this text")
    parser.add_argument("--hide", action="append", default=[], metavar="CATEGORY", help="Hide a category")
    parser.add_argument(
        "--hide-level",
        action="append",
        default=[],
        choices=[s.value for s in Severity],
        help="Hide a severity level",
    )
    parser.add_argument("--error-pause", action="store_true", help="Report when an error would pause the game")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")

    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    settings = load_settings(args.config)
    if args.error_pause:
        settings.error_pause = True

    paused: List[str] = []
    facility = build_facility(settings)
    console = build_console(facility, settings, on_error_pause=lambda entry: paused.append(entry.message))
    view = ConsoleView(console, max_message_length=settings.max_message_length)

    with console:
        for category in args.hide:
            console.set_category_enabled(category, False)
        for level in args.hide_level:
            console.set_severity_enabled(level, False)
        console.set_search_text(args.search)
        run_demo_session(facility)

    print("  ".join(view.toolbar_labels()))
    for line in view.render_lines():
        print(line)
    for message in paused:
        print(f"Paused on error: {message}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
