"""
Command-line interface for the application.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import logging
import sys

from dogwalk_safety import __version__
from dogwalk_safety.config import get_settings
from dogwalk_safety.errors import AcquisitionError, InvalidInput
from dogwalk_safety.paw_check import HOLD_SECONDS
from dogwalk_safety.schemas import PawMethod, PawVerdict, WalkLogEntry, WeatherSnapshot
from dogwalk_safety.session import WalkSession

RISK_ICONS = {
    "safe": "✅",
    "caution": "⚠️",
    "danger": "🔥",
    "extreme": "🚨",
}


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="dogwalk-safety",
        description="Heat safety checks and walk log for dog owners",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # 'check' command - current conditions
    check_parser = subparsers.add_parser("check", help="Show current heat risk")
    _add_source_args(check_parser)

    # 'paw' command - surface test on its own
    paw_parser = subparsers.add_parser("paw", help="Run a paw check")
    _add_paw_args(paw_parser)

    # 'walk' command - conditions + paw check + log entry
    walk_parser = subparsers.add_parser(
        "walk", help="Check conditions and the ground, then log the walk"
    )
    _add_source_args(walk_parser)
    _add_paw_args(walk_parser)
    walk_parser.add_argument(
        "--duration",
        type=int,
        default=None,
        help="Walk duration in minutes",
    )
    walk_parser.add_argument("--notes", type=str, default=None, help="Free-form notes")
    walk_parser.add_argument(
        "-y",
        "--yes",
        action="store_true",
        help="Do not ask for confirmation when the heat risk is high",
    )

    subparsers.add_parser("history", help="Show logged walks, newest first")
    subparsers.add_parser("clear", help="Delete all logged walks")
    subparsers.add_parser("info", help="Show application info")

    return parser


def _add_source_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--zip",
        dest="postal_code",
        type=str,
        default=None,
        help="5-digit US ZIP code to use if location is unavailable",
    )
    parser.add_argument(
        "--synthetic",
        action="store_true",
        help="Use sample weather instead of a live lookup",
    )


def _add_paw_args(parser: argparse.ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument(
        "--timer",
        action="store_true",
        help=f"{HOLD_SECONDS}-second hand test (Ctrl+C if it is too hot)",
    )
    group.add_argument(
        "--reading",
        type=str,
        default=None,
        help="Surface temperature from a thermometer, in °F",
    )


# ---------------------------------------------------------------------------
# Output helpers
# ---------------------------------------------------------------------------


def print_snapshot(snapshot: WeatherSnapshot) -> None:
    hi = snapshot.heat_index
    if snapshot.is_synthetic:
        print("Note: live weather unavailable, showing sample data.")
    print(
        f"{snapshot.location}: {snapshot.temperature_f:.0f}°F, "
        f"{snapshot.humidity_pct:.0f}% humidity, {snapshot.condition}"
    )
    print(f"Heat index: {hi.heat_index_f}°F  {RISK_ICONS[hi.risk_tier]} {hi.risk_tier.upper()}")
    print(hi.advisory)
    print("Safe walk times:")
    for suggestion in snapshot.walk_times:
        print(f"  • {suggestion}")


def print_entry(entry: WalkLogEntry) -> None:
    parts = [
        entry.date.strftime("%Y-%m-%d %H:%M"),
        f"{RISK_ICONS[entry.risk_tier]} {entry.risk_tier.upper()}",
        f"air {entry.temperature_f:.0f}°F",
        f"feels {entry.heat_index_f}°F",
    ]
    if entry.surface_temp_f is not None:
        parts.append(f"ground {entry.surface_temp_f:.0f}°F")
    if entry.duration_minutes is not None:
        parts.append(f"{entry.duration_minutes} min")
    print("  ".join(parts))
    if entry.notes:
        print(f"    {entry.notes}")


def _confirm(prompt: str) -> bool:
    try:
        answer = input(f"{prompt} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def _run_paw_check(session: WalkSession, args: argparse.Namespace) -> PawVerdict:
    if args.timer:
        print(
            "Place the back of your hand on the pavement. "
            f"If you can't hold it for {HOLD_SECONDS} seconds, press Ctrl+C."
        )
        session.start_paw_check(PawMethod.TIMED_HOLD_TEST)
        return session.paw_check.run(on_tick=lambda n: print(f"  {n}/{HOLD_SECONDS}"))
    return session.submit_direct_reading(args.reading)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def cmd_check(args: argparse.Namespace) -> int:
    """Handle the 'check' command."""
    session = WalkSession.from_settings(get_settings())
    try:
        snapshot = session.acquire_current(args.postal_code, synthetic=args.synthetic)
    except (InvalidInput, AcquisitionError) as err:
        print(f"Error: {err}", file=sys.stderr)
        return 1
    print_snapshot(snapshot)
    return 0


def cmd_paw(args: argparse.Namespace) -> int:
    """Handle the 'paw' command."""
    session = WalkSession.from_settings(get_settings())
    try:
        verdict = _run_paw_check(session, args)
    except InvalidInput as err:
        print(f"Error: {err}", file=sys.stderr)
        return 1
    print(verdict.message)
    return 0 if verdict.is_safe else 2


def cmd_walk(args: argparse.Namespace) -> int:
    """Handle the 'walk' command: conditions, paw check, then log."""
    if args.duration is not None and args.duration < 0:
        print("Error: duration must not be negative", file=sys.stderr)
        return 1

    session = WalkSession.from_settings(get_settings())
    try:
        snapshot = session.acquire_current(args.postal_code, synthetic=args.synthetic)
    except (InvalidInput, AcquisitionError) as err:
        print(f"Error: {err}", file=sys.stderr)
        return 1
    print_snapshot(snapshot)

    if session.needs_confirmation and not args.yes:
        risk = snapshot.risk_tier.upper()
        if not _confirm(f"Heat risk is {risk}. Continue with the paw check?"):
            print("Walk cancelled.")
            return 1

    try:
        verdict = _run_paw_check(session, args)
    except InvalidInput as err:
        print(f"Error: {err}", file=sys.stderr)
        return 1
    print(verdict.message)

    entry = session.record_walk(duration_minutes=args.duration, notes=args.notes)
    print(f"Logged walk {entry.id}.")
    return 0


def cmd_history(_args: argparse.Namespace) -> int:
    """Handle the 'history' command."""
    session = WalkSession.from_settings(get_settings())
    entries = session.get_history()
    if not entries:
        print("No walks logged yet.")
        return 0
    for entry in entries:
        print_entry(entry)
    return 0


def cmd_clear(_args: argparse.Namespace) -> int:
    """Handle the 'clear' command."""
    session = WalkSession.from_settings(get_settings())
    session.clear_history()
    print("Walk history cleared.")
    return 0


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Debug: {settings.debug}")
    print(f"Data file: {settings.settings_file}")
    return 0


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    debug = args.debug or get_settings().debug
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if debug else logging.WARNING,
    )

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "check": cmd_check,
        "paw": cmd_paw,
        "walk": cmd_walk,
        "history": cmd_history,
        "clear": cmd_clear,
        "info": cmd_info,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
