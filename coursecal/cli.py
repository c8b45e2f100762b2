"""Command-line interface for the coursecal calendar engine."""

import argparse
import dataclasses
import logging
import sys
from datetime import date, datetime
from typing import Optional

from .calendar_manager import CalendarManager
from .categories import get_vocabulary
from .colors import Colors
from .config import CalendarConfig, find_default_config, load_config, parse_week_start
from .errors import CalendarError
from .upcoming import TIMEFRAMES, reminder_message
from .view import CalendarView


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="coursecal",
        description="Display course calendar events in a month, week or day terminal view",
        epilog="""
Examples:
  %(prog)s events.json                       # Current month
  %(prog)s -v week -d 2025-04-22 events.json # Week containing April 22
  %(prog)s -v day --category exam events.json
  %(prog)s --upcoming week events.json       # Upcoming panel for the next 7 days
  %(prog)s -c coursecal.json                 # Use config file (coursecal.json auto-detected)

Config file format (coursecal.json or calendar.json):
  {
    "vocabulary": "student",
    "week_start": "sunday",
    "default_category": "assignment",
    "max_events_per_day": 2,
    "events": "events.json"
  }
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "events",
        nargs="?",
        metavar="EVENTS",
        help="JSON file with the events to display. Overrides the config file's 'events'.",
    )
    parser.add_argument(
        "-c",
        "--config",
        metavar="FILE",
        help="Path to JSON configuration file. If not specified, looks for "
        "'coursecal.json' or 'calendar.json' in the current directory.",
    )
    parser.add_argument(
        "-v",
        "--view",
        choices=["month", "week", "day"],
        default="month",
        help="Calendar granularity. Default: month.",
    )
    parser.add_argument(
        "-d",
        "--date",
        metavar="YYYY-MM-DD",
        help="Anchor date of the view. Default: today.",
    )
    parser.add_argument(
        "--category",
        action="append",
        metavar="NAME",
        help="Only show events of this category. Repeat to select several; "
        "omit to show every category.",
    )
    parser.add_argument(
        "--vocabulary",
        choices=["student", "admin", "instructor"],
        help="Category vocabulary of the calendar. Overrides the config file.",
    )
    parser.add_argument(
        "--week-start",
        metavar="DAY",
        help="First day of the week (e.g. sunday, monday). Overrides the config file.",
    )
    parser.add_argument(
        "--upcoming",
        choices=list(TIMEFRAMES),
        help="Print the upcoming events panel for a timeframe instead of the calendar.",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output (useful for non-interactive terminals or piping).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging on stderr.",
    )
    return parser


def _load_settings(args: argparse.Namespace) -> CalendarConfig:
    config = CalendarConfig()
    if args.config:
        try:
            config = load_config(args.config)
        except FileNotFoundError:
            print(f"Error: Config file not found: {args.config}", file=sys.stderr)
            sys.exit(1)
        except PermissionError:
            print(
                f"Error: Permission denied reading config file: {args.config}",
                file=sys.stderr,
            )
            sys.exit(1)
        except ValueError as e:
            print(f"Error: Invalid config file: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        default = find_default_config()
        if default:
            print(f"Using config file: {default}", file=sys.stderr)
            try:
                config = load_config(default)
            except Exception as e:
                print(
                    f"Warning: Failed to load config file {default}: {e}",
                    file=sys.stderr,
                )

    if args.vocabulary:
        config = dataclasses.replace(config, vocabulary=get_vocabulary(args.vocabulary))
    if args.week_start:
        try:
            config = dataclasses.replace(
                config, week_start=parse_week_start(args.week_start)
            )
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
    if args.events:
        config = dataclasses.replace(config, events_path=args.events)
    return config


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point for the coursecal CLI application."""
    args = build_parser().parse_args(argv)

    if args.no_color or not sys.stdout.isatty():
        Colors.disable()
    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )

    anchor: Optional[date] = None
    if args.date:
        try:
            anchor = datetime.strptime(args.date, "%Y-%m-%d").date()
        except ValueError:
            print(
                f"Error: Invalid date format '{args.date}'. "
                "Use YYYY-MM-DD (e.g., 2025-01-15)",
                file=sys.stderr,
            )
            sys.exit(1)

    config = _load_settings(args)
    if not config.events_path:
        print("Error: No events file provided.", file=sys.stderr)
        print("Use --help for usage information.", file=sys.stderr)
        sys.exit(1)

    manager = CalendarManager(config, anchor=anchor, granularity=args.view)
    try:
        manager.load_events(config.events_path)
        for category in args.category or []:
            manager.toggle_filter(category)
    except FileNotFoundError:
        print(f"Error: Events file not found: {config.events_path}", file=sys.stderr)
        sys.exit(1)
    except (CalendarError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.upcoming:
        print_upcoming(manager, args.upcoming)
        return

    view = CalendarView(
        manager.project(), config.vocabulary, config.week_start, manager.clock()
    )
    view.display()


def print_upcoming(manager: CalendarManager, timeframe: str) -> None:
    events = manager.upcoming(timeframe)
    now = manager.clock()
    print(f"{Colors.BOLD}Upcoming events ({timeframe}){Colors.RESET}")
    if not events:
        print(f"{Colors.DIM}  No upcoming events{Colors.RESET}")
        return
    for e in events:
        label = manager.config.vocabulary.info(e.category).label
        print(
            f"  {Colors.BLUE}{reminder_message(e.start, now):<16}{Colors.RESET}"
            f"{e.title} {Colors.DIM}[{label}]{Colors.RESET}"
        )
