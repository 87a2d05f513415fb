"""Command-line interface: run the picker demo or a single configured field."""

from __future__ import annotations

import argparse
import datetime as dt
import sys

from date_time_picker import __version__
from date_time_picker.errors import DateTimePickerError
from date_time_picker.model import (
    DateEntryMode,
    DatePickerMode,
    FieldOptions,
    Mode,
    TimeEntryMode,
    list_modes,
    resolve_locale,
)

DEFAULT_FIRST_DATE = dt.date(1900, 1, 1)
DEFAULT_LAST_DATE = dt.date(2100, 12, 31)


def print_error_box(title: str, *lines: str) -> None:
    """Print a formatted error box to stderr.

    Args:
        title: The error title (will be prefixed with "Error: ")
        *lines: Additional lines to print in the box
    """
    print("=" * 60, file=sys.stderr)
    print(f"Error: {title}", file=sys.stderr)
    print("", file=sys.stderr)
    for line in lines:
        print(line, file=sys.stderr)
    print("=" * 60, file=sys.stderr)


def _iso_date(text: str) -> dt.date:
    try:
        return dt.date.fromisoformat(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {text!r}") from None


# Flags that configure the single --mode field, by argparse dest
FIELD_FLAGS = {
    "value": "--value",
    "mask": "--mask",
    "locale": "--locale",
    "use_24_hour": "--12h",
    "first_date": "--first-date",
    "last_date": "--last-date",
    "date_entry": "--date-entry",
    "time_entry": "--time-entry",
    "date_view": "--date-view",
    "weekdays_only": "--weekdays-only",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="date-time-picker",
        description="Pick dates and times in the terminal. Prints the canonical value(s) on exit.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--mode",
        choices=list_modes(),
        help="Show a single field of this mode (default: one field of each mode)",
    )
    parser.add_argument("--value", help="Initial value, e.g. 2020-07-23 or 14:30")
    parser.add_argument("--mask", help='Date label pattern, e.g. "d MMM, yyyy"')
    parser.add_argument("--locale", help="Locale tag, e.g. pt_BR")
    parser.add_argument(
        "--12h", dest="use_24_hour", action="store_false", help="Use a 12-hour clock"
    )
    parser.add_argument("--first-date", type=_iso_date, default=DEFAULT_FIRST_DATE)
    parser.add_argument("--last-date", type=_iso_date, default=DEFAULT_LAST_DATE)
    parser.add_argument(
        "--date-entry",
        choices=[m.value for m in DateEntryMode],
        default=DateEntryMode.CALENDAR.value,
    )
    parser.add_argument(
        "--time-entry",
        choices=[m.value for m in TimeEntryMode],
        default=TimeEntryMode.DIAL.value,
    )
    parser.add_argument(
        "--date-view",
        choices=[m.value for m in DatePickerMode],
        default=DatePickerMode.DAY.value,
        help="View the calendar opens on",
    )
    parser.add_argument(
        "--weekdays-only", action="store_true", help="Only allow Monday to Friday"
    )
    return parser


def options_from_args(args: argparse.Namespace) -> FieldOptions:
    """Build FieldOptions for --mode from parsed arguments."""
    return FieldOptions(
        mode=Mode(args.mode),
        first_date=args.first_date,
        last_date=args.last_date,
        mask=args.mask,
        locale=args.locale,
        use_24_hour_format=args.use_24_hour,
        date_picker_entry_mode=DateEntryMode(args.date_entry),
        time_picker_entry_mode=TimeEntryMode(args.time_entry),
        initial_date_picker_mode=DatePickerMode(args.date_view),
        selectable_day_predicate=(lambda d: d.weekday() < 5) if args.weekdays_only else None,
        date_label_text="Date",
        time_label_text="Time",
    )


def field_flags_without_mode(parser: argparse.ArgumentParser, args: argparse.Namespace) -> list[str]:
    """Field flags given on the command line even though --mode was not."""
    if args.mode:
        return []
    return [flag for dest, flag in FIELD_FLAGS.items() if getattr(args, dest) != parser.get_default(dest)]


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    stray = field_flags_without_mode(parser, args)
    if stray:
        print_error_box(
            f"{', '.join(stray)} only apply with --mode",
            "Without --mode the demo shows its own preset fields.",
        )
        return 1

    # Imported here so --help and --version do not set up the app's logging
    from date_time_picker.app import FieldSpec, PickerDemoApp

    fields = None
    if args.mode:
        try:
            resolve_locale(args.locale)
            fields = [FieldSpec(options_from_args(args), initial_value=args.value)]
        except DateTimePickerError as e:
            print_error_box(str(e), "Check --mode, --first-date, --last-date and --locale.")
            return 1

    try:
        values = PickerDemoApp(fields).run()
    except DateTimePickerError as e:
        print_error_box(str(e))
        return 1

    for name, value in (values or {}).items():
        print(f"{name}: {value}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
