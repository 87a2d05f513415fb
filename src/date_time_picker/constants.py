"""Shared constants for the date/time field."""

# Canonical (machine) formats handed to host callbacks. Never locale-aware.
CANONICAL_DATE_FORMAT = "{year:04d}-{month:02d}-{day:02d}"
CANONICAL_TIME_FORMAT = "{hour:02d}:{minute:02d}"

# Default display masks (LDML patterns, formatted by Babel)
DATE_MASK = "MMM d, yyyy"
DATE_TIME_MASK_24H = "MMM d, yyyy - HH:mm"
DATE_TIME_MASK_12H = "MMM d, yyyy - hh:mm a"
TIME_MASK_24H = "HH:mm"
TIME_MASK_12H = "hh:mm"

# Day period suffixes appended to the 12-hour time label
AM_SUFFIX = " AM"
PM_SUFFIX = " PM"

DEFAULT_LOCALE = "en_US"

# Text values that mean "no value" when seeding or parsing
ABSENT_VALUES = frozenset({"", "null"})
