"""Model classes for the date/time field."""

from date_time_picker.model.moment import Period, StructuredMoment
from date_time_picker.model.mode import (
    FieldPart,
    Mode,
    ModeStrategy,
    get_strategy,
    list_modes,
    register_mode,
)
from date_time_picker.model.options import (
    DateEntryMode,
    DatePickerMode,
    FieldOptions,
    TimeEntryMode,
)
from date_time_picker.model.formatting import FormatEngine, render, resolve_locale
from date_time_picker.model.canonical import (
    CanonicalValueStore,
    is_absent,
    parse_canonical,
    serialize_canonical,
)

__all__ = [
    "Period",
    "StructuredMoment",
    "FieldPart",
    "Mode",
    "ModeStrategy",
    "get_strategy",
    "list_modes",
    "register_mode",
    "DateEntryMode",
    "DatePickerMode",
    "FieldOptions",
    "TimeEntryMode",
    "FormatEngine",
    "render",
    "resolve_locale",
    "CanonicalValueStore",
    "is_absent",
    "parse_canonical",
    "serialize_canonical",
]
