"""A date, time or date-time field for Textual apps.

The field keeps three things consistent: a canonical text value handed to
the host ("YYYY-MM-DD", "HH:MM" or "YYYY-MM-DD HH:MM"), the structured date and
time behind it, and the locale-formatted label(s) shown to the user.
"""

__version__ = "0.1.0"

from date_time_picker.errors import (
    BoundsError,
    ConfigurationError,
    DateTimePickerError,
    ParseError,
)
from date_time_picker.model import (
    FieldOptions,
    FieldPart,
    FormatEngine,
    Mode,
    StructuredMoment,
)
from date_time_picker.controller import (
    FieldController,
    SelectionSession,
    SessionState,
    TextBuffer,
)

__all__ = [
    "__version__",
    "BoundsError",
    "ConfigurationError",
    "DateTimePickerError",
    "ParseError",
    "FieldOptions",
    "FieldPart",
    "FormatEngine",
    "Mode",
    "StructuredMoment",
    "FieldController",
    "SelectionSession",
    "SessionState",
    "TextBuffer",
]
