"""Exceptions raised by the date/time field core."""


class DateTimePickerError(Exception):
    """Base class for all date/time field errors."""


class ParseError(DateTimePickerError, ValueError):
    """Raised when text does not match the canonical shape for a mode."""


class BoundsError(DateTimePickerError, ValueError):
    """Raised when a chosen date falls outside [first_date, last_date]."""


class ConfigurationError(DateTimePickerError):
    """Raised when a field is constructed with invalid options."""
