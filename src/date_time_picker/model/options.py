"""FieldOptions: construction parameters of a date/time field."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from date_time_picker.errors import BoundsError, ConfigurationError
from date_time_picker.model.mode import Mode, ModeStrategy, get_strategy


class DateEntryMode(Enum):
    """How the date picker starts."""

    CALENDAR = "calendar"  # month grid
    INPUT = "input"  # typed YYYY-MM-DD


class DatePickerMode(Enum):
    """Which view the calendar opens on."""

    DAY = "day"  # month grid of days
    YEAR = "year"  # list of years


class TimeEntryMode(Enum):
    """How the time picker starts."""

    DIAL = "dial"  # step buttons
    INPUT = "input"  # typed hour and minute


@dataclass
class FieldOptions:
    """Everything a host configures on a field, validated on construction.

    first_date/last_date are required for every mode except TIME; they bound
    what the date picker offers rather than being checked after the fact.
    """

    mode: Mode = Mode.DATE
    first_date: dt.date | None = None
    last_date: dt.date | None = None
    initial_date: dt.date | None = None  # fallback when the field has no value
    initial_time: dt.time | None = None  # fallback when the field has no value
    mask: str | None = None  # LDML pattern for the date label
    locale: str | None = None
    use_24_hour_format: bool = True
    date_picker_entry_mode: DateEntryMode = DateEntryMode.CALENDAR
    time_picker_entry_mode: TimeEntryMode = TimeEntryMode.DIAL
    initial_date_picker_mode: DatePickerMode = DatePickerMode.DAY
    selectable_day_predicate: Callable[[dt.date], bool] | None = None
    read_only: bool = False
    enabled: bool = True

    # Texts shown by the field and its dialogs
    date_label_text: str = ""
    time_label_text: str = ""
    date_hint_text: str = ""
    time_hint_text: str = ""
    calendar_title: str = "Select date"
    time_title: str = "Select time"
    cancel_text: str = "Cancel"
    confirm_text: str = "OK"
    field_label_text: str = "Enter date"  # typed date entry
    field_hint_text: str = "YYYY-MM-DD"
    error_format_text: str = "Invalid format."
    error_invalid_text: str = "Out of range."

    # Host callbacks, all receiving the canonical value
    on_changed: Callable[[str], None] | None = None
    validator: Callable[[str], str | None] | None = None
    on_saved: Callable[[str], None] | None = None

    def __post_init__(self) -> None:
        try:
            self.mode = Mode(self.mode)
            self.date_picker_entry_mode = DateEntryMode(self.date_picker_entry_mode)
            self.time_picker_entry_mode = TimeEntryMode(self.time_picker_entry_mode)
            self.initial_date_picker_mode = DatePickerMode(self.initial_date_picker_mode)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

        if isinstance(self.first_date, dt.datetime):
            self.first_date = self.first_date.date()
        if isinstance(self.last_date, dt.datetime):
            self.last_date = self.last_date.date()

        if self.strategy.requires_bounds:
            if self.first_date is None or self.last_date is None:
                raise ConfigurationError(
                    f"first_date and last_date are required for {self.mode.value} fields"
                )
            if self.first_date > self.last_date:
                raise ConfigurationError(
                    f"first_date {self.first_date} is after last_date {self.last_date}"
                )
            if self.initial_date is not None and not self.in_bounds(self.initial_date):
                raise ConfigurationError(
                    f"initial_date {self.initial_date} is outside "
                    f"[{self.first_date}, {self.last_date}]"
                )

    @property
    def strategy(self) -> ModeStrategy:
        return get_strategy(self.mode)

    @property
    def interactive(self) -> bool:
        """Whether taps open pickers."""
        return self.enabled and not self.read_only

    def in_bounds(self, value: dt.date) -> bool:
        if self.first_date is not None and value < self.first_date:
            return False
        if self.last_date is not None and value > self.last_date:
            return False
        return True

    def clamp(self, value: dt.date) -> dt.date:
        """Move a date into [first_date, last_date]."""
        if self.first_date is not None and value < self.first_date:
            return self.first_date
        if self.last_date is not None and value > self.last_date:
            return self.last_date
        return value

    def check_bounds(self, value: dt.date) -> dt.date:
        """Return value unchanged, or raise BoundsError if it is out of range."""
        if not self.in_bounds(value):
            raise BoundsError(f"{value} is outside [{self.first_date}, {self.last_date}]")
        return value
