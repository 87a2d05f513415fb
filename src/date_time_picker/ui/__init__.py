"""Textual UI for the date/time field."""

from date_time_picker.ui.modals import DatePickerModal, DayButton, TimePickerModal, YearButton
from date_time_picker.ui.pickers import TextualPickers
from date_time_picker.ui.widgets import DateTimeField, FieldLabel

__all__ = [
    "DatePickerModal",
    "DayButton",
    "TimePickerModal",
    "YearButton",
    "TextualPickers",
    "DateTimeField",
    "FieldLabel",
]
