"""Controller layer: keeps a field's value, labels and host buffer in sync.

This package contains:
- binding: TextBuffer and ExternalBindingAdapter (host buffer sync)
- session: SelectionSession, the picker-dialog state machine
- field: FieldController, the per-field facade
"""

from date_time_picker.controller.binding import ExternalBindingAdapter, TextBuffer
from date_time_picker.controller.session import (
    DatePickRequest,
    PickerProvider,
    SelectionSession,
    SessionResult,
    SessionState,
    SessionStateError,
    TimePickRequest,
)
from date_time_picker.controller.field import FieldController

__all__ = [
    # Binding
    "ExternalBindingAdapter",
    "TextBuffer",
    # Session
    "DatePickRequest",
    "PickerProvider",
    "SelectionSession",
    "SessionResult",
    "SessionState",
    "SessionStateError",
    "TimePickRequest",
    # Facade
    "FieldController",
]
