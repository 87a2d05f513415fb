"""Demo Textual application hosting one or more date/time fields."""

from __future__ import annotations

import datetime as dt
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, VerticalScroll
from textual.widgets import Button, Static

from date_time_picker.controller import TextBuffer
from date_time_picker.model import FieldOptions, Mode
from date_time_picker.ui import DateTimeField
from date_time_picker.ui.ids import css
import date_time_picker.ui.ids as ids


# Set up logging to XDG state directory
def _get_log_path() -> Path:
    """Get the log file path using XDG Base Directory spec."""
    xdg_state = os.environ.get("XDG_STATE_HOME", str(Path.home() / ".local" / "state"))
    log_dir = Path(xdg_state) / "date-time-picker"
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir / "date-time-picker.log"


logging.basicConfig(
    filename=str(_get_log_path()),
    level=logging.DEBUG,
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
)
log = logging.getLogger(__name__)


@dataclass
class FieldSpec:
    """One field of the demo: its options plus where its value comes from."""

    options: FieldOptions
    binding: TextBuffer | None = None
    initial_value: str | None = None


def _weekday(day: dt.date) -> bool:
    return day.weekday() < 5


def demo_fields() -> list[FieldSpec]:
    """One field per mode, configured like a typical booking form."""
    first, last = dt.date(2000, 1, 1), dt.date(2100, 12, 31)
    return [
        FieldSpec(
            FieldOptions(
                mode=Mode.DATE_TIME_SEPARATE,
                first_date=first,
                last_date=last,
                mask="d MMM, yyyy",
                date_label_text="Date",
                time_label_text="Hour",
                selectable_day_predicate=_weekday,
            ),
            binding=TextBuffer("2000-09-20 14:30"),
        ),
        FieldSpec(
            FieldOptions(
                mode=Mode.DATE_TIME,
                first_date=first,
                last_date=last,
                mask="d MMMM, yyyy - hh:mm a",
                date_label_text="Date Time",
                use_24_hour_format=False,
            ),
            binding=TextBuffer("2001-10-21 15:31"),
        ),
        FieldSpec(
            FieldOptions(
                mode=Mode.DATE,
                first_date=first,
                last_date=last,
                mask="yyyy/MM/dd",
                date_label_text="Date",
            ),
            binding=TextBuffer("2002-11-22"),
        ),
        FieldSpec(
            FieldOptions(mode=Mode.TIME, time_label_text="Time"),
            binding=TextBuffer("17:01"),
        ),
    ]


class PickerDemoApp(App[dict[str, str]]):
    """Shows date/time fields and the values they report.

    Exits with a mapping of field id to canonical value.
    """

    TITLE = "Date Time Picker"
    ENABLE_COMMAND_PALETTE = False

    CSS = """
    #demo-fields {
        height: auto;
        max-height: 70%;
    }
    DateTimeField {
        margin: 0 0 1 0;
    }
    #demo-values {
        height: auto;
        padding: 1;
    }
    #footer-buttons {
        dock: bottom;
        height: auto;
    }
    #status-bar {
        width: 1fr;
        padding: 1;
    }
    """

    BINDINGS = [
        Binding("ctrl+s", "submit", "Submit", show=True),
        Binding("ctrl+r", "reset", "Reset", show=True),
        Binding("escape", "quit_with_values", "Quit", show=True),
    ]

    def __init__(self, fields: list[FieldSpec] | None = None) -> None:
        super().__init__()
        self.specs = fields if fields is not None else demo_fields()
        self.changed: dict[str, str] = {}
        self.saved: dict[str, str] = {}

    def compose(self) -> ComposeResult:
        with VerticalScroll(id=ids.DEMO_FIELDS):
            for index, spec in enumerate(self.specs):
                yield DateTimeField(
                    spec.options,
                    binding=spec.binding,
                    initial_value=spec.initial_value,
                    id=f"field-{index}",
                )
        yield Static(self._values_text(), id=ids.DEMO_VALUES)
        yield Horizontal(
            Static("", id=ids.STATUS_BAR),
            Button("Submit [^S]", id=ids.SUBMIT_BTN, variant="success"),
            Button("Reset [^R]", id=ids.RESET_BTN, variant="default"),
            id="footer-buttons",
        )

    @property
    def fields(self) -> list[DateTimeField]:
        return list(self.query(DateTimeField))

    def values(self) -> dict[str, str]:
        return {field.id: field.value for field in self.fields}

    def _values_text(self) -> str:
        lines = ["Values onChanged:"]
        lines += [f"  {name}: {value}" for name, value in self.changed.items()]
        lines.append("Values onSaved:")
        lines += [f"  {name}: {value}" for name, value in self.saved.items()]
        return "\n".join(lines)

    def _update_values(self) -> None:
        self.query_one(css(ids.DEMO_VALUES), Static).update(self._values_text())

    def _set_status(self, message: str) -> None:
        self.query_one(css(ids.STATUS_BAR), Static).update(message)

    @on(DateTimeField.Changed)
    def on_field_changed(self, event: DateTimeField.Changed) -> None:
        log.info(f"{event.field.id} changed to {event.value!r}")
        self.changed[event.field.id] = event.value
        self._update_values()

    @on(Button.Pressed, css(ids.SUBMIT_BTN))
    def on_submit_pressed(self, event: Button.Pressed) -> None:
        self.action_submit()

    @on(Button.Pressed, css(ids.RESET_BTN))
    def on_reset_pressed(self, event: Button.Pressed) -> None:
        self.action_reset()

    def action_submit(self) -> None:
        """Validate every field; save them all only if none reports an error."""
        errors = []
        for field in self.fields:
            message = field.controller.validate()
            if message:
                errors.append(f"{field.id}: {message}")
        if errors:
            self._set_status("; ".join(errors))
            return
        for field in self.fields:
            field.controller.save()
            self.saved[field.id] = field.value
        self._update_values()
        self._set_status("Saved")

    def action_reset(self) -> None:
        for field in self.fields:
            field.controller.reset()
        self._set_status("Reset")

    def action_quit_with_values(self) -> None:
        self.exit(self.values())
