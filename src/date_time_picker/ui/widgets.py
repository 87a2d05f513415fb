"""DateTimeField: a Textual widget around a FieldController."""

from __future__ import annotations

import datetime as dt
import logging
from typing import Callable

from textual import events, work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.widgets import Label, Static

from date_time_picker.controller import FieldController, TextBuffer
from date_time_picker.model import FieldOptions, FieldPart
from date_time_picker.ui.pickers import TextualPickers

log = logging.getLogger(__name__)


class FieldLabel(Static, can_focus=True):
    """Read-only display of one part's label; click or Enter opens the picker."""

    BINDINGS = [Binding("enter", "tap", "Pick", show=False)]

    def __init__(self, part: FieldPart, text: str, on_tap: Callable[[FieldPart], None]) -> None:
        super().__init__(text, classes=f"field-label field-label-{part.value}")
        self.part = part
        self._on_tap = on_tap

    def on_click(self, event: events.Click) -> None:
        event.stop()
        self._on_tap(self.part)

    def action_tap(self) -> None:
        self._on_tap(self.part)


class DateTimeField(Horizontal):
    """A date, time, date-time or separate date + time field.

    Shows one label per part (two in DATE_TIME_SEPARATE mode) and posts
    DateTimeField.Changed whenever a picker commits a new canonical value.
    """

    DEFAULT_CSS = """
    DateTimeField {
        height: auto;
    }
    DateTimeField .field-part {
        width: 1fr;
        height: auto;
    }
    DateTimeField .field-caption {
        color: $text-muted;
    }
    DateTimeField .field-label {
        border: tall $primary-background;
        padding: 0 1;
    }
    DateTimeField .field-label:focus {
        border: tall $accent;
    }
    """

    class Changed(Message):
        """Posted when the user commits a different value."""

        def __init__(self, field: DateTimeField, value: str) -> None:
            super().__init__()
            self.field = field
            self.value = value

        @property
        def control(self) -> DateTimeField:
            return self.field

    def __init__(
        self,
        options: FieldOptions,
        *,
        binding: TextBuffer | None = None,
        initial_value: str | None = None,
        clock: Callable[[], dt.datetime] = dt.datetime.now,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self.options = options
        self.controller = FieldController(
            options, binding=binding, initial_value=initial_value, clock=clock
        )

    def _caption(self, part: FieldPart) -> str:
        if part is FieldPart.TIME:
            return self.options.time_label_text
        return self.options.date_label_text

    def _hint(self, part: FieldPart) -> str:
        if part is FieldPart.TIME:
            return self.options.time_hint_text
        return self.options.date_hint_text

    def _label_text(self, part: FieldPart) -> str:
        return self.controller.display_label(part) or self._hint(part)

    def compose(self) -> ComposeResult:
        for part in self.controller.strategy.parts:
            with Vertical(classes="field-part"):
                caption = self._caption(part)
                if caption:
                    yield Label(caption, classes="field-caption")
                yield FieldLabel(part, self._label_text(part), self.open_pickers)

    def on_mount(self) -> None:
        self.controller.pickers = TextualPickers(self.app)
        self.controller.add_listener(self.refresh_labels)
        self.controller.resume()
        self.refresh_labels()

    def on_unmount(self) -> None:
        # The field may be mounted again; call controller.dispose() to finish with it
        self.controller.remove_listener(self.refresh_labels)
        self.controller.suspend()

    @property
    def value(self) -> str:
        return self.controller.current_value()

    def refresh_labels(self) -> None:
        for label in self.query(FieldLabel):
            label.update(self._label_text(label.part))

    @work(group="date-time-picker")
    async def open_pickers(self, part: FieldPart | None = None) -> None:
        """Run the picker dialog(s) for a part (worker, so dialogs can be awaited)."""
        before = self.controller.current_value()
        await self.controller.tap(part)
        after = self.controller.current_value()
        if after != before:
            self.post_message(self.Changed(self, after))
