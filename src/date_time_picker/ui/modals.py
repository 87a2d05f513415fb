"""Modal date and time picker dialogs.

Both dialogs dismiss with the chosen value, or with None when cancelled
(Cancel button or Escape). They only offer values the request allows: the
date dialog disables days outside the bounds or rejected by the selectable
day predicate.
"""

from __future__ import annotations

import calendar
import datetime as dt

from babel.dates import format_date, get_day_names
from textual import on
from textual.app import ComposeResult
from textual.containers import Grid, Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Static

from date_time_picker.controller.session import DatePickRequest, TimePickRequest
from date_time_picker.model.formatting import resolve_locale
from date_time_picker.model.moment import Period
from date_time_picker.model.options import DateEntryMode, DatePickerMode, TimeEntryMode
from date_time_picker.ui.ids import css, day_id
import date_time_picker.ui.ids as ids

MODAL_CSS = """
DatePickerModal, TimePickerModal {
    align: center middle;
}
#date-picker-modal, #time-picker-modal {
    width: auto;
    height: auto;
    padding: 1 2;
    border: thick $primary;
    background: $surface;
}
#modal-title {
    text-style: bold;
}
#modal-error {
    color: $error;
}
#month-nav, #time-row, #modal-buttons {
    height: auto;
    width: auto;
}
#month-label {
    width: 20;
    content-align: center middle;
}
#day-grid {
    grid-size: 7;
    grid-rows: 1;
    grid-columns: 5;
    width: 35;
    height: auto;
}
#year-grid {
    grid-size: 5;
    grid-rows: 1;
    grid-columns: 7;
    width: 35;
    height: auto;
    max-height: 12;
    overflow-y: auto;
}
.nav-btn, .step-btn, DayButton, YearButton {
    height: 1;
    min-width: 4;
    border: none;
}
.weekday {
    color: $text-muted;
}
.time-column {
    width: 8;
    height: auto;
    align: center middle;
}
#hour-input, #minute-input {
    width: 8;
}
"""


class DayButton(Button):
    """One day cell of the month grid."""

    def __init__(self, day: dt.date, selectable: bool, selected: bool) -> None:
        super().__init__(
            str(day.day),
            id=day_id(day),
            classes="day-btn",
            variant="primary" if selected else "default",
            disabled=not selectable,
        )
        self.day = day


class YearButton(Button):
    """One year of the year list."""

    def __init__(self, year: int, selected: bool) -> None:
        super().__init__(
            str(year),
            id=ids.year_id(year),
            classes="year-btn",
            variant="primary" if selected else "default",
        )
        self.year = year


class DatePickerModal(ModalScreen[dt.date | None]):
    """Calendar (day grid or year list) or typed date dialog."""

    DEFAULT_CSS = MODAL_CSS
    BINDINGS = [("escape", "cancel", "Cancel")]

    def __init__(self, request: DatePickRequest) -> None:
        super().__init__()
        self.request = request
        self.locale = resolve_locale(request.locale)
        self.selected = request.initial_date
        self.month = request.initial_date.replace(day=1)
        self.error_text = ""

    def compose(self) -> ComposeResult:
        request = self.request
        with Vertical(id=ids.DATE_PICKER_MODAL):
            yield Label(request.title, id=ids.MODAL_TITLE)
            yield Label(self._selected_text(), id=ids.SELECTED_DATE)
            if request.entry_mode is DateEntryMode.INPUT:
                yield Label(request.field_label_text, id=ids.DATE_INPUT_LABEL)
                yield Input(
                    value=self.selected.isoformat(),
                    placeholder=request.field_hint_text,
                    id=ids.DATE_INPUT,
                )
            else:
                with Horizontal(id=ids.MONTH_NAV):
                    yield Button("<", id=ids.PREV_MONTH_BTN, classes="nav-btn")
                    yield Label(self._month_text(), id=ids.MONTH_LABEL)
                    yield Button(">", id=ids.NEXT_MONTH_BTN, classes="nav-btn")
                    yield Button("Year", id=ids.YEAR_VIEW_BTN, classes="nav-btn")
                yield Grid(id=ids.DAY_GRID)
                yield Grid(id=ids.YEAR_GRID)
            yield Static("", id=ids.MODAL_ERROR)
            with Horizontal(id=ids.MODAL_BUTTONS):
                yield Button(request.cancel_text, id=ids.CANCEL_BTN, variant="default")
                yield Button(request.confirm_text, id=ids.CONFIRM_BTN, variant="success")

    async def on_mount(self) -> None:
        if self.request.entry_mode is DateEntryMode.INPUT:
            self.query_one(css(ids.DATE_INPUT), Input).focus()
        else:
            await self._build_month()
            if self.request.initial_view is DatePickerMode.YEAR:
                await self._show_years()
            else:
                self.query_one(css(ids.YEAR_GRID), Grid).display = False

    def _selected_text(self) -> str:
        return format_date(self.selected, format="EEE, MMM d", locale=self.locale)

    def _month_text(self) -> str:
        return format_date(self.month, format="LLLL yyyy", locale=self.locale)

    def _shift_month(self, months: int) -> dt.date:
        index = self.month.year * 12 + self.month.month - 1 + months
        return dt.date(index // 12, index % 12 + 1, 1)

    async def _build_month(self) -> None:
        """(Re)populate the day grid for self.month."""
        request = self.request
        grid = self.query_one(css(ids.DAY_GRID), Grid)
        await grid.remove_children()

        first_weekday = self.locale.first_week_day
        day_names = get_day_names("abbreviated", locale=self.locale)
        cells: list[Static | Button] = [
            Static(day_names[(first_weekday + i) % 7][:3], classes="weekday") for i in range(7)
        ]
        weeks = calendar.Calendar(first_weekday).monthdatescalendar(self.month.year, self.month.month)
        for week in weeks:
            for day in week:
                if day.month != self.month.month:
                    cells.append(Static(""))
                else:
                    cells.append(DayButton(day, request.is_selectable(day), day == self.selected))
        await grid.mount(*cells)

        self.query_one(css(ids.MONTH_LABEL), Label).update(self._month_text())
        self.query_one(css(ids.PREV_MONTH_BTN), Button).disabled = (
            self.month <= request.first_date.replace(day=1)
        )
        self.query_one(css(ids.NEXT_MONTH_BTN), Button).disabled = (
            self.month >= request.last_date.replace(day=1)
        )

    async def _show_years(self) -> None:
        """Replace the day grid with the years between the bounds."""
        request = self.request
        grid = self.query_one(css(ids.YEAR_GRID), Grid)
        await grid.remove_children()
        years = range(request.first_date.year, request.last_date.year + 1)
        await grid.mount(*[YearButton(year, year == self.month.year) for year in years])
        self.query_one(css(ids.DAY_GRID), Grid).display = False
        grid.display = True
        grid.query_one(css(ids.year_id(self.month.year)), YearButton).scroll_visible()

    def _show_days(self) -> None:
        self.query_one(css(ids.YEAR_GRID), Grid).display = False
        self.query_one(css(ids.DAY_GRID), Grid).display = True

    def _show_error(self, message: str) -> None:
        self.error_text = message
        self.query_one(css(ids.MODAL_ERROR), Static).update(message)

    @on(Button.Pressed, css(ids.YEAR_VIEW_BTN))
    async def on_year_view(self, event: Button.Pressed) -> None:
        event.stop()
        if self.query_one(css(ids.YEAR_GRID), Grid).display:
            self._show_days()
        else:
            await self._show_years()

    @on(Button.Pressed, ".year-btn")
    async def on_year_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        first = self.request.first_date.replace(day=1)
        last = self.request.last_date.replace(day=1)
        self.month = min(max(self.month.replace(year=event.button.year), first), last)
        await self._build_month()
        self._show_days()

    @on(Button.Pressed, ".day-btn")
    def on_day_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.selected = event.button.day
        for button in self.query(DayButton):
            button.variant = "primary" if button.day == self.selected else "default"
        self.query_one(css(ids.SELECTED_DATE), Label).update(self._selected_text())
        self._show_error("")

    @on(Button.Pressed, css(ids.PREV_MONTH_BTN))
    async def on_prev_month(self, event: Button.Pressed) -> None:
        event.stop()
        self.month = self._shift_month(-1)
        await self._build_month()

    @on(Button.Pressed, css(ids.NEXT_MONTH_BTN))
    async def on_next_month(self, event: Button.Pressed) -> None:
        event.stop()
        self.month = self._shift_month(1)
        await self._build_month()

    def _typed_date(self) -> dt.date | None:
        text = self.query_one(css(ids.DATE_INPUT), Input).value.strip()
        try:
            return dt.date.fromisoformat(text)
        except ValueError:
            self._show_error(self.request.error_format_text)
            return None

    @on(Button.Pressed, css(ids.CONFIRM_BTN))
    def on_confirm(self, event: Button.Pressed) -> None:
        event.stop()
        self.action_confirm()

    @on(Input.Submitted, css(ids.DATE_INPUT))
    def on_date_submitted(self, event: Input.Submitted) -> None:
        self.action_confirm()

    def action_confirm(self) -> None:
        if self.request.entry_mode is DateEntryMode.INPUT:
            typed = self._typed_date()
            if typed is None:
                return
            self.selected = typed
        if not self.request.is_selectable(self.selected):
            self._show_error(self.request.error_invalid_text)
            return
        self.dismiss(self.selected)

    @on(Button.Pressed, css(ids.CANCEL_BTN))
    def on_cancel(self, event: Button.Pressed) -> None:
        event.stop()
        self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)


class TimePickerModal(ModalScreen[dt.time | None]):
    """Time dialog with step buttons (dial) or typed hour/minute (input)."""

    DEFAULT_CSS = MODAL_CSS
    BINDINGS = [("escape", "cancel", "Cancel")]

    def __init__(self, request: TimePickRequest) -> None:
        super().__init__()
        self.request = request
        self.hour = request.initial_time.hour
        self.minute = request.initial_time.minute

    @property
    def period(self) -> Period:
        return Period.of(dt.time(self.hour, self.minute))

    def _hour_text(self) -> str:
        hour = self.hour if self.request.use_24_hour else self.hour % 12 or 12
        return f"{hour:02d}"

    def compose(self) -> ComposeResult:
        request = self.request
        with Vertical(id=ids.TIME_PICKER_MODAL):
            yield Label(request.title, id=ids.MODAL_TITLE)
            with Horizontal(id=ids.TIME_ROW):
                if request.entry_mode is TimeEntryMode.INPUT:
                    yield Input(value=self._hour_text(), id=ids.HOUR_INPUT, max_length=2)
                    yield Static(":")
                    yield Input(value=f"{self.minute:02d}", id=ids.MINUTE_INPUT, max_length=2)
                else:
                    with Vertical(classes="time-column"):
                        yield Button("+", id=ids.HOUR_UP_BTN, classes="step-btn")
                        yield Label(self._hour_text(), id=ids.HOUR_LABEL)
                        yield Button("-", id=ids.HOUR_DOWN_BTN, classes="step-btn")
                    yield Static(":")
                    with Vertical(classes="time-column"):
                        yield Button("+", id=ids.MINUTE_UP_BTN, classes="step-btn")
                        yield Label(f"{self.minute:02d}", id=ids.MINUTE_LABEL)
                        yield Button("-", id=ids.MINUTE_DOWN_BTN, classes="step-btn")
                if not request.use_24_hour:
                    yield Button(self.period.suffix.strip(), id=ids.PERIOD_BTN, classes="step-btn")
            yield Static("", id=ids.MODAL_ERROR)
            with Horizontal(id=ids.MODAL_BUTTONS):
                yield Button(request.cancel_text, id=ids.CANCEL_BTN, variant="default")
                yield Button(request.confirm_text, id=ids.CONFIRM_BTN, variant="success")

    def on_mount(self) -> None:
        if self.request.entry_mode is TimeEntryMode.INPUT:
            self.query_one(css(ids.HOUR_INPUT), Input).focus()

    def _refresh(self) -> None:
        # Typed digits stay as typed; only the period button changes in input mode
        if self.request.entry_mode is TimeEntryMode.DIAL:
            self.query_one(css(ids.HOUR_LABEL), Label).update(self._hour_text())
            self.query_one(css(ids.MINUTE_LABEL), Label).update(f"{self.minute:02d}")
        if not self.request.use_24_hour:
            self.query_one(css(ids.PERIOD_BTN), Button).label = self.period.suffix.strip()

    @on(Button.Pressed, ".step-btn")
    def on_step(self, event: Button.Pressed) -> None:
        event.stop()
        button_id = event.button.id
        if button_id == ids.HOUR_UP_BTN:
            self.hour = (self.hour + 1) % 24
        elif button_id == ids.HOUR_DOWN_BTN:
            self.hour = (self.hour - 1) % 24
        elif button_id == ids.MINUTE_UP_BTN:
            self.minute = (self.minute + 1) % 60
        elif button_id == ids.MINUTE_DOWN_BTN:
            self.minute = (self.minute - 1) % 60
        elif button_id == ids.PERIOD_BTN:
            self.hour = (self.hour + 12) % 24
        self._refresh()

    def _typed_time(self) -> dt.time | None:
        """Read the hour/minute inputs, or show an error and return None."""
        hour_text = self.query_one(css(ids.HOUR_INPUT), Input).value.strip()
        minute_text = self.query_one(css(ids.MINUTE_INPUT), Input).value.strip()
        if not (hour_text.isdigit() and minute_text.isdigit()):
            self._show_error("Enter a valid time.")
            return None
        hour, minute = int(hour_text), int(minute_text)
        if self.request.use_24_hour:
            valid_hour = 0 <= hour <= 23
        else:
            valid_hour = 1 <= hour <= 12
            hour = self.period.to_24_hour(hour)
        if not valid_hour or not 0 <= minute <= 59:
            self._show_error("Enter a valid time.")
            return None
        return dt.time(hour, minute)

    def _show_error(self, message: str) -> None:
        self.query_one(css(ids.MODAL_ERROR), Static).update(message)

    @on(Button.Pressed, css(ids.CONFIRM_BTN))
    def on_confirm(self, event: Button.Pressed) -> None:
        event.stop()
        self.action_confirm()

    def action_confirm(self) -> None:
        if self.request.entry_mode is TimeEntryMode.INPUT:
            typed = self._typed_time()
            if typed is None:
                return
            self.hour, self.minute = typed.hour, typed.minute
        self.dismiss(dt.time(self.hour, self.minute))

    @on(Button.Pressed, css(ids.CANCEL_BTN))
    def on_cancel(self, event: Button.Pressed) -> None:
        event.stop()
        self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)
