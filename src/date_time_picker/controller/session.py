"""SelectionSession: one tap's worth of picker dialogs, as a state machine.

    IDLE ──> AWAITING_DATE ──> CANCELLED ─────────────────────> IDLE
               │        └────> COMMITTED (DATE, separated date) > IDLE
               ▼ (DATE_TIME only)
    IDLE ──> AWAITING_TIME ──> CANCELLED (single time step) ──> IDLE
                        ├────> COMMITTED ───────────────────────> IDLE
                        └────> COMMITTED_WITH_PREVIOUS_TIME ────> IDLE
                               (DATE_TIME: time dialog dismissed after a
                                date was picked; the date still commits)

Dialogs are awaited one at a time, so a time step never starts before the
date step has resolved. A dismissed dialog is the only way to cancel.
"""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Protocol

from babel import Locale

from date_time_picker.model.mode import FieldPart
from date_time_picker.model.moment import StructuredMoment
from date_time_picker.model.options import (
    DateEntryMode,
    DatePickerMode,
    FieldOptions,
    TimeEntryMode,
)

log = logging.getLogger(__name__)


class SessionState(Enum):
    IDLE = "idle"
    AWAITING_DATE = "awaiting_date"
    AWAITING_TIME = "awaiting_time"
    CANCELLED = "cancelled"
    COMMITTED = "committed"
    COMMITTED_WITH_PREVIOUS_TIME = "committed_with_previous_time"


_TRANSITIONS: dict[SessionState, frozenset[SessionState]] = {
    SessionState.IDLE: frozenset({SessionState.AWAITING_DATE, SessionState.AWAITING_TIME}),
    SessionState.AWAITING_DATE: frozenset(
        {SessionState.AWAITING_TIME, SessionState.COMMITTED, SessionState.CANCELLED}
    ),
    SessionState.AWAITING_TIME: frozenset(
        {
            SessionState.COMMITTED,
            SessionState.COMMITTED_WITH_PREVIOUS_TIME,
            SessionState.CANCELLED,
        }
    ),
    SessionState.CANCELLED: frozenset({SessionState.IDLE}),
    SessionState.COMMITTED: frozenset({SessionState.IDLE}),
    SessionState.COMMITTED_WITH_PREVIOUS_TIME: frozenset({SessionState.IDLE}),
}


class SessionStateError(RuntimeError):
    """Raised on a transition the state machine does not allow."""


@dataclass(frozen=True)
class DatePickRequest:
    """What the date dialog needs to show."""

    initial_date: dt.date
    first_date: dt.date
    last_date: dt.date
    selectable_day_predicate: Callable[[dt.date], bool] | None = None
    entry_mode: DateEntryMode = DateEntryMode.CALENDAR
    initial_view: DatePickerMode = DatePickerMode.DAY
    locale: Locale | None = None
    title: str = "Select date"
    cancel_text: str = "Cancel"
    confirm_text: str = "OK"
    field_label_text: str = "Enter date"
    field_hint_text: str = "YYYY-MM-DD"
    error_format_text: str = "Invalid format."
    error_invalid_text: str = "Out of range."

    def is_selectable(self, value: dt.date) -> bool:
        if not self.first_date <= value <= self.last_date:
            return False
        if self.selectable_day_predicate is None:
            return True
        return bool(self.selectable_day_predicate(value))


@dataclass(frozen=True)
class TimePickRequest:
    """What the time dialog needs to show."""

    initial_time: dt.time
    use_24_hour: bool = True
    entry_mode: TimeEntryMode = TimeEntryMode.DIAL
    title: str = "Select time"
    cancel_text: str = "Cancel"
    confirm_text: str = "OK"


class PickerProvider(Protocol):
    """Asynchronous date and time dialogs. None means the user dismissed it."""

    async def pick_date(self, request: DatePickRequest) -> dt.date | None: ...

    async def pick_time(self, request: TimePickRequest) -> dt.time | None: ...


@dataclass(frozen=True)
class SessionResult:
    """Outcome of one session: its terminal state and the moment to commit."""

    state: SessionState
    moment: StructuredMoment | None = None
    steps: tuple[FieldPart, ...] = field(default=())

    @property
    def committed(self) -> bool:
        return self.moment is not None


class SelectionSession:
    """Runs the picker steps for one tap and decides what gets committed.

    One session object serves a field for its whole life; `active` is true
    while a dialog is open.
    """

    def __init__(
        self,
        options: FieldOptions,
        pickers: PickerProvider,
        locale: Locale | None = None,
        clock: Callable[[], dt.datetime] = dt.datetime.now,
    ) -> None:
        self.options = options
        self.strategy = options.strategy
        self.pickers = pickers
        self.locale = locale
        self._clock = clock
        self.state = SessionState.IDLE
        self.history: list[SessionState] = []

    @property
    def active(self) -> bool:
        return self.state in (SessionState.AWAITING_DATE, SessionState.AWAITING_TIME)

    def _transition(self, state: SessionState) -> None:
        if state not in _TRANSITIONS[self.state]:
            raise SessionStateError(f"Invalid session transition {self.state.value} -> {state.value}")
        log.debug(f"Session {self.state.value} -> {state.value}")
        self.state = state
        self.history.append(state)

    def _date_request(self, moment: StructuredMoment) -> DatePickRequest:
        opts = self.options
        start = moment.date or opts.initial_date or self._clock().date()
        return DatePickRequest(
            initial_date=opts.clamp(start),
            first_date=opts.first_date,
            last_date=opts.last_date,
            selectable_day_predicate=opts.selectable_day_predicate,
            entry_mode=opts.date_picker_entry_mode,
            initial_view=opts.initial_date_picker_mode,
            locale=self.locale,
            title=opts.calendar_title,
            cancel_text=opts.cancel_text,
            confirm_text=opts.confirm_text,
            field_label_text=opts.field_label_text,
            field_hint_text=opts.field_hint_text,
            error_format_text=opts.error_format_text,
            error_invalid_text=opts.error_invalid_text,
        )

    def _fallback_time(self, moment: StructuredMoment) -> dt.time:
        return moment.time or self.options.initial_time or self._clock().time()

    def _time_request(self, moment: StructuredMoment) -> TimePickRequest:
        opts = self.options
        return TimePickRequest(
            initial_time=self._fallback_time(moment),
            use_24_hour=opts.use_24_hour_format,
            entry_mode=opts.time_picker_entry_mode,
            title=opts.time_title,
            cancel_text=opts.cancel_text,
            confirm_text=opts.confirm_text,
        )

    def _finish(
        self,
        state: SessionState,
        steps: tuple[FieldPart, ...],
        moment: StructuredMoment | None = None,
    ) -> SessionResult:
        self._transition(state)
        self._transition(SessionState.IDLE)
        return SessionResult(state=state, moment=moment, steps=steps)

    async def run(self, moment: StructuredMoment, part: FieldPart | None = None) -> SessionResult:
        """Run the steps a tap on `part` starts, starting from `moment`.

        Raises:
            SessionStateError: if a session is already running
            BoundsError: if the date dialog returns a date outside the bounds
        """
        if self.state is not SessionState.IDLE:
            raise SessionStateError("A selection session is already running")

        steps = self.strategy.steps(part)
        draft = moment
        try:
            for index, step in enumerate(steps):
                if step is FieldPart.DATE:
                    self._transition(SessionState.AWAITING_DATE)
                    picked_date = await self.pickers.pick_date(self._date_request(draft))
                    if picked_date is None:
                        return self._finish(SessionState.CANCELLED, steps)
                    if isinstance(picked_date, dt.datetime):
                        picked_date = picked_date.date()
                    draft = draft.with_date(self.options.check_bounds(picked_date))
                else:
                    self._transition(SessionState.AWAITING_TIME)
                    picked_time = await self.pickers.pick_time(self._time_request(draft))
                    if picked_time is None:
                        if index == 0:
                            return self._finish(SessionState.CANCELLED, steps)
                        # A date was already picked; it commits with the time we had
                        draft = draft.with_time(self._fallback_time(draft))
                        return self._finish(
                            SessionState.COMMITTED_WITH_PREVIOUS_TIME, steps, draft
                        )
                    draft = draft.with_time(picked_time)
            return self._finish(SessionState.COMMITTED, steps, draft)
        finally:
            if self.state is not SessionState.IDLE:
                log.debug(f"Session aborted in state {self.state.value}")
                self.state = SessionState.IDLE
