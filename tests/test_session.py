"""Tests for the SelectionSession state machine."""

import datetime as dt

import pytest

from date_time_picker.controller import (
    DatePickRequest,
    SelectionSession,
    SessionState,
    SessionStateError,
)
from date_time_picker.errors import BoundsError
from date_time_picker.model import DateEntryMode, DatePickerMode, FieldPart, Mode, StructuredMoment

from conftest import FIRST_DATE, LAST_DATE, NOW, FakePickers

JULY_23 = dt.date(2020, 7, 23)
JULY_25 = dt.date(2020, 7, 25)
HELD = StructuredMoment(date=JULY_23, time=dt.time(10, 0))


def session_for(options, pickers, clock):
    return SelectionSession(options, pickers, clock=clock)


class TestDateSessions:
    """Single date step (DATE and the date half of DATE_TIME_SEPARATE)."""

    @pytest.mark.asyncio
    async def test_pick_commits(self, make_options, clock):
        pickers = FakePickers(dates=[JULY_25])
        session = session_for(make_options(), pickers, clock)
        result = await session.run(StructuredMoment(date=JULY_23))
        assert result.state is SessionState.COMMITTED
        assert result.moment == StructuredMoment(date=JULY_25)
        assert session.history == [
            SessionState.AWAITING_DATE,
            SessionState.COMMITTED,
            SessionState.IDLE,
        ]

    @pytest.mark.asyncio
    async def test_cancel(self, make_options, clock):
        session = session_for(make_options(), FakePickers(dates=[None]), clock)
        result = await session.run(StructuredMoment(date=JULY_23))
        assert result.state is SessionState.CANCELLED
        assert result.moment is None
        assert not result.committed
        assert session.state is SessionState.IDLE

    @pytest.mark.asyncio
    async def test_request_carries_bounds_and_predicate(self, make_options, clock):
        predicate = lambda d: d.weekday() < 5  # noqa: E731
        pickers = FakePickers(dates=[None])
        options = make_options(selectable_day_predicate=predicate, calendar_title="Pick one")
        await session_for(options, pickers, clock).run(StructuredMoment(date=JULY_23))
        request = pickers.date_requests[0]
        assert request.initial_date == JULY_23
        assert (request.first_date, request.last_date) == (FIRST_DATE, LAST_DATE)
        assert request.selectable_day_predicate is predicate
        assert request.title == "Pick one"
        assert not request.is_selectable(JULY_25)

    @pytest.mark.asyncio
    async def test_request_carries_dialog_texts_and_view(self, make_options, clock):
        pickers = FakePickers(dates=[None])
        options = make_options(
            date_picker_entry_mode="input",
            initial_date_picker_mode="year",
            field_label_text="Date of birth",
            field_hint_text="yyyy-mm-dd",
            error_format_text="Not a date",
            error_invalid_text="Too late",
        )
        await session_for(options, pickers, clock).run(StructuredMoment(date=JULY_23))
        request = pickers.date_requests[0]
        assert request.entry_mode is DateEntryMode.INPUT
        assert request.initial_view is DatePickerMode.YEAR
        assert request.field_label_text == "Date of birth"
        assert request.field_hint_text == "yyyy-mm-dd"
        assert request.error_format_text == "Not a date"
        assert request.error_invalid_text == "Too late"

    def test_request_is_selectable(self):
        request = DatePickRequest(
            initial_date=JULY_23,
            first_date=FIRST_DATE,
            last_date=LAST_DATE,
            selectable_day_predicate=lambda d: d.weekday() < 5,
        )
        assert request.is_selectable(dt.date(2020, 7, 24))  # Friday
        assert not request.is_selectable(JULY_25)  # Saturday
        assert not request.is_selectable(dt.date(1999, 7, 23))

    @pytest.mark.asyncio
    async def test_initial_date_is_clamped(self, make_options, clock):
        pickers = FakePickers(dates=[None])
        options = make_options(first_date=dt.date(2021, 1, 1), last_date=dt.date(2021, 12, 31))
        await session_for(options, pickers, clock).run(StructuredMoment(date=JULY_23))
        assert pickers.date_requests[0].initial_date == dt.date(2021, 1, 1)

    @pytest.mark.asyncio
    async def test_out_of_bounds_pick_raises(self, make_options, clock):
        session = session_for(make_options(), FakePickers(dates=[dt.date(1990, 1, 1)]), clock)
        with pytest.raises(BoundsError):
            await session.run(StructuredMoment(date=JULY_23))
        assert session.state is SessionState.IDLE

    @pytest.mark.asyncio
    async def test_separated_date_keeps_time(self, make_options, clock):
        pickers = FakePickers(dates=[JULY_25])
        session = session_for(make_options(Mode.DATE_TIME_SEPARATE), pickers, clock)
        result = await session.run(HELD, FieldPart.DATE)
        assert result.moment == StructuredMoment(date=JULY_25, time=dt.time(10, 0))
        assert pickers.calls == ["date"]


class TestTimeSessions:
    """Single time step (TIME and the time half of DATE_TIME_SEPARATE)."""

    @pytest.mark.asyncio
    async def test_pick_commits(self, make_options, clock):
        pickers = FakePickers(times=[dt.time(14, 5)])
        session = session_for(make_options(Mode.TIME), pickers, clock)
        result = await session.run(StructuredMoment(time=dt.time(9, 0)))
        assert result.state is SessionState.COMMITTED
        assert result.moment.time == dt.time(14, 5)
        assert pickers.time_requests[0].initial_time == dt.time(9, 0)

    @pytest.mark.asyncio
    async def test_cancel(self, make_options, clock):
        session = session_for(make_options(Mode.TIME), FakePickers(times=[None]), clock)
        result = await session.run(StructuredMoment(time=dt.time(9, 0)))
        assert result.state is SessionState.CANCELLED
        assert result.moment is None

    @pytest.mark.asyncio
    async def test_separated_time_keeps_date(self, make_options, clock):
        pickers = FakePickers(times=[dt.time(14, 30)])
        session = session_for(make_options(Mode.DATE_TIME_SEPARATE), pickers, clock)
        result = await session.run(HELD, FieldPart.TIME)
        assert result.moment == StructuredMoment(date=JULY_23, time=dt.time(14, 30))
        assert pickers.calls == ["time"]

    @pytest.mark.asyncio
    async def test_request_uses_clock_format(self, make_options, clock):
        pickers = FakePickers(times=[None])
        options = make_options(Mode.TIME, use_24_hour_format=False)
        await session_for(options, pickers, clock).run(StructuredMoment(time=dt.time(9, 0)))
        assert pickers.time_requests[0].use_24_hour is False


class TestCombinedSessions:
    """DATE_TIME runs the date dialog, then the time dialog."""

    @pytest.mark.asyncio
    async def test_both_picked(self, make_options, clock):
        pickers = FakePickers(dates=[JULY_25], times=[dt.time(14, 30)])
        session = session_for(make_options(Mode.DATE_TIME), pickers, clock)
        result = await session.run(HELD)
        assert result.state is SessionState.COMMITTED
        assert result.moment == StructuredMoment(date=JULY_25, time=dt.time(14, 30))
        assert pickers.calls == ["date", "time"]

    @pytest.mark.asyncio
    async def test_date_cancel_skips_time(self, make_options, clock):
        pickers = FakePickers(dates=[None], times=[dt.time(14, 30)])
        session = session_for(make_options(Mode.DATE_TIME), pickers, clock)
        result = await session.run(HELD)
        assert result.state is SessionState.CANCELLED
        assert pickers.calls == ["date"]

    @pytest.mark.asyncio
    async def test_time_cancel_commits_date_with_previous_time(self, make_options, clock):
        pickers = FakePickers(dates=[JULY_25], times=[None])
        session = session_for(make_options(Mode.DATE_TIME), pickers, clock)
        result = await session.run(HELD)
        assert result.state is SessionState.COMMITTED_WITH_PREVIOUS_TIME
        assert result.moment == StructuredMoment(date=JULY_25, time=dt.time(10, 0))

    @pytest.mark.asyncio
    async def test_time_cancel_without_held_time_uses_initial_time(self, make_options, clock):
        pickers = FakePickers(dates=[JULY_25], times=[None])
        options = make_options(Mode.DATE_TIME, initial_time=dt.time(7, 45))
        result = await session_for(options, pickers, clock).run(StructuredMoment(date=JULY_23))
        assert result.moment.time == dt.time(7, 45)

    @pytest.mark.asyncio
    async def test_time_cancel_without_any_time_uses_clock(self, make_options, clock):
        pickers = FakePickers(dates=[JULY_25], times=[None])
        session = session_for(make_options(Mode.DATE_TIME), pickers, clock)
        result = await session.run(StructuredMoment(date=JULY_23))
        assert result.moment.time == NOW.time()

    @pytest.mark.asyncio
    async def test_time_dialog_starts_from_picked_date_draft(self, make_options, clock):
        pickers = FakePickers(dates=[JULY_25], times=[None])
        session = session_for(make_options(Mode.DATE_TIME), pickers, clock)
        await session.run(HELD)
        assert pickers.time_requests[0].initial_time == dt.time(10, 0)


class TestSessionGuards:
    """State machine guards."""

    @pytest.mark.asyncio
    async def test_picker_error_returns_to_idle(self, make_options, clock):
        session = session_for(make_options(), FakePickers(dates=[RuntimeError("boom")]), clock)
        with pytest.raises(RuntimeError):
            await session.run(HELD)
        assert session.state is SessionState.IDLE
        assert not session.active

    @pytest.mark.asyncio
    async def test_run_while_running_raises(self, make_options, clock):
        class ReentrantPickers(FakePickers):
            async def pick_date(self, request):
                with pytest.raises(SessionStateError):
                    await session.run(HELD)
                return None

        session = session_for(make_options(), ReentrantPickers(), clock)
        result = await session.run(HELD)
        assert result.state is SessionState.CANCELLED
