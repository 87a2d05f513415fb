"""Shared fixtures for date-time-picker tests."""

import datetime as dt

import pytest

from date_time_picker.controller import DatePickRequest, TextBuffer, TimePickRequest
from date_time_picker.model import FieldOptions, Mode

FIRST_DATE = dt.date(2000, 1, 1)
LAST_DATE = dt.date(2100, 12, 31)
NOW = dt.datetime(2020, 7, 23, 9, 15)


class FakePickers:
    """Scripted PickerProvider.

    Each queued answer is returned by the next dialog of that kind: a value,
    None (the user dismissed the dialog) or an exception to raise.
    """

    def __init__(self, dates=(), times=()):
        self.dates = list(dates)
        self.times = list(times)
        self.date_requests: list[DatePickRequest] = []
        self.time_requests: list[TimePickRequest] = []
        self.calls: list[str] = []

    async def pick_date(self, request):
        self.calls.append("date")
        self.date_requests.append(request)
        return self._answer(self.dates)

    async def pick_time(self, request):
        self.calls.append("time")
        self.time_requests.append(request)
        return self._answer(self.times)

    @staticmethod
    def _answer(queue):
        answer = queue.pop(0) if queue else None
        if isinstance(answer, Exception):
            raise answer
        return answer


@pytest.fixture
def clock():
    """Fixed 'now' so fallback values are predictable."""
    return lambda: NOW


@pytest.fixture
def make_options():
    """Factory for FieldOptions with bounds filled in for date modes."""

    def _make(mode=Mode.DATE, **kwargs):
        if mode is not Mode.TIME:
            kwargs.setdefault("first_date", FIRST_DATE)
            kwargs.setdefault("last_date", LAST_DATE)
        return FieldOptions(mode=mode, **kwargs)

    return _make


@pytest.fixture
def buffer():
    """Empty host-owned text buffer."""
    return TextBuffer()
