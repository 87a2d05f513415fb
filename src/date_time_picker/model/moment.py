"""StructuredMoment: the in-memory date/time value of one field."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, replace
from enum import Enum

from date_time_picker.constants import AM_SUFFIX, PM_SUFFIX


class Period(Enum):
    """Half of the day a clock time falls in."""

    AM = "am"
    PM = "pm"

    @classmethod
    def of(cls, value: dt.time) -> Period:
        return cls.AM if value.hour < 12 else cls.PM

    @property
    def suffix(self) -> str:
        """Suffix appended to a 12-hour time label (" AM" / " PM")."""
        return AM_SUFFIX if self is Period.AM else PM_SUFFIX

    def to_24_hour(self, hour_12: int) -> int:
        """Rebuild a 24-hour hour from 12-hour digits in this period.

        12 AM is midnight (0) and 12 PM is noon (12).
        """
        hour = hour_12 % 12
        return hour + 12 if self is Period.PM else hour


@dataclass(frozen=True)
class StructuredMoment:
    """A calendar date and/or clock time at minute precision.

    Either part may be absent; which parts are present is decided by the
    field's mode. The AM/PM period is always derived from the time.
    """

    date: dt.date | None = None
    time: dt.time | None = None

    def __post_init__(self) -> None:
        if isinstance(self.date, dt.datetime):
            object.__setattr__(self, "date", self.date.date())
        if self.time is not None:
            object.__setattr__(
                self, "time", dt.time(self.time.hour, self.time.minute)
            )

    @classmethod
    def from_datetime(
        cls, value: dt.datetime, *, keep_date: bool = True, keep_time: bool = True
    ) -> StructuredMoment:
        """Build a moment from a datetime, keeping only the requested parts."""
        return cls(
            date=value.date() if keep_date else None,
            time=value.time() if keep_time else None,
        )

    @property
    def has_date(self) -> bool:
        return self.date is not None

    @property
    def has_time(self) -> bool:
        return self.time is not None

    @property
    def period(self) -> Period | None:
        if self.time is None:
            return None
        return Period.of(self.time)

    @property
    def hour_12(self) -> int | None:
        """Hour on a 12-hour clock: 0 and 12 both read as 12."""
        if self.time is None:
            return None
        return self.time.hour % 12 or 12

    def with_date(self, value: dt.date) -> StructuredMoment:
        return replace(self, date=value)

    def with_time(self, value: dt.time | None) -> StructuredMoment:
        return replace(self, time=value)

    def to_datetime(self) -> dt.datetime:
        """Combine both parts into a naive datetime for formatting.

        Missing parts fall back to 1970-01-01 / midnight; callers only format
        the fields their pattern asks for.
        """
        day = self.date or dt.date(1970, 1, 1)
        clock = self.time or dt.time(0, 0)
        return dt.datetime.combine(day, clock)

    def __str__(self) -> str:
        parts = []
        if self.date is not None:
            parts.append(self.date.isoformat())
        if self.time is not None:
            parts.append(f"{self.time.hour:02d}:{self.time.minute:02d}")
        return " ".join(parts) or "<empty>"
