"""CanonicalValueStore: the authoritative moment and its canonical text.

Canonical values are what host callbacks receive and what is written to an
external text buffer:

    DATE                 "YYYY-MM-DD"
    TIME                 "HH:MM"
    DATE_TIME(_SEPARATE) "YYYY-MM-DD HH:MM" (or "YYYY-MM-DD" with no time set)

They never depend on the display mask or locale. One exception to "HH:MM is
24-hour": a TIME field with use_24_hour off stores 12-hour digits ("02:30" for
2:30 PM). The period is not part of the text, so the store remembers it and
uses it to read such digits back.
"""

from __future__ import annotations

import datetime as dt
import logging
import re

from date_time_picker.constants import (
    ABSENT_VALUES,
    CANONICAL_DATE_FORMAT,
    CANONICAL_TIME_FORMAT,
)
from date_time_picker.errors import ParseError
from date_time_picker.model.mode import Mode, ModeStrategy, get_strategy
from date_time_picker.model.moment import Period, StructuredMoment

log = logging.getLogger(__name__)

# A date digit followed by the date/time separator and a time digit
_HAS_TIME = re.compile(r"\d[Tt ]\d")
_TIME_LITERAL = re.compile(r"(\d{1,2}):(\d{2})", re.ASCII)


def _as_strategy(mode: Mode | str | ModeStrategy) -> ModeStrategy:
    if isinstance(mode, ModeStrategy):
        return mode
    return get_strategy(mode)


def is_absent(text: str | None) -> bool:
    """Whether text means "no value" (None, "", whitespace or "null")."""
    return text is None or text.strip() in ABSENT_VALUES


def parse_date_literal(text: str) -> tuple[dt.datetime, bool]:
    """Parse an ISO-8601 date or date-time literal.

    Returns:
        (naive datetime, whether the text encoded a time component)
    """
    stripped = text.strip()
    try:
        value = dt.datetime.fromisoformat(stripped)
    except ValueError as e:
        raise ParseError(f"Not a date or date-time: {text!r}") from e
    return value.replace(tzinfo=None), bool(_HAS_TIME.search(stripped))


def parse_time_literal(
    text: str, *, twelve_hour: bool = False, period: Period | None = None
) -> dt.time:
    """Parse "H:MM" or "HH:MM".

    With twelve_hour set, hours 0-12 are 12-hour digits in the given period
    (AM when unknown). Hours 13-23 are always read as 24-hour.
    """
    match = _TIME_LITERAL.fullmatch(text.strip())
    if not match:
        raise ParseError(f"Expected H:MM or HH:MM, got {text!r}")
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise ParseError(f"Time out of range: {text!r}")
    if twelve_hour and hour <= 12:
        hour = (period or Period.AM).to_24_hour(hour)
    return dt.time(hour, minute)


def parse_canonical(
    text: str | None,
    mode: Mode | str | ModeStrategy,
    *,
    use_24_hour: bool = True,
    period: Period | None = None,
) -> StructuredMoment:
    """Parse canonical (or any ISO-8601) text into a moment for a mode.

    Date-bearing modes keep the time only if the text encoded one; DATE mode
    never keeps it.

    Raises:
        ParseError: if the text is absent or malformed
    """
    if is_absent(text):
        raise ParseError("No value")
    strategy = _as_strategy(mode)
    if strategy.has_date:
        value, has_time = parse_date_literal(text)
        return StructuredMoment.from_datetime(value, keep_time=strategy.has_time and has_time)
    twelve_hour = strategy.twelve_hour_canonical and not use_24_hour
    return StructuredMoment(time=parse_time_literal(text, twelve_hour=twelve_hour, period=period))


def serialize_canonical(
    moment: StructuredMoment, mode: Mode | str | ModeStrategy, *, use_24_hour: bool = True
) -> str:
    """Serialize a moment to the mode's canonical text."""
    strategy = _as_strategy(mode)
    parts = []
    if strategy.has_date and moment.date is not None:
        d = moment.date
        parts.append(CANONICAL_DATE_FORMAT.format(year=d.year, month=d.month, day=d.day))
    if strategy.has_time and moment.time is not None:
        twelve_hour = strategy.twelve_hour_canonical and not use_24_hour
        hour = moment.hour_12 if twelve_hour else moment.time.hour
        parts.append(CANONICAL_TIME_FORMAT.format(hour=hour, minute=moment.time.minute))
    return " ".join(parts)


class CanonicalValueStore:
    """Owns the single structured moment of a field.

    The canonical value is always derived from the moment, never stored on
    its own. The moment seeded at construction is kept as the reset snapshot.
    """

    def __init__(self, strategy: ModeStrategy, use_24_hour: bool = True) -> None:
        self.strategy = strategy
        self.use_24_hour = use_24_hour
        self._moment = StructuredMoment()
        self._snapshot = self._moment

    @property
    def moment(self) -> StructuredMoment:
        return self._moment

    @property
    def value(self) -> str:
        return self.serialize()

    def parse(self, text: str | None) -> StructuredMoment:
        """Parse text for this field, reusing the current AM/PM period."""
        return parse_canonical(
            text, self.strategy, use_24_hour=self.use_24_hour, period=self._moment.period
        )

    def serialize(self, moment: StructuredMoment | None = None) -> str:
        return serialize_canonical(
            moment if moment is not None else self._moment,
            self.strategy,
            use_24_hour=self.use_24_hour,
        )

    def seed(self, text: str | None, fallback: StructuredMoment) -> StructuredMoment:
        """Set the initial moment from text, or from fallback when text is absent.

        Unparseable text also falls back; the field starts from a valid moment
        either way. The result becomes the reset snapshot.
        """
        if is_absent(text):
            moment = fallback
        else:
            try:
                moment = self.parse(text)
            except ParseError as e:
                log.warning(f"Ignoring initial value {text!r}: {e}")
                moment = fallback
        self._moment = self.strategy.normalize(moment)
        self._snapshot = self._moment
        log.debug(f"Seeded {self.strategy.mode.value} field with {self._moment}")
        return self._moment

    def commit(self, moment: StructuredMoment) -> bool:
        """Replace the moment. Returns True if the canonical value changed."""
        before = self.value
        self._moment = self.strategy.normalize(moment)
        return self.value != before

    def restore(self) -> bool:
        """Go back to the seeded snapshot. Returns True if the value changed."""
        return self.commit(self._snapshot)
