"""Presentation modes and the per-mode strategy registry.

Every field is built for exactly one Mode. The matching ModeStrategy is looked
up once, when the field is constructed, and answers all of the mode-dependent
questions afterwards:

- which parts (date, time) the structured moment may carry
- which display labels the field shows
- which picker steps a tap starts
- which default mask the date label uses when the host gives none

Strategies register themselves with @register_mode, one class per Mode.
"""

from __future__ import annotations

import datetime as dt
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, ClassVar

from date_time_picker.constants import (
    DATE_MASK,
    DATE_TIME_MASK_12H,
    DATE_TIME_MASK_24H,
)
from date_time_picker.errors import ConfigurationError
from date_time_picker.model.moment import StructuredMoment

if TYPE_CHECKING:
    from date_time_picker.model.formatting import FormatEngine


class Mode(Enum):
    """How a field presents and edits its value."""

    DATE = "date"  # date only
    TIME = "time"  # time only
    DATE_TIME = "date_time"  # one field, date dialog then time dialog
    DATE_TIME_SEPARATE = "date_time_separate"  # two fields, one per part


class FieldPart(Enum):
    """The part of a field a label or tap refers to."""

    DATE = "date"
    TIME = "time"


# Registry of all mode strategies
_mode_registry: dict[Mode, type[ModeStrategy]] = {}


def register_mode(cls: type[ModeStrategy]) -> type[ModeStrategy]:
    """Decorator to register a strategy class for its mode."""
    _mode_registry[cls.mode] = cls
    return cls


def get_strategy(mode: Mode | str) -> ModeStrategy:
    """Get the strategy instance for a mode (or its string value).

    Raises:
        ConfigurationError: if the mode is unknown
    """
    try:
        mode = Mode(mode)
    except ValueError as e:
        raise ConfigurationError(f"Unknown mode: {mode!r}") from e
    return _mode_registry[mode]()


def list_modes() -> list[str]:
    """Get the string values of all registered modes."""
    return sorted(m.value for m in _mode_registry)


class ModeStrategy(ABC):
    """Mode-specific behaviour of a field."""

    mode: ClassVar[Mode]
    has_date: ClassVar[bool] = True
    has_time: ClassVar[bool] = False
    parts: ClassVar[tuple[FieldPart, ...]] = (FieldPart.DATE,)
    # TIME fields hand 12-hour digits to the host when use_24_hour is off
    twelve_hour_canonical: ClassVar[bool] = False

    @property
    def requires_bounds(self) -> bool:
        """Whether first_date/last_date must be configured."""
        return self.has_date

    @property
    def default_part(self) -> FieldPart:
        return self.parts[0]

    def normalize(self, moment: StructuredMoment) -> StructuredMoment:
        """Drop the parts this mode never carries."""
        return StructuredMoment(
            date=moment.date if self.has_date else None,
            time=moment.time if self.has_time else None,
        )

    def fallback(
        self,
        now: dt.datetime,
        initial_date: dt.date | None = None,
        initial_time: dt.time | None = None,
    ) -> StructuredMoment:
        """Moment used when a field starts with no text."""
        return self.normalize(
            StructuredMoment(
                date=initial_date or now.date(),
                time=initial_time or now.time(),
            )
        )

    def default_mask(self, moment: StructuredMoment, use_24_hour: bool) -> str:
        """LDML pattern for the date label when the host supplies no mask."""
        return DATE_MASK

    @abstractmethod
    def steps(self, part: FieldPart | None = None) -> tuple[FieldPart, ...]:
        """Picker steps, in order, started by a tap on the given part."""
        ...

    @abstractmethod
    def labels(self, moment: StructuredMoment, engine: FormatEngine) -> dict[FieldPart, str]:
        """Render every label this mode shows."""
        ...


@register_mode
class DateMode(ModeStrategy):
    mode = Mode.DATE

    def steps(self, part: FieldPart | None = None) -> tuple[FieldPart, ...]:
        return (FieldPart.DATE,)

    def labels(self, moment: StructuredMoment, engine: FormatEngine) -> dict[FieldPart, str]:
        return {FieldPart.DATE: engine.format_date_label(moment)}


@register_mode
class TimeMode(ModeStrategy):
    mode = Mode.TIME
    has_date = False
    has_time = True
    parts = (FieldPart.TIME,)
    twelve_hour_canonical = True

    def steps(self, part: FieldPart | None = None) -> tuple[FieldPart, ...]:
        return (FieldPart.TIME,)

    def labels(self, moment: StructuredMoment, engine: FormatEngine) -> dict[FieldPart, str]:
        return {FieldPart.TIME: engine.format_time_label(moment)}


@register_mode
class DateTimeMode(ModeStrategy):
    """Single field; a tap runs the date dialog and then the time dialog."""

    mode = Mode.DATE_TIME
    has_time = True

    def default_mask(self, moment: StructuredMoment, use_24_hour: bool) -> str:
        if not moment.has_time:
            return DATE_MASK
        return DATE_TIME_MASK_24H if use_24_hour else DATE_TIME_MASK_12H

    def steps(self, part: FieldPart | None = None) -> tuple[FieldPart, ...]:
        return (FieldPart.DATE, FieldPart.TIME)

    def labels(self, moment: StructuredMoment, engine: FormatEngine) -> dict[FieldPart, str]:
        return {FieldPart.DATE: engine.format_date_label(moment)}


@register_mode
class DateTimeSeparateMode(ModeStrategy):
    """Two fields sharing one moment; each tap edits only its own part."""

    mode = Mode.DATE_TIME_SEPARATE
    has_time = True
    parts = (FieldPart.DATE, FieldPart.TIME)

    def steps(self, part: FieldPart | None = None) -> tuple[FieldPart, ...]:
        return (part or FieldPart.DATE,)

    def labels(self, moment: StructuredMoment, engine: FormatEngine) -> dict[FieldPart, str]:
        return {
            FieldPart.DATE: engine.format_date_label(moment),
            FieldPart.TIME: engine.format_time_label(moment),
        }
