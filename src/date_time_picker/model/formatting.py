"""FormatEngine: renders a StructuredMoment as locale-aware display labels.

Patterns are LDML (the same syntax as ICU / CLDR, e.g. "MMM d, yyyy") and are
formatted by Babel, which also supplies month names and day periods for the
requested locale.

Label rules:
- The date label (DATE, DATE_TIME, and the date half of DATE_TIME_SEPARATE)
  uses the host mask verbatim when one is given, otherwise the mode's default
  mask ("MMM d, yyyy", plus " - HH:mm" / " - hh:mm a" for DATE_TIME when a time
  is present).
- The time label (TIME, and the time half of DATE_TIME_SEPARATE) never uses the
  host mask: "HH:mm" on a 24-hour clock, "hh:mm" plus " AM" / " PM" otherwise.
"""

from __future__ import annotations

from babel import Locale, UnknownLocaleError
from babel.dates import format_datetime

from date_time_picker.constants import DEFAULT_LOCALE, TIME_MASK_12H, TIME_MASK_24H
from date_time_picker.errors import ConfigurationError
from date_time_picker.model.mode import FieldPart, Mode, ModeStrategy, get_strategy
from date_time_picker.model.moment import StructuredMoment


def resolve_locale(tag: str | Locale | None) -> Locale:
    """Parse a locale tag ("pt_BR", "pt-BR", "en") into a Babel Locale.

    Raises:
        ConfigurationError: if Babel has no data for the tag
    """
    if isinstance(tag, Locale):
        return tag
    identifier = (tag or DEFAULT_LOCALE).strip().replace("-", "_")
    try:
        return Locale.parse(identifier)
    except (UnknownLocaleError, ValueError) as e:
        raise ConfigurationError(f"Unknown locale: {tag!r}") from e


class FormatEngine:
    """Formats moments for one field (mode, mask, locale and clock are fixed)."""

    def __init__(
        self,
        strategy: ModeStrategy,
        mask: str | None = None,
        locale: str | Locale | None = None,
        use_24_hour: bool = True,
    ) -> None:
        self.strategy = strategy
        self.mask = mask or None
        self.locale = resolve_locale(locale)
        self.use_24_hour = use_24_hour

    def date_pattern(self, moment: StructuredMoment) -> str:
        """Pattern for the date label of this moment."""
        return self.mask or self.strategy.default_mask(moment, self.use_24_hour)

    @property
    def time_pattern(self) -> str:
        return TIME_MASK_24H if self.use_24_hour else TIME_MASK_12H

    def format_pattern(self, moment: StructuredMoment, pattern: str) -> str:
        return format_datetime(moment.to_datetime(), format=pattern, locale=self.locale)

    def format_date_label(self, moment: StructuredMoment) -> str:
        if not moment.has_date:
            return ""
        return self.format_pattern(moment, self.date_pattern(moment))

    def format_time_label(self, moment: StructuredMoment) -> str:
        if not moment.has_time:
            return ""
        label = self.format_pattern(moment, self.time_pattern)
        if not self.use_24_hour:
            label += moment.period.suffix
        return label

    def render_labels(self, moment: StructuredMoment) -> dict[FieldPart, str]:
        """Render every label the field shows, keyed by part."""
        return self.strategy.labels(moment, self)

    def render(self, moment: StructuredMoment, part: FieldPart | None = None) -> str:
        """Render one label (the field's main label when part is None)."""
        labels = self.render_labels(moment)
        return labels.get(part or self.strategy.default_part, "")


def render(
    moment: StructuredMoment,
    mode: Mode | str,
    mask: str | None = None,
    locale: str | None = None,
    use_24_hour: bool = True,
    part: FieldPart | None = None,
) -> str:
    """Render a moment's label without building a field.

    Example:
        >>> render(StructuredMoment(date=date(2020, 7, 23)), Mode.DATE)
        'Jul 23, 2020'
    """
    engine = FormatEngine(get_strategy(mode), mask=mask, locale=locale, use_24_hour=use_24_hour)
    return engine.render(moment, part)
