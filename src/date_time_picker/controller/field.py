"""FieldController: the public face of one date/time field."""

from __future__ import annotations

import datetime as dt
import logging
from typing import Callable

from date_time_picker.controller.binding import ExternalBindingAdapter, TextBuffer
from date_time_picker.controller.session import PickerProvider, SelectionSession, SessionResult
from date_time_picker.errors import ConfigurationError, ParseError
from date_time_picker.model.canonical import CanonicalValueStore
from date_time_picker.model.formatting import FormatEngine
from date_time_picker.model.mode import FieldPart
from date_time_picker.model.moment import StructuredMoment
from date_time_picker.model.options import FieldOptions

log = logging.getLogger(__name__)


class FieldController:
    """Composes store, formatter, binding and session for one field.

    The value is seeded from the binding's text (or initial_value), falling
    back to options.initial_date / initial_time and then to the clock. That
    seeded value is what reset() returns to.

    Example usage:
        buffer = TextBuffer("2020-07-23")
        field = FieldController(options, pickers, binding=buffer)
        field.display_label()        # "Jul 23, 2020"
        await field.tap()            # user picks Jul 25 in the dialog
        buffer.text                  # "2020-07-25"
        field.dispose()
    """

    def __init__(
        self,
        options: FieldOptions,
        pickers: PickerProvider | None = None,
        *,
        binding: TextBuffer | None = None,
        initial_value: str | None = None,
        clock: Callable[[], dt.datetime] = dt.datetime.now,
    ) -> None:
        if binding is not None and initial_value is not None:
            raise ConfigurationError("initial_value and binding are mutually exclusive")

        self.options = options
        self.strategy = options.strategy
        self.engine = FormatEngine(
            self.strategy,
            mask=options.mask,
            locale=options.locale,
            use_24_hour=options.use_24_hour_format,
        )
        self.store = CanonicalValueStore(self.strategy, use_24_hour=options.use_24_hour_format)
        self.adapter = ExternalBindingAdapter(self._apply_external_text)
        self._clock = clock
        self._session: SelectionSession | None = None
        self._pickers = pickers
        self._labels: dict[FieldPart, str] = {}
        self._listeners: list[Callable[[], None]] = []
        self._binding = binding
        self._disposed = False

        seed_text = binding.text if binding is not None else initial_value
        fallback = self.strategy.fallback(clock(), options.initial_date, options.initial_time)
        self.store.seed(seed_text, fallback)
        self._render()
        if binding is not None:
            self.adapter.attach(binding)

    # =========================================================================
    # State
    # =========================================================================

    @property
    def moment(self) -> StructuredMoment:
        return self.store.moment

    @property
    def labels(self) -> dict[FieldPart, str]:
        return dict(self._labels)

    @property
    def session_active(self) -> bool:
        return self._session is not None and self._session.active

    @property
    def pickers(self) -> PickerProvider | None:
        return self._pickers

    @pickers.setter
    def pickers(self, pickers: PickerProvider | None) -> None:
        if self.session_active:
            raise ConfigurationError("Cannot replace pickers while a dialog is open")
        self._pickers = pickers
        self._session = None

    def current_value(self) -> str:
        """The canonical value ("YYYY-MM-DD", "HH:MM" or "YYYY-MM-DD HH:MM")."""
        return self.store.value

    get_value = current_value

    def display_label(self, part: FieldPart | None = None) -> str:
        """The label for a part (the field's main label when part is None)."""
        return self._labels.get(part or self.strategy.default_part, "")

    def add_listener(self, listener: Callable[[], None]) -> None:
        """Be told whenever the value or labels may have changed."""
        self._listeners.append(listener)

    def remove_listener(self, listener: Callable[[], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _render(self) -> None:
        self._labels = self.engine.render_labels(self.store.moment)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    def _commit(self, moment: StructuredMoment) -> bool:
        """Store a moment, re-render, push to the binding. Returns True on change."""
        changed = self.store.commit(moment)
        self._render()
        self.adapter.push_canonical_value(self.store.value)
        self._notify()
        return changed

    # =========================================================================
    # Operations
    # =========================================================================

    async def on_user_tap(self, part: FieldPart | None = None) -> SessionResult | None:
        """Open the picker dialog(s) for a tap on `part`.

        Returns None when the tap was ignored: the field is disposed,
        read-only or disabled, or a dialog is already open.
        """
        if self._disposed or not self.options.interactive:
            return None
        if self._pickers is None:
            raise ConfigurationError("No picker provider configured for this field")
        if self._session is None:
            self._session = SelectionSession(
                self.options, self._pickers, locale=self.engine.locale, clock=self._clock
            )
        if self._session.active:
            log.debug("Tap ignored: a selection session is already open")
            return None

        result = await self._session.run(self.store.moment, part)
        if result.moment is None or self._disposed:
            return result

        if self._commit(result.moment):
            value = self.store.value
            log.debug(f"Committed {value!r} ({result.state.value})")
            if self.options.on_changed is not None:
                self.options.on_changed(value)
        return result

    tap = on_user_tap

    def on_external_text_changed(self, text: str) -> None:
        """Handle text written to the field by the host."""
        if self._disposed:
            return
        self.adapter.on_external_change(text)

    def _apply_external_text(self, text: str) -> None:
        try:
            moment = self.store.parse(text)
        except ParseError as e:
            log.debug(f"Keeping {self.store.value!r}; external text rejected: {e}")
            return
        self.store.commit(moment)
        self._render()
        self._notify()

    def set_value(self, text: str) -> None:
        """Replace the value programmatically.

        Raises:
            ParseError: if the text is not a valid value for this mode
        """
        self._commit(self.store.parse(text))

    def reset(self) -> None:
        """Return to the value the field was constructed with."""
        self.store.restore()
        self._render()
        self.adapter.push_canonical_value(self.store.value)
        self._notify()

    def validate(self) -> str | None:
        """Run the host validator on the canonical value; returns its error text."""
        if self.options.validator is None:
            return None
        return self.options.validator(self.store.value)

    def save(self) -> None:
        if self.options.on_saved is not None:
            self.options.on_saved(self.store.value)

    def suspend(self) -> None:
        """Stop following the binding until resume() is called."""
        self.adapter.detach()

    def resume(self) -> None:
        """Follow the binding again, taking over text the host wrote meanwhile."""
        if self._disposed or self._binding is None:
            return
        self.adapter.attach(self._binding)
        if self._binding.text != self.store.value:
            self._apply_external_text(self._binding.text)

    def dispose(self) -> None:
        """Detach from the binding. Safe to call more than once."""
        if self._disposed:
            return
        self._disposed = True
        self.adapter.detach()
        self._listeners.clear()
