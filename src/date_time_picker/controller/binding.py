"""Two-way binding between a field and a host-owned text buffer."""

from __future__ import annotations

import logging
from typing import Callable

log = logging.getLogger(__name__)

Listener = Callable[[str], None]


class TextBuffer:
    """Mutable text owned by the host form.

    Either side may write `text` at any time; listeners are told about every
    write that actually changes the text.
    """

    def __init__(self, text: str = "") -> None:
        self._text = text
        self._listeners: list[Listener] = []

    @property
    def text(self) -> str:
        return self._text

    @text.setter
    def text(self, value: str) -> None:
        if value == self._text:
            return
        self._text = value
        for listener in list(self._listeners):
            listener(value)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def __repr__(self) -> str:
        return f"TextBuffer({self._text!r})"


class ExternalBindingAdapter:
    """Keeps a TextBuffer and a field's canonical value converged.

    The adapter remembers the last value it pushed into the buffer. When the
    buffer then reports that same text, the notification is our own echo and
    is dropped; anything else is a genuine host edit and goes to on_change.
    """

    def __init__(self, on_change: Listener) -> None:
        self._on_change = on_change
        self._buffer: TextBuffer | None = None
        self._last_pushed: str | None = None

    @property
    def attached(self) -> bool:
        return self._buffer is not None

    @property
    def buffer(self) -> TextBuffer | None:
        return self._buffer

    @property
    def last_pushed(self) -> str | None:
        return self._last_pushed

    def attach(self, buffer: TextBuffer) -> None:
        """Subscribe to a buffer, detaching from any previous one first."""
        if self._buffer is buffer:
            return
        self.detach()
        buffer.add_listener(self.on_external_change)
        self._buffer = buffer
        self._last_pushed = None

    def detach(self) -> bool:
        """Unsubscribe from the buffer. Returns False if already detached."""
        if self._buffer is None:
            return False
        self._buffer.remove_listener(self.on_external_change)
        self._buffer = None
        log.debug("Detached from external buffer")
        return True

    def on_external_change(self, text: str) -> None:
        if text == self._last_pushed:
            log.debug(f"Ignoring echo of pushed value {text!r}")
            return
        # The host wrote last; its text is now the reference
        self._last_pushed = None
        self._on_change(text)

    def push_canonical_value(self, text: str) -> None:
        """Write a canonical value into the buffer."""
        self._last_pushed = text
        if self._buffer is not None:
            self._buffer.text = text
