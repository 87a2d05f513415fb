"""Tests for TextBuffer and ExternalBindingAdapter."""

from date_time_picker.controller import ExternalBindingAdapter, TextBuffer


class TestTextBuffer:
    """Tests for the host-owned buffer."""

    def test_notifies_on_change(self):
        seen = []
        buffer = TextBuffer("a")
        buffer.add_listener(seen.append)
        buffer.text = "b"
        assert seen == ["b"]

    def test_same_text_does_not_notify(self):
        seen = []
        buffer = TextBuffer("a")
        buffer.add_listener(seen.append)
        buffer.text = "a"
        assert seen == []

    def test_remove_listener(self):
        seen = []
        buffer = TextBuffer()
        buffer.add_listener(seen.append)
        buffer.remove_listener(seen.append)
        buffer.remove_listener(seen.append)
        buffer.text = "x"
        assert seen == []
        assert buffer.listener_count == 0


class TestExternalBindingAdapter:
    """Tests for echo suppression and subscription handling."""

    def test_forwards_host_edits(self):
        seen = []
        adapter = ExternalBindingAdapter(seen.append)
        buffer = TextBuffer()
        adapter.attach(buffer)
        buffer.text = "2020-07-23"
        assert seen == ["2020-07-23"]

    def test_own_push_is_not_echoed(self):
        """Writing the canonical value into the buffer does not come back."""
        seen = []
        adapter = ExternalBindingAdapter(seen.append)
        buffer = TextBuffer()
        adapter.attach(buffer)
        adapter.push_canonical_value("2020-07-25")
        assert buffer.text == "2020-07-25"
        assert adapter.last_pushed == "2020-07-25"
        assert seen == []

    def test_host_edit_after_push_clears_last_pushed(self):
        """After the host writes, re-writing the old pushed value is a real edit."""
        seen = []
        adapter = ExternalBindingAdapter(seen.append)
        buffer = TextBuffer()
        adapter.attach(buffer)
        adapter.push_canonical_value("2020-07-25")
        buffer.text = "2020-07-26"
        buffer.text = "2020-07-25"
        assert seen == ["2020-07-26", "2020-07-25"]
        assert adapter.last_pushed is None

    def test_detach_is_idempotent(self):
        adapter = ExternalBindingAdapter(lambda text: None)
        buffer = TextBuffer()
        adapter.attach(buffer)
        assert buffer.listener_count == 1
        assert adapter.detach() is True
        assert adapter.detach() is False
        assert buffer.listener_count == 0
        assert not adapter.attached

    def test_attach_replaces_previous_buffer(self):
        seen = []
        adapter = ExternalBindingAdapter(seen.append)
        first, second = TextBuffer(), TextBuffer()
        adapter.attach(first)
        adapter.attach(second)
        first.text = "ignored"
        second.text = "kept"
        assert seen == ["kept"]
        assert first.listener_count == 0

    def test_push_without_buffer(self):
        adapter = ExternalBindingAdapter(lambda text: None)
        adapter.push_canonical_value("09:00")
        assert adapter.last_pushed == "09:00"
        assert adapter.buffer is None
