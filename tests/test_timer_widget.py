"""Tests for the timer card widget.

Child widgets of a never-shown window report ``isVisible() == False``,
so visibility is checked with ``isHidden()``.
"""

import pytest

from focussync.timer.messages import PresetType, Task
from focussync.ui.timer_widget import TimerWidget

from helpers import sync_payload


@pytest.fixture
def widget(core):
    w = TimerWidget(core)
    yield w
    w.deleteLater()


class TestRendering:

    def test_initial_display(self, widget):
        assert widget._time_label.text() == "25:00"
        assert widget._round_label.text() == "Round 1/4"
        assert widget._session_label.text() == "Work Session - Write report"
        assert widget._short_btn.isChecked()
        assert not widget._long_btn.isChecked()

    def test_snapshot_updates_display(self, widget, channel):
        channel.deliver(sync_payload(
            session_type="short_break", remaining_time=299, round_number=2,
        ))
        assert widget._time_label.text() == "04:59"
        assert widget._session_label.text() == "Short Break"
        assert widget._round_label.text() == "Round 2/4"

    def test_active_task_from_server(self, widget, channel):
        channel.deliver(sync_payload(active_task={"id": 9, "title": "Taxes"}))
        assert widget._session_label.text() == "Work Session - Taxes"

    def test_idle_shows_start_only(self, widget):
        assert not widget._start_btn.isHidden()
        assert widget._pause_btn.isHidden()
        assert widget._resume_btn.isHidden()
        assert not widget._skip_btn.isEnabled()

    def test_running_shows_pause_and_resume(self, widget, channel):
        channel.deliver(sync_payload(is_paused=False))
        assert widget._start_btn.isHidden()
        assert not widget._pause_btn.isHidden()
        assert not widget._resume_btn.isHidden()
        assert widget._skip_btn.isEnabled()


class TestInteraction:

    def test_long_preset_click_updates_time(self, widget, channel):
        widget._long_btn.click()
        assert widget._time_label.text() == "50:00"
        assert widget._long_btn.isChecked()
        assert not widget._short_btn.isChecked()
        assert channel.sent == []

    def test_reclicking_current_preset_keeps_it_checked(self, widget):
        widget._short_btn.click()
        assert widget._short_btn.isChecked()

    def test_start_click_sends_start(self, widget, channel):
        widget._start_btn.click()
        assert channel.sent_types == ["start"]

    def test_rejection_is_shown(self, widget, core):
        core.attach()
        widget._start_btn.click()
        assert widget._status_label.text() == "Please select a task first."

    def test_status_cleared_on_next_action(self, widget, core, channel):
        core.attach()
        widget._start_btn.click()
        core.set_current_task(Task(id=1, title="Back"))
        widget._start_btn.click()
        assert widget._status_label.text() == ""
        assert channel.sent_types == ["start"]

    def test_stop_click_then_server_stop(self, widget, channel):
        channel.deliver(sync_payload(remaining_time=100, is_paused=False))
        widget._stop_btn.click()
        assert channel.sent_types == ["stop"]
        channel.deliver({"type": "timer_stopped"})
        assert widget._time_label.text() == "25:00"
        assert not widget._start_btn.isHidden()

    def test_clicks_after_detach_are_ignored(self, widget, core, channel):
        core.detach()
        for btn in (widget._start_btn, widget._pause_btn, widget._resume_btn,
                    widget._stop_btn, widget._skip_btn):
            btn.click()
        assert channel.sent == []
        assert widget._status_label.text() == ""
