"""Unit tests for IntegrityMonitor and ManualSignalSource."""
import logging

import pytest

from factories import TAB_SWITCH, RecordingNotifier
from integrity import IntegrityMonitor, LoggingNotifier, ManualSignalSource


class LeakySource(ManualSignalSource):
    """Source whose unsubscribe never takes effect (callbacks keep firing)."""

    def subscribe_hidden(self, callback):
        super().subscribe_hidden(callback)
        return lambda: None

    def subscribe_focus_lost(self, callback):
        super().subscribe_focus_lost(callback)
        return lambda: None


@pytest.fixture
def monitor(signals, notifier) -> IntegrityMonitor:
    return IntegrityMonitor(signals, notifier, TAB_SWITCH)


@pytest.mark.unit
class TestArming:
    def test_starts_inactive_with_zero_count(self, monitor, signals):
        assert monitor.armed is False
        assert monitor.count == 0
        assert signals.listener_count == 0

    def test_arming_subscribes_both_signals(self, monitor, signals):
        monitor.set_armed(True)
        assert monitor.armed is True
        assert signals.listener_count == 2

    def test_set_armed_is_idempotent(self, monitor, signals):
        monitor.set_armed(True)
        monitor.set_armed(True)
        assert signals.listener_count == 2
        signals.emit_focus_lost()
        assert monitor.count == 1

        monitor.set_armed(False)
        monitor.set_armed(False)
        assert signals.listener_count == 0

    def test_disarm_keeps_count(self, monitor, signals):
        monitor.set_armed(True)
        signals.emit_hidden()
        monitor.set_armed(False)
        assert monitor.count == 1


@pytest.mark.unit
class TestSignals:
    def test_hidden_counts_and_interrupts(self, monitor, signals, notifier):
        monitor.set_armed(True)
        signals.emit_hidden()
        signals.emit_hidden()
        assert monitor.count == 2
        assert notifier.interrupts == [TAB_SWITCH, TAB_SWITCH]
        assert notifier.alerts == []

    def test_focus_lost_counts_without_notice(self, monitor, signals, notifier):
        monitor.set_armed(True)
        signals.emit_focus_lost()
        assert monitor.count == 1
        assert notifier.interrupts == []

    def test_tab_switch_fires_both_signals(self, monitor, signals, notifier):
        monitor.set_armed(True)
        signals.emit_focus_lost()
        signals.emit_hidden()
        assert monitor.count == 2
        assert len(notifier.interrupts) == 1

    def test_signals_while_inactive_are_ignored(self, monitor, signals, notifier):
        signals.emit_hidden()
        signals.emit_focus_lost()
        monitor.set_armed(True)
        monitor.set_armed(False)
        signals.emit_hidden()
        signals.emit_focus_lost()
        assert monitor.count == 0
        assert notifier.interrupts == []

    def test_late_callback_after_disarm_is_ignored(self, notifier):
        source = LeakySource()
        monitor = IntegrityMonitor(source, notifier, TAB_SWITCH)
        monitor.set_armed(True)
        monitor.set_armed(False)
        source.emit_hidden()
        source.emit_focus_lost()
        assert monitor.count == 0
        assert notifier.interrupts == []

    def test_monitors_on_shared_source_count_independently(self, signals):
        first = IntegrityMonitor(signals, RecordingNotifier(), TAB_SWITCH)
        second = IntegrityMonitor(signals, RecordingNotifier(), TAB_SWITCH)
        first.set_armed(True)
        signals.emit_focus_lost()
        second.set_armed(True)
        signals.emit_focus_lost()
        assert (first.count, second.count) == (2, 1)


@pytest.mark.unit
def test_manual_source_unsubscribe_twice_is_harmless(signals):
    calls = []
    unsubscribe = signals.subscribe_hidden(lambda: calls.append(1))
    unsubscribe()
    unsubscribe()
    signals.emit_hidden()
    assert calls == []


@pytest.mark.unit
def test_logging_notifier_writes_to_log(caplog):
    # the portal logger tree does not propagate to root once configured
    log = logging.getLogger("aptlearn.integrity")
    caplog.set_level("WARNING", logger="aptlearn.integrity")
    log.addHandler(caplog.handler)
    try:
        LoggingNotifier().interrupt("stay here")
        LoggingNotifier().alert("it broke")
    finally:
        log.removeHandler(caplog.handler)
    assert "stay here" in caplog.text
    assert "it broke" in caplog.text
