"""
Focus-loss monitoring for an active quiz.

The viewport is reached through a ViewportSignalSource so that any front end (or a
test) can feed "hidden" and "focus lost" events in. The IntegrityMonitor turns the
events it sees while armed into a violation count.
"""
from typing import Callable, List, Protocol

from logger import get_logger

logger = get_logger("integrity")

Callback = Callable[[], None]
Unsubscribe = Callable[[], None]


class ViewportSignalSource(Protocol):
    def subscribe_hidden(self, callback: Callback) -> Unsubscribe: ...

    def subscribe_focus_lost(self, callback: Callback) -> Unsubscribe: ...


class Notifier(Protocol):
    def interrupt(self, message: str) -> None:
        """Blocking notice; returns once the learner has acknowledged it."""
        ...

    def alert(self, message: str) -> None: ...


class LoggingNotifier:
    """Notifier for headless runs: notices go to the log."""

    def interrupt(self, message: str) -> None:
        logger.warning("interrupt: %s", message)

    def alert(self, message: str) -> None:
        logger.error("alert: %s", message)


class ManualSignalSource:
    """In-process signal source; callers push viewport events with emit_*()."""

    def __init__(self):
        self._hidden: List[Callback] = []
        self._focus_lost: List[Callback] = []

    @staticmethod
    def _subscribe(listeners: List[Callback], callback: Callback) -> Unsubscribe:
        listeners.append(callback)

        def unsubscribe() -> None:
            if callback in listeners:
                listeners.remove(callback)

        return unsubscribe

    def subscribe_hidden(self, callback: Callback) -> Unsubscribe:
        return self._subscribe(self._hidden, callback)

    def subscribe_focus_lost(self, callback: Callback) -> Unsubscribe:
        return self._subscribe(self._focus_lost, callback)

    @property
    def listener_count(self) -> int:
        return len(self._hidden) + len(self._focus_lost)

    def emit_hidden(self) -> None:
        for callback in list(self._hidden):
            callback()

    def emit_focus_lost(self) -> None:
        for callback in list(self._focus_lost):
            callback()


class IntegrityMonitor:
    """
    Counts focus-loss signals while armed.

    - hidden (tab switch): count + blocking interrupt notice
    - focus lost (other window): count only
    There is no reset; a new quiz session gets a new monitor.
    """

    def __init__(self, source: ViewportSignalSource, notifier: Notifier, interrupt_message: str):
        self._source = source
        self._notifier = notifier
        self._interrupt_message = interrupt_message
        self._count = 0
        self._unsubscribers: List[Unsubscribe] = []

    @property
    def armed(self) -> bool:
        return bool(self._unsubscribers)

    @property
    def count(self) -> int:
        return self._count

    def set_armed(self, active: bool) -> None:
        if active == self.armed:
            return
        if active:
            self._unsubscribers = [
                self._source.subscribe_hidden(self._on_hidden),
                self._source.subscribe_focus_lost(self._on_focus_lost),
            ]
            logger.debug("monitor armed count=%s", self._count)
        else:
            unsubscribers, self._unsubscribers = self._unsubscribers, []
            for unsubscribe in unsubscribers:
                unsubscribe()
            logger.debug("monitor disarmed count=%s", self._count)

    def _on_hidden(self) -> None:
        if not self.armed:
            return
        self._count += 1
        logger.info("violation: viewport hidden count=%s", self._count)
        self._notifier.interrupt(self._interrupt_message)

    def _on_focus_lost(self) -> None:
        if not self.armed:
            return
        self._count += 1
        logger.info("violation: focus lost count=%s", self._count)
