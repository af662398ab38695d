"""
Next Tick - deferred callbacks on the Qt event loop.

next_tick() runs a callback once the current synchronous notification
cycle has finished. wait_tick() drives the event loop through one such
cycle, which is what tests and scripts use to let deferred work settle.
"""

import logging
from typing import Callable, List, Optional

from PySide6.QtCore import QCoreApplication, QEventLoop, QTimer

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


def _require_application() -> QCoreApplication:
    app = QCoreApplication.instance()
    if app is None:
        raise RuntimeError("next_tick requires a QCoreApplication instance")
    return app


def next_tick(callback: Callback) -> None:
    """Schedule callback for the next event loop iteration."""
    _require_application()
    QTimer.singleShot(0, callback)


def wait_tick(timeout_ms: int = 10) -> None:
    """Run the event loop for timeout_ms milliseconds.

    Zero-delay callbacks queued before the call (see next_tick) run within
    that window.
    """
    _require_application()
    loop = QEventLoop()
    QTimer.singleShot(timeout_ms, loop.quit)
    loop.exec()


class ManualScheduler:
    """Scheduler that queues callbacks until flush() is called.

    Useful where no Qt event loop is running, e.g. in a worker script or in
    tests that want to step ticks explicitly.
    """

    def __init__(self):
        self._pending: List[Callback] = []

    def __call__(self, callback: Callback) -> None:
        self._pending.append(callback)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def flush(self, limit: Optional[int] = None) -> int:
        """Run queued callbacks in order; returns how many ran.

        Callbacks queued while flushing belong to the following tick and
        are left for the next flush().
        """
        batch, self._pending = self._pending, []
        if limit is not None:
            self._pending = batch[limit:] + self._pending
            batch = batch[:limit]
        for callback in batch:
            callback()
        if batch:
            logger.debug("Flushed %d scheduled callback(s)", len(batch))
        return len(batch)
