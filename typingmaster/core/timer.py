"""Periodic tick sources that drive the elapsed-time display."""

from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol

from PySide6.QtCore import QObject, QTimer

logger = logging.getLogger(__name__)

TICK_INTERVAL_MS = 1000


class TickTimer(Protocol):
    """A cancellable timer calling back once per tick interval."""

    @property
    def is_active(self) -> bool: ...

    def start(self, callback: Callable[[], None]) -> None: ...

    def stop(self) -> None: ...


class QtTickTimer:
    """Tick timer backed by a ``QTimer`` on the owning thread's event loop.

    Starting an active timer or stopping an idle one does nothing, so the
    session can release the timer from every exit path without bookkeeping.
    """

    def __init__(self, interval_ms: int = TICK_INTERVAL_MS, parent: Optional[QObject] = None) -> None:
        self._timer = QTimer(parent)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._on_timeout)
        self._callback: Optional[Callable[[], None]] = None

    @property
    def is_active(self) -> bool:
        return self._timer.isActive()

    def start(self, callback: Callable[[], None]) -> None:
        if self._timer.isActive():
            logger.debug("Tick timer already running; start ignored")
            return
        self._callback = callback
        self._timer.start()

    def stop(self) -> None:
        if self._timer.isActive():
            self._timer.stop()
        self._callback = None

    def _on_timeout(self) -> None:
        if self._callback is not None:
            self._callback()
