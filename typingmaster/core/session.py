from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Callable, List, Optional

from typingmaster.core.diff import CharState, classify
from typingmaster.core.metrics import Metrics, compute, format_elapsed
from typingmaster.core.timer import QtTickTimer, TickTimer

logger = logging.getLogger(__name__)


class SessionStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"
    FINISHED = "finished"


class SessionController:
    """Lifecycle of a single scored typing test.

    The test is idle until the first character arrives, which stamps the
    start time and starts the one-second tick timer. It finishes as soon as
    the typed text reaches the reference length, whether or not the
    characters are right; correctness only shows up in the metrics. A
    finished test ignores further input until ``reset`` starts a new one.

    Input is the whole current buffer, not a delta, so edits and backspace
    are simply a shorter or different buffer.
    """

    def __init__(
        self,
        reference_text: str = "",
        timer: Optional[TickTimer] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._timer: TickTimer = timer if timer is not None else QtTickTimer()
        self._clock = clock
        self._reference_text = reference_text
        self._typed_text = ""
        self._status = SessionStatus.IDLE
        self._started_at: Optional[float] = None
        self._finished_at: Optional[float] = None
        self._elapsed_ticks = 0
        self._metrics: Optional[Metrics] = None
        self._closed = False

    def __enter__(self) -> SessionController:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # -- state accessors ---------------------------------------------------

    @property
    def reference_text(self) -> str:
        return self._reference_text

    @property
    def typed_text(self) -> str:
        return self._typed_text

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def started_at(self) -> Optional[float]:
        """Clock reading at the first typed character, None while idle."""
        return self._started_at

    @property
    def finished_at(self) -> Optional[float]:
        return self._finished_at

    @property
    def elapsed_ticks(self) -> int:
        return self._elapsed_ticks

    @property
    def elapsed_display(self) -> str:
        return format_elapsed(self._elapsed_ticks)

    @property
    def metrics(self) -> Optional[Metrics]:
        """Final metrics; only available once the test has finished."""
        return self._metrics

    @property
    def is_finished(self) -> bool:
        return self._status is SessionStatus.FINISHED

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def accepts_input(self) -> bool:
        return not self._closed and self._status is not SessionStatus.FINISHED

    @property
    def classification(self) -> List[CharState]:
        return classify(self._reference_text, self._typed_text)

    # -- events ------------------------------------------------------------

    def reset(self, reference_text: str) -> None:
        """Discard the current test and prepare a fresh one for ``reference_text``."""
        self._timer.stop()
        self._reference_text = reference_text
        self._typed_text = ""
        self._status = SessionStatus.IDLE
        self._started_at = None
        self._finished_at = None
        self._elapsed_ticks = 0
        self._metrics = None
        self._closed = False
        logger.info("Session reset (%d reference characters)", len(reference_text))

    def on_input(self, typed_text: str) -> bool:
        """Feed the current input buffer. Returns False if the input was rejected."""
        if self._closed:
            logger.debug("Input rejected: session closed")
            return False
        if self._status is SessionStatus.FINISHED:
            logger.debug("Input rejected: session already finished")
            return False

        if self._status is SessionStatus.IDLE and typed_text:
            self._start()

        self._typed_text = typed_text

        if self._status is SessionStatus.RUNNING and len(typed_text) >= len(self._reference_text):
            self._finish()
        return True

    start_or_update = on_input

    def tick(self) -> None:
        """Advance the elapsed time by one tick while the test is running."""
        if self._closed or self._status is not SessionStatus.RUNNING:
            logger.debug("Tick ignored in %s state", self._status.value)
            return
        self._elapsed_ticks += 1

    def close(self) -> None:
        """Release the tick timer; call when the session is discarded.

        A closed session rejects input and ticks until ``reset`` starts a new
        test on it.
        """
        self._timer.stop()
        self._closed = True

    # -- transitions -------------------------------------------------------

    def _start(self) -> None:
        self._status = SessionStatus.RUNNING
        self._started_at = self._clock()
        self._timer.start(self.tick)
        logger.info("Session started")

    def _finish(self) -> None:
        self._finished_at = self._clock()
        self._status = SessionStatus.FINISHED
        self._timer.stop()
        # _start always runs before _finish, so started_at is set
        elapsed_millis = (self._finished_at - self._started_at) * 1000.0
        self._metrics = compute(self._reference_text, self._typed_text, elapsed_millis)
        logger.info(
            "Session finished: %d wpm, %d%% accuracy, %d errors",
            self._metrics.speed,
            self._metrics.accuracy,
            self._metrics.error_count,
        )
