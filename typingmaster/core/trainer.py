"""Both practice modes behind one object, the way the app's two tabs share state."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, List, Optional

from typingmaster.core.diff import CharState, count_states
from typingmaster.core.lessons import LessonRepository, LessonSequencer, LessonSet
from typingmaster.core.passages import Passage, PassageRepository
from typingmaster.core.session import SessionController

logger = logging.getLogger(__name__)


class Mode(Enum):
    TESTER = "tester"
    TUTORIAL = "tutorial"


class TypingTrainer:
    """Scored speed test plus guided lessons, one of them active at a time.

    Every switch starts a fresh test on the current reference text, so a
    test left running in the background is stopped. Switching to the
    tutorial also clears the lesson input but keeps the selected lesson.
    """

    def __init__(
        self,
        session: Optional[SessionController] = None,
        lessons: Optional[LessonSet] = None,
        reference_text: Optional[str] = None,
        passages: Optional[PassageRepository] = None,
    ) -> None:
        self._passages = passages if passages is not None else PassageRepository()
        if reference_text is None:
            reference_text = self._passages.default().text
        if lessons is None:
            lessons = LessonRepository().lesson_set()
        self._lesson_set = lessons
        self._session = session if session is not None else SessionController()
        self._session.reset(reference_text)
        self._sequencer = LessonSequencer(lessons)
        self._mode = Mode.TESTER

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def session(self) -> SessionController:
        return self._session

    @property
    def lessons(self) -> LessonSequencer:
        return self._sequencer

    def switch_mode(self, mode: Mode) -> None:
        # a test abandoned by leaving the tester must not keep ticking
        self._session.reset(self._session.reference_text)
        if mode is Mode.TUTORIAL:
            self._sequencer.clear_input()
        self._mode = mode
        logger.info("Switched to %s mode", mode.value)

    def load_custom_text(self, text: str) -> None:
        """Start a new scored test on caller-supplied text."""
        if not text or not text.strip():
            raise ValueError("Custom text must contain at least one non-blank character")
        self._session.reset(text)
        logger.info("Loaded custom text (%d characters)", len(text))

    def close(self) -> None:
        self._session.close()

    def lesson_titles(self) -> List[str]:
        return self._lesson_set.titles()

    def available_passages(self) -> List[Passage]:
        return self._passages.all()

    def load_passage(self, key: str) -> None:
        """Start a new scored test on a built-in passage. Unknown keys raise KeyError."""
        passage = self._passages.get(key)
        self._session.reset(passage.text)
        logger.info("Loaded passage '%s'", key)

    def live_counts(self) -> Dict[CharState, int]:
        """Correct / incorrect / untyped tally for the active mode's text."""
        if self._mode is Mode.TUTORIAL:
            return count_states(self._sequencer.classification)
        return count_states(self._session.classification)
