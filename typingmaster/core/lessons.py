from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple

import yaml

from typingmaster.core.diff import CharState, classify

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent.parent / "data"


@dataclass(frozen=True)
class Lesson:
    title: str
    text: str


class LessonSet:
    """Fixed, ordered sequence of practice lessons."""

    def __init__(self, lessons: Iterable[Lesson]) -> None:
        self._lessons: Tuple[Lesson, ...] = tuple(lessons)
        if not self._lessons:
            raise ValueError("A lesson set needs at least one lesson")

    def __len__(self) -> int:
        return len(self._lessons)

    def __getitem__(self, index: int) -> Lesson:
        return self._lessons[index]

    def __iter__(self) -> Iterator[Lesson]:
        return iter(self._lessons)

    def titles(self) -> List[str]:
        return [lesson.title for lesson in self._lessons]


class LessonRepository:
    """Loads the tutorial lessons shipped as ``data/lessons.yaml``."""

    def __init__(self, base_dir: Optional[Path] = None) -> None:
        self._path = (base_dir or DATA_DIR) / "lessons.yaml"
        self._lessons = self._load_lessons()

    def lesson_set(self) -> LessonSet:
        return self._lessons

    def _load_lessons(self) -> LessonSet:
        if not self._path.exists():
            raise FileNotFoundError(f"Lessons file not found: {self._path}")

        raw = yaml.safe_load(self._path.read_text(encoding="utf-8"))
        if not raw or not isinstance(raw, dict):
            raise ValueError(f"{self._path.name}: expected YAML with a 'lessons' list")
        entries = raw.get("lessons")
        if not isinstance(entries, list) or not entries:
            raise ValueError(f"{self._path.name}: 'lessons' must be a non-empty list")

        lessons: List[Lesson] = []
        for position, entry in enumerate(entries):
            if not isinstance(entry, dict):
                raise ValueError(f"{self._path.name}: lesson #{position} is not a mapping")
            title = entry.get("title")
            text = entry.get("text")
            if not title or not isinstance(title, str):
                raise ValueError(f"{self._path.name}: lesson #{position} has missing or invalid 'title'")
            if not text or not isinstance(text, str) or not text.strip():
                raise ValueError(f"{self._path.name}: lesson #{position} has missing or invalid 'text'")
            lessons.append(Lesson(title=title.strip(), text=text.strip()))

        logger.debug("Loaded %d lessons from %s", len(lessons), self._path)
        return LessonSet(lessons)


class LessonSequencer:
    """Walks a lesson set one lesson at a time.

    Unlike the scored test there is no timer and no metrics: the only
    feedback is the per-character classification and whether the typed
    buffer has reached the lesson's length. Moving to another lesson always
    starts with an empty buffer; a move that is refused at either end of the
    set leaves the buffer alone.
    """

    def __init__(self, lessons: LessonSet, start_index: int = 0) -> None:
        self._lessons = lessons
        self._index = max(0, min(start_index, len(lessons) - 1))
        self._typed_text = ""

    @property
    def index(self) -> int:
        """Index of the current lesson (0-based)."""
        return self._index

    @property
    def lesson_count(self) -> int:
        return len(self._lessons)

    @property
    def current_lesson(self) -> Lesson:
        return self._lessons[self._index]

    @property
    def title(self) -> str:
        return self.current_lesson.title

    @property
    def text(self) -> str:
        return self.current_lesson.text

    @property
    def typed_text(self) -> str:
        return self._typed_text

    @property
    def has_next(self) -> bool:
        return self._index < len(self._lessons) - 1

    @property
    def has_previous(self) -> bool:
        return self._index > 0

    @property
    def classification(self) -> List[CharState]:
        return classify(self.text, self._typed_text)

    def is_complete(self) -> bool:
        """True once the buffer is exactly as long as the lesson text."""
        return len(self._typed_text) == len(self.text)

    def next(self) -> bool:
        if not self.has_next:
            return False
        self._move_to(self._index + 1)
        return True

    def previous(self) -> bool:
        if not self.has_previous:
            return False
        self._move_to(self._index - 1)
        return True

    def select_lesson(self, index: int) -> bool:
        """Jump to ``index``. Out-of-range indexes are ignored and return False."""
        if not 0 <= index < len(self._lessons):
            logger.debug("Lesson index %d out of range (0..%d)", index, len(self._lessons) - 1)
            return False
        if index != self._index:
            self._move_to(index)
        return True

    def on_input(self, typed_text: str) -> None:
        self._typed_text = typed_text

    def clear_input(self) -> None:
        self._typed_text = ""

    def _move_to(self, index: int) -> None:
        self._index = index
        self._typed_text = ""
        logger.debug("Moved to lesson %d: %s", index, self.title)
