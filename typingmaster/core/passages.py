from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent.parent / "data"


@dataclass(frozen=True)
class Passage:
    key: str
    title: str
    text: str


class PassageRepository:
    """Built-in reference texts for the scored test, from ``data/passages.yaml``.

    The first passage in the file is the default one.
    """

    def __init__(self, base_dir: Optional[Path] = None) -> None:
        self._path = (base_dir or DATA_DIR) / "passages.yaml"
        self._passages = self._load_passages()

    def all(self) -> List[Passage]:
        return list(self._passages.values())

    def get(self, key: str) -> Passage:
        return self._passages[key]

    def default(self) -> Passage:
        return next(iter(self._passages.values()))

    def _load_passages(self) -> Dict[str, Passage]:
        if not self._path.exists():
            raise FileNotFoundError(f"Passages file not found: {self._path}")

        raw = yaml.safe_load(self._path.read_text(encoding="utf-8"))
        if not raw or not isinstance(raw, dict) or not isinstance(raw.get("passages"), list):
            raise ValueError(f"{self._path.name}: expected YAML with a 'passages' list")

        passages: Dict[str, Passage] = {}
        for entry in raw["passages"]:
            if not isinstance(entry, dict):
                raise ValueError(f"{self._path.name}: passage entries must be mappings")
            key = entry.get("key")
            title = entry.get("title")
            text = entry.get("text")
            if not key or not isinstance(key, str):
                raise ValueError(f"{self._path.name}: passage missing or invalid 'key'")
            if key in passages:
                raise ValueError(f"{self._path.name}: duplicate passage key '{key}'")
            if not title or not isinstance(title, str):
                raise ValueError(f"{self._path.name}: passage '{key}' missing or invalid 'title'")
            if not text or not isinstance(text, str) or not text.strip():
                raise ValueError(f"{self._path.name}: passage '{key}' has no text")
            # folded YAML scalars may end with a newline
            passages[key] = Passage(key=key, title=title.strip(), text=" ".join(text.split()))

        if not passages:
            raise ValueError(f"{self._path.name}: no passages defined")
        logger.debug("Loaded %d passages from %s", len(passages), self._path)
        return passages
