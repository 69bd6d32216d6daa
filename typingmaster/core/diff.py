"""Per-character comparison of typed input against a reference text."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Iterable, List


class CharState(Enum):
    UNTYPED = "untyped"
    CORRECT = "correct"
    INCORRECT = "incorrect"


def classify(reference: str, typed: str) -> List[CharState]:
    """Classify every reference position against what has been typed so far.

    Returns exactly ``len(reference)`` entries. Characters typed past the end
    of the reference have nothing to be compared with and are left out.
    """
    states: List[CharState] = []
    typed_len = len(typed)
    for i, expected in enumerate(reference):
        if i >= typed_len:
            states.append(CharState.UNTYPED)
        elif typed[i] == expected:
            states.append(CharState.CORRECT)
        else:
            states.append(CharState.INCORRECT)
    return states


def count_states(states: Iterable[CharState]) -> Dict[CharState, int]:
    """Tally a classification, with every state present (zero if unseen)."""
    counts = {state: 0 for state in CharState}
    for state in states:
        counts[state] += 1
    return counts
