"""Essay answer grading strategies.

Each strategy decides whether a submitted essay answer matches the expected
text of a question (the content of its first listed answer). Strategies are
selected by name through ``ESSAY_GRADING_STRATEGY``.
"""

from __future__ import annotations

import re
from typing import Callable, Dict, Optional


EssayStrategy = Callable[[str, Optional[str]], bool]


def _norm(text: str) -> str:
    return " ".join(str(text).split())


def exact_match(submitted: str, expected: Optional[str]) -> bool:
    if expected is None:
        return False
    return str(submitted).strip() == str(expected).strip()


def case_insensitive_match(submitted: str, expected: Optional[str]) -> bool:
    if expected is None:
        return False
    return str(submitted).strip().casefold() == str(expected).strip().casefold()


def pattern_match(submitted: str, expected: Optional[str]) -> bool:
    """Treat the expected text as a regex that must match the whole answer.

    Inner whitespace of the answer is collapsed first, so "ibu  kota" and
    "ibu kota" are graded the same.
    """
    if expected is None:
        return False
    try:
        rx = re.compile(str(expected).strip(), flags=re.IGNORECASE)
    except re.error:
        return False
    return rx.fullmatch(_norm(submitted)) is not None


ESSAY_STRATEGIES: Dict[str, EssayStrategy] = {
    "exact": exact_match,
    "case_insensitive": case_insensitive_match,
    "pattern": pattern_match,
}


def get_essay_strategy(name: str) -> EssayStrategy:
    key = (name or "").strip().lower()
    try:
        return ESSAY_STRATEGIES[key]
    except KeyError:
        raise ValueError(f"Unknown essay grading strategy: {name!r}") from None
