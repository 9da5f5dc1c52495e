"""
Scoring - Aggregate scores over a collection.

- total: every element's score, answered or not
- current: only elements whose recorded answers match their correct answers

Both are pure functions of the collection; the store memoises them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..tree.elements import ANSWERS, CORRECT_ANSWERS, SCORE, answer_set, element_props, normalize_score
from ..tree.traversal import iter_elements


@dataclass(frozen=True)
class ScoreSummary:
    """Score totals for one collection value."""
    total: int | float
    current: int | float
    element_count: int

    @property
    def percent(self) -> int:
        if not self.total:
            return 0
        return int(round(100 * self.current / self.total))


def element_score(element: dict) -> int | float:
    return normalize_score(element_props(element).get(SCORE))


def answers_match(element: dict) -> bool:
    """
    True when the element's recorded answers equal its correct answers.

    Comparison is set equality, so order and duplicates do not matter. An
    element without correct answers can never be answered correctly.
    """
    props = element_props(element)
    correct = answer_set(props.get(CORRECT_ANSWERS))
    if not correct:
        return False
    return answer_set(props.get(ANSWERS)) == correct


def total_score(collection: Any) -> int | float:
    return sum(element_score(element) for _, _, element in iter_elements(collection))


def current_score(collection: Any) -> int | float:
    return sum(
        element_score(element)
        for _, _, element in iter_elements(collection)
        if answers_match(element)
    )


def summarize(collection: Any) -> ScoreSummary:
    count = 0
    total = 0
    current = 0
    for _, _, element in iter_elements(collection):
        count += 1
        score = element_score(element)
        total += score
        if answers_match(element):
            current += score
    return ScoreSummary(total=total, current=current, element_count=count)
