"""
Element Tree - The slide/element data model.

The tree is plain JSON-compatible data so that authoring tools can emit it
directly:

    collection = [                      # ordered slides
        [                               # slide 0: ordered elements
            {"type": "RadioGroup", "props": {"score": 2, ...}},
        ],
    ]

An element is a tagged node: {"type": str, "props": dict}. Props may hold
nested elements under "children" plus domain fields (position, score,
correctAnswers, checked, answers) and anything a renderer wants.
"""

from __future__ import annotations

import math
from typing import Any, Iterable

# Node keys
TYPE_KEY = "type"
PROPS_KEY = "props"
CHILDREN_KEY = "children"

# Domain prop names
POSITION = "position"
SCORE = "score"
CORRECT_ANSWERS = "correctAnswers"
ANSWERS = "answers"
CHECKED = "checked"

PERCENT_MIN = 0
PERCENT_MAX = 99


def make_element(element_type: str, **props: Any) -> dict[str, Any]:
    """Create an element node."""
    return {TYPE_KEY: element_type, PROPS_KEY: props}


def make_slide(*elements: dict[str, Any]) -> list[dict[str, Any]]:
    return list(elements)


def empty_collection() -> list:
    return []


def is_element(node: Any) -> bool:
    return isinstance(node, dict) and isinstance(node.get(TYPE_KEY), str)


def element_type(node: Any) -> str | None:
    if isinstance(node, dict):
        value = node.get(TYPE_KEY)
        return value if isinstance(value, str) else None
    return None


def element_props(node: Any) -> dict[str, Any]:
    """Props of an element, or an empty dict for anything malformed."""
    if isinstance(node, dict):
        props = node.get(PROPS_KEY)
        if isinstance(props, dict):
            return props
    return {}


def element_children(node: Any) -> list[Any]:
    """Nested child nodes as a list (a single child is wrapped)."""
    children = element_props(node).get(CHILDREN_KEY)
    if children is None:
        return []
    if isinstance(children, list):
        return children
    return [children]


# =============================================================================
# Value normalisation
# =============================================================================

def _as_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    except OverflowError:
        # Integers beyond float range
        return math.inf if value > 0 else -math.inf
    if math.isnan(number):
        return None
    return number


def normalize_score(value: Any) -> int | float:
    """
    Coerce a score to a non-negative number.

    Non-numeric and negative values become 0. Integral floats come back as
    int so that totals stay tidy.
    """
    number = _as_number(value)
    if number is None or number <= 0 or math.isinf(number):
        return 0
    if number.is_integer():
        return int(number)
    return number


def clamp_percent(value: Any) -> int:
    """Round half up and clamp into [0, 99]. Non-numeric input gives 0."""
    number = _as_number(value)
    if number is None:
        return PERCENT_MIN
    number = min(max(number, PERCENT_MIN), PERCENT_MAX)
    return int(math.floor(number + 0.5))


def clamp_fraction(value: Any) -> float:
    """Clamp a position coordinate into [0, 1]."""
    number = _as_number(value)
    if number is None:
        return 0.0
    return min(max(number, 0.0), 1.0)


def answer_set(value: Any) -> frozenset:
    """
    Normalise a recorded or correct answer into a set.

    A scalar counts as a single answer; None or a missing value is the empty
    set. Unhashable items are ignored. Bools are kept apart from the numbers
    they compare equal to, so True never matches 1.
    """
    if value is None:
        return frozenset()
    if isinstance(value, (str, int, float, bool)):
        return frozenset([_answer_id(value)])
    if isinstance(value, Iterable):
        items = []
        for item in value:
            try:
                hash(item)
            except TypeError:
                continue
            items.append(_answer_id(item))
        return frozenset(items)
    return frozenset()


def _answer_id(value: Any) -> Any:
    if isinstance(value, bool):
        return (bool, value)
    return value
