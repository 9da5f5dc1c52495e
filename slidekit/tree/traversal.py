"""
Traversal - Deterministic walk over every element of a collection.

Order is slide order, then element order within the slide. The walk is
read-only; callers that want to change the tree collect (path, value) writes
and hand them to `apply_writes` in one go.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Iterator

from .elements import PROPS_KEY

Visitor = Callable[[dict, int, int], Any]
WriteBuilder = Callable[[dict, int, int], Iterable[tuple[tuple, Any]]]


def iter_elements(collection: Any) -> Iterator[tuple[int, int, dict]]:
    """Yield (slide_index, element_index, element) for every element."""
    if not isinstance(collection, (list, tuple)):
        return
    for slide_index, slide in enumerate(collection):
        if not isinstance(slide, (list, tuple)):
            continue
        for element_index, element in enumerate(slide):
            if isinstance(element, dict):
                yield slide_index, element_index, element


def for_each_element(collection: Any, visit: Visitor) -> None:
    """Call visit(element, slide_index, element_index) for every element."""
    for slide_index, element_index, element in iter_elements(collection):
        visit(element, slide_index, element_index)


def element_count(collection: Any) -> int:
    return sum(1 for _ in iter_elements(collection))


def element_path(slide_index: int, element_index: int, *rest: Any) -> tuple:
    """Path to an element, or to something inside it."""
    return (slide_index, element_index, *rest)


def prop_path(slide_index: int, element_index: int, *fields: Any) -> tuple:
    """Path to a field under an element's props."""
    return (slide_index, element_index, PROPS_KEY, *fields)


def collect_writes(collection: Any, build: WriteBuilder) -> list[tuple[tuple, Any]]:
    """
    Run one traversal and gather the writes `build` asks for.

    `build(element, slide_index, element_index)` returns an iterable of
    (path, value) pairs (possibly empty).
    """
    writes: list[tuple[tuple, Any]] = []

    def visit(element: dict, slide_index: int, element_index: int) -> None:
        writes.extend(build(element, slide_index, element_index) or ())

    for_each_element(collection, visit)
    return writes
