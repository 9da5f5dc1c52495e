"""
Tree Store - The single owner of an editing session's collection.

The store is the single point of state mutation. Every change:
1. Computes a new collection with the path accessor (copy-on-write)
2. Installs it as the current collection
3. Bumps the version and notifies subscribers

Design principles:
- Never raises for expected conditions: bad paths are no-ops
- No-ops keep the current collection object, so identity means "unchanged"
- Derived values (scores) are memoised against collection identity
- Bulk operations commit once, however many elements they touch
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from ..tree.path import (
    ABSENT,
    Path,
    as_path,
    apply_writes,
    get_in,
    insert_in,
    merge_in,
    move_in,
    remove_in,
    set_in,
)
from ..tree.elements import (
    CHECKED,
    POSITION,
    SCORE,
    clamp_fraction,
    clamp_percent,
    element_props,
    normalize_score,
)
from ..tree.traversal import collect_writes, element_path, prop_path
from .scoring import ScoreSummary, current_score, summarize, total_score

logger = logging.getLogger(__name__)

Listener = Callable[[list], None]


@dataclass
class MutationResult:
    """
    Result of a store mutation.

    `success` is always True for the operations the store offers; `changed`
    tells whether a new collection was installed. `error` explains a no-op.
    """
    success: bool
    changed: bool
    collection: Any
    version: int = 0
    error: str | None = None

    @classmethod
    def applied(cls, collection: Any, version: int) -> MutationResult:
        return cls(success=True, changed=True, collection=collection, version=version)

    @classmethod
    def unchanged(cls, collection: Any, version: int, reason: str) -> MutationResult:
        return cls(success=True, changed=False, collection=collection, version=version, error=reason)


@dataclass
class FieldBinding:
    """
    A {value, on_change} pair for an input widget owned elsewhere.

    `value` is a snapshot taken when the binding was created; widgets rebind
    after each change notification.
    """
    path: tuple
    value: Any
    on_change: Callable[[Any], MutationResult | None] = field(repr=False)


def _identity(value: Any) -> Any:
    return value


class TreeStore:
    """
    Owns one collection plus the slide/element cursor.

    Usage:
        store = TreeStore(initial=[[{"type": "Checkbox", "props": {}}]])
        store.patch_value((0, 0, "props", "checked"), True)
        store.total_score
    """

    def __init__(self, initial: list | None = None):
        self._collection: list = initial if initial is not None else []
        self._version = 0
        self._listeners: list[Listener] = []
        self._memo: dict[str, tuple[Any, Any]] = {}

        self.selected_slide_index = 0
        self.selected_element_index: int | None = None

    # =========================================================================
    # Reads
    # =========================================================================

    @property
    def collection(self) -> list:
        return self._collection

    @property
    def version(self) -> int:
        return self._version

    def get_value(self, path: Path, default: Any = ABSENT) -> Any:
        return get_in(self._collection, path, default)

    # =========================================================================
    # Derived values
    # =========================================================================

    def _memoized(self, name: str, compute: Callable[[Any], Any]) -> Any:
        cached = self._memo.get(name)
        if cached is not None and cached[0] is self._collection:
            return cached[1]
        value = compute(self._collection)
        self._memo[name] = (self._collection, value)
        return value

    @property
    def total_score(self) -> int | float:
        return self._memoized("total_score", total_score)

    @property
    def current_score(self) -> int | float:
        return self._memoized("current_score", current_score)

    def score_summary(self) -> ScoreSummary:
        return self._memoized("summary", summarize)

    # =========================================================================
    # Mutations
    # =========================================================================

    def _commit(self, new_collection: Any, operation: str) -> MutationResult:
        if new_collection is self._collection:
            logger.debug("%s left the collection unchanged", operation)
            return MutationResult.unchanged(
                self._collection, self._version, f"{operation}: nothing to change"
            )

        self._collection = new_collection
        self._version += 1
        self._clamp_cursor()
        self._notify()
        return MutationResult.applied(new_collection, self._version)

    def patch_value(self, path: Path, value: Any) -> MutationResult:
        return self._commit(set_in(self._collection, path, value), "patch_value")

    def merge_value(self, path: Path, mapping: dict[str, Any]) -> MutationResult:
        return self._commit(merge_in(self._collection, path, mapping), "merge_value")

    def add_element(self, path: Path, index: int | None, value: Any) -> MutationResult:
        return self._commit(insert_in(self._collection, path, index, value), "add_element")

    def remove_element(self, path: Path, index: int) -> MutationResult:
        return self._commit(remove_in(self._collection, path, index), "remove_element")

    def replace_collection(self, collection: list) -> MutationResult:
        return self._commit(collection, "replace_collection")

    def uncheck_all(self) -> MutationResult:
        """Force every element's `checked` prop to False in one commit."""
        def build(element, slide_index, element_index):
            props = element_props(element)
            if CHECKED in props and props[CHECKED] is not False:
                yield prop_path(slide_index, element_index, CHECKED), False

        writes = collect_writes(self._collection, build)
        return self._commit(apply_writes(self._collection, writes), "uncheck_all")

    def set_score_for_all(self, score: Any) -> MutationResult:
        """Write the same score to every element in one commit."""
        score = normalize_score(score)

        def build(element, slide_index, element_index):
            yield prop_path(slide_index, element_index, SCORE), score

        writes = collect_writes(self._collection, build)
        return self._commit(apply_writes(self._collection, writes), "set_score_for_all")

    # =========================================================================
    # Field bindings
    # =========================================================================

    def bind_field(
        self,
        path: Path,
        to_store: Callable[[Any], Any] | None = None,
        from_store: Callable[[Any], Any] | None = None,
        default: Any = None,
    ) -> FieldBinding:
        """
        Bind a scalar field to an external input widget.

        `on_change` never raises; a failing `to_store` is logged and the
        write is dropped.
        """
        path = as_path(path)
        to_store = to_store or _identity
        from_store = from_store or _identity

        def on_change(value: Any) -> MutationResult:
            try:
                stored = to_store(value)
            except Exception:
                logger.exception("Could not convert %r for %r", value, path)
                return MutationResult.unchanged(
                    self._collection, self._version, "bind_field: conversion failed"
                )
            return self.patch_value(path, stored)

        return FieldBinding(
            path=path,
            value=from_store(self.get_value(path, default)),
            on_change=on_change,
        )

    def bind_percent_field(self, path: Path, default: Any = None) -> FieldBinding:
        """Bind a 0-99 percent field. Reads pass through; an absent field reads as `default`."""
        return self.bind_field(path, to_store=clamp_percent, default=default)

    # =========================================================================
    # Cursor
    # =========================================================================

    def _clamp_cursor(self) -> None:
        slide_count = len(self._collection) if isinstance(self._collection, list) else 0
        self.selected_slide_index = min(max(self.selected_slide_index, 0), max(slide_count - 1, 0))
        if self.selected_element_index is not None:
            if self.selected_element_index >= len(self.current_slide()):
                self.selected_element_index = None

    def select_slide(self, index: int) -> int:
        """Move the slide cursor (clamped) and clear the element selection."""
        self.selected_slide_index = index
        self.selected_element_index = None
        self._clamp_cursor()
        return self.selected_slide_index

    def select_element(self, index: int | None) -> int | None:
        if index is not None and not 0 <= index < len(self.current_slide()):
            index = None
        self.selected_element_index = index
        return index

    def current_slide(self) -> list:
        slide = get_in(self._collection, (self.selected_slide_index,))
        return slide if isinstance(slide, list) else []

    def selected_element(self) -> dict | None:
        if self.selected_element_index is None:
            return None
        element = get_in(self._collection, (self.selected_slide_index, self.selected_element_index))
        return element if isinstance(element, dict) else None

    # =========================================================================
    # Slide and element editing
    # =========================================================================

    def add_slide(self, index: int | None = None, elements: list | None = None) -> MutationResult:
        return self._commit(
            insert_in(self._collection, (), index, list(elements or [])), "add_slide"
        )

    def remove_slide(self, index: int) -> MutationResult:
        return self._commit(remove_in(self._collection, (), index), "remove_slide")

    def move_slide(self, source: int, destination: int) -> MutationResult:
        return self._commit(move_in(self._collection, (), source, destination), "move_slide")

    def move_element(self, slide_index: int, element_index: int, x: Any, y: Any) -> MutationResult:
        """Set an element's position; both coordinates are clamped to [0, 1]."""
        if not isinstance(get_in(self._collection, (slide_index, element_index)), dict):
            return MutationResult.unchanged(
                self._collection, self._version, "move_element: no such element"
            )
        position = {"x": clamp_fraction(x), "y": clamp_fraction(y)}
        return self._commit(
            merge_in(self._collection, prop_path(slide_index, element_index, POSITION), position),
            "move_element",
        )

    def reorder_element(self, slide_index: int, source: int, destination: int) -> MutationResult:
        return self._commit(
            move_in(self._collection, (slide_index,), source, destination), "reorder_element"
        )

    def duplicate_element(self, slide_index: int, element_index: int) -> MutationResult:
        """Insert a deep copy of an element right after it."""
        element = get_in(self._collection, element_path(slide_index, element_index))
        if not isinstance(element, dict):
            return MutationResult.unchanged(
                self._collection, self._version, "duplicate_element: no such element"
            )
        return self._commit(
            insert_in(self._collection, (slide_index,), element_index + 1, copy.deepcopy(element)),
            "duplicate_element",
        )

    # =========================================================================
    # Subscriptions
    # =========================================================================

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener. Returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self._collection)
            except Exception:
                logger.exception("Store listener %r failed", listener)
