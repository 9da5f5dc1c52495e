"""
Collection Validation - Authoring-time checks for decks.

The store and interpreter accept anything and degrade gracefully. Strict
checking is opt-in and happens here, before content reaches a store.

Validates that:
1. The collection is a list of slides, each a list of elements
2. Every element (children included) has a type tag and dict props
3. Domain fields are well-formed (score, position, correctAnswers)
4. Type tags are known to a registry, when one is given (warnings only)
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Iterable

from pydantic import ValidationError

from ..tree.elements import (
    ANSWERS,
    CHILDREN_KEY,
    CORRECT_ANSWERS,
    POSITION,
    PROPS_KEY,
    SCORE,
    TYPE_KEY,
)
from ..render.interpreter import MAX_DEPTH
from .nodes import DeckDocument, ElementNode, Position


class CollectionValidationError(Exception):
    """Raised when collection validation fails."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Collection validation failed with {len(errors)} error(s)")


@dataclass
class ValidationResult:
    """Result of validation, with errors and warnings."""
    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def load_collection(data: Any) -> list:
    """
    Accept a bare list of slides or a {"slides": [...]} document.

    Raises CollectionValidationError for anything else.
    """
    if isinstance(data, list):
        return data
    if isinstance(data, Mapping) and isinstance(data.get("slides"), list):
        return data["slides"]
    raise CollectionValidationError(["Expected a list of slides or an object with 'slides'"])


def parse_document(data: Any) -> DeckDocument:
    """Parse and validate a deck into a DeckDocument."""
    result = validate_collection(load_collection(data))
    if not result.valid:
        raise CollectionValidationError(result.errors)
    title = data.get("title") if isinstance(data, Mapping) else None
    return DeckDocument.model_validate({"title": title, "slides": load_collection(data)})


def ensure_valid(collection: Any, known_types: Iterable[str] | None = None) -> list:
    result = validate_collection(collection, known_types)
    if not result.valid:
        raise CollectionValidationError(result.errors)
    return collection


def validate_collection(collection: Any, known_types: Iterable[str] | None = None) -> ValidationResult:
    """
    Validate a collection.

    Args:
        collection: List of slides
        known_types: Optional type tags a registry can render

    Returns:
        ValidationResult with errors and warnings
    """
    errors: list[str] = []
    warnings: list[str] = []
    known = set(known_types) if known_types is not None else None

    if not isinstance(collection, list):
        return ValidationResult(valid=False, errors=["Collection must be a list of slides"])

    for slide_index, slide in enumerate(collection):
        if not isinstance(slide, list):
            errors.append(f"Slide {slide_index} must be a list of elements")
            continue
        for element_index, element in enumerate(slide):
            _validate_node(element, f"[{slide_index}][{element_index}]", known, errors, warnings)

    if not collection:
        warnings.append("Collection has no slides")

    return ValidationResult(valid=len(errors) == 0, errors=errors, warnings=warnings)


def _validate_node(
    node: Any,
    location: str,
    known: set[str] | None,
    errors: list[str],
    warnings: list[str],
    depth: int = 0,
) -> None:
    """Validate one node and, recursively, its children."""
    if depth > MAX_DEPTH:
        errors.append(f"Element {location}: nested more than {MAX_DEPTH} levels deep")
        return

    try:
        ElementNode.model_validate(node)
    except ValidationError as e:
        for error in e.errors():
            field_name = ".".join(str(part) for part in error["loc"]) or "node"
            errors.append(f"Element {location}: {field_name}: {error['msg']}")
        return

    node_type = node[TYPE_KEY]
    props = node.get(PROPS_KEY) or {}

    if known is not None and node_type not in known:
        warnings.append(f"Element {location}: no renderer for type '{node_type}'")

    errors.extend(f"Element {location}: {e}" for e in _validate_props(props))

    children = props.get(CHILDREN_KEY)
    if children is None or _is_text(children):
        return
    if isinstance(children, list):
        for child_index, child in enumerate(children):
            if not _is_text(child):
                _validate_node(
                    child, f"{location}.children[{child_index}]", known, errors, warnings, depth + 1
                )
    elif isinstance(children, dict):
        _validate_node(children, f"{location}.children", known, errors, warnings, depth + 1)
    else:
        errors.append(f"Element {location}: children must be nodes or text")


def _is_text(value: Any) -> bool:
    return isinstance(value, (str, int, float)) and not isinstance(value, bool)


def _validate_props(props: dict) -> list[str]:
    """Validate the domain fields of one element's props."""
    errors = []

    if SCORE in props:
        score = props[SCORE]
        if isinstance(score, bool) or not isinstance(score, (int, float)):
            errors.append("score must be a number")
        elif score < 0:
            errors.append("score must be >= 0")

    if POSITION in props:
        try:
            Position.model_validate(props[POSITION])
        except ValidationError:
            errors.append("position must be {x, y} with both in [0, 1]")

    for name in (CORRECT_ANSWERS, ANSWERS):
        if name in props and props[name] is not None:
            if not isinstance(props[name], (list, tuple, set, frozenset, str, int)):
                errors.append(f"{name} must be a list of answer ids")

    return errors
