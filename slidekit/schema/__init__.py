"""Deck schema - tagged-node models and authoring-time validation."""

from .nodes import ElementNode, DeckDocument, Position
from .validation import (
    validate_collection,
    ensure_valid,
    load_collection,
    parse_document,
    ValidationResult,
    CollectionValidationError,
)

__all__ = [
    "ElementNode",
    "DeckDocument",
    "Position",
    "validate_collection",
    "ensure_valid",
    "load_collection",
    "parse_document",
    "ValidationResult",
    "CollectionValidationError",
]
