"""
Node Schemas - Pydantic models for the tagged-node authoring contract.

Authoring tools emit:

    {"type": "RadioGroup", "props": {"children": [...], ...}}

and decks as either a bare list of slides or {"slides": [...]}.
These models check the outer shape only; domain checks live in validation.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


class Position(BaseModel):
    """Fractional element position; both coordinates in [0, 1]."""
    x: float = Field(ge=0.0, le=1.0)
    y: float = Field(ge=0.0, le=1.0)


class ElementNode(BaseModel):
    """A tagged node: a type tag plus free-form props."""
    type: str = Field(min_length=1, description="Renderer type tag")
    props: dict[str, Any] = Field(default_factory=dict)

    model_config = {"extra": "allow"}


class DeckDocument(BaseModel):
    """A whole deck: ordered slides of ordered elements."""
    title: Optional[str] = None
    slides: list[list[ElementNode]] = Field(default_factory=list)

    def to_collection(self) -> list[list[dict[str, Any]]]:
        return [
            [element.model_dump(exclude_unset=False) for element in slide]
            for slide in self.slides
        ]
