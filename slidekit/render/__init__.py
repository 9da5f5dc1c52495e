"""
Render - Turns tagged-node trees into output trees.

The renderer registry maps type tags to renderer functions; the interpreter
walks a node tree and dispatches each node through the registry.
"""

from .registry import RendererRegistry, Renderer
from .interpreter import (
    MAX_DEPTH,
    PLACEHOLDER,
    MissReason,
    RenderMiss,
    RenderReport,
    render,
    render_slide,
    bound_props,
)
from .builtin import json_registry, json_renderer, collect_types, to_jsonable

__all__ = [
    "RendererRegistry",
    "Renderer",
    "MAX_DEPTH",
    "PLACEHOLDER",
    "MissReason",
    "RenderMiss",
    "RenderReport",
    "render",
    "render_slide",
    "bound_props",
    "json_registry",
    "json_renderer",
    "collect_types",
    "to_jsonable",
]
