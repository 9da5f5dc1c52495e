"""
Built-in renderers producing JSON-friendly output.

Useful for the CLI, the API and debugging: each node renders to
{"type", "props", "children"} with children taken from the interpreter and
non-serialisable props dropped. Real widget catalogues plug in their own
registries instead.
"""

from __future__ import annotations

from typing import Any, Iterable

from ..tree.elements import CHILDREN_KEY, TYPE_KEY, element_children, element_props
from .registry import Renderer, RendererRegistry

_SKIPPED_PROPS = {CHILDREN_KEY, "bind"}


def to_jsonable(value: Any) -> Any:
    """Convert sets and tuples to lists, recursively. Sets are sorted when possible."""
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items() if not callable(v)}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    if isinstance(value, (set, frozenset)):
        items = [to_jsonable(v) for v in value]
        try:
            return sorted(items)
        except TypeError:
            return sorted(items, key=repr)
    return value


def json_renderer(type_tag: str) -> Renderer:
    def render_json(props: dict, children: Any) -> dict:
        output = {
            "type": type_tag,
            "props": to_jsonable({
                k: v for k, v in props.items()
                if k not in _SKIPPED_PROPS and not callable(v)
            }),
        }
        if children is not None:
            output["children"] = children
        return output

    render_json.__name__ = f"render_{type_tag}"
    return render_json


def json_registry(types: Iterable[str]) -> RendererRegistry:
    """Registry with a JSON renderer for every given type tag."""
    registry = RendererRegistry()
    for type_tag in types:
        registry.register(type_tag, json_renderer(type_tag))
    return registry


def collect_types(node: Any) -> set[str]:
    """Every type tag used anywhere in a node tree or collection."""
    found: set[str] = set()
    stack = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, (list, tuple)):
            stack.extend(current)
        elif isinstance(current, dict):
            node_type = current.get(TYPE_KEY)
            if isinstance(node_type, str) and node_type:
                found.add(node_type)
            if isinstance(element_props(current).get(CHILDREN_KEY), (list, dict)):
                stack.extend(element_children(current))
    return found
