"""
Renderer Registry - Dispatch table from type tag to renderer.

A renderer takes (props, rendered_children) and returns an output node of
whatever shape the rendering layer uses. The registry is the only place
where type tags are special-cased.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Iterator

Renderer = Callable[[dict, Any], Any]


class RendererRegistry(Mapping):
    """
    Mapping of type tag -> renderer.

    Usage:
        registry = RendererRegistry()

        @registry.renderer("Checkbox")
        def checkbox(props, children):
            return {"checkbox": props.get("label")}
    """

    def __init__(self, renderers: Mapping[str, Renderer] | None = None):
        self._renderers: dict[str, Renderer] = {}
        for type_tag, renderer in (renderers or {}).items():
            self.register(type_tag, renderer)

    def __getitem__(self, type_tag: str) -> Renderer:
        return self._renderers[type_tag]

    def __iter__(self) -> Iterator[str]:
        return iter(self._renderers)

    def __len__(self) -> int:
        return len(self._renderers)

    def __repr__(self) -> str:
        return f"RendererRegistry({sorted(self._renderers)})"

    def register(self, type_tag: str, renderer: Renderer) -> Renderer:
        if not isinstance(type_tag, str) or not type_tag:
            raise ValueError(f"Type tag must be a non-empty string, got {type_tag!r}")
        if not callable(renderer):
            raise TypeError(f"Renderer for {type_tag!r} is not callable")
        self._renderers[type_tag] = renderer
        return renderer

    def renderer(self, type_tag: str) -> Callable[[Renderer], Renderer]:
        """Decorator form of register()."""
        def decorator(fn: Renderer) -> Renderer:
            return self.register(type_tag, fn)
        return decorator

    def unregister(self, type_tag: str) -> None:
        self._renderers.pop(type_tag, None)

    def merged(self, other: Mapping[str, Renderer]) -> RendererRegistry:
        """New registry with `other`'s entries layered over this one."""
        combined = dict(self._renderers)
        combined.update(other)
        return RendererRegistry(combined)
