"""
Interpreter - Recursive rendering of tagged-node trees.

Given a node (or list of nodes) and a renderer registry:
- lists render item by item, order preserved
- empty nodes render to nothing
- strings and numbers are text leaves and pass through unchanged
- tagged nodes render their children first, then call the renderer for
  their type with (props, rendered_children)

Nothing here raises for bad content. A node with an unknown or missing
type, or whose renderer fails, becomes a placeholder and is reported, so
the rest of the tree still renders. The interpreter keeps no state between
calls; identical input gives identical output.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable

from ..tree.elements import CHILDREN_KEY, PROPS_KEY, TYPE_KEY
from ..tree.path import get_in

logger = logging.getLogger(__name__)

PLACEHOLDER = None

# Nesting (lists and children both count) deeper than this renders to a
# placeholder instead of exhausting the interpreter stack.
MAX_DEPTH = 300

# Prepares the props handed to a renderer, given the node's path.
PropsHook = Callable[[dict, tuple], dict]


class MissReason:
    UNKNOWN_TYPE = "unknown_type"
    MISSING_TYPE = "missing_type"
    NOT_A_NODE = "not_a_node"
    RENDERER_ERROR = "renderer_error"
    TOO_DEEP = "too_deep"


@dataclass
class RenderMiss:
    """A node that rendered to a placeholder."""
    path: tuple
    node_type: Any
    reason: str
    detail: str = ""


@dataclass
class RenderReport:
    """Diagnostics gathered during one render call."""
    rendered: int = 0
    misses: list[RenderMiss] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.misses

    @property
    def unknown_types(self) -> list[str]:
        return sorted({
            str(miss.node_type)
            for miss in self.misses
            if miss.reason == MissReason.UNKNOWN_TYPE
        })


@dataclass
class _RenderContext:
    registry: Mapping
    report: RenderReport | None
    prepare_props: PropsHook | None


def render(
    node: Any,
    registry: Mapping,
    report: RenderReport | None = None,
    prepare_props: PropsHook | None = None,
    base_path: tuple = (),
) -> Any:
    """
    Render a node or a list of nodes.

    Args:
        node: Tagged node, list of nodes, or nothing
        registry: Mapping of type tag -> renderer (RendererRegistry or dict)
        report: Optional report collecting misses
        prepare_props: Optional hook returning the props passed to a renderer
        base_path: Path of `node` inside its collection, used for reporting
            and passed to `prepare_props`

    Returns:
        The rendered output; a list for list input, PLACEHOLDER for nothing
    """
    context = _RenderContext(registry=registry, report=report, prepare_props=prepare_props)
    return _render(node, tuple(base_path), context)


def _render(node: Any, path: tuple, context: _RenderContext, depth: int = 0) -> Any:
    if depth > MAX_DEPTH and isinstance(node, (list, tuple, Mapping)):
        node_type = node.get(TYPE_KEY) if isinstance(node, Mapping) else None
        return _miss(context, path, node_type, MissReason.TOO_DEEP, f"depth > {MAX_DEPTH}")

    if isinstance(node, (list, tuple)):
        return [_render(item, path + (index,), context, depth + 1) for index, item in enumerate(node)]

    if node is None or (isinstance(node, Mapping) and not node):
        return PLACEHOLDER

    # Text leaves
    if isinstance(node, (str, int, float)):
        return node

    if not isinstance(node, Mapping):
        return _miss(context, path, None, MissReason.NOT_A_NODE, type(node).__name__)

    node_type = node.get(TYPE_KEY)
    if not isinstance(node_type, str) or not node_type:
        return _miss(context, path, node_type, MissReason.MISSING_TYPE)

    renderer = context.registry.get(node_type)
    if renderer is None:
        return _miss(context, path, node_type, MissReason.UNKNOWN_TYPE)

    props = node.get(PROPS_KEY)
    if not isinstance(props, Mapping):
        props = {}

    children = props.get(CHILDREN_KEY)
    rendered_children = None
    if children is not None:
        rendered_children = _render(children, path + (PROPS_KEY, CHILDREN_KEY), context, depth + 1)

    if context.prepare_props is not None:
        props = context.prepare_props(props, path)

    try:
        output = renderer(props, rendered_children)
    except Exception as e:
        logger.warning("Renderer for %r failed at %r: %s", node_type, path, e, exc_info=True)
        return _miss(context, path, node_type, MissReason.RENDERER_ERROR, str(e), logged=True)

    if context.report is not None:
        context.report.rendered += 1
    return output


def _miss(
    context: _RenderContext,
    path: tuple,
    node_type: Any,
    reason: str,
    detail: str = "",
    logged: bool = False,
) -> Any:
    if not logged:
        if reason == MissReason.UNKNOWN_TYPE:
            logger.warning("No renderer for type %r at %r", node_type, path)
        else:
            logger.warning("Cannot render node at %r (%s) %s", path, reason, detail)
    if context.report is not None:
        context.report.misses.append(
            RenderMiss(path=path, node_type=node_type, reason=reason, detail=detail)
        )
    return PLACEHOLDER


# =============================================================================
# Store integration
# =============================================================================

def bound_props(store) -> PropsHook:
    """
    Props hook that exposes the store to renderers.

    Each renderer receives a copy of its props with:
    - "path": the node's path in the collection
    - "bind": bind(field, **opts) -> FieldBinding for a prop of this node
    """
    def prepare(props: dict, path: tuple) -> dict:
        def bind(field_name: str, **options):
            return store.bind_field(path + (PROPS_KEY, field_name), **options)

        return {**props, "path": path, "bind": bind}

    return prepare


def render_slide(
    source: Any,
    registry: Mapping,
    slide_index: int | None = None,
    report: RenderReport | None = None,
    bind: bool = False,
) -> list:
    """
    Render one slide of a store or a bare collection.

    Defaults to the store's selected slide (slide 0 for a bare collection).
    With bind=True, and a store as source, renderers get store bindings
    through the "path"/"bind" props.
    """
    collection = getattr(source, "collection", source)
    if slide_index is None:
        slide_index = getattr(source, "selected_slide_index", 0)

    slide = get_in(collection, (slide_index,), [])
    if not isinstance(slide, list):
        slide = []

    prepare = bound_props(source) if bind and hasattr(source, "bind_field") else None
    return render(slide, registry, report=report, prepare_props=prepare, base_path=(slide_index,))
