"""
Tree - Path addressing, the element data model and traversal.

Everything here works on plain dicts and lists and never mutates its input.
"""

from .path import (
    ABSENT,
    Key,
    Path,
    as_path,
    get_in,
    has_path,
    set_in,
    merge_in,
    update_in,
    insert_in,
    remove_in,
    move_in,
    apply_writes,
)
from .elements import (
    make_element,
    make_slide,
    element_props,
    element_children,
    normalize_score,
    clamp_percent,
    clamp_fraction,
    answer_set,
)
from .traversal import (
    for_each_element,
    iter_elements,
    element_count,
    element_path,
    prop_path,
    collect_writes,
)

__all__ = [
    "ABSENT",
    "Key",
    "Path",
    "as_path",
    "get_in",
    "has_path",
    "set_in",
    "merge_in",
    "update_in",
    "insert_in",
    "remove_in",
    "move_in",
    "apply_writes",
    "make_element",
    "make_slide",
    "element_props",
    "element_children",
    "normalize_score",
    "clamp_percent",
    "clamp_fraction",
    "answer_set",
    "for_each_element",
    "iter_elements",
    "element_count",
    "element_path",
    "prop_path",
    "collect_writes",
]
