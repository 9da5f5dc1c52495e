"""
Path Accessor - Safe, copy-on-write access to nested dict/list trees.

A path is an ordered sequence of keys:
- str keys select dict fields
- non-negative int keys select list indices

Design principles:
- Reads never raise: a missing key or a non-indexable step yields the default
- Writes never mutate their input: every container along the written path
  is shallow-copied, everything else is shared with the previous tree
- Malformed writes (wrong container type at some step) are no-ops that
  return the input tree itself, so callers can detect them with `is`
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Sequence, Union

logger = logging.getLogger(__name__)

Key = Union[str, int]
Path = Sequence[Key]


class _Absent:
    """Marker for "nothing at this path". Falsy, singleton."""

    _instance: _Absent | None = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


ABSENT = _Absent()


def as_path(path: Path | Key | None) -> tuple:
    """
    Normalise a path argument; a bare key becomes a one-step path.

    Anything that is not a key or an iterable of keys also becomes a one-step
    path, which reads treat as missing and writes reject.
    """
    if path is None:
        return ()
    if isinstance(path, (str, int)) or not isinstance(path, Iterable):
        return (path,)
    return tuple(path)


def is_index(key: Any) -> bool:
    return isinstance(key, int) and not isinstance(key, bool) and key >= 0


def is_field(key: Any) -> bool:
    return isinstance(key, str)


def _step(node: Any, key: Key) -> Any:
    """One level of lookup. Returns ABSENT instead of raising."""
    if is_field(key) and isinstance(node, dict):
        return node.get(key, ABSENT)
    if is_index(key) and isinstance(node, (list, tuple)) and key < len(node):
        return node[key]
    return ABSENT


def _accepts(node: Any, key: Key) -> bool:
    return (isinstance(node, dict) and is_field(key)) or (
        isinstance(node, list) and is_index(key)
    )


# =============================================================================
# Reads
# =============================================================================

def get_in(root: Any, path: Path | Key, default: Any = ABSENT) -> Any:
    """
    Read the value at `path`.

    Returns `default` as soon as a key is missing or the value at some step
    cannot be indexed by the next key.
    """
    node = root
    for key in as_path(path):
        node = _step(node, key)
        if node is ABSENT:
            return default
    return node


def has_path(root: Any, path: Path | Key) -> bool:
    return get_in(root, path) is not ABSENT


# =============================================================================
# Writes
# =============================================================================

def can_write(root: Any, path: Path | Key) -> bool:
    """
    Check that a write to `path` would succeed.

    Missing (or None) intermediates are fine, they get created. An existing
    value of the wrong container type is not.
    """
    node = root
    for key in as_path(path):
        if not (is_field(key) or is_index(key)):
            return False
        if node is ABSENT or node is None:
            continue
        if not _accepts(node, key):
            return False
        node = _step(node, key)
    return True


def _assoc(node: Any, path: tuple, value: Any, fresh: dict[int, Any]) -> Any:
    """
    Write `value` at `path` below `node`, copying containers on the way down.

    `fresh` holds the containers created during the current batch; those are
    owned by the batch and can be written in place.
    """
    if not path:
        return value

    key, rest = path[0], path[1:]
    if node is ABSENT or node is None:
        node = {} if is_field(key) else []
        fresh[id(node)] = node
    elif id(node) not in fresh:
        node = node.copy()
        fresh[id(node)] = node

    child = _assoc(_step(node, key), rest, value, fresh)
    if isinstance(node, list) and key >= len(node):
        node.extend([None] * (key - len(node) + 1))
    node[key] = child
    return node


def apply_writes(root: Any, writes: Iterable[tuple[Path, Any]]) -> Any:
    """
    Apply a batch of (path, value) writes and return one new tree.

    Writes are applied in order. Each container is copied at most once per
    batch. Writes to malformed paths are skipped. If nothing was written the
    input `root` is returned unchanged.
    """
    fresh: dict[int, Any] = {}
    result = root
    for path, value in writes:
        path = as_path(path)
        if not can_write(result, path):
            logger.debug("Skipping write to malformed path %r", path)
            continue
        result = _assoc(result, path, value, fresh)
    return result


def set_in(root: Any, path: Path | Key, value: Any) -> Any:
    """Return a new tree with `value` stored at `path`."""
    return apply_writes(root, [(as_path(path), value)])


def merge_in(root: Any, path: Path | Key, mapping: dict[str, Any]) -> Any:
    """Shallow-merge `mapping` into the dict at `path`, creating it if needed."""
    target = get_in(root, path)
    if target is ABSENT or target is None:
        merged = dict(mapping)
    elif isinstance(target, dict):
        merged = {**target, **mapping}
    else:
        logger.debug("Cannot merge into %s at %r", type(target).__name__, path)
        return root
    return set_in(root, path, merged)


def update_in(root: Any, path: Path | Key, fn, default: Any = None) -> Any:
    """Replace the value at `path` with `fn(current)`."""
    return set_in(root, path, fn(get_in(root, path, default)))


# =============================================================================
# List operations
# =============================================================================

def insert_in(root: Any, path: Path | Key, index: int | None, value: Any) -> Any:
    """
    Insert `value` into the list at `path`.

    `index` is clamped to [0, len]; None appends. A missing list is created
    holding just `value`.
    """
    target = get_in(root, path)
    if target is ABSENT or target is None:
        return set_in(root, path, [value])
    if not isinstance(target, list):
        logger.debug("Cannot insert into %s at %r", type(target).__name__, path)
        return root

    if index is None or index > len(target):
        index = len(target)
    index = max(index, 0)

    items = target.copy()
    items.insert(index, value)
    return set_in(root, path, items)


def remove_in(root: Any, path: Path | Key, index: int) -> Any:
    """Remove the list item at `index`. Out of range is a no-op."""
    target = get_in(root, path)
    if not isinstance(target, list) or not is_index(index) or index >= len(target):
        logger.debug("Nothing to remove at %r[%r]", path, index)
        return root
    return set_in(root, path, target[:index] + target[index + 1:])


def move_in(root: Any, path: Path | Key, source: int, destination: int) -> Any:
    """
    Move the list item at `source` so that it ends up at `destination`.

    `destination` is clamped into the list. A missing source, or a move onto
    itself, is a no-op.
    """
    target = get_in(root, path)
    if not isinstance(target, list) or not is_index(source) or source >= len(target):
        return root
    destination = min(max(destination, 0), len(target) - 1)
    if destination == source:
        return root

    items = target.copy()
    item = items.pop(source)
    items.insert(destination, item)
    return set_in(root, path, items)
