# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Conversion of trees, forests and paths to and from plain data.

Formats:
    - Tree: ``[label, [child, child, ...]]``, depth-first
    - Forest: ``[tree, tree, ...]``
    - TreePath: ``[i, j, ...]``
    - ForestPath: ``[tree_index, [i, j, ...]]``

Labels go through optional ``encode``/``decode`` callables, so any label
type can be stored as long as the caller can turn it into JSON-friendly
data and back.

Example:
    >>> data = tree_to_data(tree('mic', ['igg', 'dee']))
    >>> data
    ['mic', [['igg', []], ['dee', []]]]
    >>> tree_from_data(data) == tree('mic', ['igg', 'dee'])
    True
"""

from __future__ import annotations

import json
from typing import Any, Callable, Iterable, Sequence

from .exceptions import CodecError, InvalidPathError
from .node import Tree, TreeNode
from .path import ForestPath, TreePath


def _identity(value: Any) -> Any:
    return value


# ==================== Trees ====================

def tree_to_data(
    tree: Tree, encode: Callable[[Any], Any] | None = None
) -> list[Any]:
    """Convert a tree to nested ``[label, children]`` lists.

    Args:
        tree: Any object following the Tree protocol.
        encode: Optional function applied to every label.
    """
    encode = encode or _identity
    return [encode(tree.label), [tree_to_data(c, encode) for c in tree.children]]


def tree_from_data(
    data: Any,
    decode: Callable[[Any], Any] | None = None,
    make: Callable[[Any, Iterable[Any]], Any] = TreeNode,
) -> Any:
    """Build a tree from nested ``[label, children]`` lists.

    Args:
        data: Output of ``tree_to_data`` (lists or tuples).
        decode: Optional function applied to every label.
        make: Node constructor, called as ``make(label, children)``.

    Raises:
        CodecError: If a node is not a two-item ``[label, children]`` pair.
    """
    decode = decode or _identity
    if not isinstance(data, (list, tuple)) or len(data) != 2:
        raise CodecError(f"Tree node must be a [label, children] pair, got {data!r}")
    label, children = data
    if not isinstance(children, (list, tuple)):
        raise CodecError(
            f"Children of {label!r} must be a list, not {type(children).__name__}"
        )
    return make(decode(label), [tree_from_data(c, decode, make) for c in children])


def forest_to_data(
    forest: Sequence[Tree], encode: Callable[[Any], Any] | None = None
) -> list[Any]:
    """Convert a forest to a list of encoded trees."""
    return [tree_to_data(t, encode) for t in forest]


def forest_from_data(
    data: Any,
    decode: Callable[[Any], Any] | None = None,
    make: Callable[[Any, Iterable[Any]], Any] = TreeNode,
) -> tuple[Any, ...]:
    """Build a forest (tuple of trees) from a list of encoded trees."""
    if not isinstance(data, (list, tuple)):
        raise CodecError(f"Forest must be a list, not {type(data).__name__}")
    return tuple(tree_from_data(t, decode, make) for t in data)


# ==================== Paths ====================

def path_to_data(path: TreePath) -> list[int]:
    """Convert a TreePath to a plain list of indices."""
    return list(path.steps)


def path_from_data(data: Any) -> TreePath:
    """Build a TreePath from a list of indices.

    Raises:
        CodecError: If data is not a list of non-negative ints.
    """
    if not isinstance(data, (list, tuple)):
        raise CodecError(f"Path must be a list, not {type(data).__name__}")
    try:
        return TreePath(data)
    except InvalidPathError as e:
        raise CodecError(str(e)) from e


def forest_path_to_data(forest_path: ForestPath) -> list[Any]:
    """Convert a ForestPath to ``[tree_index, [i, j, ...]]``."""
    return [forest_path.tree_index, path_to_data(forest_path.path_into_tree_at_index)]


def forest_path_from_data(data: Any) -> ForestPath:
    """Build a ForestPath from ``[tree_index, [i, j, ...]]``.

    Raises:
        CodecError: If data is malformed.
    """
    if not isinstance(data, (list, tuple)) or len(data) != 2:
        raise CodecError(
            f"Forest path must be a [tree_index, path] pair, got {data!r}"
        )
    tree_index, inner = data
    inner_path = path_from_data(inner)
    try:
        return ForestPath(tree_index, inner_path)
    except InvalidPathError as e:
        raise CodecError(str(e)) from e


# ==================== JSON ====================

def dumps(
    value: Tree | Sequence[Tree] | TreePath | ForestPath,
    encode: Callable[[Any], Any] | None = None,
    **kwargs: Any,
) -> str:
    """Serialize a tree, forest, TreePath or ForestPath to a JSON string.

    Extra keyword arguments are passed to ``json.dumps``.
    """
    if isinstance(value, TreePath):
        data: Any = path_to_data(value)
    elif isinstance(value, ForestPath):
        data = forest_path_to_data(value)
    elif hasattr(value, 'label') and hasattr(value, 'children'):
        data = tree_to_data(value, encode)
    elif isinstance(value, (list, tuple)):
        data = forest_to_data(value, encode)
    else:
        raise TypeError(
            f"Cannot serialize {type(value).__name__}: "
            "expected a tree, a forest, a TreePath or a ForestPath"
        )
    return json.dumps(data, **kwargs)


def loads(
    text: str,
    kind: str = 'tree',
    decode: Callable[[Any], Any] | None = None,
    make: Callable[[Any, Iterable[Any]], Any] = TreeNode,
) -> Any:
    """Deserialize a JSON string produced by ``dumps``.

    Args:
        text: JSON text.
        kind: What the text holds: 'tree', 'forest', 'path' or 'forest_path'.
        decode: Optional label decoder (trees and forests only).
        make: Node constructor (trees and forests only).

    Raises:
        CodecError: If the text is not valid JSON or does not match ``kind``.
        ValueError: If ``kind`` is unknown.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise CodecError(f"Invalid JSON: {e}") from e

    if kind == 'tree':
        return tree_from_data(data, decode, make)
    elif kind == 'forest':
        return forest_from_data(data, decode, make)
    elif kind == 'path':
        return path_from_data(data)
    elif kind == 'forest_path':
        return forest_path_from_data(data)
    else:
        raise ValueError(f"Unknown kind: {kind}")
