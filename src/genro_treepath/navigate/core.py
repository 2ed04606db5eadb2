# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Recursive building blocks shared by the tree and forest modules.

The helpers here never log and never raise for a path that leaves the
tree: they return the MISSING sentinel and let the caller decide between
a no-op and a PathNotFoundError.

Path Reporting:
    ``map_labels_with`` and ``fold_with`` take a ``wrap`` function that
    turns the TreePath of each visited node into the path handed to the
    callback. The tree module passes the TreePath through unchanged; the
    forest module wraps it into a ForestPath.
"""

from __future__ import annotations

from typing import Any, Callable, Sequence, TypeVar

from ..exceptions import UnknownDirectionError
from ..node import Tree
from ..path import AT_TRUNK, LabelAt, TreePath

T = TypeVar('T', bound=Tree)
A = TypeVar('A')

FORWARD = 'forward'
REVERSE = 'reverse'
DIRECTIONS = (FORWARD, REVERSE)

# Returned by the recursive helpers when the path leaves the tree.
MISSING: Any = object()


def check_direction(direction: str) -> str:
    """Return ``direction`` if it is 'forward' or 'reverse'.

    Raises:
        UnknownDirectionError: For any other value.
    """
    if direction not in DIRECTIONS:
        raise UnknownDirectionError(
            f"Unknown fold direction: {direction!r} "
            f"(expected {FORWARD!r} or {REVERSE!r})"
        )
    return direction


def replace_index(items: Sequence[T], index: int, item: T) -> tuple[T, ...]:
    """Return ``items`` as a tuple with ``items[index]`` replaced by ``item``."""
    return (*items[:index], item, *items[index + 1:])


def same_path(path: TreePath) -> TreePath:
    return path


# ==================== Mutation ====================

def alter_or_missing(tree: T, path: TreePath, transform: Callable[[T], T]) -> T:
    """Rebuild the route to ``path`` around ``transform(subtree)``, or MISSING."""
    stepped = path.step()
    if stepped is None:
        return transform(tree)
    index, rest = stepped
    children = tree.children
    if index >= len(children):
        return MISSING
    child = children[index]
    new_child = alter_or_missing(child, rest, transform)
    if new_child is MISSING:
        return MISSING
    if new_child is child:
        return tree
    return tree.map_children(
        lambda siblings: replace_index(siblings, index, new_child)
    )


def remove_or_missing(children: Sequence[T], path: TreePath) -> tuple[T, ...]:
    """Drop the node at ``path`` from a child sequence, or MISSING."""
    stepped = path.step()
    if stepped is None:
        return MISSING
    index, rest = stepped
    if index >= len(children):
        return MISSING
    if rest.is_trunk:
        return (*children[:index], *children[index + 1:])
    child = children[index]
    new_grandchildren = remove_or_missing(child.children, rest)
    if new_grandchildren is MISSING:
        return MISSING
    new_child = child.map_children(lambda _current: new_grandchildren)
    return replace_index(children, index, new_child)


def insert_or_missing(
    children: Sequence[T], path: TreePath, subtree: T
) -> tuple[T, ...]:
    """Place ``subtree`` at ``path`` inside a child sequence, or MISSING."""
    stepped = path.step()
    if stepped is None:
        return MISSING
    index, rest = stepped
    if rest.is_trunk:
        if index > len(children):
            return MISSING
        return (*children[:index], subtree, *children[index:])
    if index >= len(children):
        return MISSING
    child = children[index]
    new_grandchildren = insert_or_missing(child.children, rest, subtree)
    if new_grandchildren is MISSING:
        return MISSING
    new_child = child.map_children(lambda _current: new_grandchildren)
    return replace_index(children, index, new_child)


# ==================== Map and Folds ====================

def map_labels_with(
    node: T,
    fn: Callable[[LabelAt], Any],
    wrap: Callable[[TreePath], Any],
) -> T:
    """Pre-order relabel of ``node``, reporting paths through ``wrap``."""
    def _map(current: T, path: TreePath) -> T:
        label = fn(LabelAt(wrap(path), current.label))
        return current.make(
            label,
            [
                _map(child, path.to_child(index))
                for index, child in enumerate(current.children)
            ],
        )

    return _map(node, AT_TRUNK)


def fold_with(
    node: Tree,
    initial: A,
    direction: str,
    reduce: Callable[[A, LabelAt], A],
    wrap: Callable[[TreePath], Any],
) -> A:
    """Fold every label of ``node`` in ``direction``, reporting paths through ``wrap``."""
    def _forward(current: Tree, path: TreePath, acc: A) -> A:
        acc = reduce(acc, LabelAt(wrap(path), current.label))
        for index, child in enumerate(current.children):
            acc = _forward(child, path.to_child(index), acc)
        return acc

    def _reverse(current: Tree, path: TreePath, acc: A) -> A:
        children = current.children
        for index in range(len(children) - 1, -1, -1):
            acc = _reverse(children[index], path.to_child(index), acc)
        return reduce(acc, LabelAt(wrap(path), current.label))

    if check_direction(direction) == FORWARD:
        return _forward(node, AT_TRUNK, initial)
    return _reverse(node, AT_TRUNK, initial)
