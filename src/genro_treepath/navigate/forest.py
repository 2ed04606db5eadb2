# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Path-addressed navigation over a forest (an ordered sequence of trees).

The functions mirror ``genro_treepath.navigate.tree`` and dispatch on the
``tree_index`` of a ForestPath: the tree at that index is navigated with
the inner TreePath, every other tree is returned as the very same object.

A forest is any sequence of trees. A changed forest comes back as a
tuple; an unchanged one comes back as the input object itself.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterator, Sequence, TypeVar

from ..exceptions import PathNotFoundError
from ..node import Tree
from ..path import ForestPath, LabelAt, TreePath
from . import tree as _tree
from .core import (
    FORWARD,
    MISSING,
    REVERSE,
    alter_or_missing,
    check_direction,
    fold_with,
    insert_or_missing,
    map_labels_with,
    remove_or_missing,
    replace_index,
)

_logger = logging.getLogger(__name__)

T = TypeVar('T', bound=Tree)
A = TypeVar('A')


def _not_found(operation: str, forest_path: ForestPath, strict: bool) -> None:
    if strict:
        raise PathNotFoundError(f"Forest path '{forest_path}' not found")
    _logger.debug(
        "%s: forest path '%s' not found, forest unchanged", operation, forest_path
    )


def _as_tree_path(forest_path: ForestPath) -> TreePath:
    """Read a forest path as a path into the forest as a child sequence."""
    return TreePath(
        (forest_path.tree_index,) + forest_path.path_into_tree_at_index.steps
    )


def _wrap_for(tree_index: int) -> Callable[[TreePath], ForestPath]:
    def wrap(path: TreePath) -> ForestPath:
        return ForestPath(tree_index, path)
    return wrap


# ==================== Lookup ====================

def to(forest: Sequence[T], forest_path: ForestPath) -> T | None:
    """Return the subtree at ``forest_path``, or None if it does not exist."""
    if forest_path.tree_index >= len(forest):
        return None
    return _tree.to(forest[forest_path.tree_index], forest_path.path_into_tree_at_index)


def node_at(forest: Sequence[T], forest_path: ForestPath) -> T:
    """Return the subtree at ``forest_path``.

    Raises:
        PathNotFoundError: If the path does not reach a node.
    """
    node = to(forest, forest_path)
    if node is None:
        raise PathNotFoundError(f"Forest path '{forest_path}' not found")
    return node


# ==================== Bounded Mutation ====================

def alter(
    forest: Sequence[T],
    forest_path: ForestPath,
    transform: Callable[[T], T],
    strict: bool = False,
) -> Sequence[T]:
    """Replace the subtree at ``forest_path`` with ``transform(subtree)``.

    Only the tree at ``tree_index`` is rebuilt, and inside it only the
    route to the target. A trunk inner path transforms the whole tree.

    Returns:
        The new forest, or ``forest`` itself if the path does not exist.

    Raises:
        PathNotFoundError: If ``strict`` and the path does not exist.
    """
    index = forest_path.tree_index
    if index >= len(forest):
        _not_found('alter', forest_path, strict)
        return forest
    current = forest[index]
    new_tree = alter_or_missing(current, forest_path.path_into_tree_at_index, transform)
    if new_tree is MISSING:
        _not_found('alter', forest_path, strict)
        return forest
    if new_tree is current:
        return forest
    return replace_index(forest, index, new_tree)


def replace_at(
    forest: Sequence[T],
    forest_path: ForestPath,
    subtree: T,
    strict: bool = False,
) -> Sequence[T]:
    """Substitute the subtree at ``forest_path`` with ``subtree``."""
    return alter(forest, forest_path, lambda _current: subtree, strict=strict)


def update_at(
    forest: Sequence[T],
    forest_path: ForestPath,
    fn: Callable[[T], T],
    strict: bool = False,
) -> Sequence[T]:
    """Replace the subtree at ``forest_path`` with ``fn(subtree)``."""
    return alter(forest, forest_path, fn, strict=strict)


def update_label_at(
    forest: Sequence[T],
    forest_path: ForestPath,
    fn: Callable[[Any], Any],
    strict: bool = False,
) -> Sequence[T]:
    """Replace the label at ``forest_path`` with ``fn(label)``, keeping children."""
    return alter(
        forest,
        forest_path,
        lambda current: current.make(fn(current.label), current.children),
        strict=strict,
    )


def remove(
    forest: Sequence[T], forest_path: ForestPath, strict: bool = False
) -> Sequence[T]:
    """Remove the node at ``forest_path`` together with its descendants.

    With a trunk inner path the whole tree at ``tree_index`` leaves the
    forest; otherwise the node is removed from inside that tree.

    Example:
        >>> forest = (leaf('ann'), tree('mic', ['igg', 'dee', 'bee']))
        >>> remove(forest, ForestPath(1, [2]))
        (TreeNode('ann'), TreeNode('mic', [TreeNode('igg'), TreeNode('dee')]))
    """
    result = remove_or_missing(forest, _as_tree_path(forest_path))
    if result is MISSING:
        _not_found('remove', forest_path, strict)
        return forest
    return result


def insert(
    forest: Sequence[T],
    forest_path: ForestPath,
    subtree: T,
    strict: bool = False,
) -> Sequence[T]:
    """Insert ``subtree`` so that it ends up at ``forest_path``.

    With a trunk inner path ``subtree`` becomes a new top-level tree at
    ``tree_index`` (which may equal ``len(forest)`` to append).
    """
    result = insert_or_missing(forest, _as_tree_path(forest_path), subtree)
    if result is MISSING:
        _not_found('insert', forest_path, strict)
        return forest
    return result


# ==================== Map and Folds ====================

def map_labels(forest: Sequence[T], fn: Callable[[LabelAt], Any]) -> tuple[T, ...]:
    """Rebuild every tree with each label replaced by ``fn(LabelAt(forest_path, label))``."""
    return tuple(
        map_labels_with(tree, fn, _wrap_for(index))
        for index, tree in enumerate(forest)
    )


def fold_from(
    forest: Sequence[Tree],
    initial: A,
    direction: str,
    reduce: Callable[[A, LabelAt], A],
) -> A:
    """Thread an accumulator through every label of every tree.

    'forward' folds the trees in index order, 'reverse' in reverse index
    order; each tree is folded in the same direction. Callbacks receive
    ForestPaths.

    Raises:
        UnknownDirectionError: If direction is not 'forward' or 'reverse'.
    """
    check_direction(direction)
    indexes = range(len(forest))
    if direction == REVERSE:
        indexes = reversed(indexes)
    acc = initial
    for index in indexes:
        acc = fold_with(forest[index], acc, direction, reduce, _wrap_for(index))
    return acc


def flatten(forest: Sequence[Tree], direction: str = FORWARD) -> list[Any]:
    """Return all labels of the forest as a list, in fold order."""
    def _append(acc: list[Any], at: LabelAt) -> list[Any]:
        acc.append(at.label)
        return acc

    return fold_from(forest, [], direction, _append)


def walk(forest: Sequence[Tree]) -> Iterator[LabelAt]:
    """Yield a LabelAt (with a ForestPath) for every node, in forward order."""
    for index, tree in enumerate(forest):
        for at in _tree.walk(tree):
            yield LabelAt(ForestPath(index, at.path), at.label)
