# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Path-addressed navigation over a single tree.

Every function here is pure: it reads a tree (any object following the
Tree protocol of ``genro_treepath.node``) and returns a new value. Nothing
is changed in place.

Key Features:
    - **Lookup**: ``to`` returns the subtree at a path, or None
    - **Bounded mutation**: ``alter``, ``replace_at``, ``update_at``,
      ``remove`` and ``insert`` rebuild only the nodes on the route to the
      target; every off-route subtree is shared by identity
    - **Restructure**: a bottom-up fold that sees each node's path, label
      and already-transformed children
    - **Path-aware map and folds**: every visited label comes with its path

Invalid Paths:
    A path that leaves the tree (an index out of range at some level) is
    never an error by default: lookups return None and mutations return
    their input unchanged, as the very same object. Pass ``strict=True``
    to get a PathNotFoundError instead.

Fold Directions:
    - 'forward': the node, then each child's whole subtree in index order
    - 'reverse': each child's whole subtree in reverse index order, then
      the node

Example:
    >>> t = tree(0, [1, tree(2, [3, 4]), 5])
    >>> to(t, TreePath([1, 0])).label
    3
    >>> flatten(t, 'reverse')
    [5, 4, 3, 2, 1, 0]
"""


from __future__ import annotations

import logging
from typing import Any, Callable, Iterator, Sequence, TypeVar

from ..exceptions import PathNotFoundError
from ..node import Tree
from ..path import AT_TRUNK, LabelAt, NodeAt, TreePath
from .core import (
    DIRECTIONS,
    FORWARD,
    MISSING,
    REVERSE,
    alter_or_missing,
    fold_with,
    insert_or_missing,
    map_labels_with,
    remove_or_missing,
    same_path,
)

_logger = logging.getLogger(__name__)

T = TypeVar('T', bound=Tree)
R = TypeVar('R')
A = TypeVar('A')

__all__ = [
    "FORWARD",
    "REVERSE",
    "DIRECTIONS",
    "to",
    "node_at",
    "label_at",
    "alter",
    "replace_at",
    "update_at",
    "update_label_at",
    "remove",
    "remove_from",
    "insert",
    "insert_into",
    "restructure",
    "map_labels",
    "fold_from",
    "flatten",
    "walk",
]


def _not_found(operation: str, path: Any, strict: bool) -> None:
    if strict:
        raise PathNotFoundError(f"Path '{path}' not found")
    _logger.debug("%s: path '%s' not found, input unchanged", operation, path)


# ==================== Lookup ====================

def to(tree: T, path: TreePath) -> T | None:
    """Return the subtree at ``path``, or None if the path leaves the tree.

    Args:
        tree: The tree to navigate.
        path: Route from the tree's trunk.

    Returns:
        The subtree (``tree`` itself for the trunk), or None.
    """
    node = tree
    stepped = path.step()
    while stepped is not None:
        index, path = stepped
        children = node.children
        if index >= len(children):
            return None
        node = children[index]
        stepped = path.step()
    return node


def node_at(tree: T, path: TreePath) -> T:
    """Return the subtree at ``path``.

    Raises:
        PathNotFoundError: If the path leaves the tree.
    """
    node = to(tree, path)
    if node is None:
        raise PathNotFoundError(f"Path '{path}' not found")
    return node


def label_at(tree: Tree, path: TreePath, default: Any = None) -> Any:
    """Return the label at ``path``, or ``default`` if the path leaves the tree."""
    node = to(tree, path)
    if node is None:
        return default
    return node.label


# ==================== Bounded Mutation ====================

def alter(
    tree: T,
    path: TreePath,
    transform: Callable[[T], T],
    strict: bool = False,
) -> T:
    """Replace the subtree at ``path`` with ``transform(subtree)``.

    Only the nodes on the route from the trunk to the target are rebuilt;
    all other subtrees are shared with the input tree.

    Args:
        tree: The tree to transform.
        path: Route to the node to transform.
        transform: Pure function from the current subtree to its
            replacement.
        strict: If True, raise instead of returning ``tree`` unchanged
            when the path leaves the tree.

    Returns:
        The new tree, or ``tree`` itself if the path leaves the tree.

    Raises:
        PathNotFoundError: If ``strict`` and the path leaves the tree.

    Example:
        >>> alter(t, TreePath([1]), lambda sub: sub.with_label('two'))
    """
    result = alter_or_missing(tree, path, transform)
    if result is MISSING:
        _not_found('alter', path, strict)
        return tree
    return result


def replace_at(tree: T, path: TreePath, subtree: T, strict: bool = False) -> T:
    """Substitute the whole subtree at ``path`` with ``subtree``."""
    return alter(tree, path, lambda _current: subtree, strict=strict)


def update_at(
    tree: T,
    path: TreePath,
    fn: Callable[[T], T],
    strict: bool = False,
) -> T:
    """Replace the subtree at ``path`` with ``fn(subtree)``.

    Example:
        >>> update_at(t, TreePath([1]), lambda sub: sub.map_children(reversed))
    """
    return alter(tree, path, fn, strict=strict)


def update_label_at(
    tree: T,
    path: TreePath,
    fn: Callable[[Any], Any],
    strict: bool = False,
) -> T:
    """Replace the label at ``path`` with ``fn(label)``, keeping its children."""
    return alter(
        tree,
        path,
        lambda current: current.make(fn(current.label), current.children),
        strict=strict,
    )


def remove(
    children: Sequence[T], path: TreePath, strict: bool = False
) -> Sequence[T]:
    """Remove the node at ``path``, with all its descendants, from a child sequence.

    The first step of ``path`` indexes into ``children`` itself: ``[2]``
    drops ``children[2]``, ``[2, 0]`` drops the first child of
    ``children[2]``. The trunk path names no member of the sequence, so
    it is a no-op like any other path that leaves the tree.

    Args:
        children: Ordered sequence of trees (a node's children or a forest).
        path: Route to the node to remove.
        strict: If True, raise instead of returning ``children`` unchanged.

    Returns:
        A new tuple of trees, or ``children`` itself if nothing was removed.

    Raises:
        PathNotFoundError: If ``strict`` and the path names no node.
    """
    result = remove_or_missing(children, path)
    if result is MISSING:
        _not_found('remove', path, strict)
        return children
    return result


def remove_from(tree: T, path: TreePath, strict: bool = False) -> T:
    """Remove the node at ``path`` (relative to ``tree``'s trunk) from ``tree``."""
    children = tree.children
    new_children = remove(children, path, strict=strict)
    if new_children is children:
        return tree
    return tree.map_children(lambda _current: new_children)


def insert(
    children: Sequence[T],
    path: TreePath,
    subtree: T,
    strict: bool = False,
) -> Sequence[T]:
    """Insert ``subtree`` into a child sequence so that it ends up at ``path``.

    Siblings from the target index onward shift one place to the right.
    The last index may equal the number of siblings, which appends. The
    path is read like in ``remove``: its first step indexes into
    ``children``.

    Returns:
        A new tuple of trees, or ``children`` itself if the parent of the
        target does not exist (or the path is the trunk).

    Raises:
        PathNotFoundError: If ``strict`` and the subtree cannot be placed.
    """
    result = insert_or_missing(children, path, subtree)
    if result is MISSING:
        _not_found('insert', path, strict)
        return children
    return result


def insert_into(tree: T, path: TreePath, subtree: T, strict: bool = False) -> T:
    """Insert ``subtree`` at ``path`` (relative to ``tree``'s trunk)."""
    children = tree.children
    new_children = insert(children, path, subtree, strict=strict)
    if new_children is children:
        return tree
    return tree.map_children(lambda _current: new_children)


# ==================== Restructure ====================

def restructure(tree: Tree, reduce: Callable[[NodeAt], R]) -> R:
    """Fold ``tree`` bottom-up into an arbitrary result.

    ``reduce`` is called exactly once per node with a NodeAt holding the
    node's path, its label and the tuple of results already computed for
    its children. Children are handled before their parent, siblings left
    to right, the trunk last.

    Args:
        tree: The tree to fold.
        reduce: Function from NodeAt to the node's result.

    Returns:
        The result computed for the trunk.

    Example:
        Count nodes::

            >>> restructure(t, lambda n: 1 + sum(n.children))
            6

        Rebuild the tree unchanged::

            >>> restructure(t, lambda n: TreeNode(n.label, n.children)) == t
            True
    """
    def _restructure(node: Tree, path: TreePath) -> R:
        results = tuple(
            _restructure(child, path.to_child(index))
            for index, child in enumerate(node.children)
        )
        return reduce(NodeAt(path, node.label, results))

    return _restructure(tree, AT_TRUNK)


# ==================== Map ====================

def map_labels(tree: T, fn: Callable[[LabelAt], Any]) -> T:
    """Rebuild ``tree`` with every label replaced by ``fn(LabelAt(path, label))``.

    Labels are computed parent first, then children in index order.

    Example:
        >>> doubled = map_labels(t, lambda at: (at.label * 2, at.path))
        >>> to(doubled, TreePath([1, 0])).label
        (6, TreePath('#1.#0'))
    """
    return map_labels_with(tree, fn, same_path)


# ==================== Folds ====================

def fold_from(
    tree: Tree,
    initial: A,
    direction: str,
    reduce: Callable[[A, LabelAt], A],
) -> A:
    """Thread an accumulator through every label of ``tree``.

    Args:
        tree: The tree to fold.
        initial: Starting accumulator.
        direction: 'forward' (node, then children in index order) or
            'reverse' (children in reverse index order, then node).
        reduce: Function ``(acc, LabelAt) -> acc``, called once per node.

    Returns:
        The final accumulator.

    Raises:
        UnknownDirectionError: If direction is not 'forward' or 'reverse'.
    """
    return fold_with(tree, initial, direction, reduce, same_path)


def flatten(tree: Tree, direction: str = FORWARD) -> list[Any]:
    """Return all labels of ``tree`` as a list, in fold order."""
    def _append(acc: list[Any], at: LabelAt) -> list[Any]:
        acc.append(at.label)
        return acc

    return fold_from(tree, [], direction, _append)


def walk(tree: Tree) -> Iterator[LabelAt]:
    """Yield a LabelAt for every node, in forward order.

    Example:
        >>> for at in walk(t):
        ...     print(at.path, at.label)
    """
    def _walk(node: Tree, path: TreePath) -> Iterator[LabelAt]:
        yield LabelAt(path, node.label)
        for index, child in enumerate(node.children):
            yield from _walk(child, path.to_child(index))

    return _walk(tree, AT_TRUNK)
