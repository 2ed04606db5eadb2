# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Paths into trees and forests.

A TreePath is an ordered sequence of zero-based child indices, the
root-relative step first. The empty path is the trunk: the tree itself.
A ForestPath pairs the index of a tree inside a forest with a TreePath
into that tree.

Paths are passive descriptors. They never hold a reference to a tree and
are only checked against a concrete tree when a navigation function
follows them.

Text Syntax:
    Steps use the positional syntax of the TreeStore family, joined by dots:

    - Trunk: ''
    - Child: '#2'
    - Nested: '#2.#0.#1'
    - Forest: '#1/#2.#0' (tree 1, then path '#2.#0'); '#1/' is tree 1 itself

Example:
    >>> path = AT_TRUNK.to_child(2).to_child(0)
    >>> str(path)
    '#2.#0'
    >>> path.step()
    (2, TreePath('#0'))
    >>> path.to_parent()
    TreePath('#2')
"""

from __future__ import annotations

from functools import total_ordering
from typing import Any, Iterable, Iterator, NamedTuple

from .exceptions import InvalidPathError


def _check_index(index: Any) -> int:
    """Validate a single child index.

    Raises:
        InvalidPathError: If index is not a non-negative int.
    """
    if isinstance(index, bool) or not isinstance(index, int):
        raise InvalidPathError(
            f"Path index must be an int, not {type(index).__name__}"
        )
    if index < 0:
        raise InvalidPathError(f"Path index must be non-negative, got {index}")
    return index


def _parse_path_segment(segment: str) -> int:
    """Parse a '#N' path segment into its index."""
    if segment.startswith('#') and segment.isascii() and segment[1:].isdecimal():
        return int(segment[1:])
    raise InvalidPathError(f"Invalid path segment: '{segment}'")


@total_ordering
class TreePath:
    """Immutable route from a tree's trunk to one of its nodes.

    Equality, hashing and ordering are those of the underlying index
    tuple, so paths can be used as dict keys and sorted: a parent sorts
    before its descendants, and siblings sort by index.

    Example:
        >>> TreePath([2, 3]).targets_child_of(TreePath([2]))
        True
        >>> TreePath([2]).depth
        1
    """

    __slots__ = ('_steps',)

    _steps: tuple[int, ...]

    def __init__(self, steps: Iterable[int] = ()) -> None:
        """Initialize a TreePath.

        Args:
            steps: Child indices, root-relative step first.

        Raises:
            InvalidPathError: If any index is negative or not an int.
        """
        object.__setattr__(
            self, '_steps', tuple(_check_index(i) for i in steps)
        )

    @classmethod
    def _from_valid(cls, steps: tuple[int, ...]) -> TreePath:
        path = object.__new__(cls)
        object.__setattr__(path, '_steps', steps)
        return path

    # ==================== Construction ====================

    @classmethod
    def at_trunk(cls) -> TreePath:
        """Return the empty path, denoting the tree itself."""
        return AT_TRUNK

    @classmethod
    def follow(cls, steps: Iterable[int]) -> TreePath:
        """Build a path from a sequence of child indices.

        Example:
            >>> TreePath.follow([1, 0]) == AT_TRUNK.to_child(1).to_child(0)
            True
        """
        return cls(steps)

    @classmethod
    def parse(cls, text: str) -> TreePath:
        """Build a path from its text form ('#1.#0', or '' for the trunk).

        Raises:
            InvalidPathError: If a segment is not '#N' with N >= 0.
        """
        if not text:
            return AT_TRUNK
        return cls._from_valid(
            tuple(_parse_path_segment(part) for part in text.split('.'))
        )

    def to_child(self, index: int) -> TreePath:
        """Return the path to the child at ``index`` of this path's target."""
        return self._from_valid(self._steps + (_check_index(index),))

    def join(self, other: TreePath) -> TreePath:
        """Return this path followed by ``other``."""
        return self._from_valid(self._steps + other._steps)

    # ==================== Special Methods ====================

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"'{type(self).__name__}' is immutable")

    def __reduce__(self) -> tuple[Any, ...]:
        return type(self), (self._steps,)

    def __repr__(self) -> str:
        return f"TreePath({str(self)!r})"

    def __str__(self) -> str:
        return '.'.join(f"#{i}" for i in self._steps)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TreePath):
            return NotImplemented
        return self._steps == other._steps

    def __lt__(self, other: TreePath) -> bool:
        if not isinstance(other, TreePath):
            return NotImplemented
        return self._steps < other._steps

    def __hash__(self) -> int:
        return hash(self._steps)

    def __len__(self) -> int:
        return len(self._steps)

    def __bool__(self) -> bool:
        """False only for the trunk."""
        return bool(self._steps)

    def __iter__(self) -> Iterator[int]:
        return iter(self._steps)

    def __getitem__(self, index: int) -> int:
        return self._steps[index]

    # ==================== Decomposition ====================

    @property
    def steps(self) -> tuple[int, ...]:
        """The child indices as a tuple."""
        return self._steps

    @property
    def depth(self) -> int:
        """Number of steps from the trunk (trunk = 0)."""
        return len(self._steps)

    @property
    def is_trunk(self) -> bool:
        """True if this path denotes the tree itself."""
        return not self._steps

    def step(self) -> tuple[int, TreePath] | None:
        """Split off the first step.

        Returns:
            Tuple of (first_index, remaining_path), or None if this path
            is the trunk (already at the target).
        """
        if not self._steps:
            return None
        return self._steps[0], self._from_valid(self._steps[1:])

    def to_parent(self) -> TreePath | None:
        """Return the path to the target's parent, or None for the trunk."""
        if not self._steps:
            return None
        return self._from_valid(self._steps[:-1])

    def last_index(self) -> int | None:
        """Return the target's index among its siblings, or None for the trunk."""
        if not self._steps:
            return None
        return self._steps[-1]

    # ==================== Relations ====================

    def targets_child_of(self, ancestor: TreePath) -> bool:
        """True if ``ancestor`` is a strict prefix of this path.

        The target of this path is then a strict descendant of the
        ancestor's target. No tree is consulted.
        """
        n = len(ancestor._steps)
        return n < len(self._steps) and self._steps[:n] == ancestor._steps

    def targets_parent_of(self, descendant: TreePath) -> bool:
        """True if this path is a strict prefix of ``descendant``."""
        return descendant.targets_child_of(self)


AT_TRUNK = TreePath._from_valid(())


@total_ordering
class ForestPath:
    """Immutable route to a node inside a forest.

    Attributes:
        tree_index: Index of the tree inside the forest.
        path_into_tree_at_index: TreePath into that tree.

    Example:
        >>> fp = ForestPath.from_index(1).to_child(2)
        >>> str(fp)
        '#1/#2'
        >>> fp.tree_index, fp.path_into_tree_at_index
        (1, TreePath('#2'))
    """

    __slots__ = ('tree_index', 'path_into_tree_at_index')

    tree_index: int
    path_into_tree_at_index: TreePath

    def __init__(
        self, tree_index: int, inner: TreePath | Iterable[int] = AT_TRUNK
    ) -> None:
        """Initialize a ForestPath.

        Args:
            tree_index: Index of the tree inside the forest.
            inner: TreePath (or plain indices) into that tree.

        Raises:
            InvalidPathError: If any index is negative or not an int.
        """
        if not isinstance(inner, TreePath):
            inner = TreePath(inner)
        object.__setattr__(self, 'tree_index', _check_index(tree_index))
        object.__setattr__(self, 'path_into_tree_at_index', inner)

    @classmethod
    def from_index(
        cls, tree_index: int, inner: TreePath | Iterable[int] = AT_TRUNK
    ) -> ForestPath:
        """Build a ForestPath from a tree index and an inner path."""
        return cls(tree_index, inner)

    @classmethod
    def parse(cls, text: str) -> ForestPath:
        """Build a ForestPath from its text form ('#1/#2.#0').

        Raises:
            InvalidPathError: If the text is malformed.
        """
        head, sep, rest = text.partition('/')
        if not sep:
            raise InvalidPathError(f"Forest path needs a '/': '{text}'")
        return cls(_parse_path_segment(head), TreePath.parse(rest))

    @property
    def inner(self) -> TreePath:
        """Alias for path_into_tree_at_index."""
        return self.path_into_tree_at_index

    def to_child(self, index: int) -> ForestPath:
        """Return the path to the child at ``index``, same tree."""
        return ForestPath(
            self.tree_index, self.path_into_tree_at_index.to_child(index)
        )

    def to_parent(self) -> ForestPath | None:
        """Return the path to the target's parent.

        A whole top-level tree has no parent inside the forest: None.
        """
        parent = self.path_into_tree_at_index.to_parent()
        if parent is None:
            return None
        return ForestPath(self.tree_index, parent)

    @property
    def depth(self) -> int:
        """Depth of the target inside its tree (top-level tree = 0)."""
        return self.path_into_tree_at_index.depth

    def targets_child_of(self, ancestor: ForestPath) -> bool:
        """True if this path's target is a strict descendant of ``ancestor``'s."""
        return (
            self.tree_index == ancestor.tree_index
            and self.path_into_tree_at_index.targets_child_of(
                ancestor.path_into_tree_at_index
            )
        )

    def targets_parent_of(self, descendant: ForestPath) -> bool:
        """True if ``descendant``'s target is a strict descendant of this one."""
        return descendant.targets_child_of(self)

    def _key(self) -> tuple[int, tuple[int, ...]]:
        return self.tree_index, self.path_into_tree_at_index.steps

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"'{type(self).__name__}' is immutable")

    def __reduce__(self) -> tuple[Any, ...]:
        return type(self), (self.tree_index, self.path_into_tree_at_index)

    def __repr__(self) -> str:
        return f"ForestPath({str(self)!r})"

    def __str__(self) -> str:
        return f"#{self.tree_index}/{self.path_into_tree_at_index}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ForestPath):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: ForestPath) -> bool:
        if not isinstance(other, ForestPath):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())


class LabelAt(NamedTuple):
    """A label together with the path it was found at."""

    path: Any
    label: Any


class NodeAt(NamedTuple):
    """A node seen by a restructure reducer.

    ``children`` holds the reducer's results for the node's children,
    in index order.
    """

    path: TreePath
    label: Any
    children: tuple[Any, ...]
