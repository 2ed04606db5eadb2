# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tree node classes.

Navigation never depends on TreeNode directly: any object exposing the
four members of the Tree protocol (label, children, make, map_children)
can be navigated. TreeNode is the bundled immutable implementation.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Protocol, Sequence, TypeVar

T = TypeVar('T', bound='Tree')


class Tree(Protocol):
    """Structural protocol required by the navigation functions."""

    @property
    def label(self) -> Any: ...

    @property
    def children(self) -> Sequence[Any]: ...

    def make(self: T, label: Any, children: Iterable[T]) -> T: ...

    def map_children(
        self: T, fn: Callable[[Sequence[T]], Iterable[T]]
    ) -> T: ...


class TreeNode:
    """An immutable node of an ordered, labeled tree.

    Each node has:
    - label: The value held by the node (any object)
    - children: Tuple of child TreeNode instances, in order

    Nodes are values: two nodes are equal when their labels are equal and
    their children are pairwise equal. "Changing" a node always means
    building a new one; unchanged children are shared, never copied.

    Example:
        >>> node = TreeNode('mic', [TreeNode('igg'), TreeNode('dee')])
        >>> node.label
        'mic'
        >>> [child.label for child in node.children]
        ['igg', 'dee']
    """

    __slots__ = ('label', 'children')

    label: Any
    children: tuple[TreeNode, ...]

    def __init__(
        self,
        label: Any,
        children: Iterable[TreeNode] = (),
    ) -> None:
        """Initialize a TreeNode.

        Args:
            label: The node's value.
            children: Optional iterable of child nodes, kept in order.
        """
        object.__setattr__(self, 'label', label)
        object.__setattr__(self, 'children', tuple(children))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"'{type(self).__name__}' is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"'{type(self).__name__}' is immutable")

    def __reduce__(self) -> tuple[Any, ...]:
        return type(self), (self.label, self.children)

    def __repr__(self) -> str:
        if not self.children:
            return f"TreeNode({self.label!r})"
        return f"TreeNode({self.label!r}, {list(self.children)!r})"

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, TreeNode):
            return NotImplemented
        return self.label == other.label and self.children == other.children

    def __hash__(self) -> int:
        return hash((self.label, self.children))

    @property
    def is_leaf(self) -> bool:
        """True if this node has no children."""
        return not self.children

    @property
    def is_branch(self) -> bool:
        """True if this node has at least one child."""
        return bool(self.children)

    def make(self, label: Any, children: Iterable[TreeNode] = ()) -> TreeNode:
        """Build a node of the same class as this one."""
        return type(self)(label, children)

    def map_children(
        self, fn: Callable[[tuple[TreeNode, ...]], Iterable[TreeNode]]
    ) -> TreeNode:
        """Return a node with the same label and ``fn(children)`` as children.

        If ``fn`` hands back the very same children tuple, this node itself
        is returned, so callers can detect that nothing changed.
        """
        new_children = fn(self.children)
        if new_children is self.children:
            return self
        return self.make(self.label, new_children)

    def with_label(self, label: Any) -> TreeNode:
        """Return a node with a new label and the same (shared) children."""
        return self.make(label, self.children)


def leaf(label: Any) -> TreeNode:
    """Build a childless TreeNode."""
    return TreeNode(label)


def tree(label: Any, children: Iterable[TreeNode | Any] = ()) -> TreeNode:
    """Build a TreeNode, wrapping non-node children into leaves.

    Example:
        >>> tree(0, [1, tree(2, [3, 4]), 5]).children[1]
        TreeNode(2, [TreeNode(3), TreeNode(4)])
    """
    return TreeNode(
        label,
        (c if isinstance(c, TreeNode) else TreeNode(c) for c in children),
    )
