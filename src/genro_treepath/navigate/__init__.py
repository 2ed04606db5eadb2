# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Navigate package - Path-addressed lookup and transformation.

The package is organized into:
- core: Recursive helpers shared by tree and forest
- tree: Operations on a single tree, addressed by TreePath
- forest: The same operations lifted to a sequence of trees, addressed
  by ForestPath

Both modules expose functions with the same names (to, alter, remove,
map_labels, fold_from, ...), so they are meant to be used through their
module:

Example:
    >>> from genro_treepath.navigate import forest, tree
    >>> tree.to(t, TreePath([1, 0]))
    >>> forest.remove(trees, ForestPath(1, [2]))
"""

from . import forest, tree
from .core import DIRECTIONS, FORWARD, REVERSE

__all__ = ["tree", "forest", "FORWARD", "REVERSE", "DIRECTIONS"]
