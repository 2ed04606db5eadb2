# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-TreePath - Path-addressed navigation over immutable trees and forests.

A lightweight, zero-dependency library for looking up and transforming
ordered, labeled trees through index paths, for the Genro ecosystem
(Genro Kyō).
"""

__version__ = "0.1.0"

from . import codec, navigate
from .exceptions import (
    CodecError,
    InvalidPathError,
    PathNotFoundError,
    TreePathError,
    UnknownDirectionError,
)
from .navigate import FORWARD, REVERSE
from .node import Tree, TreeNode, leaf, tree
from .path import AT_TRUNK, ForestPath, LabelAt, NodeAt, TreePath

__all__ = [
    # Trees
    "Tree",
    "TreeNode",
    "leaf",
    "tree",
    # Paths
    "TreePath",
    "ForestPath",
    "AT_TRUNK",
    "LabelAt",
    "NodeAt",
    # Navigation
    "navigate",
    "codec",
    "FORWARD",
    "REVERSE",
    # Exceptions
    "TreePathError",
    "InvalidPathError",
    "PathNotFoundError",
    "UnknownDirectionError",
    "CodecError",
]
