# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""TreePath exceptions."""

from __future__ import annotations


class TreePathError(Exception):
    """Base exception for TreePath errors."""

    pass


class InvalidPathError(TreePathError, ValueError):
    """Raised when a path is built from an invalid index or text."""

    pass


class PathNotFoundError(TreePathError, KeyError):
    """Raised by strict operations when a path does not reach a node."""

    pass


class UnknownDirectionError(TreePathError, ValueError):
    """Raised when a fold direction is not 'forward' or 'reverse'."""

    pass


class CodecError(TreePathError, ValueError):
    """Raised when encoded tree or path data is malformed."""

    pass
