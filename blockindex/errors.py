"""Exceptions raised by the block index."""

from __future__ import annotations


class BlockIndexError(Exception):
    """Base class for every error raised by this package."""


class InvalidInputError(BlockIndexError, ValueError):
    """The block collection handed to a build is missing or malformed."""


class NotInitializedError(BlockIndexError, RuntimeError):
    """An index operation was called before a successful build."""


class InvalidRectError(BlockIndexError, ValueError):
    """A query rectangle is missing fields or carries non-numeric values."""


class InvalidRatioError(BlockIndexError, ValueError):
    """An overlap ratio is not a number between 0 and 1."""


class InvalidPageError(BlockIndexError, ValueError):
    """A page filter is not a positive integer."""
