"""Spatial index over document-analysis text blocks."""

from .errors import (
    BlockIndexError,
    InvalidInputError,
    InvalidPageError,
    InvalidRatioError,
    InvalidRectError,
    NotInitializedError,
)
from .models import Block, BoundingBox, IndexEntry, QueryRect, QueryResult
from .retrieval import BlockGraph, SpatialBlockIndex, create_index

__all__ = [
    "Block",
    "BlockGraph",
    "BlockIndexError",
    "BoundingBox",
    "IndexEntry",
    "InvalidInputError",
    "InvalidPageError",
    "InvalidRatioError",
    "InvalidRectError",
    "NotInitializedError",
    "QueryRect",
    "QueryResult",
    "SpatialBlockIndex",
    "create_index",
]

__version__ = "0.1.0"
