"""Typed models shared across the package."""

from .block import Block, BlockType, BoundingBox, Geometry, Relationship, RelationshipType
from .query import Bounds, IndexEntry, QueryRect, QueryResult

__all__ = [
    "Block",
    "BlockType",
    "BoundingBox",
    "Bounds",
    "Geometry",
    "IndexEntry",
    "QueryRect",
    "QueryResult",
    "Relationship",
    "RelationshipType",
]
