"""Document-analysis block models.

Field aliases follow the Textract response layout (``Id``, ``BlockType``,
``Geometry.BoundingBox`` ...), so raw response blocks validate directly while
Python code reads snake_case attributes.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class BlockType(str, Enum):
    """Block tags known to the index. Other tags are kept as plain strings."""

    PAGE = "PAGE"
    LINE = "LINE"
    WORD = "WORD"
    TABLE = "TABLE"
    CELL = "CELL"
    MERGED_CELL = "MERGED_CELL"
    TABLE_TITLE = "TABLE_TITLE"
    TABLE_FOOTER = "TABLE_FOOTER"
    SELECTION_ELEMENT = "SELECTION_ELEMENT"
    KEY_VALUE_SET = "KEY_VALUE_SET"


class RelationshipType(str, Enum):
    CHILD = "CHILD"
    VALUE = "VALUE"
    MERGED_CELL = "MERGED_CELL"
    TITLE = "TITLE"
    TABLE_FOOTER = "TABLE_FOOTER"


class _TextractModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class BoundingBox(_TextractModel):
    """Normalized rectangle relative to the page, each value in [0, 1]."""

    left: float = Field(..., alias="Left", allow_inf_nan=False)
    top: float = Field(..., alias="Top", allow_inf_nan=False)
    width: float = Field(..., alias="Width", ge=0.0, allow_inf_nan=False)
    height: float = Field(..., alias="Height", ge=0.0, allow_inf_nan=False)

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height


class Geometry(_TextractModel):
    bounding_box: Optional[BoundingBox] = Field(default=None, alias="BoundingBox")


class Relationship(_TextractModel):
    """Typed list of references from one block to others."""

    type: str = Field(..., alias="Type")
    ids: List[str] = Field(default_factory=list, alias="Ids")


class Block(_TextractModel):
    """One semantic unit of a document analysis result."""

    id: str = Field(..., alias="Id", min_length=1)
    type: str = Field(..., alias="BlockType")
    text: Optional[str] = Field(default=None, alias="Text")
    confidence: Optional[float] = Field(default=None, alias="Confidence")
    page: Optional[int] = Field(default=None, alias="Page", ge=1)
    geometry: Optional[Geometry] = Field(default=None, alias="Geometry")
    relationships: List[Relationship] = Field(default_factory=list, alias="Relationships")
    row_index: Optional[int] = Field(default=None, alias="RowIndex", ge=1)
    column_index: Optional[int] = Field(default=None, alias="ColumnIndex", ge=1)

    @property
    def bounding_box(self) -> Optional[BoundingBox]:
        if self.geometry is None:
            return None
        return self.geometry.bounding_box

    def child_ids(self) -> List[str]:
        """Ids referenced by CHILD relationships, in document order."""
        ids: List[str] = []
        for relationship in self.relationships:
            if relationship.type == RelationshipType.CHILD.value:
                ids.extend(relationship.ids)
        return ids
