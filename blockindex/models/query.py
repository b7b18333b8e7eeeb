"""Index entry and query request/response models."""

from __future__ import annotations

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .block import BoundingBox

Bounds = Tuple[float, float, float, float]


class QueryRect(BaseModel):
    """Query rectangle in the same normalized space as stored boxes."""

    model_config = ConfigDict(frozen=True)

    x: float = Field(..., strict=True, allow_inf_nan=False)
    y: float = Field(..., strict=True, allow_inf_nan=False)
    width: float = Field(..., strict=True, ge=0.0, allow_inf_nan=False)
    height: float = Field(..., strict=True, ge=0.0, allow_inf_nan=False)

    @property
    def bounds(self) -> Bounds:
        return (self.x, self.y, self.x + self.width, self.y + self.height)


class IndexEntry(BaseModel):
    """A block as stored in the spatial index."""

    model_config = ConfigDict(frozen=True)

    id: str
    type: str
    text: str = ""
    confidence: Optional[float] = None
    page: Optional[int] = None
    bounding_box: BoundingBox

    @property
    def bounds(self) -> Bounds:
        box = self.bounding_box
        return (box.left, box.top, box.right, box.bottom)


class QueryResult(BaseModel):
    """An index entry matched by a query, annotated with its overlap."""

    id: str
    text: str
    type: str
    confidence: Optional[float] = None
    page: Optional[int] = None
    bounding_box: BoundingBox
    overlap_percentage: float
