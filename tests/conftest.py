"""Shared fixtures: a small two-page Textract-style response."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest


def textract_block(
    block_id: str,
    block_type: str,
    box: Optional[tuple] = None,
    text: Optional[str] = None,
    page: Optional[int] = 1,
    children: Optional[List[str]] = None,
    confidence: Optional[float] = 99.0,
) -> Dict[str, Any]:
    """Build a raw block mapping in the Textract response layout."""
    block: Dict[str, Any] = {"Id": block_id, "BlockType": block_type}
    if text is not None:
        block["Text"] = text
    if confidence is not None:
        block["Confidence"] = confidence
    if page is not None:
        block["Page"] = page
    if box is not None:
        left, top, width, height = box
        block["Geometry"] = {
            "BoundingBox": {"Left": left, "Top": top, "Width": width, "Height": height}
        }
    if children:
        block["Relationships"] = [{"Type": "CHILD", "Ids": children}]
    return block


@pytest.fixture
def make_block():
    return textract_block


@pytest.fixture
def invoice_response() -> Dict[str, Any]:
    """Page 1 holds a heading line and a one-cell table; page 2 a single line."""
    return {
        "DocumentMetadata": {"Pages": 2},
        "Blocks": [
            textract_block("page-1", "PAGE", (0.0, 0.0, 1.0, 1.0), children=["line-1", "table-1"]),
            textract_block("line-1", "LINE", (0.1, 0.05, 0.3, 0.04), "Invoice Total", children=["w-1", "w-2"]),
            textract_block("w-1", "WORD", (0.1, 0.05, 0.14, 0.04), "Invoice"),
            textract_block("w-2", "WORD", (0.26, 0.05, 0.14, 0.04), "Total"),
            textract_block("table-1", "TABLE", (0.1, 0.5, 0.4, 0.2), children=["cell-1"]),
            textract_block("cell-1", "CELL", (0.1, 0.5, 0.4, 0.2), children=["w-3", "w-4"]),
            textract_block("w-3", "WORD", (0.12, 0.55, 0.1, 0.05), "42.00"),
            textract_block("w-4", "WORD", (0.25, 0.55, 0.1, 0.05), "USD"),
            textract_block("page-2", "PAGE", (0.0, 0.0, 1.0, 1.0), page=2, children=["line-2"]),
            textract_block("line-2", "LINE", (0.1, 0.05, 0.3, 0.04), "Thank you", page=2),
        ],
    }
