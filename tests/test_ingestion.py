"""Tests for validating raw Textract payloads."""

from __future__ import annotations

import pytest

from blockindex.errors import InvalidInputError
from blockindex.ingestion.textract import block_type_counts, parse_blocks
from blockindex.models.block import Block


def test_parse_textract_response(invoice_response) -> None:
    blocks = parse_blocks(invoice_response)
    assert len(blocks) == 10
    line = blocks[1]
    assert line.id == "line-1"
    assert line.type == "LINE"
    assert line.text == "Invoice Total"
    assert line.page == 1
    assert line.bounding_box.left == 0.1
    assert line.bounding_box.right == pytest.approx(0.4)
    assert line.child_ids() == ["w-1", "w-2"]


def test_parse_keeps_block_instances_and_extra_fields(make_block) -> None:
    existing = Block(id="b", type="WORD", text="ready")
    raw = make_block("c", "CELL", (0.0, 0.0, 0.5, 0.5))
    raw.update({"RowIndex": 2, "ColumnIndex": 3, "EntityTypes": ["COLUMN_HEADER"]})
    blocks = parse_blocks([existing, raw])
    assert blocks[0] is existing
    assert (blocks[1].row_index, blocks[1].column_index) == (2, 3)
    assert blocks[1].text is None


def test_block_without_geometry_has_no_box(make_block) -> None:
    [block] = parse_blocks([make_block("w", "WORD", text="x")])
    assert block.bounding_box is None
    [block] = parse_blocks([{"Id": "g", "BlockType": "WORD", "Geometry": {"Polygon": []}}])
    assert block.bounding_box is None


@pytest.mark.parametrize(
    "raw",
    [
        {"BlockType": "WORD"},
        {"Id": "", "BlockType": "WORD"},
        {"Id": "p", "BlockType": "PAGE", "Page": 0},
        {"Id": "c", "BlockType": "CELL", "RowIndex": 0, "ColumnIndex": 1},
        {"Id": "w", "BlockType": "WORD", "Geometry": {"BoundingBox": {"Left": 0.1, "Top": 0.1, "Width": -1, "Height": 0.1}}},
        {"Id": "w", "BlockType": "WORD", "Geometry": {"BoundingBox": {"Left": 0.1, "Top": 0.1}}},
    ],
)
def test_invalid_blocks_are_rejected(raw) -> None:
    with pytest.raises(InvalidInputError):
        parse_blocks([raw])


def test_block_type_counts(invoice_response) -> None:
    counts = block_type_counts(parse_blocks(invoice_response))
    assert counts == {"PAGE": 2, "LINE": 2, "WORD": 4, "TABLE": 1, "CELL": 1}
