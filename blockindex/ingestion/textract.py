"""Validate raw Textract block payloads into typed ``Block`` records."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Mapping, Sequence
from typing import Any, Dict, Iterable, List

from pydantic import ValidationError

from blockindex.errors import InvalidInputError
from blockindex.models.block import Block

logger = logging.getLogger(__name__)


def _extract_block_list(payload: Any) -> Sequence[Any]:
    if payload is None:
        raise InvalidInputError("Invalid block data: no blocks were provided.")
    if isinstance(payload, Mapping):
        if "Blocks" not in payload:
            raise InvalidInputError("Invalid block data: Blocks array is missing.")
        payload = payload["Blocks"]
    if isinstance(payload, (str, bytes)) or not isinstance(payload, Sequence):
        raise InvalidInputError(
            f"Invalid block data: expected a list of blocks, got {type(payload).__name__}."
        )
    return payload


def parse_blocks(payload: Any) -> List[Block]:
    """Turn a Textract response (or its ``Blocks`` list) into ``Block`` records.

    Accepts either the response mapping carrying a ``Blocks`` list or the
    list itself; list items may be ``Block`` instances or raw mappings.
    """
    raw_blocks = _extract_block_list(payload)
    blocks: List[Block] = []
    for position, raw in enumerate(raw_blocks):
        if isinstance(raw, Block):
            blocks.append(raw)
            continue
        if not isinstance(raw, Mapping):
            raise InvalidInputError(
                f"Invalid block at position {position}: expected a mapping, "
                f"got {type(raw).__name__}."
            )
        try:
            blocks.append(Block.model_validate(raw))
        except ValidationError as exc:
            raise InvalidInputError(f"Invalid block at position {position}: {exc}") from exc
    logger.debug("Validated %s blocks", len(blocks))
    return blocks


def block_type_counts(blocks: Iterable[Block]) -> Dict[str, int]:
    """Count blocks per block type."""
    return dict(Counter(block.type for block in blocks))
