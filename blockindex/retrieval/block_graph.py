"""Lookup table and text resolution over the block relationship graph."""

from __future__ import annotations

import logging
from typing import AbstractSet, Dict, Iterable, Iterator, List, Optional

from blockindex.config import settings
from blockindex.models.block import Block

logger = logging.getLogger(__name__)


class BlockGraph:
    """Read-only view of one document's blocks keyed by id."""

    def __init__(
        self,
        blocks: Iterable[Block],
        indexable_types: Optional[AbstractSet[str]] = None,
    ) -> None:
        self._blocks: Dict[str, Block] = {}
        for block in blocks:
            if block.id in self._blocks:
                logger.warning("Duplicate block id %s; keeping the later block.", block.id)
            self._blocks[block.id] = block
        if indexable_types is None:
            indexable_types = settings.indexable_type_set
        self.indexable_types = frozenset(indexable_types)

    def __len__(self) -> int:
        return len(self._blocks)

    def __contains__(self, block_id: object) -> bool:
        return block_id in self._blocks

    def __iter__(self) -> Iterator[Block]:
        return iter(self._blocks.values())

    def get(self, block_id: str) -> Optional[Block]:
        return self._blocks.get(block_id)

    def children(self, block: Block) -> List[Block]:
        """CHILD blocks of ``block`` that exist; dangling ids are skipped."""
        return [self._blocks[child_id] for child_id in block.child_ids() if child_id in self._blocks]

    def resolve_text(self, block: Block) -> str:
        """Return the block's own text, or the space-joined text of its subtree.

        Missing children contribute nothing. A child already on the current
        path is skipped, so malformed cyclic graphs still terminate.
        """
        return self._resolve(block, frozenset())

    def _resolve(self, block: Block, ancestors: AbstractSet[str]) -> str:
        if block.text:
            return block.text
        path = ancestors | {block.id}
        parts: List[str] = []
        for child in self.children(block):
            if child.id in path:
                logger.debug("Skipping cyclic CHILD reference %s -> %s", block.id, child.id)
                continue
            text = self._resolve(child, path)
            if text:
                parts.append(text)
        return " ".join(parts).strip()

    def is_indexable_type(self, block_type: str) -> bool:
        """True for types worth indexing even without text of their own."""
        return block_type in self.indexable_types
