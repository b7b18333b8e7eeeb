"""R-tree backed spatial index over document-analysis blocks."""

from __future__ import annotations

import logging
import numbers
from collections.abc import Mapping
from dataclasses import dataclass
from typing import AbstractSet, Any, Iterator, List, Optional, Tuple

from pydantic import ValidationError
from rtree import index as rtree_index

from blockindex.config import settings
from blockindex.errors import (
    InvalidPageError,
    InvalidRatioError,
    InvalidRectError,
    NotInitializedError,
)
from blockindex.ingestion.textract import block_type_counts, parse_blocks
from blockindex.models.block import Block, BlockType, BoundingBox
from blockindex.models.query import Bounds, IndexEntry, QueryRect, QueryResult
from blockindex.retrieval.block_graph import BlockGraph
from blockindex.utils import geometry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _IndexState:
    graph: BlockGraph
    tree: rtree_index.Index
    entries: Tuple[IndexEntry, ...]


def _rtree_properties() -> rtree_index.Property:
    properties = rtree_index.Property()
    properties.dimension = 2
    properties.leaf_capacity = settings.rtree_leaf_capacity
    properties.index_capacity = settings.rtree_index_capacity
    return properties


def _bulk_load(entries: Tuple[IndexEntry, ...]) -> rtree_index.Index:
    properties = _rtree_properties()
    if not entries:
        # libspatialindex rejects an empty bulk-load stream.
        return rtree_index.Index(properties=properties)
    stream = ((position, entry.bounds, None) for position, entry in enumerate(entries))
    return rtree_index.Index(stream, properties=properties)


def _coerce_rect(rect: Any) -> QueryRect:
    if isinstance(rect, QueryRect):
        return rect
    if not isinstance(rect, Mapping):
        raise InvalidRectError(
            "Invalid rectangle: must be a mapping with x, y, width, height properties."
        )
    try:
        return QueryRect.model_validate(dict(rect))
    except ValidationError as exc:
        raise InvalidRectError(f"Invalid rectangle: {exc}") from exc


def _check_ratio(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidRatioError(f"Invalid overlap ratio {value!r}: must be a number between 0 and 1.")
    if not 0.0 <= value <= 1.0:
        raise InvalidRatioError(f"Invalid overlap ratio {value!r}: must be a number between 0 and 1.")
    return float(value)


def _check_page(page: Any) -> Optional[int]:
    if page is None:
        return None
    if isinstance(page, bool) or not isinstance(page, int) or page < 1:
        raise InvalidPageError(f"Invalid page {page!r}: must be a positive integer or None.")
    return page


class SpatialBlockIndex:
    """Answers "which blocks overlap this rectangle" over one document.

    Build once with :meth:`initialize`; the index is read-only afterwards.
    Pages are an attribute of each entry rather than a third dimension.
    """

    def __init__(self, indexable_types: Optional[AbstractSet[str]] = None) -> None:
        self._indexable_types = indexable_types
        self._state: Optional[_IndexState] = None

    @property
    def is_ready(self) -> bool:
        return self._state is not None

    def _require_state(self) -> _IndexState:
        state = self._state
        if state is None:
            raise NotInitializedError("Spatial index not initialized. Call initialize() first.")
        return state

    def initialize(self, blocks: Any) -> "SpatialBlockIndex":
        """Build the index from a Textract response or a list of blocks."""
        parsed = parse_blocks(blocks)
        graph = BlockGraph(parsed, indexable_types=self._indexable_types)

        entries: List[IndexEntry] = []
        for block in parsed:
            box = block.bounding_box
            if box is None:
                continue
            text = graph.resolve_text(block)
            if not text and not graph.is_indexable_type(block.type):
                continue
            entries.append(
                IndexEntry(
                    id=block.id,
                    type=block.type,
                    text=text,
                    confidence=block.confidence,
                    page=block.page,
                    bounding_box=box,
                )
            )

        frozen_entries = tuple(entries)
        self._state = _IndexState(graph=graph, tree=_bulk_load(frozen_entries), entries=frozen_entries)
        logger.info(
            "Indexed %s of %s blocks; block type counts: %s",
            len(frozen_entries),
            len(parsed),
            block_type_counts(parsed),
        )
        return self

    def __len__(self) -> int:
        return len(self._require_state().entries)

    @property
    def pages(self) -> List[int]:
        """Distinct page numbers present in the index."""
        entries = self._require_state().entries
        return sorted({entry.page for entry in entries if entry.page is not None})

    def _search(self, state: _IndexState, bounds: Bounds) -> Iterator[IndexEntry]:
        for position in state.tree.intersection(bounds):
            yield state.entries[position]

    def query(
        self,
        rect: Any,
        overlap_ratio: Optional[float] = None,
        page: Optional[int] = None,
    ) -> List[QueryResult]:
        """Return blocks whose own area is covered by ``rect`` at least ``overlap_ratio``.

        Results come back in R-tree traversal order; callers must not rely on it.
        """
        state = self._require_state()
        query_rect = _coerce_rect(rect)
        if overlap_ratio is None:
            overlap_ratio = settings.default_overlap_ratio
        threshold = _check_ratio(overlap_ratio)
        page = _check_page(page)

        bounds = query_rect.bounds
        results: List[QueryResult] = []
        candidates = 0
        for entry in self._search(state, bounds):
            if page is not None and entry.page != page:
                continue
            candidates += 1
            ratio = geometry.overlap_ratio(bounds, entry.bounds)
            if ratio < threshold:
                continue
            results.append(
                QueryResult(
                    id=entry.id,
                    text=entry.text,
                    type=entry.type,
                    confidence=entry.confidence,
                    page=entry.page,
                    bounding_box=entry.bounding_box,
                    overlap_percentage=ratio,
                )
            )
        logger.debug(
            "Query %s (ratio>=%s, page=%s): %s candidates, %s results",
            bounds,
            threshold,
            page,
            candidates,
            len(results),
        )
        return results

    def resolve_text(self, block_id: str) -> str:
        """Text of the block with ``block_id`` via its CHILD graph; "" if unknown."""
        state = self._require_state()
        block = state.graph.get(block_id)
        if block is None:
            return ""
        return state.graph.resolve_text(block)

    def words_within(
        self,
        bounding_box: BoundingBox,
        page: Optional[int] = None,
        margin: Optional[float] = None,
    ) -> List[IndexEntry]:
        """WORD entries lying inside ``bounding_box``, in reading order."""
        state = self._require_state()
        if margin is None:
            margin = settings.containment_margin
        page = _check_page(page)
        target = geometry.to_bounds(bounding_box)
        search_bounds = (target[0] - margin, target[1] - margin, target[2] + margin, target[3] + margin)

        words = [
            entry
            for entry in self._search(state, search_bounds)
            if entry.type == BlockType.WORD.value
            and entry.text
            and (page is None or entry.page == page)
            and geometry.is_within(entry.bounds, target, margin)
        ]
        return _reading_order(words, settings.line_tolerance)

    def text_for_block(self, block_id: str) -> str:
        """Graph-resolved text, falling back to the words lying inside the block's box."""
        state = self._require_state()
        block: Optional[Block] = state.graph.get(block_id)
        if block is None:
            return ""
        text = state.graph.resolve_text(block)
        if text or block.bounding_box is None:
            return text
        words = self.words_within(block.bounding_box, page=block.page)
        return " ".join(word.text for word in words if word.id != block.id)

    def table_cells(self, table_id: str) -> List[Block]:
        """CELL children of the table with ``table_id``."""
        state = self._require_state()
        table = state.graph.get(table_id)
        if table is None:
            return []
        return [child for child in state.graph.children(table) if child.type == BlockType.CELL.value]

    def table_grid(self, table_id: str) -> List[List[str]]:
        """Cell texts laid out by ``RowIndex``/``ColumnIndex``.

        The grid spans up to the largest row and column index; positions
        without a cell hold "". Tables without indexed cells give ``[]``.
        """
        cells = [cell for cell in self.table_cells(table_id) if cell.row_index and cell.column_index]
        if not cells:
            return []
        max_row = max(cell.row_index for cell in cells)
        max_col = max(cell.column_index for cell in cells)
        grid: List[List[Optional[str]]] = [[None] * max_col for _ in range(max_row)]
        for cell in cells:
            row, col = cell.row_index - 1, cell.column_index - 1
            if grid[row][col] is not None:
                continue
            grid[row][col] = self.text_for_block(cell.id)
        return [[text or "" for text in row] for row in grid]

    def table_title(self, table_id: str) -> str:
        """Text of the TABLE_TITLE closest above the table on the same page, or ""."""
        state = self._require_state()
        table = state.graph.get(table_id)
        if table is None or table.bounding_box is None:
            return ""
        table_top = table.bounding_box.top
        titles = [
            block
            for block in state.graph
            if block.type == BlockType.TABLE_TITLE.value
            and block.page == table.page
            and block.bounding_box is not None
            and block.bounding_box.top < table_top
        ]
        if not titles:
            return ""
        closest = min(titles, key=lambda title: table_top - title.bounding_box.top)
        return state.graph.resolve_text(closest)


def _reading_order(entries: List[IndexEntry], tolerance: float) -> List[IndexEntry]:
    """Sort top-to-bottom into lines of similar top, then left-to-right."""
    lines: List[List[IndexEntry]] = []
    for entry in sorted(entries, key=lambda item: (item.bounding_box.top, item.bounding_box.left)):
        if lines and abs(entry.bounding_box.top - lines[-1][0].bounding_box.top) <= tolerance:
            lines[-1].append(entry)
        else:
            lines.append([entry])
    ordered: List[IndexEntry] = []
    for line in lines:
        ordered.extend(sorted(line, key=lambda item: item.bounding_box.left))
    return ordered


def create_index(blocks: Any, indexable_types: Optional[AbstractSet[str]] = None) -> SpatialBlockIndex:
    """Build and return a ready spatial index over ``blocks``."""
    return SpatialBlockIndex(indexable_types=indexable_types).initialize(blocks)
