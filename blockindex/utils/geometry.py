"""Rectangle arithmetic over normalized ``(min_x, min_y, max_x, max_y)`` bounds."""

from __future__ import annotations

from blockindex.models.block import BoundingBox
from blockindex.models.query import Bounds


def to_bounds(box: BoundingBox) -> Bounds:
    return (box.left, box.top, box.right, box.bottom)


def rect_bounds(x: float, y: float, width: float, height: float) -> Bounds:
    return (x, y, x + width, y + height)


def area(bounds: Bounds) -> float:
    min_x, min_y, max_x, max_y = bounds
    return (max_x - min_x) * (max_y - min_y)


def intersection_area(first: Bounds, second: Bounds) -> float:
    """Area shared by two rectangles, 0.0 when they are disjoint."""
    x_overlap = max(0.0, min(first[2], second[2]) - max(first[0], second[0]))
    y_overlap = max(0.0, min(first[3], second[3]) - max(first[1], second[1]))
    return x_overlap * y_overlap


def is_within(inner: Bounds, outer: Bounds, margin: float = 0.0) -> bool:
    """Return True if ``inner`` lies inside ``outer`` widened by ``margin``."""
    return (
        inner[0] >= outer[0] - margin
        and inner[1] >= outer[1] - margin
        and inner[2] <= outer[2] + margin
        and inner[3] <= outer[3] + margin
    )


def overlap_ratio(query: Bounds, entry: Bounds) -> float:
    """Share of ``entry``'s own area covered by ``query``.

    The ratio is measured against the entry, not the query: a large query
    fully containing a small entry scores 1.0. Zero-area entries (points and
    hairlines) score 1.0 when they sit inside the query, edges included, and
    0.0 otherwise.
    """
    entry_area = area(entry)
    if entry_area <= 0.0:
        return 1.0 if is_within(entry, query) else 0.0
    return intersection_area(query, entry) / entry_area
