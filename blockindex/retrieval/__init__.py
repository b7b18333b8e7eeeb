"""Block graph resolution and spatial lookup."""

from .block_graph import BlockGraph
from .spatial_index import SpatialBlockIndex, create_index

__all__ = ["BlockGraph", "SpatialBlockIndex", "create_index"]
