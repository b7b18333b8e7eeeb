"""Library configuration loaded from environment variables."""

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Global index settings."""

    default_overlap_ratio: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Minimum share of an entry's area that must fall inside a query.",
    )
    indexable_block_types: List[str] = Field(
        default_factory=lambda: [
            "LINE",
            "WORD",
            "SELECTION_ELEMENT",
            "TABLE",
            "CELL",
            "TABLE_TITLE",
            "KEY_VALUE_SET",
        ],
        description="Block types indexed even when they carry no text.",
    )

    containment_margin: float = 0.01
    line_tolerance: float = 0.01

    rtree_leaf_capacity: int = 100
    rtree_index_capacity: int = 100

    model_config = SettingsConfigDict(
        env_prefix="BLOCKINDEX_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def indexable_type_set(self) -> frozenset:
        return frozenset(self.indexable_block_types)


settings = Settings()
