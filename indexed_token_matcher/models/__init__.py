"""Data models for the indexed token matcher."""

from .response import (
    BucketStats,
    IndexReport,
    SearchHit,
    SearchResponse,
)

__all__ = [
    "BucketStats",
    "IndexReport",
    "SearchHit",
    "SearchResponse",
]
