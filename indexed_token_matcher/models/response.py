"""Response and report models for searches and index diagnostics."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class SearchHit(BaseModel):
    """Individual search result."""

    unique_key: Optional[str] = Field(..., description="Unique key of the matched object")
    term: Optional[str] = Field(None, description="Primary term of the matched object")
    matched: str = Field(..., description="The lowercase term or synonym that matched")
    display_value: str = Field(..., description="Pick-list rendering of the match")
    by_term: bool = Field(..., description="Whether the term (not a synonym) matched")
    match_type: str = Field(..., description="Match quality (exact_term, begins_synonym, etc.)")


class SearchResponse(BaseModel):
    """Response for search queries."""

    query: str = Field(..., description="Original search query")
    max_count: int = Field(..., ge=0, description="Maximum number of results requested")
    execution_time_ms: float = Field(..., description="Query execution time in milliseconds")
    total_results: int = Field(..., description="Total number of results")
    results: List[SearchHit] = Field(..., description="Search results in ranked order")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Response timestamp")


class BucketStats(BaseModel):
    """Distribution of bucket sizes across the keys of one index mapping."""

    name: str = Field(..., description="Which mapping (or subset) was analyzed")
    unit: str = Field(..., description="What each bucket entry refers to")
    keys: int = Field(..., ge=0, description="Number of keys in the mapping")
    min: Optional[int] = Field(None, description="Smallest bucket size")
    max: Optional[int] = Field(None, description="Largest bucket size")
    mean: Optional[float] = Field(None, description="Average bucket size")
    stddev: Optional[float] = Field(None, description="Population standard deviation of bucket sizes")


class IndexReport(BaseModel):
    """Health statistics for a built prefix index."""

    records: int = Field(..., ge=0, description="Number of match records indexed")
    keystone: BucketStats = Field(..., description="Keystone list sizes")
    prefix_fanout: BucketStats = Field(..., description="Fan-out list sizes")
    term_count: BucketStats = Field(..., description="All term counts")
    term_count_by_length: List[BucketStats] = Field(
        ..., description="Term counts for 1-, 2- and 3-character prefixes"
    )
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Report timestamp")
