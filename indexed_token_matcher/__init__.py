"""
Indexed Token Matcher - in-memory prefix index for autocomplete over vocabularies.

This package indexes the terms and synonyms of a fixed collection of objects
by 1-, 2- and 3-character token prefixes, and answers autocomplete queries
with matches ranked by quality (exact, begins, other) and then by a
caller-supplied or default ordering.
"""

__version__ = "1.0.0"

from .core.engine import TokenMatcher
from .core.indexed_object import IndexedItem, IndexedObject
from .core.match_record import MatchQuality, MatchRecord
from .core.ordering import MalformedEntityError
from .models.response import SearchHit, SearchResponse

__all__ = [
    "TokenMatcher",
    "IndexedItem",
    "IndexedObject",
    "MatchQuality",
    "MatchRecord",
    "MalformedEntityError",
    "SearchHit",
    "SearchResponse",
]
