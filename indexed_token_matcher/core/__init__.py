"""Core matcher functionality."""

from .diagnostics import IndexAnalyzer
from .engine import TokenMatcher
from .index import PrefixIndex
from .indexed_object import IndexedItem, IndexedObject
from .match_record import MatchQuality, MatchRecord
from .messages import MessageCollector
from .normalizer import tokenize
from .ordering import MalformedEntityError, default_ordering

__all__ = [
    "IndexAnalyzer",
    "IndexedItem",
    "IndexedObject",
    "MalformedEntityError",
    "MatchQuality",
    "MatchRecord",
    "MessageCollector",
    "PrefixIndex",
    "TokenMatcher",
    "default_ordering",
    "tokenize",
]
