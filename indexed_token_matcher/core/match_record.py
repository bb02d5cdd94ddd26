"""Searchable records denormalized from indexed objects."""

from enum import IntEnum
from typing import Generic, List, Optional, Sequence, Tuple, TypeVar

from .indexed_object import IndexedObject
from .normalizer import tokenize

T = TypeVar("T")


class MatchQuality(IntEnum):
    """
    How well a query matched a record.

    Non-zero values are in priority order: a lower value is a better match.
    """

    NONE = 0            # query does not match the record
    EXACT_TERM = 1      # query equals the term
    EXACT_SYNONYM = 2   # query equals a synonym
    BEGINS_TERM = 3     # query is a prefix of the term
    BEGINS_SYNONYM = 4  # query is a prefix of a synonym
    OTHER = 5           # every query token begins some token of the string


class MatchRecord(Generic[T]):
    """
    One searchable string (a term or a synonym) of an indexed object.

    An object with two synonyms is represented by three records: one for its
    term plus one for each synonym.  Records only refer to their object; the
    collection handed to the matcher owns it.
    """

    __slots__ = ("indexed_object", "is_term", "lower_string", "tokens", "sortable_term")

    def __init__(self, indexed_object: IndexedObject[T], is_term: bool, searchable_string: str) -> None:
        self.indexed_object = indexed_object
        self.is_term = is_term
        self.lower_string = searchable_string.lower()
        self.tokens: Tuple[str, ...] = tuple(tokenize(self.lower_string))
        self.sortable_term: Optional[str] = indexed_object.term

    @property
    def by_term(self) -> bool:
        """True if this record represents the term itself, False for a synonym."""
        return self.is_term

    @property
    def raw_object(self) -> T:
        """The payload wrapped by the indexed object."""
        return self.indexed_object.payload

    @property
    def display_value(self) -> str:
        """
        Pick-list rendering of this record.

        A term renders as ``"term"``, a synonym as ``"term (synonym)"``.
        """
        if self.is_term or self.sortable_term is None:
            return self.lower_string
        return f"{self.sortable_term.lower()} ({self.lower_string})"

    def match_type(self, query: str) -> MatchQuality:
        """
        Classify a raw query string against this record.

        Tokenizes the query on every call; when checking many records, tokenize
        once and call ``classify`` instead.
        """
        return self.classify(query.lower(), tokenize(query))

    def classify(self, query_lower: str, query_tokens: Sequence[str]) -> MatchQuality:
        """
        Classify a lowercased query and its tokens against this record.

        Args:
            query_lower: Lowercase form of the query
            query_tokens: Tokens of the query

        Returns:
            The highest-priority MatchQuality that applies
        """
        if self.lower_string.startswith(query_lower):
            if self.lower_string == query_lower:
                return MatchQuality.EXACT_TERM if self.is_term else MatchQuality.EXACT_SYNONYM
            return MatchQuality.BEGINS_TERM if self.is_term else MatchQuality.BEGINS_SYNONYM

        for query_token in query_tokens:
            if not any(token.startswith(query_token) for token in self.tokens):
                return MatchQuality.NONE
        return MatchQuality.OTHER

    def __repr__(self) -> str:
        kind = "term" if self.is_term else "synonym"
        return f"MatchRecord({self.indexed_object.unique_key!r}, {kind}={self.lower_string!r})"


def denormalize(indexed_object: IndexedObject[T], include_term: bool = True) -> List[MatchRecord[T]]:
    """
    Build the records for every string that can be used to find an object.

    Args:
        indexed_object: The object to denormalize
        include_term: Whether to emit a record for the object's term

    Returns:
        Term record (when wanted and present) followed by one per synonym
    """
    records: List[MatchRecord[T]] = []
    if include_term and indexed_object.term is not None:
        records.append(MatchRecord(indexed_object, True, indexed_object.term))
    for synonym in indexed_object.synonyms:
        records.append(MatchRecord(indexed_object, False, synonym))
    return records
