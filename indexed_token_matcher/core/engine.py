"""Main token matcher implementation."""

import time
from typing import Callable, Dict, Generic, List, Optional, Sequence, Set, TypeVar

import structlog

from ..config import get_settings
from ..models.response import SearchHit, SearchResponse
from .index import PrefixIndex, best_prefix
from .indexed_object import IndexedObject, Ordering
from .match_record import MatchQuality, MatchRecord, denormalize
from .normalizer import tokenize
from .ordering import record_sort_key, resolve_ordering

T = TypeVar("T")

logger = structlog.get_logger(__name__)

# Buckets concatenated, in this order, to form a result list.
RANKED_QUALITIES = (
    MatchQuality.EXACT_TERM,
    MatchQuality.EXACT_SYNONYM,
    MatchQuality.BEGINS_TERM,
    MatchQuality.BEGINS_SYNONYM,
    MatchQuality.OTHER,
)


class TokenMatcher(Generic[T]):
    """
    Autocomplete matcher over the terms and synonyms of a fixed set of objects.

    All searching is case-insensitive and only considers alphanumeric
    characters.  Everything is built once in the constructor; afterwards the
    matcher is read-only and can be shared across many threads.
    """

    def __init__(
        self,
        indexed_objects: Sequence[IndexedObject[T]],
        already_denormalized: bool = False,
        ordering: Optional[Ordering] = None,
        collector: Optional[Callable[[str], None]] = None,
    ) -> None:
        """
        Initialize the matcher and build its indexes.

        Args:
            indexed_objects: Objects to make searchable
            already_denormalized: True if an object may appear more than once
                (sharing a unique key); its term is then indexed only once,
                while the synonyms of every entry are indexed
            ordering: Comparison function for sorting objects; defaults to
                the first object's own ``ordering``, then to term and key
            collector: Optional sink for build milestone messages

        Raises:
            MalformedEntityError: if the default ordering meets two objects
                tied on term where either lacks a unique key
        """
        self._collector = collector
        self._log_build_events = get_settings().log_build_events

        records: List[MatchRecord[T]] = []
        indexed_keys: Set[str] = set()
        for indexed_object in indexed_objects:
            if already_denormalized:
                include_term = indexed_object.unique_key not in indexed_keys
                indexed_keys.add(indexed_object.unique_key)
            else:
                include_term = True
            records.extend(denormalize(indexed_object, include_term))

        # Sort once, so matches only need binning (never sorting) at query time.
        self._build_event("Building indexes", terms=len(records))
        records.sort(key=record_sort_key(resolve_ordering(indexed_objects, ordering)))
        self._build_event("Sorted terms")

        self._records = tuple(records)
        self._index = PrefixIndex(self._records)
        self._build_event(
            "Populated keystone, prefix and term count maps",
            **self._index.get_stats()
        )

    @property
    def records(self) -> Sequence[MatchRecord[T]]:
        """All match records in sorted order."""
        return self._records

    @property
    def index(self) -> PrefixIndex:
        """The prefix index over ``records``."""
        return self._index

    def search(self, query: str, max_count: int = 200) -> List[MatchRecord[T]]:
        """
        Match a query against the indexed terms and synonyms.

        Matches are returned in five priority groups, each in sorted object
        order: exact term matches, exact synonym matches, term begins
        matches, synonym begins matches, and everything else (where each
        query token begins some token of the term or synonym).

        Args:
            query: Search query
            max_count: Maximum number of results to return

        Returns:
            Up to ``max_count`` matching records
        """
        if max_count <= 0:
            return []

        query_lower = query.lower()
        query_tokens = tokenize(query)

        # Every match must match the rarest query token, so its candidates are
        # the only records that need checking.
        min_count = -1
        oddest_prefix = None
        for token in query_tokens:
            prefix = best_prefix(token)
            token_count = self._index.count(prefix)
            if token_count is None:
                logger.debug("Unknown query prefix", query=query, prefix=prefix)
                return []
            if token_count < min_count or min_count < 0:
                min_count = token_count
                oddest_prefix = prefix

        if oddest_prefix is None:
            return []

        buckets: Dict[MatchQuality, List[MatchRecord[T]]] = {
            quality: [] for quality in RANKED_QUALITIES
        }
        for position in self._index.candidates(oddest_prefix):
            record = self._records[position]
            quality = record.classify(query_lower, query_tokens)
            if quality is not MatchQuality.NONE:
                buckets[quality].append(record)

        matches: List[MatchRecord[T]] = []
        for quality in RANKED_QUALITIES:
            if len(matches) >= max_count:
                break
            matches.extend(buckets[quality])
        return matches[:max_count]

    def search_response(self, query: str, max_count: Optional[int] = None) -> SearchResponse:
        """
        Search and report the results with timing information.

        Args:
            query: Search query
            max_count: Maximum number of results (settings default if None)

        Returns:
            SearchResponse with one SearchHit per match
        """
        start_time = time.time()
        if max_count is None:
            max_count = get_settings().default_max_count

        records = self.search(query, max_count)
        query_lower = query.lower()
        query_tokens = tokenize(query)
        results = [
            SearchHit(
                unique_key=record.indexed_object.unique_key,
                term=record.sortable_term,
                matched=record.lower_string,
                display_value=record.display_value,
                by_term=record.by_term,
                match_type=record.classify(query_lower, query_tokens).name.lower(),
            )
            for record in records
        ]
        execution_time = (time.time() - start_time) * 1000

        return SearchResponse(
            query=query,
            max_count=max(max_count, 0),
            execution_time_ms=execution_time,
            total_results=len(results),
            results=results,
        )

    @staticmethod
    def as_indexed_objects(records: Sequence[MatchRecord[T]]) -> List[IndexedObject[T]]:
        """Extract the indexed objects from a list of matching records."""
        return [record.indexed_object for record in records]

    @staticmethod
    def as_raw_objects(records: Sequence[MatchRecord[T]]) -> List[T]:
        """Extract the raw payloads from a list of matching records."""
        return [record.raw_object for record in records]

    def get_stats(self) -> Dict[str, int]:
        """Get matcher statistics."""
        stats = {"records": len(self._records)}
        stats.update(self._index.get_stats())
        return stats

    def _build_event(self, message: str, **fields: int) -> None:
        if self._log_build_events:
            logger.info(message, **fields)
        if self._collector is not None:
            details = ", ".join(f"{key}={value}" for key, value in fields.items())
            self._collector(f"{message} ({details})" if details else message)

    def __len__(self) -> int:
        return len(self._records)
