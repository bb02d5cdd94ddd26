"""Prefix index data structures for picking the smallest set of records to scan."""

from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .match_record import MatchRecord

# Longest token prefix used as a keystone key.
MAX_PREFIX_LENGTH = 3


def best_prefix(token: str) -> Optional[str]:
    """
    Get the longest indexed prefix of a token.

    Args:
        token: A lowercase token

    Returns:
        Its first three characters (or the whole token if shorter), or None
        for an empty token
    """
    if not token:
        return None
    return token[:MAX_PREFIX_LENGTH]


class PrefixIndex:
    """
    Token prefix index over a sorted sequence of match records.

    ``keystone`` maps 3-character token prefixes (or whole 1- and 2-character
    tokens) to the positions of the records having such a token.  For example,
    if record 0 is "2-cell stage conceptus" then 0 is listed under "2", "cel",
    "sta" and "con".

    ``prefix_fanout`` maps 1- and 2-character strings to the keystone keys
    they begin, so "u" and "un" both list "uni" when "uni" is a keystone key.

    ``term_count`` maps every key of both to the number of records a search
    through it would inspect.  Counts from the fan-out can include a record
    more than once when several of its tokens share a prefix; they only steer
    the choice of which query token to scan, never the results.
    """

    def __init__(self, records: Sequence[MatchRecord]) -> None:
        """
        Build the index.

        Args:
            records: Match records in their final sorted order
        """
        keystone: Dict[str, List[int]] = {}
        prefix_fanout: Dict[str, List[str]] = {}

        for i, record in enumerate(records):
            for token in record.tokens:
                if not token:
                    continue
                prefix1 = token[:1]
                prefix2 = token[:2]
                prefix3 = token[:3]

                keystone.setdefault(prefix3, []).append(i)

                for short_prefix in (prefix1, prefix2):
                    extensions = prefix_fanout.setdefault(short_prefix, [])
                    if prefix3 not in extensions:
                        extensions.append(prefix3)

        term_count: Dict[str, int] = {}
        for prefix, extensions in prefix_fanout.items():
            term_count[prefix] = sum(len(keystone[prefix3]) for prefix3 in extensions)

        # Keystone keys are counted directly, replacing any fan-out count.
        for prefix3, positions in keystone.items():
            term_count[prefix3] = len(positions)

        self._keystone: Mapping[str, Tuple[int, ...]] = MappingProxyType(
            {key: tuple(positions) for key, positions in keystone.items()}
        )
        self._prefix_fanout: Mapping[str, Tuple[str, ...]] = MappingProxyType(
            {key: tuple(extensions) for key, extensions in prefix_fanout.items()}
        )
        self._term_count: Mapping[str, int] = MappingProxyType(term_count)

    @property
    def keystone(self) -> Mapping[str, Tuple[int, ...]]:
        """Prefix to ascending record positions (read-only)."""
        return self._keystone

    @property
    def prefix_fanout(self) -> Mapping[str, Tuple[str, ...]]:
        """Short prefix to the keystone keys it begins (read-only)."""
        return self._prefix_fanout

    @property
    def term_count(self) -> Mapping[str, int]:
        """Prefix to approximate number of records reachable (read-only)."""
        return self._term_count

    def count(self, prefix: Optional[str]) -> Optional[int]:
        """
        Get the approximate number of records to scan for a prefix.

        Returns:
            The count, or None if no indexed token has this prefix
        """
        if prefix is None:
            return None
        return self._term_count.get(prefix)

    def candidates(self, prefix: str) -> Sequence[int]:
        """
        Get the record positions to inspect for a prefix, in record order.

        A 3-character prefix reads its keystone list, skipping the repeats left
        by records with several tokens under that prefix.  A shorter one
        merges the keystone lists of every key it fans out to, dropping
        duplicates, and re-sorts the merged positions.

        Args:
            prefix: A prefix known to the index

        Returns:
            Ascending record positions, each listed once
        """
        if len(prefix) >= MAX_PREFIX_LENGTH:
            positions = self._keystone.get(prefix, ())
            return [i for n, i in enumerate(positions) if n == 0 or positions[n - 1] != i]

        unique_positions = set()
        for prefix3 in self._prefix_fanout.get(prefix, ()):
            unique_positions.update(self._keystone[prefix3])
        return sorted(unique_positions)

    def __len__(self) -> int:
        return len(self._keystone)

    def get_stats(self) -> Dict[str, int]:
        """Get index size statistics."""
        return {
            "keystone_keys": len(self._keystone),
            "fanout_keys": len(self._prefix_fanout),
            "term_count_keys": len(self._term_count),
        }
