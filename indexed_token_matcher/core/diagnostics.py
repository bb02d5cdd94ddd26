"""Statistics about a built prefix index, for analysis and debugging."""

import statistics
from typing import Iterable, List, Union

import structlog

from ..models.response import BucketStats, IndexReport
from .engine import TokenMatcher
from .index import PrefixIndex

logger = structlog.get_logger(__name__)


def bucket_stats(name: str, unit: str, sizes: Iterable[int]) -> BucketStats:
    """
    Summarize a collection of bucket sizes.

    Args:
        name: Label for the analyzed mapping
        unit: What each bucket entry refers to
        sizes: One size per key

    Returns:
        BucketStats; min/max/mean/stddev are None when there are no keys
    """
    values: List[int] = list(sizes)
    if not values:
        return BucketStats(name=name, unit=unit, keys=0)

    return BucketStats(
        name=name,
        unit=unit,
        keys=len(values),
        min=min(values),
        max=max(values),
        mean=statistics.fmean(values),
        stddev=statistics.pstdev(values),
    )


class IndexAnalyzer:
    """Read-only reporting over the mappings of a PrefixIndex."""

    def __init__(self, source: Union[TokenMatcher, PrefixIndex]) -> None:
        """
        Initialize the analyzer.

        Args:
            source: A matcher, or a bare prefix index
        """
        if isinstance(source, TokenMatcher):
            self.index = source.index
            self.records = len(source.records)
        else:
            self.index = source
            self.records = len({i for positions in source.keystone.values() for i in positions})

    def analyze(self) -> IndexReport:
        """Compute bucket size statistics for every index mapping."""
        keystone = self.index.keystone
        prefix_fanout = self.index.prefix_fanout
        term_count = self.index.term_count

        by_length = [
            bucket_stats(
                f"term_count ({length}-char)",
                "terms to search",
                (count for key, count in term_count.items() if len(key) == length),
            )
            for length in (1, 2, 3)
        ]

        return IndexReport(
            records=self.records,
            keystone=bucket_stats(
                "keystone", "searchable terms referred to",
                (len(positions) for positions in keystone.values()),
            ),
            prefix_fanout=bucket_stats(
                "prefix_fanout", "keystone entries referred to",
                (len(extensions) for extensions in prefix_fanout.values()),
            ),
            term_count=bucket_stats("term_count", "terms to search", term_count.values()),
            term_count_by_length=by_length,
        )

    def log_report(self) -> IndexReport:
        """Analyze the index and log each section of the report."""
        report = self.analyze()
        logger.info("Analyzing indexes", records=report.records)
        sections = [report.keystone, report.prefix_fanout, report.term_count]
        sections.extend(report.term_count_by_length)
        for section in sections:
            logger.info(
                f"Analyzed {section.name} index",
                keys=section.keys,
                unit=section.unit,
                min=section.min,
                max=section.max,
                mean=section.mean,
                stddev=section.stddev,
            )
        logger.info("Finished analysis of indexes")
        return report
