"""Unit tests for the token matcher core functionality."""

import pytest
from indexed_token_matcher.core.engine import TokenMatcher
from indexed_token_matcher.core.indexed_object import IndexedItem
from indexed_token_matcher.core.match_record import MatchQuality
from indexed_token_matcher.core.messages import MessageCollector
from indexed_token_matcher.core.ordering import MalformedEntityError
from indexed_token_matcher.models.response import SearchResponse


def strings(records):
    return [record.lower_string for record in records]


class TestTokenMatcher:
    """Test cases for the TokenMatcher class."""

    @pytest.fixture
    def items(self):
        """Sample vocabulary, deliberately out of order."""
        return [
            IndexedItem(unique_key="t3", term="stage", synonyms=["phase"], payload=3),
            IndexedItem(unique_key="t1", term="cell", synonyms=["cellular unit"], payload=1),
            IndexedItem(unique_key="t2", term="cell stage", payload=2),
            IndexedItem(unique_key="t4", term="2-cell stage conceptus", payload=4),
            IndexedItem(unique_key="t5", term="cellar", synonyms=["cell"], payload=5),
        ]

    @pytest.fixture
    def matcher(self, items):
        """A matcher over the sample vocabulary."""
        return TokenMatcher(items)

    def test_initialization(self, matcher):
        """Test records are denormalized and sorted once."""
        assert len(matcher) == 8
        assert strings(matcher.records) == [
            "2-cell stage conceptus",
            "cell",
            "cellular unit",
            "cell stage",
            "cellar",
            "cell",
            "stage",
            "phase",
        ]

    def test_records_sorted_by_term_then_key(self, matcher):
        """Test the default ordering drives record order."""
        assert [r.indexed_object.unique_key for r in matcher.records] == [
            "t4", "t1", "t1", "t2", "t5", "t5", "t3", "t3"
        ]

    def test_exact_term_first(self, matcher):
        """Test bucket order: exact term, exact synonym, begins, other."""
        results = matcher.search("cell")

        assert [(r.indexed_object.unique_key, r.is_term) for r in results] == [
            ("t1", True),    # exact term
            ("t5", False),   # exact synonym
            ("t2", True),    # begins term: "cell stage"
            ("t5", True),    # begins term: "cellar"
            ("t1", False),   # begins synonym: "cellular unit"
            ("t4", True),    # other: "2-cell stage conceptus"
        ]

    def test_result_qualities_are_grouped(self, matcher):
        """Test results never move back up the quality ranking."""
        results = matcher.search("cell")
        qualities = [r.match_type("cell") for r in results]
        assert qualities == sorted(qualities)
        assert MatchQuality.NONE not in qualities

    def test_multi_token_query(self, matcher):
        """Test every query token must begin some record token."""
        results = matcher.search("stage cel")
        assert [r.indexed_object.unique_key for r in results] == ["t4", "t2"]

    def test_rarest_token_scanned(self, matcher):
        """Test a query mixing a long token and a 1-character token."""
        results = matcher.search("conceptus 2")
        assert [r.indexed_object.unique_key for r in results] == ["t4"]

    def test_unknown_prefix(self, matcher):
        """Test any unknown token prefix means no matches."""
        assert matcher.search("mortgage") == []
        assert matcher.search("cell mortgage") == []

    @pytest.mark.parametrize("query", ["", "   ", "---", "!!"])
    def test_query_without_alphanumerics(self, matcher, query):
        """Test queries with no usable tokens return nothing."""
        assert matcher.search(query) == []

    def test_case_insensitive(self, matcher):
        """Test queries are lowercased before matching."""
        assert strings(matcher.search("CELLAR")) == ["cellar"]

    def test_max_count(self, matcher):
        """Test results are capped at max_count."""
        assert len(matcher.search("cell", max_count=2)) == 2
        assert strings(matcher.search("cell", max_count=2)) == ["cell", "cell"]
        assert len(matcher.search("cell", max_count=100)) == 6

    @pytest.mark.parametrize("max_count", [0, -1])
    def test_max_count_zero(self, matcher, max_count):
        """Test non-positive max_count returns nothing."""
        assert matcher.search("cell", max_count=max_count) == []

    def test_projections(self, matcher, items):
        """Test mapping results to indexed objects and payloads."""
        results = matcher.search("cellar")
        assert matcher.as_indexed_objects(results) == [items[4]]
        assert matcher.as_raw_objects(results) == [5]

    def test_deterministic(self, matcher):
        """Test repeated searches give identical results."""
        assert matcher.search("cel st") == matcher.search("cel st")

    def test_search_response(self, matcher):
        """Test the reported search response."""
        response = matcher.search_response("cellar", max_count=5)

        assert isinstance(response, SearchResponse)
        assert response.query == "cellar"
        assert response.max_count == 5
        assert response.total_results == 1
        assert response.execution_time_ms >= 0
        hit = response.results[0]
        assert hit.unique_key == "t5"
        assert hit.term == "cellar"
        assert hit.matched == "cellar"
        assert hit.display_value == "cellar"
        assert hit.by_term is True
        assert hit.match_type == "exact_term"

    def test_search_response_default_max_count(self, matcher):
        """Test the settings default is used when max_count is omitted."""
        response = matcher.search_response("cell")
        assert response.max_count == 200
        assert response.total_results == 6
        assert response.results[1].display_value == "cellar (cell)"
        assert response.results[1].match_type == "exact_synonym"

    def test_get_stats(self, matcher):
        """Test matcher statistics."""
        stats = matcher.get_stats()
        assert stats["records"] == len(matcher.records)
        assert stats["keystone_keys"] == len(matcher.index.keystone)

    def test_empty_vocabulary(self):
        """Test a matcher with nothing to search."""
        matcher = TokenMatcher([])
        assert len(matcher) == 0
        assert matcher.search("anything") == []
        assert matcher.search("a") == []

    def test_build_events_collected(self, items):
        """Test build milestones reach the optional collector."""
        collector = MessageCollector()
        TokenMatcher(items, collector=collector)

        messages = collector.get_messages()
        assert len(messages) == 3
        assert messages[0].endswith("Building indexes (terms=8)")
        assert messages[1].endswith("Sorted terms")
        assert " sec : " in messages[2]

    def test_build_events_with_plain_callable(self, items):
        """Test any callable can be used as the collector."""
        received = []
        TokenMatcher(items, collector=received.append)
        assert received[0] == "Building indexes (terms=8)"


class TestOrderingStrategies:
    """Test cases for how records are ordered before indexing."""

    @pytest.fixture
    def items(self):
        return [
            IndexedItem(unique_key="a", term="room 10"),
            IndexedItem(unique_key="b", term="room 9"),
            IndexedItem(unique_key="c", term="room 100"),
        ]

    @staticmethod
    def smart_alpha(a, b):
        """Order terms with embedded numbers numerically."""
        a_key = int(a.term.split()[-1])
        b_key = int(b.term.split()[-1])
        return a_key - b_key

    def test_default_ordering(self, items):
        """Test plain string order by default."""
        matcher = TokenMatcher(items)
        assert strings(matcher.search("room")) == ["room 10", "room 100", "room 9"]

    def test_explicit_ordering(self, items):
        """Test a supplied ordering replaces the default."""
        matcher = TokenMatcher(items, ordering=self.smart_alpha)
        assert strings(matcher.search("room")) == ["room 9", "room 10", "room 100"]

    def test_object_ordering(self, items):
        """Test the objects' own ordering is honored."""
        own = [item.model_copy(update={"ordering": self.smart_alpha}) for item in items]
        matcher = TokenMatcher(own)
        assert strings(matcher.search("room")) == ["room 9", "room 10", "room 100"]

    def test_missing_key_fails_loudly(self):
        """Test tied terms without unique keys abort the build."""

        class Keyless:
            unique_key = None
            term = "cellar"
            synonyms = ()
            payload = None

        with pytest.raises(MalformedEntityError):
            TokenMatcher([Keyless(), Keyless()])


class TestDenormalizedInput:
    """Test cases for objects submitted more than once."""

    @pytest.fixture
    def items(self):
        """The same object submitted twice with different synonyms."""
        return [
            IndexedItem(unique_key="id1", term="house", synonyms=["home"]),
            IndexedItem(unique_key="id1", term="house", synonyms=["dwelling"]),
            IndexedItem(unique_key="id2", term="hut"),
        ]

    def test_term_indexed_once(self, items):
        """Test each unique key's term is indexed only once."""
        matcher = TokenMatcher(items, already_denormalized=True)

        assert len(matcher) == 4
        assert strings(matcher.search("house")) == ["house"]
        assert strings(matcher.search("dwel")) == ["dwelling"]
        assert strings(matcher.search("home")) == ["home"]

    def test_terms_indexed_per_entry_by_default(self, items):
        """Test every submitted term is indexed when not denormalized."""
        matcher = TokenMatcher(items)

        assert len(matcher) == 5
        assert strings(matcher.search("house")) == ["house", "house"]
