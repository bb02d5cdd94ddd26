"""Shared fixtures for the indexed token matcher tests."""

from dataclasses import dataclass
from typing import List, Optional

import pytest

from indexed_token_matcher import IndexedItem, TokenMatcher


@dataclass
class FauxItem:
    """A sample data item with a name and up to two synonyms."""

    id: str
    name: Optional[str]
    synonym1: Optional[str] = None
    synonym2: Optional[str] = None


def compare_faux_items(a: IndexedItem, b: IndexedItem) -> int:
    """Sort wrapped items by lowercase name, then by lowercase id."""
    a_key = (a.payload.name.lower(), a.payload.id.lower())
    b_key = (b.payload.name.lower(), b.payload.id.lower())
    return (a_key > b_key) - (a_key < b_key)


def wrap(item: FauxItem, ordering=None) -> IndexedItem:
    """Wrap a sample item so it can be indexed."""
    synonyms = [s for s in (item.synonym1, item.synonym2) if s is not None]
    return IndexedItem(
        unique_key=item.id,
        term=item.name,
        synonyms=synonyms,
        payload=item,
        ordering=ordering,
    )


@pytest.fixture
def house_items() -> List[FauxItem]:
    """Ten household vocabulary items."""
    return [
        FauxItem("id1", "house", "home", "domicile"),
        FauxItem("id2", "roof", "housetop"),
        FauxItem("id3", "chimney", "smokestack"),
        FauxItem("id4", "living room", "family room"),
        FauxItem("id5", "kitchen"),
        FauxItem("id6", "bathroom", "washroom", "loo"),
        FauxItem("id7", "cellar", None, "basement"),
        FauxItem("id8", "roofing material", "shingle", "slate"),
        FauxItem("id9", "cellar dweller", "mouse", "rat"),
        FauxItem("id10", "cupboard", "kitchen cabinet"),
    ]


@pytest.fixture
def house_objects(house_items) -> List[IndexedItem]:
    """The household items wrapped with their own ordering."""
    return [wrap(item, ordering=compare_faux_items) for item in house_items]


@pytest.fixture
def house_matcher(house_objects) -> TokenMatcher:
    """A matcher populated with the household vocabulary."""
    return TokenMatcher(house_objects)


@pytest.fixture
def faux_item():
    """The sample item class, for tests that build their own vocabulary."""
    return FauxItem


@pytest.fixture
def wrap_item():
    """Factory wrapping a FauxItem as an IndexedItem."""
    return wrap
