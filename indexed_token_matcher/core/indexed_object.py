"""Entity capability consumed by the token matcher."""

from typing import Any, Callable, Generic, List, Optional, Protocol, Sequence, TypeVar, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")

# Three-way comparison over entities: negative, zero or positive.
Ordering = Callable[[Any, Any], int]


@runtime_checkable
class IndexedObject(Protocol[T]):
    """
    An object that can be searched via a TokenMatcher.

    Implementations expose a unique key, a primary term (or ``None``), any
    synonyms for that term, and the wrapped payload itself.  An optional
    ``ordering`` attribute may hold a comparison function used to sort the
    indexed objects; it is read with ``getattr`` so it need not be declared.
    """

    @property
    def unique_key(self) -> str: ...

    @property
    def term(self) -> Optional[str]: ...

    @property
    def synonyms(self) -> Sequence[str]: ...

    @property
    def payload(self) -> T: ...


class IndexedItem(BaseModel, Generic[T]):
    """Ready-made IndexedObject for callers without an entity class of their own."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    unique_key: str = Field(..., description="Key that uniquely identifies the item")
    term: Optional[str] = Field(None, description="Primary term (or name) of the item")
    synonyms: List[str] = Field(default_factory=list, description="Synonyms other than the term")
    payload: Optional[T] = Field(None, description="The wrapped object returned by raw projections")
    ordering: Optional[Ordering] = Field(
        None, exclude=True, description="Optional comparison function over items"
    )
