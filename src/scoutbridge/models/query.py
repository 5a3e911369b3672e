"""Search query model — Immutable, declarative description of a search.

Queries are built fluently; every builder method returns a new instance::

    query = (
        SearchQuery.for_type(Post, "solar")
        .where("status", "published")
        .where_in("tag", [1, 3])
        .order_by("id", "desc")
        .take(20)
    )
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

SortDirection = Literal["asc", "desc"]

SearchCallback = Callable[..., Any]
"""``callback(client, term, params)`` — replaces the engine's own search call."""


class WhereClause(BaseModel):
    """An equality (scalar value) or membership (list value) filter."""

    model_config = ConfigDict(frozen=True)

    field: str = Field(description="Document field to filter on")
    value: Any = Field(description="Scalar for a phrase match, list for a terms match")

    @property
    def is_multi_value(self) -> bool:
        return isinstance(self.value, (list, tuple, set, frozenset))


class OrderClause(BaseModel):
    """A single-field sort instruction."""

    model_config = ConfigDict(frozen=True)

    column: str = Field(description="Field to sort by")
    direction: SortDirection = Field(default="asc", description="Sort direction")


class SearchQuery(BaseModel):
    """A search against one searchable record type."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    record_type: type[Any] = Field(description="Searchable class whose records are queried")
    term: str | None = Field(default=None, description="Free-text search term (None matches everything)")
    wheres: tuple[WhereClause, ...] = Field(default=(), description="Filters, in the order they were added")
    orders: tuple[OrderClause, ...] = Field(default=(), description="Sort clauses, in priority order")
    limit: int | None = Field(default=None, ge=1, description="Maximum number of hits to return")
    index: str | None = Field(default=None, description="Index to search instead of the engine default")
    callback: SearchCallback | None = Field(default=None, description="Override for the engine's search call")

    @classmethod
    def for_type(
        cls,
        record_type: type[Any],
        term: str | None = None,
        callback: SearchCallback | None = None,
    ) -> SearchQuery:
        return cls(record_type=record_type, term=term, callback=callback)

    def where(self, field: str, value: Any) -> SearchQuery:
        return self.model_copy(update={"wheres": (*self.wheres, WhereClause(field=field, value=value))})

    def where_in(self, field: str, values: Iterable[Any]) -> SearchQuery:
        return self.where(field, list(values))

    def order_by(self, column: str, direction: str = "asc") -> SearchQuery:
        clause = OrderClause(column=column, direction=direction.lower())  # type: ignore[arg-type]
        return self.model_copy(update={"orders": (*self.orders, clause)})

    def latest(self, column: str = "created_at") -> SearchQuery:
        return self.order_by(column, "desc")

    def oldest(self, column: str = "created_at") -> SearchQuery:
        return self.order_by(column, "asc")

    def take(self, limit: int) -> SearchQuery:
        if limit < 1:
            raise ValueError(f"limit must be a positive integer, got {limit}")
        return self.model_copy(update={"limit": limit})

    def within(self, index: str) -> SearchQuery:
        return self.model_copy(update={"index": index})

    def using_callback(self, callback: SearchCallback) -> SearchQuery:
        return self.model_copy(update={"callback": callback})
