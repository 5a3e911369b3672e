"""Data models — searchable records, queries and search requests."""

from scoutbridge.models.query import OrderClause, SearchQuery, WhereClause
from scoutbridge.models.record import (
    Capability,
    Searchable,
    SoftDeletes,
    declared_searchable_fields,
    has_capability,
    uses_soft_delete,
)
from scoutbridge.models.request import OverriddenRequest, SearchRequest, StandardRequest

__all__ = [
    "Capability",
    "OrderClause",
    "OverriddenRequest",
    "SearchQuery",
    "SearchRequest",
    "Searchable",
    "SoftDeletes",
    "StandardRequest",
    "WhereClause",
    "declared_searchable_fields",
    "has_capability",
    "uses_soft_delete",
]
