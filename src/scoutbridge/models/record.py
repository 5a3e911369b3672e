"""Searchable records — The contract host models fulfil to be indexed.

A host model opts in by mixing in ``Searchable`` and implementing
``get_search_key()`` and ``to_searchable_array()``. Optional behaviour is
declared at class level rather than discovered at runtime:

  - ``capabilities`` lists what the record type supports (e.g. soft deletes)
  - ``searchable_fields`` restricts full-text matching to named fields

Example::

    class Post(SoftDeletes, Searchable):
        searchable_fields = ["title", "body"]

        def __init__(self, pk: int, title: str, body: str) -> None:
            self.pk, self.title, self.body = pk, title, body

        def get_search_key(self) -> int:
            return self.pk

        def to_searchable_array(self) -> dict[str, Any]:
            return {"title": self.title, "body": self.body}
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from scoutbridge.models.query import SearchQuery

SOFT_DELETE_KEY = "__soft_deleted"
METADATA_ATTRIBUTE = "_search_metadata"


class Capability(str, Enum):
    """Optional behaviours a record type can declare."""

    SOFT_DELETE = "soft_delete"


class Searchable(ABC):
    """Mixin for host models that are stored in the search index."""

    capabilities: ClassVar[frozenset[Capability]] = frozenset()
    searchable_fields: ClassVar[list[str] | None] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        # Capabilities accumulate across mixins instead of shadowing each other.
        merged: frozenset[Capability] = frozenset()
        for base in cls.__mro__:
            merged |= base.__dict__.get("capabilities", frozenset())
        cls.capabilities = merged

    @abstractmethod
    def get_search_key(self) -> Any:
        """Return the key the record is stored under in the index."""

    @abstractmethod
    def to_searchable_array(self) -> dict[str, Any]:
        """Return the field name → value mapping to index."""

    def searchable_as(self) -> str:
        """Return the logical document type label (lowercased class name by default)."""
        return type(self).__name__.lower()

    def search_metadata(self) -> dict[str, Any]:
        """Return a copy of the metadata merged into the stored document."""
        return dict(getattr(self, METADATA_ATTRIBUTE, None) or {})

    def with_search_metadata(self, key: str, value: Any) -> Searchable:
        """Attach a metadata entry that is stored alongside the searchable fields.

        The entries live on the ``_search_metadata`` instance attribute, set with
        ``object.__setattr__`` so immutable or validating ``__setattr__``
        implementations are bypassed. Host models must not use that name for
        their own data. Subclasses that declare ``__slots__`` still work because
        this mixin leaves an instance ``__dict__`` in place. On pydantic host
        models the attribute sits in ``__dict__`` and takes part in ``==``.
        """
        metadata = getattr(self, METADATA_ATTRIBUTE, None)
        if metadata is None:
            metadata = {}
            object.__setattr__(self, METADATA_ATTRIBUTE, metadata)
        metadata[key] = value
        return self

    @classmethod
    def load_by_ids(cls, query: SearchQuery, ids: Sequence[Any]) -> Iterable[Searchable]:
        """Load the records with the given keys, in any order.

        Host models override this to query their own storage.
        """
        raise NotImplementedError(f"{cls.__name__} does not implement load_by_ids()")

    @classmethod
    def all_searchable(cls) -> Iterable[Searchable]:
        """Return every record of this type that may be in the index."""
        raise NotImplementedError(f"{cls.__name__} does not implement all_searchable()")


class SoftDeletes:
    """Mixin marking a record type whose deletions are soft.

    Soft-deleted records stay in the index when the engine runs with
    soft deletes enabled; ``__soft_deleted`` tells them apart.
    """

    capabilities: ClassVar[frozenset[Capability]] = frozenset({Capability.SOFT_DELETE})

    deleted_at: datetime | None = None

    def trashed(self) -> bool:
        return self.deleted_at is not None

    def push_soft_delete_metadata(self) -> None:
        self.with_search_metadata(SOFT_DELETE_KEY, 1 if self.trashed() else 0)  # type: ignore[attr-defined]


def _record_class(record_type: type | object) -> type:
    return record_type if isinstance(record_type, type) else type(record_type)


def has_capability(record_type: type | object, capability: Capability) -> bool:
    """Check whether a record type (or an instance of it) declares a capability."""
    declared = getattr(_record_class(record_type), "capabilities", frozenset())
    return capability in declared


def declared_searchable_fields(record_type: type | object) -> list[str] | None:
    """Return the record type's explicit full-text field list, or None for engine defaults."""
    fields = getattr(_record_class(record_type), "searchable_fields", None)
    return list(fields) if fields is not None else None


def uses_soft_delete(record_type: type | object) -> bool:
    return has_capability(record_type, Capability.SOFT_DELETE)
