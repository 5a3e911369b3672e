"""Base search engine — Abstract interface for all engine drivers.

Every search backend implements this interface to serve searchable records.
The engine is responsible for:
  1. Writing records to the index and removing them
  2. Executing queries and paginated queries
  3. Mapping raw results back to keys and to ordered records
  4. Reporting health status
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from pydantic import BaseModel, Field

from scoutbridge.models.query import SearchQuery
from scoutbridge.models.record import Searchable

RawResult = dict[str, Any]
"""The backend's search response, unmodified apart from pagination info."""

RecordLoader = Callable[[SearchQuery, list[Any]], Iterable[Searchable]]
"""``loader(query, keys)`` — fetches records for keys, in any order."""


class EngineHealth(BaseModel):
    """Health status of a search engine."""

    status: str = Field(description="Health status: healthy, degraded, unhealthy")
    latency_ms: int = Field(default=0, description="Latency of last health check in ms")
    last_check: str | None = Field(default=None, description="ISO timestamp of last health check")
    message: str | None = Field(default=None, description="Additional health message")


class SearchEngine(ABC):
    """Abstract base class for search engine drivers.

    Engines hold no mutable state after construction; every operation
    except ``flush()`` issues at most one request to the backend.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique driver name (e.g., 'opensearch')."""

    @abstractmethod
    def index(self, records: Sequence[Searchable]) -> None:
        """Add or update records in the index."""

    @abstractmethod
    def remove(self, records: Sequence[Searchable]) -> None:
        """Remove records from the index."""

    @abstractmethod
    def search(self, query: SearchQuery) -> RawResult:
        """Execute a query and return the backend's raw result."""

    @abstractmethod
    def paginate_search(self, query: SearchQuery, per_page: int, page: int) -> RawResult:
        """Execute a query for one page of results.

        Args:
            query: The query to run.
            per_page: Number of hits per page.
            page: 1-based page number.
        """

    @abstractmethod
    def extract_ids(self, results: RawResult) -> list[Any]:
        """Return the keys of all hits, in result order."""

    @abstractmethod
    def map_to_models(self, query: SearchQuery, results: RawResult, loader: RecordLoader) -> list[Searchable]:
        """Load the records behind a raw result, in result order."""

    @abstractmethod
    def get_total_count(self, results: RawResult) -> int:
        """Return the total number of matching documents."""

    @abstractmethod
    def flush(self, record_type: type[Searchable]) -> None:
        """Remove every record of a type from the index."""

    @abstractmethod
    def health_check(self) -> EngineHealth:
        """Check the health of the search backend."""

    def close(self) -> None:
        """Release the backend client, if the engine owns one."""

    def get(self, query: SearchQuery) -> list[Searchable]:
        """Search and load records in one step.

        Uses the record type's ``load_by_ids()`` as the loader.
        """
        return self.map_to_models(query, self.search(query), query.record_type.load_by_ids)
