"""OpenSearch engine — Keeps searchable records in an OpenSearch/Elasticsearch index.

Records are written with bulk ``update`` directives flagged ``doc_as_upsert``
and queried with a ``bool`` query: a fuzzy ``multi_match`` on the free-text
term under ``must`` and one clause per where-filter under ``filter``.

The engine never retries or wraps client errors; whatever the client raises
reaches the caller unchanged.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from datetime import UTC, datetime
from itertools import islice
from typing import Any

from scoutbridge.engines.base.engine import EngineHealth, RawResult, RecordLoader, SearchEngine
from scoutbridge.models.query import SearchQuery
from scoutbridge.models.record import Searchable, declared_searchable_fields, uses_soft_delete
from scoutbridge.models.request import OverriddenRequest, SearchRequest, StandardRequest

logger = logging.getLogger(__name__)


class OpenSearchEngine(SearchEngine):
    """Search engine driver for OpenSearch and Elasticsearch-compatible clusters.

    Args:
        client: An ``opensearchpy.OpenSearch`` client (or anything with the
            same ``bulk``/``search`` surface).
        index: Index that stores every record.
        soft_delete: Keep soft-deleted records indexed with a ``__soft_deleted`` marker.
        include_type: Send each record's type label as ``_type`` in bulk
            directives. Disable for typeless clusters.
        chunk_size: Records per bulk delete when flushing a record type.
    """

    def __init__(
        self,
        client: Any,
        index: str,
        soft_delete: bool = False,
        include_type: bool = True,
        chunk_size: int = 500,
    ) -> None:
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be a positive integer, got {chunk_size}")
        self._client = client
        self._index = index
        self._soft_delete = soft_delete
        self._include_type = include_type
        self._chunk_size = chunk_size

    @property
    def name(self) -> str:
        return "opensearch"

    @property
    def client(self) -> Any:
        return self._client

    @property
    def index_name(self) -> str:
        return self._index

    @property
    def soft_delete(self) -> bool:
        return self._soft_delete

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    # ── Indexing ─────────────────────────────────────────────────────────

    def index(self, records: Sequence[Searchable]) -> None:
        """Upsert records into the index with one bulk request."""
        if not records:
            return

        if self._soft_delete and uses_soft_delete(records[0]):
            for record in records:
                record.push_soft_delete_metadata()  # type: ignore[attr-defined]

        body = self.build_index_body(records)
        logger.debug("Bulk upserting %d records into %s", len(records), self._index)
        self._bulk(body)

    def remove(self, records: Sequence[Searchable]) -> None:
        """Delete records from the index with one bulk request."""
        if not records:
            return

        body = self.build_remove_body(records)
        logger.debug("Bulk deleting %d records from %s", len(records), self._index)
        self._bulk(body)

    def flush(self, record_type: type[Searchable]) -> None:
        """Remove every record the type reports through ``all_searchable()``.

        Records are pulled lazily and deleted with one bulk request per
        ``chunk_size`` records.
        """
        records = iter(record_type.all_searchable())
        while chunk := list(islice(records, self._chunk_size)):
            self.remove(chunk)

    def build_index_body(self, records: Sequence[Searchable]) -> list[dict[str, Any]]:
        body: list[dict[str, Any]] = []
        for record in records:
            body.append({"update": self._directive(record)})
            body.append(
                {
                    "doc": {**record.to_searchable_array(), **record.search_metadata()},
                    "doc_as_upsert": True,
                }
            )
        return body

    def build_remove_body(self, records: Sequence[Searchable]) -> list[dict[str, Any]]:
        return [{"delete": self._directive(record)} for record in records]

    def _directive(self, record: Searchable) -> dict[str, Any]:
        directive: dict[str, Any] = {
            "_id": record.get_search_key(),
            "_index": self._index,
        }
        if self._include_type:
            directive["_type"] = record.searchable_as()
        return directive

    def _bulk(self, body: list[dict[str, Any]]) -> None:
        response = self._client.bulk(body=body)
        if isinstance(response, dict) and response.get("errors"):
            logger.debug("Bulk request on %s reported item errors", self._index)

    # ── Search ───────────────────────────────────────────────────────────

    def search(self, query: SearchQuery) -> RawResult:
        """Execute a query, capped at ``query.limit`` hits when set."""
        return self._execute(self.build_request(query, size=query.limit))

    def paginate_search(self, query: SearchQuery, per_page: int, page: int) -> RawResult:
        """Execute a query for one page and attach ``nb_pages``.

        ``nb_pages`` is ``total / per_page`` without rounding.
        """
        if per_page < 1:
            raise ValueError(f"per_page must be a positive integer, got {per_page}")
        if page < 1:
            raise ValueError(f"page must be a positive integer, got {page}")

        result = self._execute(self.build_request(query, from_=(page * per_page) - per_page, size=per_page))
        result["nb_pages"] = self.get_total_count(result) / per_page
        return result

    def build_request(
        self,
        query: SearchQuery,
        from_: int | None = None,
        size: int | None = None,
    ) -> SearchRequest:
        """Build the search parameters and decide who sends them."""
        params = {
            "index": query.index or self._index,
            "body": self.build_body(query, from_=from_, size=size),
        }
        if query.callback is not None:
            return OverriddenRequest(callback=query.callback, term=query.term, params=params)
        return StandardRequest(params=params)

    def build_body(
        self,
        query: SearchQuery,
        from_: int | None = None,
        size: int | None = None,
    ) -> dict[str, Any]:
        bool_query: dict[str, Any] = {}

        if query.term:
            multi_match: dict[str, Any] = {
                "query": query.term,
                "fuzziness": "auto",
                "operator": "and",
            }
            fields = declared_searchable_fields(query.record_type)
            if fields is not None:
                multi_match["fields"] = fields
            bool_query["must"] = {"multi_match": multi_match}

        bool_query["filter"] = self._filters(query)

        body: dict[str, Any] = {"query": {"bool": bool_query}}

        sort = self._sort(query)
        if sort:
            body["sort"] = sort
        if from_ is not None:
            body["from"] = from_
        if size is not None:
            body["size"] = size

        return body

    @staticmethod
    def _filters(query: SearchQuery) -> list[dict[str, Any]]:
        filters: list[dict[str, Any]] = []
        for where in query.wheres:
            if where.is_multi_value:
                filters.append({"terms": {f"{where.field}.keyword": list(where.value)}})
            else:
                filters.append({"match_phrase": {where.field: where.value}})
        return filters

    @staticmethod
    def _sort(query: SearchQuery) -> list[dict[str, str]] | None:
        if not query.orders:
            return None
        return [{order.column: order.direction} for order in query.orders]

    def _execute(self, request: SearchRequest) -> Any:
        if isinstance(request, OverriddenRequest):
            return request.callback(self._client, request.term, request.params)
        return self._client.search(**request.params)

    # ── Result mapping ───────────────────────────────────────────────────

    def extract_ids(self, results: RawResult) -> list[Any]:
        return [hit["_id"] for hit in results["hits"]["hits"]]

    def map_to_models(self, query: SearchQuery, results: RawResult, loader: RecordLoader) -> list[Searchable]:
        """Load the records behind the hits and order them by relevance.

        Records the loader returns for keys that were not requested are dropped.
        Keys are compared as strings since hit ``_id`` values always are.
        """
        if self.get_total_count(results) == 0:
            return []

        keys = self.extract_ids(results)
        positions: dict[str, int] = {}
        for position, key in enumerate(keys):
            positions.setdefault(str(key), position)

        records = [record for record in loader(query, keys) if str(record.get_search_key()) in positions]
        return sorted(records, key=lambda record: positions[str(record.get_search_key())])

    def get_total_count(self, results: RawResult) -> int:
        total = results["hits"]["total"]
        # Newer clusters report {"value": n, "relation": "eq"}
        if isinstance(total, dict):
            total = total["value"]
        return int(total)

    # ── Health ───────────────────────────────────────────────────────────

    def health_check(self) -> EngineHealth:
        """Check cluster health."""
        try:
            start = time.monotonic()
            health = self._client.cluster.health()
            latency_ms = int((time.monotonic() - start) * 1000)

            status_map = {"green": "healthy", "yellow": "degraded", "red": "unhealthy"}

            return EngineHealth(
                status=status_map.get(health.get("status", "red"), "unhealthy"),
                latency_ms=latency_ms,
                last_check=datetime.now(UTC).isoformat(),
                message=f"Cluster: {health.get('cluster_name')}, Nodes: {health.get('number_of_nodes')}",
            )
        except Exception as e:
            return EngineHealth(status="unhealthy", message=str(e))

    def close(self) -> None:
        """Close the underlying client."""
        self._client.close()
