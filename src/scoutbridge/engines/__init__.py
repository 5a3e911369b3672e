"""Search engine layer — Drivers that keep a search backend in sync with host records.

Built-in drivers:
  - opensearch: OpenSearch v1+ and Elasticsearch-compatible clusters
    (also registered as ``elasticsearch``)

Implement ``SearchEngine`` to connect your own search backend.
"""
