"""OpenSearch driver — also serves Elasticsearch-compatible clusters."""

from scoutbridge.engines.opensearch.engine import OpenSearchEngine
from scoutbridge.engines.opensearch.provider import create_engine, register

__all__ = ["OpenSearchEngine", "create_engine", "register"]
