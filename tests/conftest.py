"""Shared test fixtures and configuration."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest
from sample_records import Table

from scoutbridge.config.settings import Settings
from scoutbridge.engines.opensearch.engine import OpenSearchEngine

# ── Fixtures ──────────────────────────────────────────────────────────────────


@pytest.fixture
def settings() -> Settings:
    """Create a test Settings instance with defaults."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        opensearch={"hosts": ["http://localhost:9200"], "index": "scout"},
    )


@pytest.fixture
def client() -> MagicMock:
    return MagicMock(name="OpenSearch")


@pytest.fixture
def engine(client: MagicMock) -> OpenSearchEngine:
    return OpenSearchEngine(client, "scout")


@pytest.fixture
def soft_delete_engine(client: MagicMock) -> OpenSearchEngine:
    return OpenSearchEngine(client, "scout", soft_delete=True)


@pytest.fixture
def table_store() -> Iterable[dict[str, Table]]:
    """Populate ``Table.store`` with records 1-3 and clear it afterwards."""
    Table.store = {str(pk): Table(pk) for pk in (1, 2, 3)}
    yield Table.store
    Table.store = {}


@pytest.fixture
def trashed_at() -> datetime:
    return datetime(2024, 6, 15, tzinfo=UTC)
