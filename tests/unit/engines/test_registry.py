"""Tests for the engine registry."""

from __future__ import annotations

import logging
from unittest.mock import MagicMock

import pytest

from scoutbridge.config.settings import Settings
from scoutbridge.engines.base.engine import EngineHealth
from scoutbridge.engines.base.exceptions import EngineNotFoundError
from scoutbridge.engines.base.registry import EngineRegistry
from scoutbridge.engines.opensearch.engine import OpenSearchEngine


@pytest.fixture
def registry(settings: Settings) -> EngineRegistry:
    return EngineRegistry(settings)


@pytest.fixture
def factory(client: MagicMock) -> MagicMock:
    return MagicMock(side_effect=lambda settings: OpenSearchEngine(client, settings.opensearch.index))


class TestEngineRegistry:
    def test_register_and_create(self, registry: EngineRegistry, factory: MagicMock, settings: Settings) -> None:
        registry.register("opensearch", factory)

        engine = registry.engine("opensearch")

        assert isinstance(engine, OpenSearchEngine)
        assert engine.index_name == "scout"
        factory.assert_called_once_with(settings)

    def test_engine_defaults_to_configured_driver(self, registry: EngineRegistry, factory: MagicMock) -> None:
        registry.register("opensearch", factory)

        assert registry.engine() is registry.engine("opensearch")

    def test_engine_is_cached(self, registry: EngineRegistry, factory: MagicMock) -> None:
        registry.register("opensearch", factory)

        registry.engine("opensearch")
        registry.engine("opensearch")

        factory.assert_called_once()

    def test_unknown_engine_raises(self, registry: EngineRegistry) -> None:
        with pytest.raises(EngineNotFoundError, match="No engine registered"):
            registry.engine("typesense")

    def test_get_before_create_raises(self, registry: EngineRegistry, factory: MagicMock) -> None:
        registry.register("opensearch", factory)

        with pytest.raises(EngineNotFoundError, match="not created"):
            registry.get("opensearch")

    def test_get_after_create(self, registry: EngineRegistry, factory: MagicMock) -> None:
        registry.register("opensearch", factory)
        engine = registry.engine()

        assert registry.get("opensearch") is engine

    def test_overwrite_warns_and_drops_instance(
        self, registry: EngineRegistry, factory: MagicMock, caplog: pytest.LogCaptureFixture
    ) -> None:
        registry.register("opensearch", factory)
        registry.engine()

        with caplog.at_level(logging.WARNING):
            registry.register("opensearch", factory)

        assert "Overwriting" in caplog.text
        assert registry.active_engines == []

    def test_overwrite_closes_previous_engine(
        self, registry: EngineRegistry, factory: MagicMock, client: MagicMock
    ) -> None:
        registry.register("opensearch", factory)
        previous = registry.engine()

        registry.register("opensearch", factory)
        registry.shutdown_all()

        client.close.assert_called_once()
        assert registry.engine() is not previous

    def test_overwrite_logs_close_errors(self, registry: EngineRegistry, caplog: pytest.LogCaptureFixture) -> None:
        broken = MagicMock()
        broken.close.side_effect = RuntimeError("boom")
        registry.register("broken", lambda settings: broken)
        registry.engine("broken")

        replacement = MagicMock()
        with caplog.at_level(logging.WARNING):
            registry.register("broken", lambda settings: replacement)

        broken.close.assert_called_once()
        assert "Error shutting down engine: broken" in caplog.text
        assert registry.engine("broken") is replacement

    def test_listing(self, registry: EngineRegistry, factory: MagicMock) -> None:
        registry.register("opensearch", factory)
        registry.register("elasticsearch", factory)
        registry.engine("elasticsearch")

        assert registry.registered_engines == ["opensearch", "elasticsearch"]
        assert registry.active_engines == ["elasticsearch"]


class TestEngineRegistryLifecycle:
    def test_health_check_all(self, registry: EngineRegistry, factory: MagicMock, client: MagicMock) -> None:
        client.cluster.health.return_value = {"status": "green", "cluster_name": "c", "number_of_nodes": 1}
        registry.register("opensearch", factory)
        registry.engine()

        results = registry.health_check_all()

        assert results["opensearch"].status == "healthy"

    def test_health_check_all_catches_errors(self, registry: EngineRegistry) -> None:
        broken = MagicMock()
        broken.health_check.side_effect = RuntimeError("boom")
        registry.register("broken", lambda settings: broken)
        registry.engine("broken")

        results = registry.health_check_all()

        assert results["broken"] == EngineHealth(status="unhealthy", message="boom")

    def test_shutdown_all(self, registry: EngineRegistry, factory: MagicMock, client: MagicMock) -> None:
        registry.register("opensearch", factory)
        registry.engine()

        registry.shutdown_all()

        client.close.assert_called_once()
        assert registry.active_engines == []

    def test_shutdown_all_logs_errors(self, registry: EngineRegistry, caplog: pytest.LogCaptureFixture) -> None:
        broken = MagicMock()
        broken.close.side_effect = RuntimeError("boom")
        registry.register("broken", lambda settings: broken)
        registry.engine("broken")

        with caplog.at_level(logging.WARNING):
            registry.shutdown_all()

        assert "Error shutting down engine: broken" in caplog.text
        assert registry.active_engines == []
