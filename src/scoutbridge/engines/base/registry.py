"""Engine Registry — Manages registration and creation of search engines.

Drivers are registered by name as factories that build an engine from
settings. Engines are created lazily on first use and cached.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from scoutbridge.config.settings import Settings
from scoutbridge.engines.base.engine import EngineHealth, SearchEngine
from scoutbridge.engines.base.exceptions import EngineNotFoundError

logger = logging.getLogger(__name__)

EngineFactory = Callable[[Settings], SearchEngine]


class EngineRegistry:
    """Registry for search engine drivers and their instances.

    Example:
        >>> registry = EngineRegistry(Settings())
        >>> registry.register("opensearch", create_engine)
        >>> engine = registry.engine()  # uses settings.driver
        >>> engine.index(posts)
    """

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._factories: dict[str, EngineFactory] = {}
        self._instances: dict[str, SearchEngine] = {}

    def register(self, name: str, factory: EngineFactory) -> None:
        """Register an engine factory.

        Args:
            name: Unique driver name.
            factory: Callable building the engine from settings.
        """
        if name in self._factories:
            logger.warning("Overwriting existing engine registration: %s", name)
            previous = self._instances.pop(name, None)
            if previous is not None:
                self._close(name, previous)
        self._factories[name] = factory
        logger.info("Registered engine driver: %s", name)

    def engine(self, name: str | None = None) -> SearchEngine:
        """Return the engine for a driver, creating it on first use.

        Args:
            name: Driver name. Defaults to ``settings.driver``.

        Raises:
            EngineNotFoundError: If no factory is registered under this name.
        """
        name = name or self._settings.driver
        if name in self._instances:
            return self._instances[name]

        if name not in self._factories:
            raise EngineNotFoundError(
                f"No engine registered with name '{name}'. "
                f"Available engines: {list(self._factories.keys())}"
            )

        instance = self._factories[name](self._settings)
        self._instances[name] = instance
        logger.info("Created engine: %s", name)
        return instance

    def get(self, name: str) -> SearchEngine:
        """Get an already-created engine by name.

        Raises:
            EngineNotFoundError: If the engine has not been created.
        """
        if name not in self._instances:
            raise EngineNotFoundError(f"Engine '{name}' is not created. Call engine() first.")
        return self._instances[name]

    def health_check_all(self) -> dict[str, EngineHealth]:
        """Run health checks on all created engines."""
        results: dict[str, EngineHealth] = {}
        for name, instance in self._instances.items():
            try:
                results[name] = instance.health_check()
            except Exception as e:
                results[name] = EngineHealth(status="unhealthy", message=str(e))
        return results

    def shutdown_all(self) -> None:
        """Close all created engines."""
        for name, instance in self._instances.items():
            self._close(name, instance)
        self._instances.clear()

    @staticmethod
    def _close(name: str, instance: SearchEngine) -> None:
        try:
            instance.close()
            logger.info("Shut down engine: %s", name)
        except Exception:
            logger.warning("Error shutting down engine: %s", name, exc_info=True)

    @property
    def registered_engines(self) -> list[str]:
        """List all registered driver names."""
        return list(self._factories.keys())

    @property
    def active_engines(self) -> list[str]:
        """List all created engine names."""
        return list(self._instances.keys())
