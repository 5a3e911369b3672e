"""OpenSearch provider — Builds the client and registers the driver.

Install the client with::

    pip install opensearch-py
"""

from __future__ import annotations

import logging
from typing import Any

from scoutbridge.config.settings import OpenSearchSettings, Settings
from scoutbridge.engines.base.exceptions import ConfigurationError
from scoutbridge.engines.base.registry import EngineRegistry
from scoutbridge.engines.opensearch.engine import OpenSearchEngine

logger = logging.getLogger(__name__)

DRIVER_NAMES = ("opensearch", "elasticsearch")


def build_client(settings: OpenSearchSettings) -> Any:
    """Create an ``opensearchpy.OpenSearch`` client from settings.

    Raises:
        ConfigurationError: If ``opensearch-py`` is not installed.
    """
    try:
        from opensearchpy import OpenSearch
    except ImportError as e:
        raise ConfigurationError("opensearch-py package is required.  Install with: pip install opensearch-py") from e

    client_kwargs: dict[str, Any] = {
        "hosts": settings.hosts,
        "verify_certs": settings.verify_certs,
        "ssl_show_warn": False,
    }
    if settings.username and settings.password:
        client_kwargs["http_auth"] = (settings.username, settings.password)

    client_kwargs.update(settings.extra)

    logger.info("Creating OpenSearch client for %s", ", ".join(settings.hosts))
    return OpenSearch(**client_kwargs)


def create_engine(settings: Settings) -> OpenSearchEngine:
    """Engine factory used by the registry."""
    config = settings.opensearch
    return OpenSearchEngine(
        build_client(config),
        config.index,
        soft_delete=config.soft_delete,
        include_type=config.include_type,
        chunk_size=config.chunk_size,
    )


def register(registry: EngineRegistry) -> None:
    """Register the driver under every name it answers to."""
    for name in DRIVER_NAMES:
        registry.register(name, create_engine)
