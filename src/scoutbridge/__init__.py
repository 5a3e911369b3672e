"""scoutbridge — Full-text search engine connector for searchable host records.

Quick start::

    from scoutbridge import EngineRegistry, SearchQuery, Settings
    from scoutbridge.engines import opensearch

    registry = EngineRegistry(Settings())
    opensearch.register(registry)
    engine = registry.engine()

    engine.index(posts)
    hits = engine.get(SearchQuery.for_type(Post, "solar").where("status", "published"))
"""

from scoutbridge.config.settings import Settings
from scoutbridge.engines.base import EngineRegistry, SearchEngine
from scoutbridge.models import SearchQuery, Searchable, SoftDeletes

__version__ = "0.1.0"

__all__ = ["EngineRegistry", "SearchEngine", "SearchQuery", "Searchable", "Settings", "SoftDeletes", "__version__"]
