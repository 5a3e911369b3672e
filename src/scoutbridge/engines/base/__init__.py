"""Base engine interface — Abstract classes for search engine drivers."""

from scoutbridge.engines.base.engine import EngineHealth, RawResult, RecordLoader, SearchEngine
from scoutbridge.engines.base.registry import EngineRegistry

__all__ = ["EngineHealth", "EngineRegistry", "RawResult", "RecordLoader", "SearchEngine"]
