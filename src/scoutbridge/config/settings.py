"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. YAML config file (if specified)
  2. Environment variables (SCOUTBRIDGE_ prefix)
  3. Default values
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings


class OpenSearchSettings(BaseModel):
    """Connection and indexing options for the OpenSearch/Elasticsearch driver."""

    hosts: list[str] = Field(default_factory=lambda: ["http://localhost:9200"], description="Backend host URLs")
    index: str = Field(default="scout", description="Index that stores every searchable record")
    soft_delete: bool = Field(default=False, description="Keep soft-deleted records in the index with a marker")
    include_type: bool = Field(default=True, description="Send the record type label as _type in bulk directives")
    chunk_size: int = Field(default=500, ge=1, description="Records per bulk delete when flushing a record type")
    username: str | None = Field(default=None, description="HTTP basic-auth username")
    password: str | None = Field(default=None, description="HTTP basic-auth password")
    verify_certs: bool = Field(default=True, description="Verify TLS certificates")
    extra: dict[str, Any] = Field(default_factory=dict, description="Keyword arguments forwarded to the client")

    @field_validator("hosts", mode="before")
    @classmethod
    def _parse_hosts(cls, v: Any) -> list[str]:
        """Parse hosts from JSON string (env var) or list."""
        if isinstance(v, str):
            import json

            try:
                parsed = json.loads(v)
                if isinstance(parsed, list):
                    return [str(h) for h in parsed]
            except (json.JSONDecodeError, TypeError):
                pass
            # Single host as plain string
            return [v] if v else []
        return list(v)


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")


class Settings(BaseSettings):
    """Root settings.

    Configuration is loaded from environment variables with the SCOUTBRIDGE_ prefix.
    Nested settings use double underscores: SCOUTBRIDGE_OPENSEARCH__INDEX=products

    Example:
        SCOUTBRIDGE_DRIVER=elasticsearch
        SCOUTBRIDGE_OPENSEARCH__HOSTS='["http://es-1:9200", "http://es-2:9200"]'
        SCOUTBRIDGE_OPENSEARCH__SOFT_DELETE=true
    """

    model_config = {
        "env_prefix": "SCOUTBRIDGE_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    driver: str = Field(default="opensearch", description="Name of the default engine driver")

    opensearch: OpenSearchSettings = Field(default_factory=OpenSearchSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Keys present in the file override both defaults and environment
        variables; anything the file omits is still read from the environment.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.
        """
        import yaml  # type: ignore[import-untyped]

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)
