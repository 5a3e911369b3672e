"""Configuration — settings loaded from the environment or a YAML file."""

from scoutbridge.config.settings import ObservabilitySettings, OpenSearchSettings, Settings

__all__ = ["ObservabilitySettings", "OpenSearchSettings", "Settings"]
