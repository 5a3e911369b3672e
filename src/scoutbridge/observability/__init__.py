"""Observability — structured logging setup."""

from scoutbridge.observability.logging import setup_logging

__all__ = ["setup_logging"]
