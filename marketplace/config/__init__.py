"""Configuration: settings and logging."""

from marketplace.config.settings import Config

__all__ = ["Config"]
