"""Configuration module -- exports Settings and load_settings."""

from feedback_collector.config.loader import load_settings
from feedback_collector.config.settings import INSECURE_DEFAULT_PASSWORD, Settings

__all__ = ["INSECURE_DEFAULT_PASSWORD", "Settings", "load_settings"]
