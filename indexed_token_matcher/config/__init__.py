"""Configuration management for the indexed token matcher."""

from .settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
