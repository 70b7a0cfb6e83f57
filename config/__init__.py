"""Configuration module for the PSO demo."""

from .settings import Settings, SwarmSettings, RunSettings, get_settings

__all__ = ["Settings", "SwarmSettings", "RunSettings", "get_settings"]
