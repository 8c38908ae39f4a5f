"""
Configuration module for pipebind.

Provides the engine settings model and its environment loader.
"""

from .schemas import EngineSettings
from .settings import get_settings, load_settings

__all__ = [
    "EngineSettings",
    "get_settings",
    "load_settings",
]
