"""
Storage Layer.

This package handles all data persistence: the configuration file and the
counter file that records retrieval progress.
"""

from .config_manager import ConfigManager
from .counter import CounterStore

__all__ = ["ConfigManager", "CounterStore"]
