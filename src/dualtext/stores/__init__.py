"""
Settings stores for DualText Translator.
"""

from .base import BaseSettingsStore, SettingsStoreError, SettingsLoadError
from .file_store import FileSettingsStore
from .memory_store import InMemorySettingsStore

__all__ = [
    "BaseSettingsStore",
    "SettingsStoreError",
    "SettingsLoadError",
    "FileSettingsStore",
    "InMemorySettingsStore",
]
