"""
In-memory settings storage for embedding hosts and tests.
"""

from typing import Any, Dict, Optional

from .base import BaseSettingsStore


class InMemorySettingsStore(BaseSettingsStore):
    """Dict-backed settings store."""

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        self._data = dict(data) if data is not None else None

    async def load_data(self) -> Optional[Dict[str, Any]]:
        return dict(self._data) if self._data is not None else None

    async def save_data(self, data: Dict[str, Any]) -> None:
        self._data = dict(data)
