"""
Base storage interface for translator settings.
"""

import abc
from typing import Any, Dict, Optional

from pydantic import ValidationError

from ..config import TranslatorSettings


class SettingsStoreError(Exception):
    """Base exception for settings store errors."""
    pass


class SettingsLoadError(SettingsStoreError):
    """Stored settings could not be read or are invalid."""
    pass


class BaseSettingsStore(abc.ABC):
    """Base class for settings storage implementations.

    Stored values are always merged over the defaults on load, so a store
    holding only some keys (or nothing at all) still yields full settings.
    """

    async def initialize(self) -> None:
        """Initialize the store."""
        pass

    async def shutdown(self) -> None:
        """Shutdown the store."""
        pass

    @abc.abstractmethod
    async def load_data(self) -> Optional[Dict[str, Any]]:
        """
        Read raw stored settings.

        Returns:
            Stored key/value pairs, or None if nothing was saved yet
        """
        pass

    @abc.abstractmethod
    async def save_data(self, data: Dict[str, Any]) -> None:
        """
        Persist raw settings.

        Args:
            data: Settings in their aliased on-disk form
        """
        pass

    async def load(self) -> TranslatorSettings:
        """
        Load settings, merged over the defaults.

        Raises:
            SettingsLoadError: If stored values are invalid
        """
        data = await self.load_data()
        if data is not None and not isinstance(data, dict):
            raise SettingsLoadError(f"Stored settings must be a mapping, got {type(data).__name__}")

        try:
            return TranslatorSettings.merged_over_defaults(data)
        except ValidationError as e:
            raise SettingsLoadError(f"Invalid stored settings: {e}") from e

    async def save(self, settings: TranslatorSettings) -> None:
        """Persist settings."""
        await self.save_data(settings.to_dict())
