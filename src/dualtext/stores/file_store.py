"""
File-based settings storage implementation.
Stores settings as a YAML document on disk.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

import aiofiles
import aiofiles.os
import structlog
import yaml

from .base import BaseSettingsStore, SettingsLoadError

logger = structlog.get_logger(__name__)


class FileSettingsStore(BaseSettingsStore):
    """YAML file settings storage."""

    def __init__(self, path: Union[str, Path]):
        """
        Initialize file store.

        Args:
            path: Settings file location (``~`` is expanded)
        """
        self.path = Path(path).expanduser()

    @classmethod
    def from_config(cls, config: Any) -> "FileSettingsStore":
        """Create a store at the configured settings file."""
        return cls(getattr(config, "settings_file", "~/.dualtext/settings.yaml"))

    async def initialize(self) -> None:
        """Create the settings directory if needed."""
        await aiofiles.os.makedirs(self.path.parent, exist_ok=True)

    async def load_data(self) -> Optional[Dict[str, Any]]:
        """
        Read the settings file.

        Returns:
            Parsed YAML document, or None if the file does not exist yet

        Raises:
            SettingsLoadError: If the file cannot be read or parsed
        """
        if not await aiofiles.os.path.exists(self.path):
            logger.debug("Settings file not found, using defaults", path=str(self.path))
            return None

        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                content = await f.read()
        except OSError as e:
            raise SettingsLoadError(f"Failed to read settings file {self.path}: {e}") from e

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise SettingsLoadError(f"Invalid YAML in settings file {self.path}: {e}") from e

        return data

    async def save_data(self, data: Dict[str, Any]) -> None:
        """Write settings to the file, creating its directory if needed."""
        await aiofiles.os.makedirs(self.path.parent, exist_ok=True)

        async with aiofiles.open(self.path, "w", encoding="utf-8") as f:
            await f.write(yaml.safe_dump(data, default_flow_style=False, sort_keys=False))

        logger.info("Settings saved", path=str(self.path))
