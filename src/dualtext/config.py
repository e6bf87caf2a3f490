"""
Configuration management for DualText Translator.
Uses Pydantic for type-safe configuration with YAML file support.
"""

import os
import sys
from pathlib import Path
from typing import Dict, List, Optional, Any
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import yaml


# Shipped default credential; a request carrying it is never sent.
PLACEHOLDER_API_KEY = "auth-placeholder-deepl-zx9y8w7v6u5t4s3r2q1p0n"

DEFAULT_ENDPOINT_URL = "https://api.deepl.com/v2/translate"


class TranslatorSettings(BaseModel):
    """User-facing translation settings (languages and credential)."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    source_language: str = Field(default="en", alias="source-language")
    target_language: str = Field(default="fr", alias="target-language")
    api_key: str = Field(default=PLACEHOLDER_API_KEY, alias="api-key")

    @field_validator("source_language", "target_language", "api_key", mode="before")
    @classmethod
    def strip_value(cls, v: Any) -> Any:
        """Strip string values; unquoted numeric YAML scalars become strings."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        if isinstance(v, str):
            return v.strip()
        return v

    @classmethod
    def merged_over_defaults(cls, data: Optional[Dict[str, Any]]) -> "TranslatorSettings":
        """Build settings from stored data, falling back to defaults per key."""
        values = DEFAULT_SETTINGS.to_dict()
        for key, value in (data or {}).items():
            # Non-string keys cannot name a setting
            if value is None or not isinstance(key, str):
                continue
            values[_SETTINGS_KEYS.get(key, key)] = value
        return cls(**values)

    def is_configured(self) -> bool:
        """True if a real credential has been set."""
        return bool(self.api_key) and self.api_key != PLACEHOLDER_API_KEY

    def to_dict(self) -> Dict[str, str]:
        """Convert to the on-disk (aliased) representation."""
        return self.model_dump(by_alias=True)

    def masked(self) -> Dict[str, Any]:
        """Settings for display, with the credential hidden."""
        data = self.to_dict()
        if not self.is_configured():
            data["api-key"] = None
        else:
            data["api-key"] = f"{self.api_key[:4]}...{self.api_key[-4:]}" if len(self.api_key) > 8 else "****"
        data["configured"] = self.is_configured()
        return data


# Python field names and camelCase names from older settings files.
_SETTINGS_KEYS = {
    "source_language": "source-language",
    "target_language": "target-language",
    "api_key": "api-key",
    "sourceLanguage": "source-language",
    "targetLanguage": "target-language",
    "apiKey": "api-key",
}

DEFAULT_SETTINGS = TranslatorSettings()


class AppConfig(BaseSettings):
    """Main application configuration."""
    model_config = SettingsConfigDict(
        env_prefix="DUALTEXT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Server configuration
    host: str = "127.0.0.1"
    port: int = 8318
    debug: bool = False

    # Translation endpoint
    endpoint_url: str = Field(default=DEFAULT_ENDPOINT_URL, alias="endpoint-url")
    request_timeout: float = Field(default=10.0, alias="request-timeout")
    proxy_url: Optional[str] = Field(default=None, alias="proxy-url")
    credential_in_header: bool = Field(default=False, alias="credential-in-header")

    # Settings persistence
    settings_file: str = Field(default="~/.dualtext/settings.yaml", alias="settings-file")

    @field_validator("settings_file", mode="before")
    @classmethod
    def expand_settings_file(cls, v: str) -> str:
        """Expand ~ in settings file path."""
        if isinstance(v, str) and v.startswith("~"):
            return os.path.expanduser(v)
        return v

    @classmethod
    def from_file(cls, config_file: str) -> "AppConfig":
        """Load configuration from a YAML file."""
        config_path = Path(config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_file}")

        with open(config_path, "r", encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f)

        if not yaml_config:
            yaml_config = {}

        return cls(**yaml_config)

    def save_to_file(self, config_file: str) -> None:
        """Save configuration to a YAML file."""
        config_path = Path(config_file)

        config_dict = self.model_dump(by_alias=True, exclude_none=True)

        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w", encoding="utf-8") as f:
            yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False)

    def validate_config(self) -> List[str]:
        """Validate configuration and return list of errors."""
        errors = []

        if not (1 <= self.port <= 65535):
            errors.append(f"Port {self.port} is out of valid range (1-65535)")

        parsed = urlparse(self.endpoint_url)
        if parsed.scheme != "https" or not parsed.hostname:
            errors.append(f"Endpoint URL must be an https URL: {self.endpoint_url}")

        if self.request_timeout <= 0:
            errors.append(f"Request timeout must be positive, got {self.request_timeout}")

        return errors


# Global configuration instance
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        raise RuntimeError("Configuration not initialized. Call load_config() first.")
    return _config


def load_config(config_file: Optional[str] = None) -> AppConfig:
    """Load configuration from file or environment."""
    global _config

    if config_file:
        _config = AppConfig.from_file(config_file)
    else:
        config_locations = [
            "dualtext.yaml",
            "config/dualtext.yaml",
            os.path.expanduser("~/.dualtext/config.yaml"),
        ]

        for location in config_locations:
            if Path(location).exists():
                _config = AppConfig.from_file(location)
                break
        else:
            _config = AppConfig()

    errors = _config.validate_config()
    if errors:
        print("Configuration errors:", file=sys.stderr)
        for error in errors:
            print(f"  - {error}", file=sys.stderr)

    return _config


def reload_config(config_file: Optional[str] = None) -> AppConfig:
    """Reload configuration from file."""
    global _config
    _config = None
    return load_config(config_file)
