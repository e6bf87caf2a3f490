"""
DualText Translator - translate a text selection and show it beside the original.

The core is ``TranslationClient``: it turns text, language codes and a
credential into a single request against a DeepL-style endpoint and returns
either a ``TranslationResult`` or a classified ``TranslationFailure``.
"""

__version__ = "1.0.0"

from .config import AppConfig, TranslatorSettings, DEFAULT_SETTINGS, PLACEHOLDER_API_KEY
from .translator import (
    FailureKind,
    HttpError,
    MalformedResponse,
    MissingCredential,
    NetworkError,
    TranslationClient,
    TranslationFailure,
    TranslationRequest,
    TranslationResult,
)

__all__ = [
    "AppConfig",
    "TranslatorSettings",
    "DEFAULT_SETTINGS",
    "PLACEHOLDER_API_KEY",
    "FailureKind",
    "HttpError",
    "MalformedResponse",
    "MissingCredential",
    "NetworkError",
    "TranslationClient",
    "TranslationFailure",
    "TranslationRequest",
    "TranslationResult",
]
