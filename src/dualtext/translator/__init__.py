"""
Translation pipeline for DualText Translator.
Turns a text selection and language settings into a translation or a classified failure.
"""

from .base import (
    FailureKind,
    HttpError,
    MalformedResponse,
    MissingCredential,
    NetworkError,
    TranslationFailure,
    TranslationOutcome,
    TranslationRequest,
    TranslationResult,
    is_blank,
)
from .client import TranslationClient

__all__ = [
    "FailureKind",
    "HttpError",
    "MalformedResponse",
    "MissingCredential",
    "NetworkError",
    "TranslationClient",
    "TranslationFailure",
    "TranslationOutcome",
    "TranslationRequest",
    "TranslationResult",
    "is_blank",
]
