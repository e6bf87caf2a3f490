"""
Value types for the translation pipeline.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, Optional, Union

from ..config import PLACEHOLDER_API_KEY, TranslatorSettings


class FailureKind(Enum):
    """Failure kind enumeration."""
    MISSING_CREDENTIAL = "missing_credential"
    NETWORK_ERROR = "network_error"
    HTTP_ERROR = "http_error"
    MALFORMED_RESPONSE = "malformed_response"


@dataclass(frozen=True)
class TranslationRequest:
    """A single translation request.

    The caller is expected to reject blank text before building one.
    """
    text: str
    source_lang: str
    target_lang: str
    credential: str

    @classmethod
    def from_settings(
        cls,
        text: str,
        settings: TranslatorSettings,
        source_language: Optional[str] = None,
        target_language: Optional[str] = None,
    ) -> "TranslationRequest":
        """Create a request for ``text`` using the given settings, optionally overriding languages."""
        return cls(
            text=text,
            source_lang=source_language or settings.source_language,
            target_lang=target_language or settings.target_language,
            credential=settings.api_key,
        )

    def has_usable_credential(self) -> bool:
        """True unless the credential is blank or the shipped placeholder."""
        credential = (self.credential or "").strip()
        return bool(credential) and credential != PLACEHOLDER_API_KEY

    def __repr__(self) -> str:
        # Keep the credential out of logs and tracebacks
        return (
            f"TranslationRequest(text_length={len(self.text)}, "
            f"source_lang={self.source_lang!r}, target_lang={self.target_lang!r})"
        )


def is_blank(text: Optional[str]) -> bool:
    """True if there is nothing to translate."""
    return not text or not text.strip()


@dataclass(frozen=True)
class TranslationResult:
    """Result of a successful translation."""
    original_text: str
    translated_text: str

    ok = True

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "original": self.original_text,
            "translated": self.translated_text,
        }


@dataclass(frozen=True)
class TranslationFailure:
    """Base class for classified translation failures."""

    ok = False
    kind: ClassVar[Optional[FailureKind]] = None

    @property
    def notice(self) -> str:
        """Short message suitable for a transient user notice."""
        return "Failed to fetch translation."

    @property
    def detail(self) -> Optional[str]:
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the error envelope used by the HTTP surface."""
        return {
            "message": self.notice,
            "type": self.kind.value,
            "code": self.kind.value,
            "detail": self.detail,
        }


@dataclass(frozen=True)
class MissingCredential(TranslationFailure):
    """No usable credential was configured; nothing was sent."""

    kind = FailureKind.MISSING_CREDENTIAL

    @property
    def notice(self) -> str:
        return "API key not configured or is a placeholder!"


@dataclass(frozen=True)
class NetworkError(TranslationFailure):
    """The request never produced an HTTP response."""
    reason: str
    timed_out: bool = False

    kind = FailureKind.NETWORK_ERROR

    @property
    def notice(self) -> str:
        if self.timed_out:
            return "Failed to fetch translation: the request timed out."
        return "Failed to fetch translation: network error."

    @property
    def detail(self) -> Optional[str]:
        return self.reason


@dataclass(frozen=True)
class HttpError(TranslationFailure):
    """The endpoint answered with a non-success status."""
    status_code: int
    status_text: str

    kind = FailureKind.HTTP_ERROR

    @property
    def notice(self) -> str:
        if self.status_code in (401, 403):
            return f"Failed to fetch translation: API key rejected ({self.status_code} {self.status_text})."
        return f"Failed to fetch translation: API error {self.status_code} {self.status_text}."

    @property
    def detail(self) -> Optional[str]:
        return f"{self.status_code} {self.status_text}"


@dataclass(frozen=True)
class MalformedResponse(TranslationFailure):
    """The endpoint answered, but the payload had no usable translation."""
    reason: str

    kind = FailureKind.MALFORMED_RESPONSE

    @property
    def notice(self) -> str:
        return "Failed to fetch translation: unexpected response from the translation service."

    @property
    def detail(self) -> Optional[str]:
        return self.reason


TranslationOutcome = Union[TranslationResult, TranslationFailure]
