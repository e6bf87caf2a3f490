"""
API routes for DualText Translator.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from ..plugin import DualTextTranslator, NO_SELECTION_NOTICE
from ..stores import SettingsStoreError
from ..translator import FailureKind, NetworkError, TranslationFailure, is_blank

router = APIRouter()


class TranslateBody(BaseModel):
    """Body of a translate request."""
    model_config = ConfigDict(populate_by_name=True)

    text: str = ""
    source_language: Optional[str] = Field(default=None, alias="source-language")
    target_language: Optional[str] = Field(default=None, alias="target-language")


class SettingsBody(BaseModel):
    """Partial settings update."""
    model_config = ConfigDict(populate_by_name=True)

    source_language: Optional[str] = Field(default=None, alias="source-language")
    target_language: Optional[str] = Field(default=None, alias="target-language")
    api_key: Optional[str] = Field(default=None, alias="api-key")


async def get_translator(request: Request) -> DualTextTranslator:
    """Get translator plugin from app state."""
    return request.app.state.translator


def error_response(status_code: int, message: str, error_type: str, detail: Optional[str] = None) -> JSONResponse:
    """Build the standard error envelope."""
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "message": message,
                "type": error_type,
                "code": error_type,
                "detail": detail,
            }
        },
    )


def failure_status(failure: TranslationFailure) -> int:
    """Map a translation failure to the HTTP status returned to our caller."""
    if failure.kind is FailureKind.MISSING_CREDENTIAL:
        return status.HTTP_400_BAD_REQUEST
    if isinstance(failure, NetworkError) and failure.timed_out:
        return status.HTTP_504_GATEWAY_TIMEOUT
    return status.HTTP_502_BAD_GATEWAY


@router.post("/translate")
async def translate(
    body: TranslateBody,
    translator: DualTextTranslator = Depends(get_translator),
):
    """
    Translate a text selection.

    Languages default to the stored settings.
    """
    if is_blank(body.text):
        return error_response(status.HTTP_400_BAD_REQUEST, NO_SELECTION_NOTICE, "empty_text")

    outcome = await translator.translate_text(
        body.text,
        source_language=body.source_language,
        target_language=body.target_language,
    )

    if isinstance(outcome, TranslationFailure):
        envelope = outcome.to_dict()
        return error_response(
            failure_status(outcome),
            envelope["message"],
            envelope["type"],
            envelope["detail"],
        )

    return outcome.to_dict()


@router.get("/settings")
async def get_settings(translator: DualTextTranslator = Depends(get_translator)):
    """Current settings with the credential masked."""
    return translator.settings.masked()


@router.put("/settings")
async def update_settings(
    body: SettingsBody,
    translator: DualTextTranslator = Depends(get_translator),
):
    """Update and persist settings."""
    try:
        settings = await translator.update_settings(
            source_language=body.source_language,
            target_language=body.target_language,
            api_key=body.api_key,
        )
    except (SettingsStoreError, OSError) as e:
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, f"Failed to save settings: {e}", "settings_error")

    return settings.masked()
