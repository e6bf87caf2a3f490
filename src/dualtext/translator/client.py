"""
Translation client for the DeepL-style translation endpoint.
"""

from typing import Any, Optional

import httpx
import structlog

from ..config import DEFAULT_ENDPOINT_URL
from ..utils.http_client import HTTPClient
from .base import (
    HttpError,
    MalformedResponse,
    MissingCredential,
    NetworkError,
    TranslationOutcome,
    TranslationRequest,
    TranslationResult,
)

logger = structlog.get_logger(__name__)


class TranslationClient:
    """Performs one translation request per call and classifies the outcome.

    ``translate`` never raises for expected failures; it returns a
    ``TranslationFailure`` value instead.
    """

    def __init__(
        self,
        http_client: Optional[HTTPClient] = None,
        endpoint_url: str = DEFAULT_ENDPOINT_URL,
        credential_in_header: bool = False,
    ):
        """
        Initialize translation client.

        Args:
            http_client: HTTP client used for the outbound request
            endpoint_url: Translation endpoint URL
            credential_in_header: Send the credential in an Authorization header
                and the text in a form body instead of the query string
        """
        self.http_client = http_client or HTTPClient()
        self.endpoint_url = endpoint_url
        self.credential_in_header = credential_in_header

    @classmethod
    def from_config(cls, config: Any, transport: Optional[httpx.AsyncBaseTransport] = None) -> "TranslationClient":
        """Create a client from application configuration."""
        return cls(
            http_client=HTTPClient.from_config(config, transport=transport),
            endpoint_url=config.endpoint_url,
            credential_in_header=config.credential_in_header,
        )

    async def translate(self, request: TranslationRequest) -> TranslationOutcome:
        """
        Translate the request text.

        Args:
            request: Text, languages and credential for this call

        Returns:
            TranslationResult on success, otherwise a TranslationFailure
        """
        if not request.has_usable_credential():
            logger.debug("Translation skipped, no usable credential")
            return MissingCredential()

        try:
            response = await self._send(request)
        except httpx.TimeoutException as e:
            return NetworkError(reason=f"{type(e).__name__}: {e}", timed_out=True)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            return NetworkError(reason=f"{type(e).__name__}: {e}")

        if not response.is_success:
            logger.debug("Translation rejected", status_code=response.status_code)
            return HttpError(
                status_code=response.status_code,
                status_text=response.reason_phrase,
            )

        return self._parse_response(request, response)

    async def _send(self, request: TranslationRequest) -> httpx.Response:
        """Issue the outbound request."""
        params = {
            "text": request.text,
            "source_lang": request.source_lang,
            "target_lang": request.target_lang,
        }

        if self.credential_in_header:
            return await self.http_client.post(
                self.endpoint_url,
                data=params,
                headers={"Authorization": f"DeepL-Auth-Key {request.credential.strip()}"},
            )

        # Query strings are commonly logged by proxies and servers.
        return await self.http_client.get(
            self.endpoint_url,
            params={"auth_key": request.credential.strip(), **params},
        )

    def _parse_response(self, request: TranslationRequest, response: httpx.Response) -> TranslationOutcome:
        """Extract the first translation from the response body."""
        try:
            data = response.json()
        except ValueError as e:
            return MalformedResponse(reason=f"response body is not valid JSON: {e}")

        text = self._extract_text(data)
        if isinstance(text, MalformedResponse):
            logger.debug("Translation response malformed", reason=text.reason)
            return text

        logger.debug("Translation completed", translated_length=len(text))
        return TranslationResult(original_text=request.text, translated_text=text)

    @staticmethod
    def _extract_text(data: Any) -> Any:
        """Return ``translations[0].text`` or a MalformedResponse naming the gap."""
        if not isinstance(data, dict):
            return MalformedResponse(reason=f"expected a JSON object, got {type(data).__name__}")

        translations = data.get("translations")
        if translations is None:
            return MalformedResponse(reason="missing field 'translations'")
        if not isinstance(translations, list):
            return MalformedResponse(reason=f"field 'translations' is {type(translations).__name__}, expected list")
        if not translations:
            return MalformedResponse(reason="field 'translations' is empty")

        first = translations[0]
        if not isinstance(first, dict):
            return MalformedResponse(reason=f"translations[0] is {type(first).__name__}, expected object")

        text = first.get("text")
        if text is None:
            return MalformedResponse(reason="missing field 'translations[0].text'")
        if not isinstance(text, str):
            return MalformedResponse(reason=f"field 'translations[0].text' is {type(text).__name__}, expected string")

        return text
