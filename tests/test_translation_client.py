"""Unit tests for TranslationClient."""

import asyncio

import httpx
import pytest

from dualtext.config import PLACEHOLDER_API_KEY, TranslatorSettings
from dualtext.translator import (
    FailureKind,
    HttpError,
    MalformedResponse,
    MissingCredential,
    NetworkError,
    TranslationClient,
    TranslationRequest,
    TranslationResult,
)
from dualtext.utils.http_client import HTTPClient

from .conftest import RecordingTransport, json_response


ENDPOINT = "https://api.example-translate.test/v2/translate"


def make_client(transport, **kwargs):
    return TranslationClient(
        http_client=HTTPClient(transport=transport),
        endpoint_url=ENDPOINT,
        **kwargs,
    )


def make_request(text="Hello", credential="real-key-123"):
    return TranslationRequest(text=text, source_lang="en", target_lang="fr", credential=credential)


def translate(client, request):
    return asyncio.run(client.translate(request))


class TestCredentialCheck:
    """Requests without a usable credential never reach the network."""

    @pytest.mark.parametrize("credential", ["", "   ", PLACEHOLDER_API_KEY, f" {PLACEHOLDER_API_KEY} "])
    def test_unusable_credential_returns_missing_credential(self, bonjour_transport, credential):
        client = make_client(bonjour_transport)

        outcome = translate(client, make_request(credential=credential))

        assert outcome == MissingCredential()
        assert outcome.kind is FailureKind.MISSING_CREDENTIAL
        assert bonjour_transport.requests == []


class TestRequestConstruction:
    """Tests for the outbound request."""

    @pytest.mark.parametrize("text", [
        "Hello",
        "Hello & goodbye = ?",
        "100% sure + more",
        "café, naïve, 日本語",
        "line one\nline two\ttabbed",
        "a#fragment/and?query",
    ])
    def test_text_parameter_round_trips(self, bonjour_transport, text):
        client = make_client(bonjour_transport)

        translate(client, make_request(text=text))

        assert len(bonjour_transport.requests) == 1
        assert bonjour_transport.requests[0].url.params["text"] == text

    def test_get_request_carries_query_parameters(self, bonjour_transport):
        client = make_client(bonjour_transport)

        translate(client, make_request())

        sent = bonjour_transport.requests[0]
        assert sent.method == "GET"
        assert sent.url.scheme == "https"
        assert sent.url.path == "/v2/translate"
        assert sent.url.params["auth_key"] == "real-key-123"
        assert sent.url.params["source_lang"] == "en"
        assert sent.url.params["target_lang"] == "fr"

    def test_credential_in_header_keeps_it_out_of_url(self, bonjour_transport):
        client = make_client(bonjour_transport, credential_in_header=True)

        outcome = translate(client, make_request(text="Hello & bye"))

        sent = bonjour_transport.requests[0]
        assert sent.method == "POST"
        assert "auth_key" not in sent.url.params
        assert sent.headers["Authorization"] == "DeepL-Auth-Key real-key-123"
        assert b"text=Hello+%26+bye" in sent.content
        assert outcome == TranslationResult(original_text="Hello & bye", translated_text="Bonjour")

    def test_user_agent_is_sent(self, bonjour_transport):
        client = make_client(bonjour_transport)

        translate(client, make_request())

        assert bonjour_transport.requests[0].headers["User-Agent"].startswith("DualText-Translator/")


class TestTransportFailures:
    """Transport errors are classified, never turned into results."""

    def test_connection_error_returns_network_error(self):
        def handler(request):
            raise httpx.ConnectError("Connection refused", request=request)

        outcome = translate(make_client(RecordingTransport(handler)), make_request())

        assert isinstance(outcome, NetworkError)
        assert not outcome.ok
        assert not outcome.timed_out
        assert "Connection refused" in outcome.reason

    def test_timeout_returns_network_error_flagged_as_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        outcome = translate(make_client(RecordingTransport(handler)), make_request())

        assert isinstance(outcome, NetworkError)
        assert outcome.timed_out
        assert "timed out" in outcome.notice

    def test_later_call_succeeds_after_network_error(self):
        calls = []

        def handler(request):
            calls.append(request)
            if len(calls) == 1:
                raise httpx.ConnectError("DNS failure", request=request)
            return json_response({"translations": [{"text": "Bonjour"}]})(request)

        client = make_client(RecordingTransport(handler))

        first = translate(client, make_request())
        second = translate(client, make_request())

        assert isinstance(first, NetworkError)
        assert second == TranslationResult(original_text="Hello", translated_text="Bonjour")
        assert len(calls) == 2


class TestHttpStatus:
    """Non-success statuses map to HttpError without retries."""

    @pytest.mark.parametrize("status_code, status_text", [
        (401, "Unauthorized"),
        (403, "Forbidden"),
        (429, "Too Many Requests"),
        (456, ""),
        (500, "Internal Server Error"),
        (503, "Service Unavailable"),
    ])
    def test_non_success_status_returns_http_error(self, status_code, status_text):
        transport = RecordingTransport(json_response({"message": "nope"}, status_code=status_code))

        outcome = translate(make_client(transport), make_request())

        assert outcome == HttpError(status_code=status_code, status_text=status_text)
        assert len(transport.requests) == 1

    def test_unauthorized_notice_mentions_key(self):
        transport = RecordingTransport(json_response({}, status_code=401))

        outcome = translate(make_client(transport), make_request())

        assert outcome == HttpError(401, "Unauthorized")
        assert "API key rejected" in outcome.notice


class TestResponseParsing:
    """Tests for extracting the translated text."""

    def test_well_formed_response_returns_result(self, bonjour_transport):
        outcome = translate(make_client(bonjour_transport), make_request(text="Hello"))

        assert outcome == TranslationResult(original_text="Hello", translated_text="Bonjour")
        assert outcome.ok

    def test_only_first_translation_is_used(self):
        transport = RecordingTransport(json_response({"translations": [{"text": "Salut"}, {"text": "Bonjour"}]}))

        outcome = translate(make_client(transport), make_request())

        assert outcome.translated_text == "Salut"

    def test_extra_fields_are_ignored(self):
        payload = {"translations": [{"detected_source_language": "EN", "text": "Bonjour"}]}
        transport = RecordingTransport(json_response(payload))

        outcome = translate(make_client(transport), make_request())

        assert outcome == TranslationResult(original_text="Hello", translated_text="Bonjour")

    def test_empty_translations_is_malformed_not_placeholder(self):
        transport = RecordingTransport(json_response({"translations": []}))

        outcome = translate(make_client(transport), make_request())

        assert isinstance(outcome, MalformedResponse)
        assert not isinstance(outcome, TranslationResult)
        assert "Translation failed" not in repr(outcome)
        assert "empty" in outcome.reason

    @pytest.mark.parametrize("payload, field", [
        ({}, "translations"),
        ({"translations": None}, "translations"),
        ({"translations": "Bonjour"}, "translations"),
        ({"translations": ["Bonjour"]}, "translations[0]"),
        ({"translations": [{}]}, "translations[0].text"),
        ({"translations": [{"text": None}]}, "translations[0].text"),
        ({"translations": [{"text": 42}]}, "translations[0].text"),
        (["Bonjour"], "JSON object"),
    ])
    def test_partial_payload_names_missing_field(self, payload, field):
        transport = RecordingTransport(json_response(payload))

        outcome = translate(make_client(transport), make_request())

        assert isinstance(outcome, MalformedResponse)
        assert outcome.kind is FailureKind.MALFORMED_RESPONSE
        assert field in outcome.reason

    def test_non_json_body_is_malformed(self):
        def handler(request):
            return httpx.Response(200, content=b"<html>gateway</html>")

        outcome = translate(make_client(RecordingTransport(handler)), make_request())

        assert isinstance(outcome, MalformedResponse)
        assert "JSON" in outcome.reason


class TestRequestValue:
    """Tests for TranslationRequest itself."""

    def test_repr_hides_credential_and_text(self):
        request = make_request(text="secret text", credential="secret-key")

        assert "secret-key" not in repr(request)
        assert "secret text" not in repr(request)

    def test_from_settings_copies_languages_and_key(self):
        settings = TranslatorSettings(source_language="de", target_language="en", api_key="k-9")

        request = TranslationRequest.from_settings("Hallo", settings)

        assert request == TranslationRequest(text="Hallo", source_lang="de", target_lang="en", credential="k-9")
        assert request.has_usable_credential()

    def test_from_settings_language_overrides(self):
        settings = TranslatorSettings(api_key="k-9")

        request = TranslationRequest.from_settings("Hello", settings, target_language="ja")

        assert request.source_lang == "en"
        assert request.target_lang == "ja"
