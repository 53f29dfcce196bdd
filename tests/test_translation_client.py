from __future__ import annotations

from typing import Any

import pytest
import requests

from config import EnrichmentConfig
from core.errors import TranslationError
from integrations.translation import TranslationClient

CONFIG = EnrichmentConfig(translation_api_url="https://mt.example/api", translation_api_key="mt-key")


class FakeResponse:
    def __init__(self, payload: Any, status_code: int = 200) -> None:
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"status {self.status_code}")

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    def __init__(self, *responses: Any) -> None:
        self.responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"url": url, **kwargs})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def test_translate_posts_expected_payload() -> None:
    session = FakeSession(
        FakeResponse({"translatedText": "My name is Ravi", "sourceLanguage": "hi", "targetLanguage": "en"})
    )

    result = TranslationClient(CONFIG, session=session).translate("mera naam Ravi", "hi", "en")

    assert result.translated_text == "My name is Ravi"
    call = session.calls[0]
    assert call["url"] == "https://mt.example/api/translate"
    assert call["json"] == {"text": "mera naam Ravi", "sourceLanguage": "hi", "targetLanguage": "en"}
    assert call["headers"]["Authorization"] == "Bearer mt-key"
    assert call["timeout"] == CONFIG.request_timeout


def test_missing_credentials_raise_translation_error() -> None:
    session = FakeSession()

    with pytest.raises(TranslationError):
        TranslationClient(EnrichmentConfig(), session=session).translate("x", "hi", "en")
    assert session.calls == []


def test_http_error_raises_translation_error() -> None:
    session = FakeSession(FakeResponse({}, status_code=503))

    with pytest.raises(TranslationError) as excinfo:
        TranslationClient(CONFIG, session=session).translate("x", "hi", "en")
    assert excinfo.value.service == "translation"


def test_connection_error_is_retried_once() -> None:
    session = FakeSession(
        requests.ConnectionError("reset"),
        FakeResponse({"translatedText": "ok", "sourceLanguage": "hi", "targetLanguage": "en"}),
    )
    client = TranslationClient(CONFIG, session=session)

    assert client.translate("x", "hi", "en").translated_text == "ok"
    assert len(session.calls) == 2


def test_unexpected_payload_raises() -> None:
    session = FakeSession(FakeResponse({"text": "missing fields"}))

    with pytest.raises(TranslationError):
        TranslationClient(CONFIG, session=session).translate("x", "hi", "en")


def test_invalid_json_raises() -> None:
    session = FakeSession(FakeResponse(ValueError("not json")))

    with pytest.raises(TranslationError):
        TranslationClient(CONFIG, session=session).translate("x", "hi", "en")


def test_detect_language() -> None:
    session = FakeSession(FakeResponse({"language": "ta"}), FakeResponse({"language": ""}))
    client = TranslationClient(CONFIG, session=session)

    assert client.detect_language("vanakkam") == "ta"
    assert session.calls[0]["url"] == "https://mt.example/api/detect"
    with pytest.raises(TranslationError):
        client.detect_language("???")
