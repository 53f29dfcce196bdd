from __future__ import annotations

import json
from types import SimpleNamespace

from config import EnrichmentConfig
from llm.guidance import GuidanceClient
from models.intake import DocumentValidationResult, GuidanceResult
from utils.logging_context import current_context

CONFIG = EnrichmentConfig(api_key="test-key", model="gpt-4o-mini")


def _fake_client(*contents: str | None, error: Exception | None = None):
    calls: list[dict[str, object]] = []
    queue = list(contents)

    def _create(**kwargs: object) -> SimpleNamespace:
        calls.append(kwargs)
        if error is not None:
            raise error
        message = SimpleNamespace(content=queue.pop(0))
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])

    client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=_create)))
    return client, calls


def test_unconfigured_client_returns_unavailable() -> None:
    guidance = GuidanceClient(EnrichmentConfig())

    assert guidance.configured is False
    assert guidance.analyze_case_description("anything") == GuidanceResult.unavailable()
    assert guidance.validate_document("doc") == DocumentValidationResult.unavailable()
    assert guidance.improve_translation("a", "b", "ctx") == "b"


def test_structured_guidance_is_parsed() -> None:
    payload = {
        "explanation": "This looks like a wage dispute.",
        "requirements": ["Salary slips"],
        "suggestions": "Contact the labour commissioner",
    }
    client, calls = _fake_client(json.dumps(payload))

    result = GuidanceClient(CONFIG, client=client).analyze_case_description("unpaid salary")

    assert result.explanation == "This looks like a wage dispute."
    assert result.requirements == ["Salary slips"]
    assert result.suggestions == ["Contact the labour commissioner"]
    assert calls[0]["model"] == "gpt-4o-mini"
    assert "unpaid salary" in calls[0]["messages"][1]["content"]


def test_fenced_json_is_accepted() -> None:
    client, _calls = _fake_client('```json\n{"explanation": "ok"}\n```')

    result = GuidanceClient(CONFIG, client=client).analyze_case_description("text")

    assert result.explanation == "ok"


def test_plain_text_becomes_explanation() -> None:
    client, _calls = _fake_client("File a complaint with the consumer forum.")

    result = GuidanceClient(CONFIG, client=client).analyze_case_description("text")

    assert result == GuidanceResult(explanation="File a complaint with the consumer forum.")


def test_failure_returns_fallback() -> None:
    client, _calls = _fake_client(error=RuntimeError("boom"))

    result = GuidanceClient(CONFIG, client=client).analyze_case_description("text")

    assert result == GuidanceResult.failed()


def test_empty_completion_returns_fallback() -> None:
    client, _calls = _fake_client("   ")

    assert GuidanceClient(CONFIG, client=client).analyze_case_description("text") == GuidanceResult.failed()


def test_document_validation_parses_camel_case() -> None:
    client, _calls = _fake_client('{"isValid": false, "issues": ["Missing signature"], "suggestions": []}')

    result = GuidanceClient(CONFIG, client=client).validate_document("affidavit")

    assert result.is_valid is False
    assert result.issues == ["Missing signature"]


def test_document_validation_failure() -> None:
    client, _calls = _fake_client(error=RuntimeError("boom"))

    assert GuidanceClient(CONFIG, client=client).validate_document("doc") == DocumentValidationResult.failed()


def test_improve_translation_returns_model_text() -> None:
    client, _calls = _fake_client("My name is Ravi.")

    improved = GuidanceClient(CONFIG, client=client).improve_translation("mera naam Ravi", "name Ravi", "intake")

    assert improved == "My name is Ravi."


def test_completion_runs_in_guidance_logging_context() -> None:
    seen: list[str] = []

    def _create(**_kwargs: object) -> SimpleNamespace:
        seen.append(current_context()["service"])
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content="ok"))])

    client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=_create)))
    GuidanceClient(CONFIG, client=client).analyze_case_description("text")

    assert seen == ["guidance"]
    assert current_context()["service"] == "-"
