"""Tests for the DocumentAnalyzer (AI-powered document analysis)."""

import json
from unittest.mock import MagicMock, call

import pytest

from lexigem.analysis.analyzer import DocumentAnalyzer
from lexigem.analysis.exceptions import (
    AnalysisFailedError,
    AnalysisResponseError,
    DocumentValidationError,
    RateLimitedError,
    ServiceUnavailableError,
)
from lexigem.documents.models import UploadedFile
from lexigem.llm.exceptions import ModelProviderError

PDF = UploadedFile(content=b"%PDF-1.7", mime_type="application/pdf", name="lease.pdf")


def _make_analyzer(
    client: MagicMock | None = None, sleep: MagicMock | None = None
) -> DocumentAnalyzer:
    return DocumentAnalyzer(
        client=client or MagicMock(),
        model="test-model",
        sleep=sleep or MagicMock(),
    )


def _valid_json_response(**overrides: object) -> str:
    data: dict[str, object] = {
        "summary": "A lease agreement.",
        "pros": ["Fixed rent"],
        "cons": [],
        "potentialLoopholes": [],
        "potentialChallenges": [],
    }
    data.update(overrides)
    return json.dumps(data)


def _rate_limit_error() -> ModelProviderError:
    return ModelProviderError("429 RESOURCE_EXHAUSTED", status_code=429)


class TestAnalyzeSuccess:
    def test_returns_analysis_result(self) -> None:
        client = MagicMock()
        client.generate_json.return_value = _valid_json_response(isLegal=True)
        result = _make_analyzer(client).analyze_document(PDF)
        assert result.summary == "A lease agreement."
        assert result.pros == ["Fixed rent"]
        assert result.is_legal is True

    def test_sends_prompt_parts_and_schema(self) -> None:
        client = MagicMock()
        client.generate_json.return_value = _valid_json_response()
        pages = [
            UploadedFile(content=b"one", mime_type="image/png", name="page-1.png"),
            UploadedFile(content=b"two", mime_type="image/png", name="page-2.png"),
        ]
        _make_analyzer(client).analyze_document(pages, response_language="Hindi")

        kwargs = client.generate_json.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["parts"] == pages
        assert "Hindi" in kwargs["prompt"]
        assert "{response_language}" not in kwargs["prompt"]
        assert kwargs["json_schema"]["type"] == "object"

    def test_strips_code_fences(self) -> None:
        client = MagicMock()
        client.generate_json.return_value = f"```json\n{_valid_json_response()}\n```"
        result = _make_analyzer(client).analyze_document(PDF)
        assert result.summary == "A lease agreement."


class TestInputValidation:
    def test_empty_list_makes_no_call(self) -> None:
        client = MagicMock()
        with pytest.raises(DocumentValidationError):
            _make_analyzer(client).analyze_document([])
        client.generate_json.assert_not_called()

    def test_empty_file_makes_no_call(self) -> None:
        client = MagicMock()
        empty = UploadedFile(content=b"", mime_type="image/png", name="blank.png")
        with pytest.raises(DocumentValidationError):
            _make_analyzer(client).analyze_document([PDF, empty])
        client.generate_json.assert_not_called()

    def test_max_attempts_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            DocumentAnalyzer(client=MagicMock(), model="m", max_attempts=0)


class TestRetry:
    def test_retries_rate_limit_with_backoff(self) -> None:
        client = MagicMock()
        client.generate_json.side_effect = [
            _rate_limit_error(),
            _rate_limit_error(),
            _valid_json_response(),
        ]
        sleep = MagicMock()
        result = _make_analyzer(client, sleep).analyze_document(PDF)
        assert result.summary == "A lease agreement."
        assert client.generate_json.call_count == 3
        assert sleep.call_args_list == [call(1.0), call(2.0)]

    def test_gives_up_after_three_attempts(self) -> None:
        client = MagicMock()
        client.generate_json.side_effect = _rate_limit_error()
        sleep = MagicMock()
        with pytest.raises(RateLimitedError) as exc_info:
            _make_analyzer(client, sleep).analyze_document(PDF)
        assert client.generate_json.call_count == 3
        assert sleep.call_count == 2
        assert isinstance(exc_info.value.__cause__, ModelProviderError)

    def test_other_errors_are_not_retried(self) -> None:
        client = MagicMock()
        client.generate_json.side_effect = ModelProviderError("boom", status_code=500)
        sleep = MagicMock()
        with pytest.raises(AnalysisFailedError):
            _make_analyzer(client, sleep).analyze_document(PDF)
        assert client.generate_json.call_count == 1
        sleep.assert_not_called()

    def test_credential_errors_are_not_retried(self) -> None:
        client = MagicMock()
        client.generate_json.side_effect = ModelProviderError("API key not valid")
        with pytest.raises(ServiceUnavailableError):
            _make_analyzer(client).analyze_document(PDF)
        assert client.generate_json.call_count == 1

    def test_exhausted_throttling_mentioning_key_is_rate_limited(self) -> None:
        client = MagicMock()
        client.generate_json.side_effect = ModelProviderError(
            "429 quota exceeded for api_key", status_code=429
        )
        with pytest.raises(RateLimitedError):
            _make_analyzer(client).analyze_document(PDF)
        assert client.generate_json.call_count == 3


class TestResponseErrors:
    def test_invalid_json(self) -> None:
        client = MagicMock()
        client.generate_json.return_value = "not json"
        with pytest.raises(AnalysisResponseError, match="Invalid JSON"):
            _make_analyzer(client).analyze_document(PDF)

    def test_non_object_json(self) -> None:
        client = MagicMock()
        client.generate_json.return_value = "[1, 2]"
        with pytest.raises(AnalysisResponseError, match="must be an object"):
            _make_analyzer(client).analyze_document(PDF)

    def test_missing_summary(self) -> None:
        client = MagicMock()
        client.generate_json.return_value = json.dumps({
            "pros": [],
            "cons": [],
            "potentialLoopholes": [],
            "potentialChallenges": [],
        })
        with pytest.raises(AnalysisResponseError, match="summary"):
            _make_analyzer(client).analyze_document(PDF)
