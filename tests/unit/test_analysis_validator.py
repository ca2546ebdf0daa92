from typing import Any

import pytest

from lexigem.analysis.exceptions import AnalysisFailedError, AnalysisResponseError
from lexigem.analysis.models import Authenticity
from lexigem.analysis.validator import validate_and_build


def _valid(**overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "summary": "A one-year residential lease.",
        "pros": ["Fixed rent"],
        "cons": ["No early termination"],
        "potentialLoopholes": [],
        "potentialChallenges": ["Deposit return terms are vague"],
    }
    data.update(overrides)
    return data


class TestValidateAndBuild:
    def test_builds_result(self) -> None:
        result = validate_and_build(_valid())
        assert result.summary == "A one-year residential lease."
        assert result.pros == ["Fixed rent"]
        assert result.potential_loopholes == []
        assert result.is_legal is None
        assert result.authenticity is None

    def test_optional_fields(self) -> None:
        result = validate_and_build(_valid(isLegal=True, authenticity="REAL"))
        assert result.is_legal is True
        assert result.authenticity is Authenticity.REAL

    def test_null_optionals_are_absent(self) -> None:
        result = validate_and_build(_valid(isLegal=None, authenticity=None))
        assert result.to_dict().keys() == {
            "summary",
            "pros",
            "cons",
            "potentialLoopholes",
            "potentialChallenges",
        }

    @pytest.mark.parametrize(
        "field", ["summary", "pros", "cons", "potentialLoopholes", "potentialChallenges"]
    )
    def test_missing_required_field(self, field: str) -> None:
        data = _valid()
        del data[field]
        with pytest.raises(AnalysisResponseError, match=f"Missing required field: {field}"):
            validate_and_build(data)

    def test_blank_summary(self) -> None:
        with pytest.raises(AnalysisResponseError, match="non-empty string"):
            validate_and_build(_valid(summary="  "))

    def test_list_field_must_be_list(self) -> None:
        with pytest.raises(AnalysisResponseError, match="'cons' must be a list"):
            validate_and_build(_valid(cons="none"))

    def test_list_items_must_be_strings(self) -> None:
        with pytest.raises(AnalysisResponseError, match="index 1"):
            validate_and_build(_valid(pros=["ok", 3]))

    def test_is_legal_must_be_bool(self) -> None:
        with pytest.raises(AnalysisResponseError, match="isLegal"):
            validate_and_build(_valid(isLegal="yes"))

    def test_unknown_authenticity(self) -> None:
        with pytest.raises(AnalysisResponseError, match="authenticity"):
            validate_and_build(_valid(authenticity="maybe"))

    def test_response_errors_are_analysis_failures(self) -> None:
        with pytest.raises(AnalysisFailedError):
            validate_and_build({})


class TestToDict:
    def test_uses_camel_case_keys(self) -> None:
        result = validate_and_build(_valid(isLegal=False, authenticity="fake"))
        data = result.to_dict()
        assert data["potentialChallenges"] == ["Deposit return terms are vague"]
        assert data["isLegal"] is False
        assert data["authenticity"] == "fake"
