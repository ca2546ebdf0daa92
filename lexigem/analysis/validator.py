"""Validates the parsed model response and builds an AnalysisResult."""

from typing import Any

from lexigem.analysis.exceptions import AnalysisResponseError
from lexigem.analysis.models import AnalysisResult, Authenticity

_LIST_FIELDS = ("pros", "cons", "potentialLoopholes", "potentialChallenges")
_VALID_AUTHENTICITY = frozenset(a.value for a in Authenticity)


def validate_and_build(data: dict[str, Any]) -> AnalysisResult:
    """Validate raw parsed JSON and build an AnalysisResult.

    Optional fields set to null are treated as absent.

    Raises:
        AnalysisResponseError: on any missing or mistyped field.
    """
    _require_fields(data)
    return AnalysisResult(
        summary=_build_summary(data["summary"]),
        pros=_build_string_list(data["pros"], "pros"),
        cons=_build_string_list(data["cons"], "cons"),
        potential_loopholes=_build_string_list(
            data["potentialLoopholes"], "potentialLoopholes"
        ),
        potential_challenges=_build_string_list(
            data["potentialChallenges"], "potentialChallenges"
        ),
        is_legal=_build_is_legal(data.get("isLegal")),
        authenticity=_build_authenticity(data.get("authenticity")),
    )


def _require_fields(data: dict[str, Any]) -> None:
    for name in ("summary", *_LIST_FIELDS):
        if name not in data:
            raise AnalysisResponseError(f"Missing required field: {name}")


def _build_summary(raw: Any) -> str:
    if not isinstance(raw, str) or not raw.strip():
        raise AnalysisResponseError("'summary' must be a non-empty string")
    return raw


def _build_string_list(raw: Any, name: str) -> list[str]:
    if not isinstance(raw, list):
        raise AnalysisResponseError(f"'{name}' must be a list")
    for index, item in enumerate(raw):
        if not isinstance(item, str):
            raise AnalysisResponseError(f"'{name}' item at index {index} must be a string")
    return list(raw)


def _build_is_legal(raw: Any) -> bool | None:
    if raw is None:
        return None
    if not isinstance(raw, bool):
        raise AnalysisResponseError("'isLegal' must be a boolean or null")
    return raw


def _build_authenticity(raw: Any) -> Authenticity | None:
    if raw is None:
        return None
    if not isinstance(raw, str) or raw.lower() not in _VALID_AUTHENTICITY:
        raise AnalysisResponseError(
            f"'authenticity' must be one of {sorted(_VALID_AUTHENTICITY)}, got {raw!r}"
        )
    return Authenticity(raw.lower())
