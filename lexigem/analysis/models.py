from dataclasses import dataclass, field
from enum import StrEnum


class Authenticity(StrEnum):
    REAL = "real"
    FAKE = "fake"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class AnalysisResult:
    """Structured analysis returned by the model for one document."""

    summary: str
    pros: list[str] = field(default_factory=list)
    cons: list[str] = field(default_factory=list)
    potential_loopholes: list[str] = field(default_factory=list)
    potential_challenges: list[str] = field(default_factory=list)
    is_legal: bool | None = None
    authenticity: Authenticity | None = None

    def to_dict(self) -> dict[str, object]:
        """Wire shape with camelCase keys; absent optional fields are omitted."""
        data: dict[str, object] = {
            "summary": self.summary,
            "pros": list(self.pros),
            "cons": list(self.cons),
            "potentialLoopholes": list(self.potential_loopholes),
            "potentialChallenges": list(self.potential_challenges),
        }
        if self.is_legal is not None:
            data["isLegal"] = self.is_legal
        if self.authenticity is not None:
            data["authenticity"] = self.authenticity.value
        return data
