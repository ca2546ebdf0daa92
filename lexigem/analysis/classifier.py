"""Fallback classification for the optional isLegal / authenticity fields.

This is a presentation concern: when the model leaves a field out, a
classifier guesses it from the analysis text. Swap KeywordDocumentClassifier
for another BaseDocumentClassifier without touching AnalysisResult.
"""

import re
from abc import ABC, abstractmethod
from typing import ClassVar

from lexigem.analysis.models import AnalysisResult, Authenticity


class BaseDocumentClassifier(ABC):
    @abstractmethod
    def is_legal(self, result: AnalysisResult) -> bool:
        """Whether the analyzed attachment is a legal document."""

    @abstractmethod
    def authenticity(self, result: AnalysisResult) -> Authenticity:
        """Whether the analyzed document appears real, fake, or unknown."""


class KeywordDocumentClassifier(BaseDocumentClassifier):
    """Prefers the model's own answer, otherwise matches keywords."""

    LEGAL_KEYWORDS: ClassVar[tuple[str, ...]] = (
        "agreement",
        "contract",
        "nda",
        "non-disclosure",
        "lease",
        "terms",
        "conditions",
        "warranty",
        "party",
    )
    _FAKE_RE: ClassVar[re.Pattern[str]] = re.compile(
        r"forgery|forged|fake|counterfeit|not authentic|fabricat", re.IGNORECASE
    )
    _REAL_RE: ClassVar[re.Pattern[str]] = re.compile(
        r"authentic|original|signed|notarized|registered|executed on|witness",
        re.IGNORECASE,
    )

    def is_legal(self, result: AnalysisResult) -> bool:
        if result.is_legal is not None:
            return result.is_legal
        text = " ".join([result.summary, *result.pros, *result.cons]).lower()
        return any(keyword in text for keyword in self.LEGAL_KEYWORDS)

    def authenticity(self, result: AnalysisResult) -> Authenticity:
        if result.authenticity is not None:
            return result.authenticity
        text = " ".join([
            result.summary,
            *result.potential_loopholes,
            *result.potential_challenges,
            *result.cons,
        ])
        # forgery terms win over "authentic" so "not authentic" reads as fake
        if self._FAKE_RE.search(text):
            return Authenticity.FAKE
        if self._REAL_RE.search(text):
            return Authenticity.REAL
        return Authenticity.UNKNOWN
