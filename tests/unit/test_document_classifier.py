from lexigem.analysis.classifier import KeywordDocumentClassifier
from lexigem.analysis.models import AnalysisResult, Authenticity


class TestIsLegal:
    def test_prefers_model_value(self) -> None:
        result = AnalysisResult(summary="A grocery list.", is_legal=True)
        assert KeywordDocumentClassifier().is_legal(result) is True

    def test_keyword_match(self) -> None:
        result = AnalysisResult(summary="This non-disclosure agreement binds both parties.")
        assert KeywordDocumentClassifier().is_legal(result) is True

    def test_no_keywords(self) -> None:
        result = AnalysisResult(summary="A photo of a cat.")
        assert KeywordDocumentClassifier().is_legal(result) is False


class TestAuthenticity:
    def test_prefers_model_value(self) -> None:
        result = AnalysisResult(summary="Forged contract.", authenticity=Authenticity.REAL)
        assert KeywordDocumentClassifier().authenticity(result) is Authenticity.REAL

    def test_fake_terms_win(self) -> None:
        result = AnalysisResult(
            summary="The signature appears not authentic.",
            potential_challenges=["Document may be forged"],
        )
        assert KeywordDocumentClassifier().authenticity(result) is Authenticity.FAKE

    def test_real_terms(self) -> None:
        result = AnalysisResult(summary="A notarized deed signed by both parties.")
        assert KeywordDocumentClassifier().authenticity(result) is Authenticity.REAL

    def test_unknown(self) -> None:
        result = AnalysisResult(summary="A short memo.")
        assert KeywordDocumentClassifier().authenticity(result) is Authenticity.UNKNOWN
