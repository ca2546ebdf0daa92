from lexigem.analysis.analyzer import DocumentAnalyzer
from lexigem.config.settings import Settings
from lexigem.llm.factory import ModelClientFactory


class AnalyzerFactory:
    """Creates a DocumentAnalyzer wired to the configured model provider."""

    @classmethod
    def create(
        cls,
        settings: Settings,
        client_factory: ModelClientFactory | None = None,
    ) -> DocumentAnalyzer:
        """Build the analyzer.

        Raises:
            ServiceUnavailableError: when the provider's API key is missing.
            ValueError: for an unknown provider or incomplete provider settings.
        """
        if client_factory is None:
            client_factory = ModelClientFactory(settings)
        config = client_factory.resolve()
        return DocumentAnalyzer(
            client=client_factory.get_client(),
            model=config.model,
            temperature=settings.analysis_temperature,
            max_attempts=settings.analysis_max_attempts,
            backoff_seconds=settings.analysis_backoff_seconds,
        )
