from dataclasses import dataclass
from typing import ClassVar

from lexigem.analysis.exceptions import ServiceUnavailableError
from lexigem.config.settings import Settings
from lexigem.llm.client_base import BaseModelClient
from lexigem.llm.example_client_adapter import ExampleClientAdapter
from lexigem.llm.gemini_client_adapter import GeminiClientAdapter
from lexigem.llm.openai_client_adapter import OpenAIClientAdapter
from lexigem.logging.logger import Log


@dataclass(frozen=True)
class ProviderConfig:
    """Resolved connection settings for one model provider."""

    provider: str
    api_key: str
    model: str
    timeout_seconds: int
    base_url: str | None = None


class ModelClientFactory:
    """Resolves provider settings and builds model clients.

    Clients are memoized per resolved configuration for the lifetime of this
    factory instance. A rotated API key resolves to a new cache entry; build
    a new factory to drop old clients.
    """

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
    }
    SUPPORTED_PROVIDERS: ClassVar[tuple[str, ...]] = (
        "example",
        "gemini",
        "openai",
        "openai_compatible",
        "openrouter",
    )

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._clients: dict[ProviderConfig, BaseModelClient] = {}

    def resolve(self) -> ProviderConfig:
        """Resolve the configured provider.

        Raises:
            ValueError: for an unknown provider or a missing compatible base URL.
            ServiceUnavailableError: when the provider's API key is empty.
        """
        provider = self._settings.analysis_provider.lower()
        if provider not in self.SUPPORTED_PROVIDERS:
            raise ValueError(
                f"Unknown analysis provider '{provider}'. "
                f"Choose from: {list(self.SUPPORTED_PROVIDERS)}"
            )
        if provider == "example":
            return ProviderConfig(provider="example", api_key="", model="example", timeout_seconds=0)

        api_key = self._resolve_api_key(provider).strip()
        if not api_key:
            Log.error(
                f"API key for analysis provider '{provider}' is missing. "
                f"Set ANALYSIS_{provider.upper()}_API_KEY."
            )
            raise ServiceUnavailableError(f"Missing API key for provider '{provider}'")
        return ProviderConfig(
            provider=provider,
            api_key=api_key,
            model=self._resolve_model_name(provider),
            timeout_seconds=self._resolve_timeout_seconds(provider),
            base_url=self._resolve_base_url(provider),
        )

    def get_client(self) -> BaseModelClient:
        config = self.resolve()
        client = self._clients.get(config)
        if client is None:
            client = self._build(config)
            self._clients[config] = client
            Log.info(f"Created model client for provider '{config.provider}'")
        return client

    def model_name(self) -> str:
        return self.resolve().model

    @staticmethod
    def _build(config: ProviderConfig) -> BaseModelClient:
        if config.provider == "example":
            return ExampleClientAdapter()
        if config.provider == "gemini":
            return GeminiClientAdapter(
                api_key=config.api_key,
                timeout_seconds=config.timeout_seconds,
            )
        return OpenAIClientAdapter(
            api_key=config.api_key,
            timeout_seconds=config.timeout_seconds,
            base_url=config.base_url,
        )

    def _resolve_base_url(self, provider: str) -> str | None:
        if provider in ("gemini", "openai"):
            return None
        if provider == "openai_compatible":
            url = self._settings.analysis_openai_compatible_base_url.strip()
            if not url:
                raise ValueError(
                    "analysis_openai_compatible_base_url is required for "
                    "analysis_provider=openai_compatible"
                )
            return url
        return self.OPENAI_COMPATIBLE_BASE_URLS[provider]

    def _resolve_api_key(self, provider: str) -> str:
        key_map = {
            "gemini": self._settings.analysis_gemini_api_key,
            "openai": self._settings.analysis_openai_api_key,
            "openai_compatible": self._settings.analysis_openai_compatible_api_key,
            "openrouter": self._settings.analysis_openrouter_api_key,
        }
        return key_map.get(provider, "") or ""

    def _resolve_model_name(self, provider: str) -> str:
        key_map = {
            "gemini": self._settings.analysis_gemini_model_name,
            "openai": self._settings.analysis_openai_model_name,
            "openai_compatible": self._settings.analysis_openai_compatible_model_name,
            "openrouter": self._settings.analysis_openrouter_model_name,
        }
        model = key_map.get(provider, "") or ""
        if not model:
            raise ValueError(f"No model name configured for analysis provider '{provider}'")
        return model

    def _resolve_timeout_seconds(self, provider: str) -> int:
        key_map = {
            "gemini": self._settings.analysis_gemini_timeout_seconds,
            "openai": self._settings.analysis_openai_timeout_seconds,
            "openai_compatible": self._settings.analysis_openai_compatible_timeout_seconds,
            "openrouter": self._settings.analysis_openrouter_timeout_seconds,
        }
        return key_map.get(provider, 120) or 120
