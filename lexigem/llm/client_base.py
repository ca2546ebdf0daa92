from abc import ABC, abstractmethod
from collections.abc import Sequence

from lexigem.documents.models import UploadedFile
from lexigem.llm.models import ChatMessage


class BaseModelClient(ABC):
    """Contract for provider-specific generative model clients."""

    @abstractmethod
    def generate_json(
        self,
        *,
        model: str,
        temperature: float,
        prompt: str,
        parts: Sequence[UploadedFile],
        json_schema: dict[str, object],
    ) -> str:
        """Send the prompt plus binary parts and return the raw JSON text.

        Raises:
            ModelProviderError: on any provider or transport failure.
        """

    @abstractmethod
    def create_chat_reply(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        history: Sequence[ChatMessage],
        message: str,
    ) -> str:
        """Continue a conversation and return the model's reply text."""
