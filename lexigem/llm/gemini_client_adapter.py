from collections.abc import Sequence
from typing import Any

import httpx
from google import genai
from google.genai import errors, types

from lexigem.documents.models import UploadedFile
from lexigem.llm.client_base import BaseModelClient
from lexigem.llm.exceptions import EmptyModelResponseError, ModelProviderError
from lexigem.llm.models import ChatMessage


class GeminiClientAdapter(BaseModelClient):
    """Model client built on the Google Gen AI SDK (Gemini)."""

    def __init__(self, *, api_key: str, timeout_seconds: int) -> None:
        self._client = genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=timeout_seconds * 1000),
        )

    def generate_json(
        self,
        *,
        model: str,
        temperature: float,
        prompt: str,
        parts: Sequence[UploadedFile],
        json_schema: dict[str, object],
    ) -> str:
        contents: list[types.Part] = [types.Part.from_text(text=prompt)]
        contents.extend(
            types.Part.from_bytes(data=part.content, mime_type=part.mime_type)
            for part in parts
        )
        config = types.GenerateContentConfig(
            temperature=temperature,
            response_mime_type="application/json",
            response_schema=json_schema,
        )
        return self._generate(model=model, contents=contents, config=config)

    def create_chat_reply(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        history: Sequence[ChatMessage],
        message: str,
    ) -> str:
        contents = [
            types.Content(role=turn.role.value, parts=[types.Part.from_text(text=turn.text)])
            for turn in history
        ]
        contents.append(types.Content(role="user", parts=[types.Part.from_text(text=message)]))
        config = types.GenerateContentConfig(
            temperature=temperature,
            system_instruction=system_prompt,
        )
        return self._generate(model=model, contents=contents, config=config)

    def _generate(self, **kwargs: Any) -> str:
        try:
            response = self._client.models.generate_content(**kwargs)
        except errors.APIError as exc:
            raise ModelProviderError(
                f"AI provider API error: {exc}", status_code=exc.code
            ) from exc
        except (httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ModelProviderError(f"AI provider network error: {exc}") from exc

        text = (response.text or "").strip()
        if not text:
            raise EmptyModelResponseError("Empty response from AI model")
        return text
