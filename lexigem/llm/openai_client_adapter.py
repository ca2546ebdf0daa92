import base64
import copy
from collections.abc import Sequence
from typing import Any

import httpx
import openai

from lexigem.documents.models import UploadedFile
from lexigem.llm.client_base import BaseModelClient
from lexigem.llm.exceptions import EmptyModelResponseError, ModelProviderError
from lexigem.llm.models import ChatMessage, ChatRole


def to_strict_schema(schema: dict[str, Any]) -> dict[str, Any]:
    """Rewrite a JSON schema for OpenAI strict structured outputs.

    Strict mode needs every property listed in ``required`` and
    ``additionalProperties: false``; properties that were optional become
    nullable instead.
    """
    strict = copy.deepcopy(schema)
    _make_strict(strict)
    return strict


def _make_strict(node: dict[str, Any]) -> None:
    if node.get("type") == "object":
        properties: dict[str, dict[str, Any]] = node.get("properties", {})
        required = set(node.get("required", []))
        for name, prop in properties.items():
            _make_strict(prop)
            if name not in required:
                _make_nullable(prop)
        node["required"] = list(properties)
        node["additionalProperties"] = False
    elif node.get("type") == "array" and isinstance(node.get("items"), dict):
        _make_strict(node["items"])


def _make_nullable(prop: dict[str, Any]) -> None:
    prop_type = prop.get("type")
    if isinstance(prop_type, str):
        prop["type"] = [prop_type, "null"]
    if "enum" in prop and None not in prop["enum"]:
        prop["enum"] = [*prop["enum"], None]


class OpenAIClientAdapter(BaseModelClient):
    """Model client built on the OpenAI-compatible chat completions API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
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
        content: list[dict[str, Any]] = [{"type": "text", "text": prompt}]
        content.extend(self._to_content_part(part) for part in parts)
        return self._complete(
            model=model,
            temperature=temperature,
            messages=[{"role": "user", "content": content}],
            response_format={
                "type": "json_schema",
                "json_schema": {
                    "name": "analysis_result",
                    "strict": True,
                    "schema": to_strict_schema(json_schema),
                },
            },
        )

    def create_chat_reply(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        history: Sequence[ChatMessage],
        message: str,
    ) -> str:
        messages: list[dict[str, Any]] = [{"role": "system", "content": system_prompt}]
        for turn in history:
            role = "user" if turn.role == ChatRole.USER else "assistant"
            messages.append({"role": role, "content": turn.text})
        messages.append({"role": "user", "content": message})
        return self._complete(model=model, temperature=temperature, messages=messages)

    def _complete(self, **kwargs: Any) -> str:
        try:
            response = self._client.chat.completions.create(**kwargs)
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ModelProviderError(f"AI provider network error: {exc}") from exc
        except openai.APIStatusError as exc:
            raise ModelProviderError(
                f"AI provider API error: {exc}", status_code=exc.status_code
            ) from exc
        except openai.APIError as exc:
            raise ModelProviderError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise EmptyModelResponseError("AI returned no choices")
        text = response.choices[0].message.content
        if not text:
            raise EmptyModelResponseError("Empty response from AI model")
        return text

    @staticmethod
    def _to_content_part(part: UploadedFile) -> dict[str, Any]:
        encoded = base64.b64encode(part.content).decode("ascii")
        data_url = f"data:{part.mime_type};base64,{encoded}"
        if part.mime_type.startswith("image/"):
            return {"type": "image_url", "image_url": {"url": data_url}}
        return {"type": "file", "file": {"filename": part.name, "file_data": data_url}}
