"""Offline model client.

Returns a fixed, schema-valid analysis and a canned chat reply without any
network call. Used for local development and tests, and as the template for
new provider adapters: implement BaseModelClient and register the provider
in ModelClientFactory.
"""

import json
from collections.abc import Sequence
from typing import ClassVar

from lexigem.documents.models import UploadedFile
from lexigem.llm.client_base import BaseModelClient
from lexigem.llm.models import ChatMessage


class ExampleClientAdapter(BaseModelClient):
    DEFAULT_ANALYSIS: ClassVar[dict[str, object]] = {
        "summary": "Example analysis of the supplied document.",
        "pros": [],
        "cons": [],
        "potentialLoopholes": [],
        "potentialChallenges": [],
    }
    DEFAULT_REPLY: ClassVar[str] = "This is an example reply. It is not legal advice."

    def generate_json(
        self,
        *,
        model: str,
        temperature: float,
        prompt: str,
        parts: Sequence[UploadedFile],
        json_schema: dict[str, object],
    ) -> str:
        _ = model, temperature, prompt, parts, json_schema
        return json.dumps(self.DEFAULT_ANALYSIS)

    def create_chat_reply(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        history: Sequence[ChatMessage],
        message: str,
    ) -> str:
        _ = model, temperature, system_prompt, history, message
        return self.DEFAULT_REPLY
