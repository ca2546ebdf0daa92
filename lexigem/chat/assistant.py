"""Legal Q&A chat backed by the configured model provider."""

import time
import uuid
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from lexigem.analysis.error_mapper import is_rate_limited, map_provider_error
from lexigem.analysis.exceptions import ServiceUnavailableError
from lexigem.llm.client_base import BaseModelClient
from lexigem.llm.models import ChatMessage, ChatRole
from lexigem.logging.logger import Log
from lexigem.persistence.repositories.chat_repository import ChatRepository
from lexigem.prompts.loader import load_chat_system_prompt

TITLE_MAX_CHARS = 50


@dataclass(frozen=True)
class DocumentContext:
    """A previously analyzed document the user asks about."""

    file_name: str
    summary: str


@dataclass(frozen=True)
class ChatReply:
    session_id: str
    text: str


class LegalChatAssistant:
    """Answers general legal questions within a stored chat session.

    Without a ChatRepository the assistant works statelessly: sessions get
    an ID but nothing is persisted and history must be passed in.
    """

    def __init__(
        self,
        *,
        client: BaseModelClient,
        model: str,
        temperature: float = 0.2,
        chat_repo: ChatRepository | None = None,
        retry_delay_seconds: float = 1.2,
        sleep: Callable[[float], None] = time.sleep,
        system_prompt_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = temperature
        self._chat_repo = chat_repo
        self._retry_delay_seconds = retry_delay_seconds
        self._sleep = sleep
        self._system_prompt_template = load_chat_system_prompt(system_prompt_path)

    def start_session(self, owner_id: str, title: str | None = None) -> str:
        session_id = str(uuid.uuid4())
        if self._chat_repo is not None:
            self._chat_repo.create_chat_session(owner_id, session_id, title)
        Log.info(f"Started chat session {session_id}")
        return session_id

    def load_history(self, owner_id: str, session_id: str) -> list[ChatMessage]:
        """Return the stored turns of a session, oldest first."""
        if self._chat_repo is None:
            return []
        records = self._chat_repo.get_chat_history(session_id, owner_id)
        return [ChatMessage(role=ChatRole(record.role), text=record.message) for record in records]

    def ask(
        self,
        owner_id: str,
        session_id: str,
        question: str,
        *,
        history: Sequence[ChatMessage] = (),
        response_language: str = "English",
        context_document: DocumentContext | None = None,
    ) -> ChatReply:
        """Send one question and store both sides of the exchange.

        Raises:
            ValueError: for a blank question.
            AnalysisError: the classified provider failure.
        """
        question = question.strip()
        if not question:
            raise ValueError("Question must not be empty")

        if self._chat_repo is not None:
            self._chat_repo.save_message(owner_id, session_id, ChatRole.USER, question)
            if not history:
                self._set_title(owner_id, session_id, question)

        message = self._with_context(question, context_document)
        system_prompt = self._system_prompt_template.format(response_language=response_language)

        try:
            text = self._send_with_retry(system_prompt, list(history), message)
        except Exception as exc:
            error = map_provider_error(exc)
            if isinstance(error, ServiceUnavailableError):
                Log.error("Chat service unavailable, check model configuration")
            else:
                Log.error(f"Chat request failed: {type(error).__name__}: {error}")
                self._save_apology(owner_id, session_id, error.user_message)
            if error is exc:
                raise
            raise error from exc

        if self._chat_repo is not None:
            self._chat_repo.save_message(owner_id, session_id, ChatRole.MODEL, text)
        return ChatReply(session_id=session_id, text=text)

    @staticmethod
    def _with_context(question: str, context: DocumentContext | None) -> str:
        if context is None:
            return question
        return (
            "Context: You have access to an analyzed document.\n"
            f"Title: {context.file_name}\n"
            f"Summary: {context.summary}\n\n"
            f"User Question: {question}"
        )

    def _send_with_retry(
        self, system_prompt: str, history: list[ChatMessage], message: str
    ) -> str:
        def send() -> str:
            return self._client.create_chat_reply(
                model=self._model,
                temperature=self._temperature,
                system_prompt=system_prompt,
                history=history,
                message=message,
            )

        try:
            return send()
        except Exception as exc:
            if not is_rate_limited(exc):
                raise
            Log.warning(f"Chat rate limited, retrying once in {self._retry_delay_seconds:g}s")
            self._sleep(self._retry_delay_seconds)
            return send()

    def _set_title(self, owner_id: str, session_id: str, question: str) -> None:
        title = question
        if len(title) > TITLE_MAX_CHARS:
            title = title[:TITLE_MAX_CHARS] + "..."
        try:
            self._chat_repo.update_chat_session_title(session_id, owner_id, title)
        except Exception as exc:
            Log.warning(f"Failed to update title of chat session {session_id}: {exc}")

    def _save_apology(self, owner_id: str, session_id: str, reason: str) -> None:
        if self._chat_repo is None:
            return
        try:
            self._chat_repo.save_message(
                owner_id, session_id, ChatRole.MODEL, f"Sorry, I encountered an error: {reason}"
            )
        except Exception as exc:
            Log.warning(f"Failed to save error reply for chat session {session_id}: {exc}")
