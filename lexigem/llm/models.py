from dataclasses import dataclass
from enum import StrEnum


class ChatRole(StrEnum):
    USER = "user"
    MODEL = "model"


@dataclass(frozen=True)
class ChatMessage:
    """One turn of a chat conversation as sent to the model."""

    role: ChatRole
    text: str
