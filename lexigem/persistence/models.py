from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class NewDocument:
    """Values for a new row in the documents table."""

    owner_id: str
    file_name: str
    file_type: str
    file_size: int
    file_url: str
    summary: str
    pros: list[str] = field(default_factory=list)
    cons: list[str] = field(default_factory=list)
    potential_loopholes: list[str] = field(default_factory=list)
    potential_challenges: list[str] = field(default_factory=list)

    def to_row(self) -> dict[str, Any]:
        return {
            "user_id": self.owner_id,
            "file_name": self.file_name,
            "file_type": self.file_type,
            "file_size": self.file_size,
            "file_url": self.file_url,
            "summary": self.summary,
            "pros": self.pros,
            "cons": self.cons,
            "potential_loopholes": self.potential_loopholes,
            "potential_challenges": self.potential_challenges,
        }


@dataclass
class DocumentRecord:
    """Represents a row from the documents table."""

    id: str
    owner_id: str
    file_name: str
    file_type: str
    file_size: int
    summary: str
    file_url: str | None = None
    pros: list[str] = field(default_factory=list)
    cons: list[str] = field(default_factory=list)
    potential_loopholes: list[str] = field(default_factory=list)
    potential_challenges: list[str] = field(default_factory=list)
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "DocumentRecord":
        return cls(
            id=str(row["id"]),
            owner_id=str(row["user_id"]),
            file_name=row["file_name"],
            file_type=row["file_type"],
            file_size=int(row["file_size"]),
            summary=row["summary"],
            file_url=row.get("file_url"),
            pros=list(row.get("pros") or []),
            cons=list(row.get("cons") or []),
            potential_loopholes=list(row.get("potential_loopholes") or []),
            potential_challenges=list(row.get("potential_challenges") or []),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )


@dataclass
class ChatMessageRecord:
    """Represents a row from the chat_history table."""

    id: str
    owner_id: str
    session_id: str
    role: str
    message: str
    created_at: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "ChatMessageRecord":
        return cls(
            id=str(row["id"]),
            owner_id=str(row["user_id"]),
            session_id=str(row["session_id"]),
            role=row["role"],
            message=row["message"],
            created_at=row.get("created_at"),
        )


@dataclass
class ChatSessionRecord:
    """Represents a row from the chat_sessions table."""

    id: str
    owner_id: str
    session_id: str
    title: str | None = None
    message_count: int = 0
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "ChatSessionRecord":
        return cls(
            id=str(row["id"]),
            owner_id=str(row["user_id"]),
            session_id=str(row["session_id"]),
            title=row.get("title"),
            message_count=int(row.get("message_count") or 0),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )
