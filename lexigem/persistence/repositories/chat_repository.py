from lexigem.llm.models import ChatRole
from lexigem.persistence.connection import get_client
from lexigem.persistence.exceptions import RecordNotFoundError
from lexigem.persistence.models import ChatMessageRecord, ChatSessionRecord


class ChatRepository:
    """Table operations for chat_history and chat_sessions."""

    def save_message(
        self, owner_id: str, session_id: str, role: ChatRole, message: str
    ) -> ChatMessageRecord:
        """Append one message to a session."""
        response = (
            get_client()
            .table("chat_history")
            .insert({
                "user_id": owner_id,
                "session_id": session_id,
                "role": ChatRole(role).value,
                "message": message,
            })
            .execute()
        )
        if not response.data:
            raise RecordNotFoundError("Insert into chat_history returned no row")
        return ChatMessageRecord.from_row(response.data[0])

    def get_chat_history(self, session_id: str, owner_id: str) -> list[ChatMessageRecord]:
        """Return a session's messages, oldest first."""
        response = (
            get_client()
            .table("chat_history")
            .select("*")
            .eq("session_id", session_id)
            .eq("user_id", owner_id)
            .order("created_at")
            .execute()
        )
        return [ChatMessageRecord.from_row(row) for row in response.data or []]

    def get_user_chat_sessions(self, owner_id: str) -> list[ChatSessionRecord]:
        """Return the owner's sessions, most recently updated first."""
        response = (
            get_client()
            .table("chat_sessions")
            .select("*")
            .eq("user_id", owner_id)
            .order("updated_at", desc=True)
            .execute()
        )
        return [ChatSessionRecord.from_row(row) for row in response.data or []]

    def create_chat_session(
        self, owner_id: str, session_id: str, title: str | None = None
    ) -> ChatSessionRecord:
        response = (
            get_client()
            .table("chat_sessions")
            .insert({
                "user_id": owner_id,
                "session_id": session_id,
                "title": title or None,
                "message_count": 0,
            })
            .execute()
        )
        if not response.data:
            raise RecordNotFoundError("Insert into chat_sessions returned no row")
        return ChatSessionRecord.from_row(response.data[0])

    def update_chat_session_title(
        self, session_id: str, owner_id: str, title: str
    ) -> ChatSessionRecord:
        """Rename a session.

        Raises:
            RecordNotFoundError: if the owner has no session with this ID.
        """
        response = (
            get_client()
            .table("chat_sessions")
            .update({"title": title})
            .eq("session_id", session_id)
            .eq("user_id", owner_id)
            .execute()
        )
        if not response.data:
            raise RecordNotFoundError(f"Chat session {session_id} not found")
        return ChatSessionRecord.from_row(response.data[0])

    def delete_chat_session(self, session_id: str, owner_id: str) -> None:
        """Delete a session's messages, then the session itself."""
        client = get_client()
        (
            client.table("chat_history")
            .delete()
            .eq("session_id", session_id)
            .eq("user_id", owner_id)
            .execute()
        )
        (
            client.table("chat_sessions")
            .delete()
            .eq("session_id", session_id)
            .eq("user_id", owner_id)
            .execute()
        )
