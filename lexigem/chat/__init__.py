from lexigem.chat.assistant import ChatReply, DocumentContext, LegalChatAssistant

__all__ = ["ChatReply", "DocumentContext", "LegalChatAssistant"]
