"""Per-tab chat state: the message list, attached document and pending flag."""

import uuid
from datetime import datetime

from pdf_chat.models.schemas import ChatMessage, ChatRole, DocumentContext


class ChatSession:
    """Manages chat state for a user session.

    At most one request is in flight: ``begin_request`` refuses to start
    another while ``is_pending`` is set.
    """

    def __init__(self) -> None:
        self.messages: list[dict] = []
        self.session_id: str = str(uuid.uuid4())
        self.is_pending: bool = False
        self.document: DocumentContext | None = None

    def add_message(self, role: str, content: str, error: bool = False) -> None:
        self.messages.append({
            "role": role,
            "content": content,
            "time": datetime.now().strftime("%I:%M %p"),
            "error": error,
        })

    def begin_request(self, text: str) -> bool:
        """Record the user turn and mark a request as pending.

        Returns:
            False without changing anything when the text is blank or a
            request is already pending.
        """
        text = text.strip()
        if not text or self.is_pending:
            return False
        self.add_message(ChatRole.USER.value, text)
        self.is_pending = True
        return True

    def finish_request(self, reply: str) -> None:
        """Splice the assistant reply in and clear the pending flag."""
        self.add_message(ChatRole.ASSISTANT.value, reply or "_(empty response)_")
        self.is_pending = False

    def fail_request(self, error: str) -> None:
        """Show an error bubble and clear the pending flag.

        The user turn that got no reply stays visible but is marked
        unanswered, so it is not forwarded as history.
        """
        if self.messages and self.messages[-1]["role"] == ChatRole.USER.value:
            self.messages[-1]["unanswered"] = True
        self.add_message(ChatRole.ASSISTANT.value, f"Error: {error}", error=True)
        self.is_pending = False

    def release(self, reason: str) -> bool:
        """Fail a request that ended without a reply or an error.

        Returns:
            True if a pending request had to be released.
        """
        if not self.is_pending:
            return False
        self.fail_request(reason)
        return True

    def history(self) -> list[ChatMessage]:
        """Turns to forward with the pending request.

        Excludes error bubbles, unanswered user turns and the user turn
        currently being sent, so user and assistant turns alternate.
        """
        turns = self.messages
        if self.is_pending and turns and turns[-1]["role"] == ChatRole.USER.value:
            turns = turns[:-1]
        return [
            ChatMessage(role=ChatRole(msg["role"]), content=msg["content"])
            for msg in turns
            if not msg.get("error") and not msg.get("unanswered")
        ]

    def attach_document(self, filename: str, text: str, pages: int) -> DocumentContext:
        self.document = DocumentContext(filename=filename, text=text, pages=pages)
        return self.document

    def detach_document(self) -> None:
        self.document = None

    def reset(self) -> None:
        """Start a new chat: clear messages and document, new session id."""
        self.messages.clear()
        self.document = None
        self.is_pending = False
        self.session_id = str(uuid.uuid4())
