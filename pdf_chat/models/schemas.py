from enum import Enum

from pydantic import BaseModel, Field, field_validator


class ChatRole(str, Enum):
    """Speaker of a chat turn."""

    USER = "user"
    ASSISTANT = "assistant"


class StreamStatus(str, Enum):
    """Status values for streaming updates."""

    RECEIVED = "received"
    READING = "reading"
    GENERATING = "generating"
    COMPLETE = "complete"
    ERROR = "error"


class ChatMessage(BaseModel):
    """A single turn in the conversation.

    Attributes:
        role: Who said it (user or assistant).
        content: The message text.
    """

    role: ChatRole
    content: str


class DocumentContext(BaseModel):
    """Extracted PDF text attached to a conversation.

    Attributes:
        filename: Name of the source file.
        text: Normalized text content of the document.
        pages: Number of pages in the source document.
    """

    filename: str = Field(..., min_length=1)
    text: str
    pages: int = Field(default=0, ge=0)


class ChatRequest(BaseModel):
    """Request payload for chat completion endpoints.

    Attributes:
        message: The new user text.
        history: Earlier turns, oldest first.
        document: Optional PDF context to prepend to the new turn.
        session_id: Optional client conversation id, used for log correlation.
    """

    message: str = Field(..., min_length=1)
    history: list[ChatMessage] = Field(default_factory=list)
    document: DocumentContext | None = None
    session_id: str | None = None

    @field_validator("message", mode="before")
    @classmethod
    def strip_message(cls, v: str) -> str:
        """Strip whitespace from message before validation."""
        if isinstance(v, str):
            return v.strip()
        return v


class ChatResponse(BaseModel):
    """Complete (non-streamed) reply."""

    reply: str
    session_id: str | None = None


class StreamChunk(BaseModel):
    """A chunk of streamed response data.

    Attributes:
        content: The text content of this chunk.
        done: Whether this is the final chunk.
        status: Current processing status (received, reading, generating, complete, error).
        error: Error message if something went wrong.
    """

    content: str
    done: bool
    status: StreamStatus | None = None
    error: str | None = None


class PDFUploadResponse(BaseModel):
    """Response after PDF upload processing.

    Attributes:
        filename: Name of the uploaded file.
        pages: Number of pages in the document.
        characters: Length of the returned text.
        truncated: Whether the text was cut to the context limit.
        text: Extracted text to use as conversation context.
        success: Whether the upload was successful.
        error: Error message if upload failed.
    """

    filename: str
    pages: int
    characters: int = 0
    truncated: bool = False
    text: str = ""
    success: bool
    error: str | None = None
