"""Message assembly for the generation API.

The model sees, in order: the trailing window of earlier turns, then the
new user turn. An attached document is prepended to the new turn as a
delimited context block.
"""

from agno.models.message import Message

from pdf_chat.models.schemas import ChatMessage, DocumentContext

INSTRUCTIONS = [
    "Provide helpful and accurate responses.",
    "When the user attaches a document, answer from its text and say so "
    "when the document does not contain the answer.",
    "Be concise yet thorough.",
]

DOCUMENT_TEMPLATE = (
    'The user attached the document "{filename}" ({pages} pages). '
    "Its extracted text follows between the markers.\n"
    "<<<DOCUMENT\n{text}\nDOCUMENT>>>"
)


def format_document_context(document: DocumentContext) -> str:
    """Render an attached document as a context block."""
    return DOCUMENT_TEMPLATE.format(
        filename=document.filename,
        pages=document.pages,
        text=document.text,
    )


def compose_user_turn(message: str, document: DocumentContext | None = None) -> str:
    """Prepend the document context (if any) to the new user text."""
    if document is None or not document.text.strip():
        return message
    return f"{format_document_context(document)}\n\n{message}"


def build_messages(
    message: str,
    history: list[ChatMessage],
    document: DocumentContext | None = None,
    max_history: int = 20,
) -> list[Message]:
    """Assemble the message list sent to the model.

    Args:
        message: The new user text.
        history: Earlier turns, oldest first.
        document: Optional attached document.
        max_history: Number of trailing history turns to keep (0 keeps none).

    Returns:
        Agno messages ending with the new user turn.
    """
    window = history[-max_history:] if max_history > 0 else []
    messages = [Message(role=turn.role.value, content=turn.content) for turn in window]
    messages.append(Message(role="user", content=compose_user_turn(message, document)))
    return messages
