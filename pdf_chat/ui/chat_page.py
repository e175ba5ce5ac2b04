"""NiceGUI chat page with SSE streaming and PDF attachment."""

import logging
from datetime import datetime

from nicegui import events, ui

from pdf_chat.ui.client import UploadError, stream_chat_response, upload_document
from pdf_chat.ui.formatting import CUSTOM_CSS, markdown_to_html, plain_to_html
from pdf_chat.ui.session import ChatSession

logger = logging.getLogger(__name__)

STATUS_MESSAGES = {
    "received": "Thinking...",
    "reading": "Reading document...",
    "generating": "Generating response...",
}


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    session = ChatSession()

    messages_container: ui.column
    document_chip: ui.row
    document_label: ui.label
    input_field: ui.textarea
    uploader: ui.upload
    send_btn: ui.button

    def render_message(msg: dict) -> None:
        is_user = msg["role"] == "user"
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-assistant"
        if msg.get("error"):
            bubble += " message-error"

        with ui.row().classes(f"w-full {align}"):
            with ui.column().classes("max-w-[75%] gap-1"):
                with ui.element("div").classes(f"px-4 py-2 shadow-sm {bubble}"):
                    content = (
                        plain_to_html(msg["content"])
                        if is_user
                        else markdown_to_html(msg["content"])
                    )
                    ui.html(content, sanitize=False).classes("text-sm leading-relaxed")
                ui.label(msg["time"]).classes(
                    f"text-[10px] text-gray-400 {'self-end' if is_user else 'self-start'}"
                )

    def refresh_messages() -> None:
        messages_container.clear()
        with messages_container:
            if not session.messages:
                with ui.column().classes("w-full h-64 items-center justify-center gap-3"):
                    ui.icon("forum").classes("text-5xl text-gray-300")
                    ui.label("Start a conversation").classes("text-lg text-gray-400")
                    ui.label("Attach a PDF to ask questions about it").classes(
                        "text-sm text-gray-400"
                    )
            else:
                for msg in session.messages:
                    render_message(msg)

    def refresh_document() -> None:
        document_chip.set_visibility(session.document is not None)
        if session.document is not None:
            document_label.set_text(
                f"{session.document.filename} · {session.document.pages} pages"
            )

    def set_pending(pending: bool) -> None:
        if pending:
            send_btn.disable()
        else:
            send_btn.enable()

    def render_status_indicator(status_text: str = "Thinking...") -> tuple[ui.row, ui.label]:
        """Render status indicator with animated dots and status text."""
        with ui.row().classes("w-full justify-start") as row:
            with ui.element("div").classes("message-assistant px-4 py-3"):
                with ui.row().classes("items-center gap-2"):
                    with ui.row().classes("gap-1"):
                        for _ in range(3):
                            ui.element("div").classes("typing-dot")
                    status_label = ui.label(status_text).classes(
                        "text-sm text-gray-500 italic"
                    )
        return row, status_label

    async def send_message() -> None:
        text = input_field.value or ""
        history = session.history()
        if not session.begin_request(text):
            return

        input_field.value = ""
        set_pending(True)
        refresh_messages()

        with messages_container:
            status_row, status_label = render_status_indicator()

        accumulated = ""
        response_html: ui.html | None = None
        msg_time = datetime.now().strftime("%I:%M %p")

        def on_status(status: str) -> None:
            if status in STATUS_MESSAGES:
                status_label.set_text(STATUS_MESSAGES[status])

        def on_chunk(content: str) -> None:
            nonlocal accumulated, response_html
            if response_html is None:
                status_row.delete()
                with messages_container, ui.row().classes("w-full justify-start"):
                    with ui.column().classes("max-w-[75%] gap-1"):
                        with ui.element("div").classes("message-assistant px-4 py-2 shadow-sm"):
                            response_html = ui.html("", sanitize=False).classes(
                                "text-sm leading-relaxed"
                            )
                        ui.label(msg_time).classes("text-[10px] text-gray-400")
            accumulated += content
            response_html.set_content(markdown_to_html(accumulated))

        def on_complete() -> None:
            session.finish_request(accumulated)
            set_pending(False)
            refresh_messages()

        def on_error(error: str) -> None:
            logger.warning(f"Chat failed for session {session.session_id[:8]}: {error}")
            session.fail_request(error)
            set_pending(False)
            refresh_messages()
            ui.notify(error, type="negative")

        try:
            await stream_chat_response(
                session.messages[-1]["content"],
                session.session_id,
                history,
                session.document,
                on_chunk,
                on_status,
                on_complete,
                on_error,
            )
        finally:
            if session.release("Reply was interrupted"):
                set_pending(False)
                refresh_messages()

    async def handle_upload(e: events.UploadEventArguments) -> None:
        filename = e.file.name
        try:
            result = await upload_document(filename, await e.file.read())
        except UploadError as err:
            ui.notify(f"Could not read {filename}: {err}", type="negative")
            return
        finally:
            uploader.reset()

        if not result.text:
            ui.notify(f"{filename} contains no extractable text", type="warning")
            return

        session.attach_document(result.filename, result.text, result.pages)
        refresh_document()
        note = " (truncated)" if result.truncated else ""
        ui.notify(f"Attached {result.filename}{note}", type="positive")

    def remove_document() -> None:
        session.detach_document()
        refresh_document()

    def new_chat() -> None:
        if session.is_pending:
            ui.notify("Wait for the current reply to finish", type="info")
            return
        session.reset()
        refresh_messages()
        refresh_document()

    # === UI Layout ===
    with (
        ui.element("div").classes("w-full min-h-screen p-4"),
        ui.column().classes("w-full max-w-2xl mx-auto app-container").style(
            "height: calc(100vh - 2rem)"
        ),
    ):
        # Header
        with ui.row().classes("w-full header px-5 py-3 items-center justify-between"):
            with ui.row().classes("items-center gap-3"):
                ui.icon("chat").classes("text-white text-2xl")
                ui.label("PDF Chat").classes("text-lg font-semibold text-white")
            with ui.row().classes("items-center gap-2"):
                ui.label().bind_text_from(
                    session, "session_id", lambda s: s[:8].upper()
                ).classes("text-xs text-white/80 font-mono")
                ui.button(icon="add", on_click=new_chat).props("flat round color=white")

        # Attached document
        with ui.row().classes("w-full px-5 py-2 items-center gap-2 bg-blue-50") as document_chip:
            ui.icon("picture_as_pdf").classes("text-red-500")
            document_label = ui.label().classes("text-sm text-gray-700 flex-grow")
            ui.button(icon="close", on_click=remove_document).props("flat round dense size=sm")
        refresh_document()

        # Messages
        with (
            ui.scroll_area().classes("flex-grow w-full bg-gray-50"),
            ui.column().classes("w-full p-4"),
        ):
            messages_container = ui.column().classes("w-full gap-3")
            refresh_messages()

        # Input
        with ui.row().classes("w-full p-4 gap-2 items-end bg-white border-t"):
            uploader = (
                ui.upload(on_upload=handle_upload, auto_upload=True, max_files=1)
                .props('accept=".pdf" flat dense hide-upload-btn')
                .classes("w-40")
            )
            with ui.element("div").classes("flex-grow input-box px-3 py-2"):
                input_field = (
                    ui.textarea(placeholder="Type your message...")
                    .props("autogrow borderless dense rows=1")
                    .classes("w-full")
                    .on("keydown.enter.prevent", send_message)
                )
            send_btn = ui.button("Send", icon="send", on_click=send_message).props("unelevated")


def main() -> None:
    ui.run(title="PDF Chat", port=8080, reload=False)


if __name__ == "__main__":
    main()
