"""Rendering helpers for chat bubbles."""

import re

_CODE_BLOCK = re.compile(r"```(\w*)\n?([\s\S]*?)```")
_INLINE_CODE = re.compile(r"`([^`]+)`")
_LINK = re.compile(r"\[([^\]]+)\]\((https?://[^)\s]+)\)")

_LISTS = (
    (re.compile(r"^[-*]\s+"), '<ul class="list-disc list-inside my-2 space-y-1">', "</ul>"),
    (re.compile(r"^\d+\.\s+"), '<ol class="list-decimal list-inside my-2 space-y-1">', "</ol>"),
)


def escape_html(text: str) -> str:
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#x27;")
    )


def _wrap_lists(text: str, marker: re.Pattern, open_tag: str, close_tag: str) -> str:
    result: list[str] = []
    in_list = False
    for line in text.split("\n"):
        stripped = line.strip()
        if marker.match(stripped):
            if not in_list:
                result.append(open_tag)
                in_list = True
            result.append(f"<li>{marker.sub('', stripped)}</li>")
            continue
        if in_list:
            result.append(close_tag)
            in_list = False
        result.append(line)
    if in_list:
        result.append(close_tag)
    return "\n".join(result)


def markdown_to_html(text: str) -> str:
    """Convert the markdown subset models usually emit to HTML.

    Supports: bold, italic, inline code, code blocks, links, lists.
    Input is HTML-escaped first, quotes included. Only http(s) links
    become anchors; any other link target stays as text.
    """
    text = escape_html(text)

    text = _CODE_BLOCK.sub(
        r'<pre class="bg-gray-800 text-gray-100 rounded-lg p-3 my-2 overflow-x-auto text-xs">'
        r"<code>\2</code></pre>",
        text,
    )
    text = _INLINE_CODE.sub(
        r'<code class="bg-gray-200 text-pink-600 px-1.5 py-0.5 rounded text-xs">\1</code>',
        text,
    )

    text = re.sub(r"\*\*(.+?)\*\*", r"<strong>\1</strong>", text)
    text = re.sub(r"__(.+?)__", r"<strong>\1</strong>", text)
    text = re.sub(r"(?<![\w*])\*([^*\n]+)\*(?![\w*])", r"<em>\1</em>", text)
    text = re.sub(r"(?<![\w])_([^_\n]+)_(?![\w])", r"<em>\1</em>", text)

    text = _LINK.sub(
        r'<a href="\2" class="text-blue-600 underline" target="_blank">\1</a>',
        text,
    )

    for marker, open_tag, close_tag in _LISTS:
        text = _wrap_lists(text, marker, open_tag, close_tag)

    return text.replace("\n", "<br>")


def plain_to_html(text: str) -> str:
    """User text is shown verbatim, with line breaks kept."""
    return escape_html(text).replace("\n", "<br>")


CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #f9fafb; min-height: 100vh; }

    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }

    .header { background: #3b82f6; }

    .message-user {
        background: #3b82f6;
        color: white;
        border-radius: 18px 18px 4px 18px;
    }

    .message-assistant {
        background: #e5e7eb;
        color: #111827;
        border-radius: 18px 18px 18px 4px;
    }

    .message-error { background: #fee2e2; color: #991b1b; }

    .typing-dot {
        width: 8px; height: 8px;
        background: #3b82f6;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.2s; }
    .typing-dot:nth-child(3) { animation-delay: 0.4s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }

    .input-box {
        background: #f9fafb;
        border: 1px solid #e5e7eb;
        border-radius: 12px;
    }
    .input-box:focus-within { border-color: #3b82f6; }

    .message-assistant pre { margin: 0.5rem 0; }
    .message-assistant code { font-family: 'Menlo', 'Monaco', monospace; }
    .message-assistant a { color: #1d4ed8; }
</style>
"""
