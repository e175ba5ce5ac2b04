"""PDF Chat - converse with a hosted LLM, optionally grounded on an attached PDF.

Combines FastAPI for HTTP streaming, Agno for the model call,
NiceGUI for the chat page, and Pydantic for data validation.

Components:
    - api: HTTP endpoints and streaming responses
    - agent: LLM call with history forwarding and document context
    - parsing: PDF text extraction
    - ui: Web interface for chat interactions
    - models: Request/response schemas
"""

__version__ = "0.1.0"
