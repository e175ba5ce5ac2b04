"""NiceGUI interface - thin visualization layer for chat interactions.

Responsibilities:
    - Chat message display with streaming support
    - PDF attachment and removal
    - One request in flight per tab

Contains minimal business logic. Delegates model calls and PDF parsing
to the API.
"""
