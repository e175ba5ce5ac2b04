"""Integration tests for components working together.

Coverage:
    - API endpoints with real HTTP requests over ASGITransport
    - PDF upload with generated documents
    - The chat page's HTTP client against the running app
"""
