"""Test package for PDF Chat.

Structure:
    - unit/: Individual function and class tests
    - integration/: API and UI client tests against the real app

Sample PDFs are generated by fixtures; the model is replaced by an
echo-mode service, so no API key or network access is needed.
Uses pytest with pytest-asyncio and pytest-check for soft assertions.
"""
