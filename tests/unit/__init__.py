"""Unit tests for individual components in isolation.

Coverage:
    - parsing/: Text extraction, normalization and truncation
    - agent/: Configuration, message assembly and reply handling
    - ui/: Session state and bubble rendering

Mocks agno classes where a model would be called.
"""
