"""Test package for Gemini Chat.

Unit tests cover isolated logic; integration tests cover the streaming API
and the end-to-end submit flow.

Structure:
    - unit/: Individual function and class tests
    - integration/: API and workflow tests
    - fakes.py: Scripted model transport and in-memory repository

The model service is never called. Leverages pytest with pytest-asyncio for
coroutines and pytest-check for soft assertions.
"""
