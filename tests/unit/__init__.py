"""Unit tests for individual components in isolation.

Coverage:
    - agent/: configuration, wire conversion, delta accumulation
    - store/: thread commands and persistence
    - parsing/: image validation and encoding
    - ui/: markdown-subset rendering

The Gemini SDK client is mocked where a transport is constructed.
"""
