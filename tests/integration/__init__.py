"""Integration tests for components working together as a system.

Coverage:
    - /chat/stream with real HTTP requests through ASGITransport
    - HttpStreamTransport consuming the endpoint
    - The submit flow from composer text to a patched model turn

Only the model transport is scripted; everything else is the real code.
"""
