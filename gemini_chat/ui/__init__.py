"""NiceGUI interface - thin visualization layer for chat interactions.

Delivers a single-page web UI with real-time streaming updates.

Responsibilities:
    - Thread list with create, select and delete
    - Message display via the markdown-subset renderer, inline images
    - Composer with image attachment and Enter-to-send
    - The submit flow (ChatSession) tying the store to the model stream

Threads persist per browser in NiceGUI's user storage. Model access goes
through the streaming API.
"""
