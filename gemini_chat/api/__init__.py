"""FastAPI endpoints for the chat client.

Streams model replies over Server-Sent Events so the browser UI never talks
to the model service directly.

Endpoints:
    - GET /health: Service health status
    - POST /chat/stream: Streamed reply for a conversation
"""

from gemini_chat.api.app import app, create_app

__all__ = ["app", "create_app"]
