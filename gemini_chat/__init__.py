"""Gemini Chat - a browser chat client for Google's Gemini models.

Combines FastAPI for HTTP streaming, the google-genai SDK for model access,
NiceGUI for the browser interface, and Pydantic for data validation.

Components:
    - agent: model configuration, transports and streaming accumulation
    - api: SSE streaming endpoint
    - store: conversation threads and their persistence
    - parsing: image attachment encoding
    - ui: markdown rendering and the chat page
    - models: conversation records and wire schemas
"""

__version__ = "0.1.0"
