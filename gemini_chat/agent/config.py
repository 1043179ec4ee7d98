"""Model service configuration with environment variable loading.

Pydantic-based configuration for the Gemini streaming transport.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_MODEL = "gemini-3-flash-preview"

DEFAULT_SYSTEM_INSTRUCTION = (
    "You are a world-class AI assistant. You provide concise, accurate, and "
    "helpful information. You format your responses using Markdown for clarity, "
    "including code blocks where appropriate. Always be polite and professional."
)


def _api_key_from_env() -> str:
    for name in ("GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY"):
        if value := os.getenv(name):
            return value
    return ""


class ChatConfig(BaseModel):
    """Configuration for the Gemini model service.

    The system instruction and sampling parameters are fixed per process;
    they are sent with every request rather than as conversation history.

    Attributes:
        api_key: Google AI API key.
        model_name: Model identifier to use.
        system_instruction: System behavior prompt.
        temperature: Sampling temperature (0.0 = deterministic, 2.0 = creative).
        top_p: Nucleus sampling probability mass.
        top_k: Number of highest-probability tokens considered.
    """

    api_key: str = Field(
        default_factory=_api_key_from_env,
        validate_default=True,
        description="API key for the Gemini API",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("GEMINI_MODEL", DEFAULT_MODEL),
        description="Model to use",
    )
    system_instruction: str = Field(
        default_factory=lambda: os.getenv(
            "GEMINI_SYSTEM_INSTRUCTION", DEFAULT_SYSTEM_INSTRUCTION
        ),
        description="System instruction sent with every request",
    )
    temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for response generation",
    )
    top_p: float = Field(
        default=0.95,
        ge=0.0,
        le=1.0,
        description="Nucleus sampling threshold",
    )
    top_k: int = Field(
        default=40,
        ge=1,
        description="Top-k sampling cutoff",
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError("GEMINI_API_KEY is required. Set it in the environment or .env")
        return v.strip()


def get_chat_config() -> ChatConfig:
    """Create model service configuration from environment.

    Returns:
        Configured ChatConfig instance.

    Raises:
        ValueError: If no API key is set.
    """
    return ChatConfig()
