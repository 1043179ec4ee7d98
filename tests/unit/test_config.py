"""Unit tests for ChatConfig."""

import pytest
from pydantic import ValidationError

from gemini_chat.agent.config import DEFAULT_MODEL, DEFAULT_SYSTEM_INSTRUCTION, ChatConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer .env values out of these tests."""
    for name in (
        "GEMINI_API_KEY",
        "GOOGLE_API_KEY",
        "API_KEY",
        "GEMINI_MODEL",
        "GEMINI_SYSTEM_INSTRUCTION",
    ):
        monkeypatch.delenv(name, raising=False)


class TestChatConfig:
    """Tests for ChatConfig validation."""

    def test_valid_config_with_all_fields(self) -> None:
        """Config accepts valid values for all fields."""
        config = ChatConfig(
            api_key="test-key-12345",
            model_name="gemini-2.5-pro",
            system_instruction="Be brief.",
            temperature=0.5,
            top_p=0.8,
            top_k=20,
        )

        assert config.api_key == "test-key-12345"
        assert config.model_name == "gemini-2.5-pro"
        assert config.system_instruction == "Be brief."
        assert config.temperature == 0.5
        assert config.top_p == 0.8
        assert config.top_k == 20

    def test_config_with_default_values(self) -> None:
        """Defaults match the fixed generation settings."""
        config = ChatConfig(api_key="test-key")

        assert config.model_name == DEFAULT_MODEL
        assert config.system_instruction == DEFAULT_SYSTEM_INSTRUCTION
        assert config.temperature == 0.7
        assert config.top_p == 0.95
        assert config.top_k == 40

    def test_config_fails_with_missing_api_key(self) -> None:
        """Config raises ValidationError when no key is set anywhere."""
        with pytest.raises(ValidationError) as exc_info:
            ChatConfig()

        assert "GEMINI_API_KEY is required" in str(exc_info.value)

    def test_config_fails_with_whitespace_api_key(self) -> None:
        with pytest.raises(ValidationError):
            ChatConfig(api_key="   ")

    def test_config_strips_api_key_whitespace(self) -> None:
        config = ChatConfig(api_key="  test-key  ")

        assert config.api_key == "test-key"

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("temperature", -0.1),
            ("temperature", 2.5),
            ("top_p", 1.5),
            ("top_k", 0),
        ],
    )
    def test_config_rejects_out_of_range_sampling(self, field: str, value: float) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ChatConfig(api_key="test-key", **{field: value})

        assert field in str(exc_info.value)


class TestEnvironment:
    """Tests for environment variable loading."""

    def test_reads_gemini_api_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GEMINI_API_KEY", "env-key")

        assert ChatConfig().api_key == "env-key"

    def test_falls_back_to_google_api_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GOOGLE_API_KEY", "google-key")

        assert ChatConfig().api_key == "google-key"

    def test_model_name_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GEMINI_MODEL", "gemini-2.5-flash")

        assert ChatConfig(api_key="k").model_name == "gemini-2.5-flash"
