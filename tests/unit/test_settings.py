"""Tests for environment-driven settings."""
import pytest
from pydantic import ValidationError

from perplexity_mcp.settings import Settings


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Defaults apply when only the credential is provided."""
    for name in ("PERPLEXITY_BASE_URL", "PERPLEXITY_TIMEOUT", "DEFAULT_MAX_TOKENS", "DEFAULT_TEMPERATURE", "MCP_TRANSPORT"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None, perplexity_api_key="key")

    assert settings.perplexity_base_url == "https://api.perplexity.ai"
    assert settings.request_timeout is None
    assert settings.mcp_transport == "stdio"
    defaults = settings.tool_defaults()
    assert defaults.max_tokens == 500
    assert defaults.temperature == 0.2


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Every knob can be overridden through environment variables."""
    monkeypatch.setenv("PERPLEXITY_API_KEY", "pplx-env")
    monkeypatch.setenv("PERPLEXITY_TIMEOUT", "30")
    monkeypatch.setenv("DEFAULT_MAX_TOKENS", "1200")
    monkeypatch.setenv("DEFAULT_TEMPERATURE", "0.7")
    monkeypatch.setenv("MCP_TRANSPORT", "sse")
    monkeypatch.setenv("LOG_FORMAT", "json")

    settings = Settings(_env_file=None)

    assert settings.perplexity_api_key.get_secret_value() == "pplx-env"
    assert settings.request_timeout == 30.0
    assert settings.tool_defaults().max_tokens == 1200
    assert settings.tool_defaults().temperature == 0.7
    assert settings.mcp_transport == "sse"
    assert settings.log_format == "json"


@pytest.mark.parametrize("value", ["", "   "])
def test_blank_api_key_is_missing(value: str) -> None:
    assert not Settings(_env_file=None, perplexity_api_key=value).has_api_key


def test_api_key_is_not_exposed_in_repr() -> None:
    settings = Settings(_env_file=None, perplexity_api_key="pplx-secret")

    assert settings.has_api_key
    assert "pplx-secret" not in repr(settings)


def test_log_level_is_case_insensitive() -> None:
    assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"


def test_unknown_log_level_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "verbose")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)
