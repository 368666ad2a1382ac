"""
Environment-driven configuration for the Perplexity MCP server.
"""
from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://api.perplexity.ai"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ToolDefaults(BaseModel):
    """Values substituted when a tool call omits an optional parameter."""

    max_tokens: int = 500
    temperature: float = 0.2


class Settings(BaseSettings):
    """Application configuration loaded from environment variables and ``.env``."""

    perplexity_api_key: SecretStr = Field(default=SecretStr(""), validation_alias="PERPLEXITY_API_KEY")
    perplexity_base_url: str = Field(default=DEFAULT_BASE_URL, validation_alias="PERPLEXITY_BASE_URL")
    # None keeps the request unbounded
    request_timeout: float | None = Field(default=None, validation_alias="PERPLEXITY_TIMEOUT", gt=0)

    default_max_tokens: int = Field(default=500, validation_alias="DEFAULT_MAX_TOKENS", ge=1)
    default_temperature: float = Field(
        default=0.2, validation_alias="DEFAULT_TEMPERATURE", ge=0.0, le=1.0,
    )

    log_level: LogLevel = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_format: Literal["console", "json"] = Field(default="console", validation_alias="LOG_FORMAT")

    mcp_transport: Literal["stdio", "sse", "streamable-http"] = Field(
        default="stdio", validation_alias="MCP_TRANSPORT",
    )
    mcp_host: str = Field(default="127.0.0.1", validation_alias="MCP_HOST")
    mcp_port: int = Field(default=8000, validation_alias="MCP_PORT")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> object:
        """Accept level names in any case."""
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @property
    def has_api_key(self) -> bool:
        """Whether a non-blank Perplexity credential is configured."""
        return bool(self.perplexity_api_key.get_secret_value().strip())

    def tool_defaults(self) -> ToolDefaults:
        """Return the defaults injected into the tool handlers."""
        return ToolDefaults(
            max_tokens=self.default_max_tokens,
            temperature=self.default_temperature,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached settings instance."""
    return Settings()
