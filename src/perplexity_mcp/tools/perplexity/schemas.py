"""
Pydantic schemas for the Perplexity tools.

UpstreamSuccess / UpstreamFailure: normalized outcome of one API call.
ToolVariant: static description of one registered tool.
"""
from enum import Enum
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class FailureKind(str, Enum):
    """Classification of a failed upstream call."""

    CONFIG_ERROR = "config_error"
    HTTP_ERROR = "http_error"
    NETWORK_ERROR = "network_error"
    PARSE_ERROR = "parse_error"


class UpstreamSuccess(BaseModel):
    """Answer returned by the Perplexity API."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["success"] = "success"
    answer_text: str = Field(description="Content of the first choice")
    citations: list[str] = Field(default_factory=list, description="Source URLs in API order")
    total_tokens: int = Field(default=0, description="Total token usage reported by the API")


class UpstreamFailure(BaseModel):
    """Classified failure of a Perplexity API call."""

    model_config = ConfigDict(frozen=True)

    kind: FailureKind
    detail: str = Field(description="Human-readable error message")
    status_code: int | None = Field(default=None, description="HTTP status for http_error")
    body: str | None = Field(default=None, description="Raw response body for http_error")


UpstreamOutcome = Union[UpstreamSuccess, UpstreamFailure]


class ToolVariant(BaseModel):
    """Name, model and input bounds of one Perplexity-backed tool."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    model: str
    query_description: str
    min_query_length: int = 3
    max_query_length: int
    min_tokens: int
    max_tokens: int


QUICK_SEARCH = ToolVariant(
    name="web-search",
    description=(
        "Quickly search the web for current and factual information using Perplexity. "
        "This tool is best for straightforward questions that require up-to-date information."
    ),
    model="sonar-reasoning-pro",
    query_description="The search query - be specific and clear",
    max_query_length=1000,
    min_tokens=50,
    max_tokens=4000,
)

DEEP_RESEARCH = ToolVariant(
    name="deep-research",
    description=(
        "Perform comprehensive, thorough research on a complex topic using Perplexity's "
        "advanced research model. This tool provides more detailed analysis with multiple "
        "sources and is best for in-depth questions requiring nuanced understanding."
    ),
    model="sonar-deep-research",
    query_description="The research question or topic - be specific about what you want to learn",
    max_query_length=2000,
    min_tokens=100,
    max_tokens=8000,
)

TOOL_VARIANTS: tuple[ToolVariant, ...] = (QUICK_SEARCH, DEEP_RESEARCH)
