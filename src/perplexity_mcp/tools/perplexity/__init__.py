"""
Perplexity-backed research tools for the MCP server.

Both tools come from one handler factory, differing only in name, model and
input bounds (see schemas.TOOL_VARIANTS).
"""
from typing import Annotated, Awaitable, Callable

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult
from pydantic import Field

from perplexity_mcp.logger import get_logger
from perplexity_mcp.settings import Settings, ToolDefaults

from .client import PerplexityClient
from .schemas import TOOL_VARIANTS, ToolVariant, UpstreamSuccess
from .utils import render_response, text_result

logger = get_logger(component="PerplexityTools")

ToolHandler = Callable[..., Awaitable[CallToolResult]]


def build_tool_handler(
    variant: ToolVariant,
    client: PerplexityClient,
    defaults: ToolDefaults,
) -> ToolHandler:
    """Create the async handler for one tool variant.

    The parameter annotations carry the variant's bounds, so FastMCP publishes
    them in the input schema and rejects out-of-range arguments before the
    handler body runs.

    Args:
        variant: Tool name, model and bounds
        client: Upstream Perplexity client
        defaults: Values used when max_tokens / temperature are omitted
    """

    async def handler(
        query: Annotated[
            str,
            Field(
                min_length=variant.min_query_length,
                max_length=variant.max_query_length,
                description=variant.query_description,
            ),
        ],
        max_tokens: Annotated[
            int | None,
            Field(
                ge=variant.min_tokens,
                le=variant.max_tokens,
                description=f"Maximum number of tokens in the response (default: {defaults.max_tokens})",
            ),
        ] = None,
        temperature: Annotated[
            float | None,
            Field(
                ge=0.0,
                le=1.0,
                description=(
                    "Temperature for response generation, 0.0 (deterministic) to 1.0 (creative), "
                    f"default: {defaults.temperature}"
                ),
            ),
        ] = None,
    ) -> CallToolResult:
        try:
            outcome = await client.invoke(
                query,
                variant.model,
                defaults.max_tokens if max_tokens is None else max_tokens,
                defaults.temperature if temperature is None else temperature,
            )
        except Exception as e:
            logger.exception("tool_failed", tool=variant.name, kind="unexpected", detail=str(e))
            return text_result(f"Error: {e}", is_error=True)

        if isinstance(outcome, UpstreamSuccess):
            return text_result(render_response(outcome.answer_text, outcome.citations))

        logger.error("tool_failed", tool=variant.name, kind=outcome.kind.value, detail=outcome.detail)
        return text_result(f"Error: {outcome.detail}", is_error=True)

    handler.__name__ = variant.name.replace("-", "_")
    handler.__doc__ = variant.description
    return handler


def register(mcp: FastMCP, settings: Settings, client: PerplexityClient | None = None) -> None:
    """Register the web-search and deep-research tools with the MCP server.

    Args:
        mcp: The FastMCP server instance
        settings: Application settings (credential, defaults, timeout)
        client: Optional pre-built client, mainly for tests
    """
    if client is None:
        client = PerplexityClient(
            api_key=settings.perplexity_api_key,
            base_url=settings.perplexity_base_url,
            timeout=settings.request_timeout,
        )
    defaults = settings.tool_defaults()

    for variant in TOOL_VARIANTS:
        mcp.tool(
            name=variant.name,
            description=variant.description,
            structured_output=False,
        )(build_tool_handler(variant, client, defaults))
