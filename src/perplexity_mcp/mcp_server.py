"""
Perplexity Search MCP Server - process entry point.

Runs on stdio by default; MCP_TRANSPORT selects sse or streamable-http instead.
"""
import sys

from dotenv import load_dotenv
from mcp.server.fastmcp import FastMCP
from pydantic import ValidationError

from perplexity_mcp.logger import configure_logging, get_logger
from perplexity_mcp.settings import Settings, get_settings
from perplexity_mcp.tools import register_all_tools

SERVER_NAME = "PerplexitySearch"
SERVER_INSTRUCTIONS = (
    "Use web-search for quick, factual questions that need current information. "
    "Use deep-research for complex topics that need thorough, multi-source analysis. "
    "Answers end with a numbered list of sources."
)

logger = get_logger(component="MCPServer")


def create_server(settings: Settings) -> FastMCP:
    """Build the FastMCP server with every tool registered."""
    mcp = FastMCP(
        name=SERVER_NAME,
        instructions=SERVER_INSTRUCTIONS,
        host=settings.mcp_host,
        port=settings.mcp_port,
        log_level=settings.log_level,
    )
    register_all_tools(mcp, settings)
    return mcp


def main() -> None:
    """Start the server; exits with status 1 when misconfigured or on startup failure."""
    load_dotenv()
    try:
        settings = get_settings()
    except ValidationError as e:
        # defaults only, so the failure itself can be logged to stderr
        configure_logging(Settings.model_construct(), force=True)
        logger.error("invalid_settings", detail=str(e))
        sys.exit(1)
    configure_logging(settings, force=True)

    logger.info("server_starting", name=SERVER_NAME, transport=settings.mcp_transport)

    if not settings.has_api_key:
        logger.error("missing_api_key", detail="PERPLEXITY_API_KEY environment variable is not set")
        sys.exit(1)

    try:
        mcp = create_server(settings)
        logger.info("server_running", name=SERVER_NAME, transport=settings.mcp_transport)
        mcp.run(transport=settings.mcp_transport)
    except Exception as e:
        logger.exception("server_failed", detail=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
