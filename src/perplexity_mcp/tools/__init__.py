"""
Perplexity MCP Tools Registry.

This module provides centralized tool registration for the MCP server.
"""
from mcp.server.fastmcp import FastMCP

from perplexity_mcp.settings import Settings

from . import perplexity


def register_all_tools(mcp: FastMCP, settings: Settings) -> None:
    """Register all tools with the MCP server.

    Args:
        mcp: The FastMCP server instance
        settings: Application settings shared by the tools
    """
    perplexity.register(mcp, settings)
