"""
Entry point for ``python -m perplexity_mcp``.
"""
from perplexity_mcp.mcp_server import main

main()
