"""
Perplexity Search MCP Server.

Exposes the ``web-search`` and ``deep-research`` tools backed by the Perplexity API.
"""

__version__ = "1.0.0"
