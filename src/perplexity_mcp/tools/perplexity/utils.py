"""
Formatting helpers for Perplexity tool responses.
"""
from mcp.types import CallToolResult, TextContent


def render_response(answer_text: str, citations: list[str]) -> str:
    """Append a numbered "Sources:" block to the answer.

    Citations keep the order the API returned them in; duplicates are kept.
    """
    if not citations:
        return answer_text

    lines = [answer_text, "", "Sources:"]
    lines.extend(f"[{index}] {citation}" for index, citation in enumerate(citations, 1))
    return "\n".join(lines)


def text_result(text: str, is_error: bool = False) -> CallToolResult:
    """Wrap a single text block in an MCP tool result."""
    return CallToolResult(
        content=[TextContent(type="text", text=text)],
        isError=is_error,
    )
