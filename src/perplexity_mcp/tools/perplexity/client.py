"""
Perplexity chat-completions client.

Performs exactly one HTTP call per invocation and never raises for upstream
problems: every failure comes back as a classified UpstreamFailure.
"""
from typing import Any

import httpx
from pydantic import SecretStr

from perplexity_mcp.logger import get_logger
from perplexity_mcp.settings import DEFAULT_BASE_URL

from .schemas import FailureKind, UpstreamFailure, UpstreamOutcome, UpstreamSuccess

SYSTEM_PROMPT = "Be precise and concise."
TOP_P = 0.9
QUERY_PREVIEW_CHARS = 50

logger = get_logger(component="PerplexityClient")


def preview_query(query: str, limit: int = QUERY_PREVIEW_CHARS) -> str:
    """Truncate a query for logging."""
    if len(query) > limit:
        return query[:limit] + "..."
    return query


def build_payload(query: str, model: str, max_tokens: int, temperature: float) -> dict[str, Any]:
    """Build the JSON body of a chat-completions request."""
    return {
        "model": model,
        "messages": [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": query},
        ],
        "max_tokens": max_tokens,
        "temperature": temperature,
        "top_p": TOP_P,
        "return_citations": True,
    }


def parse_completion(data: Any) -> UpstreamOutcome:
    """Normalize a decoded chat-completions reply.

    Args:
        data: Decoded JSON body

    Returns:
        UpstreamSuccess, or a parse_error UpstreamFailure when the shape is unexpected
    """
    if not isinstance(data, dict):
        return _parse_error("response body is not a JSON object")

    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return _parse_error("response contains no choices")

    message = choices[0].get("message") if isinstance(choices[0], dict) else None
    if not isinstance(message, dict) or not isinstance(message.get("content"), str):
        return _parse_error("first choice has no message content")

    citations = data.get("citations") or []
    if not isinstance(citations, list):
        return _parse_error("citations is not a list")

    usage = data.get("usage")
    total_tokens = usage.get("total_tokens") if isinstance(usage, dict) else None

    return UpstreamSuccess(
        answer_text=message["content"],
        # non-text entries (e.g. null) are dropped
        citations=[citation for citation in citations if isinstance(citation, str)],
        total_tokens=total_tokens if isinstance(total_tokens, int) else 0,
    )


def _parse_error(reason: str) -> UpstreamFailure:
    return UpstreamFailure(
        kind=FailureKind.PARSE_ERROR,
        detail=f"Unexpected response from Perplexity API: {reason}",
    )


class PerplexityClient:
    """Async client for the Perplexity chat-completions endpoint."""

    def __init__(
        self,
        api_key: SecretStr | str | None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        if isinstance(api_key, SecretStr):
            api_key = api_key.get_secret_value()
        self._api_key = (api_key or "").strip()
        self._url = base_url.rstrip("/") + "/chat/completions"
        self._timeout = timeout
        self._http_client = http_client

    async def invoke(
        self,
        query: str,
        model: str,
        max_tokens: int,
        temperature: float,
    ) -> UpstreamOutcome:
        """Send one chat-completions request and classify the outcome.

        Args:
            query: Validated user query
            model: Perplexity model identifier
            max_tokens: Maximum number of tokens in the answer
            temperature: Sampling temperature

        Returns:
            UpstreamSuccess or UpstreamFailure
        """
        if not self._api_key:
            failure = UpstreamFailure(
                kind=FailureKind.CONFIG_ERROR,
                detail="PERPLEXITY_API_KEY environment variable is not set",
            )
            logger.error("perplexity_error", kind=failure.kind.value, detail=failure.detail)
            return failure

        logger.info("perplexity_request", model=model, query=preview_query(query))

        outcome = await self._send(build_payload(query, model, max_tokens, temperature))

        if isinstance(outcome, UpstreamSuccess):
            logger.info("perplexity_response", model=model, total_tokens=outcome.total_tokens)
        else:
            logger.error("perplexity_error", model=model, kind=outcome.kind.value, detail=outcome.detail)
        return outcome

    async def _send(self, payload: dict[str, Any]) -> UpstreamOutcome:
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        try:
            if self._http_client is not None:
                response = await self._http_client.post(self._url, json=payload, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.post(self._url, json=payload, headers=headers)
        except httpx.TransportError as e:
            return UpstreamFailure(
                kind=FailureKind.NETWORK_ERROR,
                detail=str(e) or type(e).__name__,
            )

        if not response.is_success:
            body = response.text
            return UpstreamFailure(
                kind=FailureKind.HTTP_ERROR,
                detail=f"Perplexity API error: {response.status_code} {body}",
                status_code=response.status_code,
                body=body,
            )

        try:
            data = response.json()
        except ValueError:
            return _parse_error("response body is not valid JSON")

        return parse_completion(data)
