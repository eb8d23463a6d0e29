"""OpenRouter chat-completions client used as the generation backend."""

import httpx
import logging
from typing import Dict, Any, List

from ..core.config import Settings, settings as default_settings
from ..core.structured_logging import log_external_call
from ..models.exceptions import GenerationError

logger = logging.getLogger(__name__)


def _headers(api_key: str) -> Dict[str, str]:
    """Build standard OpenRouter headers."""
    return {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
        "X-Title": "AI Designer",
    }


def _extract_message_text(response: Dict[str, Any]) -> str:
    """Extract text content from an OpenRouter-style response."""
    try:
        choices = response.get("choices", [])
        if not choices:
            return ""
        msg = choices[0].get("message", {})
        content = msg.get("content", "")
        if isinstance(content, str):
            return content
        if isinstance(content, list):
            parts = [p.get("text", "") for p in content if isinstance(p, dict) and "text" in p]
            return "\n".join([p for p in parts if p])
        return ""
    except (AttributeError, KeyError, IndexError, TypeError):
        return ""


async def call_chat_completion(messages: List[Dict[str, str]],
                               settings: Settings | None = None,
                               **kwargs) -> str:
    """Send chat messages and return the assistant text.

    Raises:
        GenerationError: when no API key is configured, the request fails or
            times out, or the response carries no usable text.
    """
    cfg = settings or default_settings
    api_key = cfg.openrouter_api_key
    if not api_key:
        raise GenerationError(
            "OPENROUTER_API_KEY environment variable is not set",
            reason=GenerationError.MISSING_CREDENTIALS,
        )

    model = kwargs.get("model") or cfg.design_model
    payload = {
        "model": model,
        "messages": messages,
        "max_tokens": kwargs.get("max_tokens", cfg.design_max_tokens),
        "temperature": kwargs.get("temperature", cfg.design_temperature),
    }

    log_external_call(logger, "OpenRouter", "chat.completions", model=model)
    try:
        async with httpx.AsyncClient(timeout=float(cfg.openrouter_timeout)) as client:
            resp = await client.post(
                f"{cfg.openrouter_base_url.rstrip('/')}/chat/completions",
                headers=_headers(api_key),
                json=payload,
            )
            resp.raise_for_status()
            result = resp.json()
    except httpx.HTTPStatusError as e:
        raise GenerationError(
            f"OpenRouter error {e.response.status_code}",
            status_code=e.response.status_code,
            model=model,
        ) from e
    except httpx.TimeoutException as e:
        raise GenerationError("OpenRouter request timed out", model=model) from e
    except httpx.HTTPError as e:
        raise GenerationError(f"OpenRouter request failed: {e}", model=model) from e
    except ValueError as e:
        raise GenerationError(
            f"Invalid JSON response from OpenRouter: {e}",
            reason=GenerationError.MALFORMED_OUTPUT,
            model=model,
        ) from e

    text = _extract_message_text(result) if isinstance(result, dict) else ""
    if not text.strip():
        raise GenerationError(
            "OpenRouter returned an empty completion",
            reason=GenerationError.MALFORMED_OUTPUT,
            model=model,
        )
    logger.info(f"OpenRouter completion received from {model}")
    return text
