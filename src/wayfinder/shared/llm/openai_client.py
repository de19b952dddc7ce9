from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from wayfinder.shared.config.settings import settings
from wayfinder.shared.concurrency import LLM_SEMAPHORE

log = logging.getLogger("openai")

_CHAT_URL = f"{settings.OPENAI_BASE_URL.rstrip('/')}/chat/completions"

def _headers() -> Dict[str, str]:
    return {
        "Authorization": f"Bearer {settings.OPENAI_API_KEY}",
        "Content-Type": "application/json",
    }

async def chat_completion(
    messages: List[Dict[str, Any]],
    *,
    tools: Optional[List[Dict[str, Any]]] = None,
    response_format: Optional[Dict[str, Any]] = None,
    model: Optional[str] = None,
    temperature: Optional[float] = None,
    max_tokens: Optional[int] = None,
    request_timeout: Optional[int] = None,
) -> Dict[str, Any]:
    """
    This function sends one non-streaming chat completion request and returns
    the assistant message (content and/or tool_calls) of the first choice.
    """
    if not settings.OPENAI_API_KEY:
        raise RuntimeError("OPENAI_API_KEY is not configured.")

    payload: Dict[str, Any] = {
        "model": (model or settings.CHAT_MODEL),
        "messages": messages,
        "temperature": temperature if temperature is not None else settings.TEMPERATURE,
        "max_tokens": max_tokens if max_tokens is not None else settings.MAX_TOKENS,
    }
    if tools:
        payload["tools"] = tools
        payload["tool_choice"] = "auto"
    if response_format:
        payload["response_format"] = response_format
    timeout = httpx.Timeout(request_timeout or settings.LLM_REQUEST_TIMEOUT)

    async with LLM_SEMAPHORE:
        async with httpx.AsyncClient(timeout=timeout) as client:
            resp = await client.post(_CHAT_URL, headers=_headers(), json=payload)
            resp.raise_for_status()
            data = resp.json()

    choice = (data.get("choices") or [{}])[0]
    message = choice.get("message")
    if not isinstance(message, dict):
        raise ValueError(f"chat completion returned no message (finish_reason={choice.get('finish_reason')})")
    log.debug("chat completion finished: %s", choice.get("finish_reason"))
    return message
