"""
Helpers for calling OpenAI chat.completions via the official Python SDK.

The SDK client is synchronous; calls are pushed onto a worker thread so the
event loop stays free while the model is thinking.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

import anyio
import httpx
from openai import OpenAI

from .exceptions import UpstreamError
from .logging_config import logger
from .models import Message

NO_RESPONSE_TEXT = "No response from GPT"

# Models that reject reasoning_effort / verbosity parameters.
_MODELS_WITHOUT_TUNING = frozenset({"o3"})


@dataclass
class UpstreamReply:
    text: str
    tokens_used: int


def supports_tuning(model: str) -> bool:
    return model not in _MODELS_WITHOUT_TUNING


def build_chat_payload(
    model: str,
    prompt: str,
    *,
    reasoning_effort: Optional[str] = None,
    verbosity: Optional[str] = None,
    history: Optional[Sequence[Message]] = None,
) -> Dict[str, Any]:
    """
    Build the chat.completions request body: prior history followed by the
    new user prompt.
    """
    messages = [{"role": m.role, "content": m.content} for m in history or ()]
    messages.append({"role": "user", "content": prompt})

    payload: Dict[str, Any] = {"model": model, "messages": messages}
    if supports_tuning(model):
        if reasoning_effort:
            payload["reasoning_effort"] = reasoning_effort
        if verbosity:
            payload["verbosity"] = verbosity
    return payload


def _extract_reply(resp: Any) -> UpstreamReply:
    text = None
    choices = getattr(resp, "choices", None) or []
    if choices:
        message = getattr(choices[0], "message", None)
        text = getattr(message, "content", None)
    usage = getattr(resp, "usage", None)
    tokens = getattr(usage, "total_tokens", None) or 0
    return UpstreamReply(text=text or NO_RESPONSE_TEXT, tokens_used=int(tokens))


class OpenAIChatClient:
    def __init__(
        self,
        api_key: str,
        *,
        base_url: Optional[str] = None,
        timeout: float = 600.0,
    ) -> None:
        kwargs: Dict[str, Any] = {
            "api_key": api_key,
            "http_client": httpx.Client(timeout=timeout),
        }
        if base_url:
            kwargs["base_url"] = base_url
        self._client = OpenAI(**kwargs)

    async def ask(
        self,
        model: str,
        prompt: str,
        *,
        reasoning_effort: Optional[str] = None,
        verbosity: Optional[str] = None,
        history: Optional[Sequence[Message]] = None,
    ) -> UpstreamReply:
        payload = build_chat_payload(
            model,
            prompt,
            reasoning_effort=reasoning_effort,
            verbosity=verbosity,
            history=history,
        )

        def _call():
            return self._client.chat.completions.create(**payload)

        try:
            resp = await anyio.to_thread.run_sync(_call)
        except Exception as exc:
            logger.warning("OpenAI call failed for model %s: %s", model, exc)
            raise UpstreamError(f"OpenAI API error: {exc}") from exc

        reply = _extract_reply(resp)
        logger.info(
            "OpenAI %s replied with %d chars, %d tokens",
            model,
            len(reply.text),
            reply.tokens_used,
        )
        return reply


__all__ = [
    "NO_RESPONSE_TEXT",
    "OpenAIChatClient",
    "UpstreamReply",
    "build_chat_payload",
    "supports_tuning",
]
