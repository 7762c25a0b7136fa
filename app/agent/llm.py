"""
Agent LLM: OpenAI chat completions with tool calling.

One request per call, no automatic retries. Failures surface as UpstreamServiceError
so the API can answer with an apology instead of a stack trace.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any

import httpx
import openai
from openai import OpenAI

from app.core.config import (
    AGENT_MAX_TOKENS,
    LLM_API_TIMEOUT,
    LLM_CONNECT_TIMEOUT,
    OPENAI_API_KEY,
    OPENAI_LLM_MODEL,
)
from app.core.errors import UpstreamServiceError

logger = logging.getLogger(__name__)


@dataclass
class ToolCall:
    id: str
    name: str
    arguments: dict[str, Any]


@dataclass
class ModelReply:
    content: str | None
    tool_calls: list[ToolCall] = field(default_factory=list)


def _make_client() -> OpenAI:
    return OpenAI(
        api_key=OPENAI_API_KEY,
        timeout=httpx.Timeout(LLM_API_TIMEOUT, connect=LLM_CONNECT_TIMEOUT),
        max_retries=0,
    )


def _parse_arguments(raw: Any) -> dict[str, Any]:
    if isinstance(raw, dict):
        return raw
    try:
        args = json.loads(raw) if raw else {}
    except (TypeError, json.JSONDecodeError):
        logger.warning("[llm:chat_with_tools] unparseable tool arguments=%r", raw)
        return {}
    return args if isinstance(args, dict) else {}


def chat_with_tools(
    messages: list[dict[str, Any]],
    tools: list[dict[str, Any]],
    system_instruction: str,
    max_tokens: int = AGENT_MAX_TOKENS,
) -> ModelReply:
    """
    Call OpenAI chat with tools. The system instruction is sent as the leading
    system message; messages is the conversation so far (user/assistant/tool turns).
    Returns the reply text (may be None) and any tool calls the model requested.
    """
    logger.info("[llm:chat_with_tools] IN  model=%s messages=%d tools=%d", OPENAI_LLM_MODEL, len(messages), len(tools))
    payload = [{"role": "system", "content": system_instruction}, *messages]
    client = _make_client()
    try:
        response = client.chat.completions.create(
            model=OPENAI_LLM_MODEL,
            messages=payload,
            tools=tools,
            max_tokens=max_tokens,
        )
    except openai.OpenAIError as e:
        logger.warning("[llm:chat_with_tools] request failed: %s", e)
        raise UpstreamServiceError(str(e)) from e
    finally:
        client.close()

    msg = response.choices[0].message if response.choices else None
    if msg is None:
        raise UpstreamServiceError("Model returned no choices.")
    content = (getattr(msg, "content", None) or "").strip() or None
    tool_calls = []
    for tc in getattr(msg, "tool_calls", None) or []:
        fn = getattr(tc, "function", None)
        if not fn:
            continue
        tool_calls.append(
            ToolCall(
                id=getattr(tc, "id", None) or "",
                name=getattr(fn, "name", None) or "",
                arguments=_parse_arguments(getattr(fn, "arguments", None)),
            )
        )
    if tool_calls:
        logger.info("[llm:chat_with_tools] OUT tool_calls=%s", [t.name for t in tool_calls])
    if content:
        logger.info("[llm:chat_with_tools] OUT content_len=%d", len(content))
    return ModelReply(content=content, tool_calls=tool_calls)
