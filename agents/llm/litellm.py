from __future__ import annotations

from typing import Any, Dict, List

import litellm

from utils.logger import get_logger

logger = get_logger(__name__)


class LiteLLM:
    """Async wrapper around ``litellm.acompletion`` with function calling."""

    def __init__(
        self,
        model: str,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> None:
        if not model:
            raise ValueError("model parameter is required and cannot be empty")
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def completion(
        self,
        messages: List[Dict[str, Any]],
        tools: List[Dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> Dict[str, Any]:
        """Return the assistant message as a chat-format dict (``content`` and optional ``tool_calls``)."""
        completion_kwargs: Dict[str, Any] = {"model": self.model, "messages": messages}
        if tools:
            completion_kwargs["tools"] = tools
        if self.temperature is not None:
            completion_kwargs["temperature"] = self.temperature
        if self.max_tokens is not None:
            completion_kwargs["max_tokens"] = self.max_tokens
        completion_kwargs.update(kwargs)

        resp = await litellm.acompletion(**completion_kwargs)
        message = resp.choices[0].message

        result: Dict[str, Any] = {"role": "assistant", "content": message.content}
        tool_calls = [
            {
                "id": call.id,
                "type": "function",
                "function": {"name": call.function.name, "arguments": call.function.arguments},
            }
            for call in (getattr(message, "tool_calls", None) or [])
        ]
        if tool_calls:
            result["tool_calls"] = tool_calls
        logger.debug("llm_completion", model=self.model, tool_calls=len(tool_calls))
        return result
