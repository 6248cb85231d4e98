"""
StepAgent

Minimal function-calling loop over step tools: the model either answers or asks
for tool calls, every call is dispatched by name through ``StepTool.execute``
and its result (or error) is fed back as a ``tool`` message.
"""
from __future__ import annotations

import asyncio
import json
from textwrap import dedent
from typing import Any, Dict, List, Mapping, Protocol

from agents.models import AgentResult
from tools.adapters import StepContext, StepTool
from tools.exceptions import ToolError
from utils.logger import get_logger

logger = get_logger(__name__)

_SYSTEM_PROMPT = dedent(
    """
    You are a helpful assistant with access to the user's Airtable bases and Notion workspace.
    Use the available tools when the request needs data from, or changes to, those services.
    When a tool returns an "error" field, explain the problem or correct the call; never invent results.
    """
).strip()


class ChatModel(Protocol):
    async def completion(
        self, messages: List[Dict[str, Any]], tools: List[Dict[str, Any]] | None = None
    ) -> Dict[str, Any]: ...


class StepAgent:
    """Owns the model, the name-keyed step tools and the conversation history."""

    def __init__(
        self,
        llm: ChatModel,
        tools: Mapping[str, StepTool],
        *,
        max_steps: int = 10,
        system_prompt: str = _SYSTEM_PROMPT,
    ) -> None:
        if max_steps < 1:
            raise ValueError("max_steps must be at least 1")
        self.llm = llm
        self.tools = dict(tools)
        self.max_steps = max_steps
        self.messages: List[Dict[str, Any]] = [{"role": "system", "content": system_prompt}]
        self.abort_signal = asyncio.Event()
        self._function_specs = [tool.to_function_spec(name) for name, tool in self.tools.items()]

    async def solve(self, goal: str) -> AgentResult:
        self.abort_signal.clear()
        self.messages.append({"role": "user", "content": goal})
        tool_calls: List[Dict[str, Any]] = []

        for step in range(1, self.max_steps + 1):
            message = await self.llm.completion(self.messages, tools=self._function_specs or None)
            self.messages.append(message)

            calls = message.get("tool_calls") or []
            if not calls:
                return AgentResult(
                    final_answer=message.get("content") or "",
                    iterations=step,
                    tool_calls=tool_calls,
                    success=True,
                )

            for call in calls:
                tool_name = call["function"]["name"]
                content = await self._dispatch(call)
                tool_calls.append({"tool_name": tool_name, "tool_call_id": call["id"]})
                self.messages.append({"role": "tool", "tool_call_id": call["id"], "content": content})

        logger.warning("max_steps_reached", max_steps=self.max_steps)
        return AgentResult(
            final_answer="",
            iterations=self.max_steps,
            tool_calls=tool_calls,
            success=False,
            error_message=f"No answer after {self.max_steps} steps",
        )

    def abort(self) -> None:
        """Signal in-flight tool calls to stop before their next request."""
        self.abort_signal.set()

    async def _dispatch(self, call: Mapping[str, Any]) -> str:
        name = call["function"]["name"]
        tool = self.tools.get(name)
        if tool is None:
            return json.dumps({"error": f"Unknown tool: {name}"})

        try:
            arguments = json.loads(call["function"].get("arguments") or "{}")
        except json.JSONDecodeError as exc:
            return json.dumps({"error": f"Tool arguments are not valid JSON: {exc}"})
        if not isinstance(arguments, dict):
            return json.dumps({"error": "Tool arguments must be a JSON object"})

        context = StepContext(
            tool_call_id=call["id"],
            messages=list(self.messages),
            abort_signal=self.abort_signal,
        )
        try:
            result = await tool.execute(arguments, context)
        except ToolError as exc:
            return json.dumps({"error": str(exc)})
        return json.dumps(result, default=str)
