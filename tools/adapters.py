"""
Adapters that export a ``ToolBase`` to agent-framework calling conventions.

Two runtimes are supported:

• LangChain / LangGraph: a named ``StructuredTool`` with a pydantic args
  schema and an async callable receiving the ``RunnableConfig``.
• Step-style runtimes: a ``{description, parameters, execute}`` record,
  keyed by tool name by the caller, whose ``execute`` receives a
  ``StepContext`` (tool call id, message history, optional abort signal).

Both views delegate to ``invoke_tool``; the tool's own logic lives only in
``ToolBase.execute``.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Dict, Iterable, List, Mapping, Union

from langchain_core.runnables import RunnableConfig
from langchain_core.tools import StructuredTool
from pydantic import ValidationError

from tools.exceptions import ToolInputError
from utils.logger import get_logger

if TYPE_CHECKING:
    from tools.base import ToolBase
    from tools.schema import ToolSchema

logger = get_logger(__name__)


@dataclass(frozen=True)
class StepContext:
    """Runtime context handed to a step tool by the agent loop."""

    tool_call_id: str
    messages: List[Dict[str, Any]] = field(default_factory=list)
    abort_signal: asyncio.Event | None = None


RuntimeConfig = Union[RunnableConfig, StepContext, None]


@dataclass(frozen=True)
class StepTool:
    """A tool shaped for step-style agent loops."""

    description: str
    parameters: Dict[str, Any]
    execute: Callable[[Mapping[str, Any], StepContext], Awaitable[Any]]

    def to_function_spec(self, name: str) -> Dict[str, Any]:
        """OpenAI / litellm function-calling entry for this tool."""
        return {
            "type": "function",
            "function": {
                "name": name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }


def merge_parameters(
    predefined: Mapping[str, Any] | None,
    caller_input: Mapping[str, Any],
) -> Dict[str, Any]:
    """Combine caller input with the predefined parameters.

    Predefined values always win; neither argument is modified.
    """
    merged = dict(caller_input)
    if predefined:
        merged.update(predefined)
    return merged


def _validate_input(tool: ToolBase, caller_input: Mapping[str, Any]) -> Dict[str, Any]:
    predefined = tool.get_predefined_parameters() or {}
    pinned = sorted(key for key in caller_input if key in predefined)
    if pinned:
        logger.warning("predefined_parameters_not_overridable", tool=tool.get_tool_name(), keys=pinned)

    validated = _checked(tool, tool.parameters, caller_input)
    # The exposed schema is a derived model; validators live on the full one.
    return _checked(tool, tool.input_schema, merge_parameters(predefined, validated))


def _checked(tool: ToolBase, schema: ToolSchema, value: Mapping[str, Any]) -> Dict[str, Any]:
    try:
        return schema.validate(value)
    except ValidationError as exc:
        raise ToolInputError(
            f"Invalid input for tool '{tool.get_tool_name()}': {exc}",
            tool_name=tool.get_tool_name(),
        ) from exc


def _supplied(schema: ToolSchema, kwargs: Mapping[str, Any]) -> Dict[str, Any]:
    """Drop optional fields LangChain filled in with their defaults."""
    fields = schema.fields
    return {
        key: value
        for key, value in kwargs.items()
        if key not in fields
        or fields[key].is_required()
        or value != fields[key].get_default(call_default_factory=True)
    }


async def invoke_tool(tool: ToolBase, caller_input: Mapping[str, Any], config: RuntimeConfig) -> Any:
    """Validate, merge and execute; failures are logged and re-raised unchanged."""
    predefined = tool.get_predefined_parameters()
    try:
        merged = _validate_input(tool, caller_input)
        logger.info("tool_execute", tool=tool.get_tool_name(), service=tool.service, param_count=len(merged))
        return await tool.execute(merged, config)
    except Exception as exc:
        logger.error(
            "tool_execution_failed",
            tool=tool.get_tool_name(),
            input=dict(caller_input),
            predefined_parameters=dict(predefined) if predefined else None,
            error_type=type(exc).__name__,
            error=str(exc),
        )
        raise


def to_langchain_tool(tool: ToolBase) -> StructuredTool:
    """Export ``tool`` as a LangChain ``StructuredTool`` (usable in LangGraph ``ToolNode``)."""

    async def _run(config: RunnableConfig, **kwargs: Any) -> Any:
        return await invoke_tool(tool, _supplied(tool.parameters, kwargs), config)

    return StructuredTool.from_function(
        coroutine=_run,
        name=tool.get_tool_name(),
        description=tool.get_tool_description(),
        args_schema=tool.parameters.model,
    )


def to_step_tool(tool: ToolBase) -> StepTool:
    """Export ``tool`` as a ``{description, parameters, execute}`` record."""

    async def _execute(caller_input: Mapping[str, Any], context: StepContext) -> Any:
        return await invoke_tool(tool, caller_input, context)

    return StepTool(
        description=tool.get_tool_description(),
        parameters=tool.parameters.to_json_schema(),
        execute=_execute,
    )


def to_step_tools(tools: Iterable[ToolBase]) -> Dict[str, StepTool]:
    """Name-keyed mapping of step tools, as step-style runtimes expect."""
    step_tools: Dict[str, StepTool] = {}
    for tool in tools:
        if tool.get_tool_name() in step_tools:
            raise ValueError(f"Duplicate tool name: {tool.get_tool_name()}")
        step_tools[tool.get_tool_name()] = tool.step_tool()
    return step_tools
