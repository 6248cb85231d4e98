"""Expose REST service operations as tools for LLM agent frameworks."""
from tools.adapters import (
    StepContext,
    StepTool,
    merge_parameters,
    to_langchain_tool,
    to_step_tool,
    to_step_tools,
)
from tools.base import ToolBase
from tools.exceptions import (
    MissingCredentialsError,
    ServiceError,
    ToolConstructionError,
    ToolError,
    ToolInputError,
)
from tools.schema import ToolSchema

__all__ = [
    "MissingCredentialsError",
    "ServiceError",
    "StepContext",
    "StepTool",
    "ToolBase",
    "ToolConstructionError",
    "ToolError",
    "ToolInputError",
    "ToolSchema",
    "merge_parameters",
    "to_langchain_tool",
    "to_step_tool",
    "to_step_tools",
]
