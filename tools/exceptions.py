"""
Generic, tool-related exceptions shared by the tool core and every service integration.
"""
from __future__ import annotations

from typing import Any, Dict, List


class ToolError(Exception):
    """Base class for every error raised by a tool."""

    def __init__(self, message: str, *, tool_name: str | None = None):
        self.message = message
        self.tool_name = tool_name
        super().__init__(message)


class ToolConstructionError(ToolError, ValueError):
    """Raised when predefined parameters do not validate against the tool's input schema."""

    def __init__(self, message: str, *, tool_name: str, errors: List[Dict[str, Any]] | None = None):
        self.errors = errors or []
        super().__init__(f"Tool '{tool_name}': {message}", tool_name=tool_name)


class ToolInputError(ToolError):
    """Raised when tool input fails schema validation or a tool's own business checks."""


class ServiceError(ToolError):
    """Raised when the backing service call fails.

    The message is the human-readable text handed back to the agent; the raw
    upstream details are kept on the instance for callers that need them.
    """

    def __init__(
        self,
        message: str,
        *,
        service: str | None = None,
        status_code: int | None = None,
        error_type: str | None = None,
        tool_name: str | None = None,
    ) -> None:
        self.service = service
        self.status_code = status_code
        self.error_type = error_type
        super().__init__(message, tool_name=tool_name)


class MissingCredentialsError(ToolError):
    """Raised when a required environment variable for building a tool is not set."""

    def __init__(
        self,
        env_var: str,
        *,
        service: str | None = None,
        message: str | None = None,
    ) -> None:
        self.env_var = env_var
        self.service = service
        base_msg = message or f"Environment variable '{env_var}' is not set."
        if service:
            base_msg += f" (required for service '{service}')"
        super().__init__(base_msg)
