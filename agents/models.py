"""Data models for the agent layer."""
from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, Field

__all__ = ["AgentResult"]


class AgentResult(BaseModel):
    """Lightweight summary returned by one agent turn."""

    final_answer: str
    iterations: int
    tool_calls: List[Dict[str, Any]] = Field(default_factory=list)
    success: bool
    error_message: str | None = None
