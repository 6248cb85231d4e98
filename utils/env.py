"""Environment lookups for building tools from secrets and pinned ids."""
from __future__ import annotations

import os

from dotenv import load_dotenv

from tools.exceptions import MissingCredentialsError


def load_env() -> None:
    """Load a ``.env`` file from the working directory, if present, without overriding the process env."""
    load_dotenv()


def require_env(name: str, *, service: str | None = None) -> str:
    """Return the value of ``name`` or raise ``MissingCredentialsError`` when it is unset or blank."""
    value = os.getenv(name, "").strip()
    if not value:
        raise MissingCredentialsError(name, service=service)
    return value


def optional_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name, "").strip()
    return value or default
