import json
from typing import Any, Dict, List, Optional

import httpx
import pytest
from pydantic import BaseModel, Field, field_validator

from tools.base import ToolBase
from tools.schema import ToolSchema


class StubService:
    """httpx.MockTransport handler replaying canned ``(status, body)`` responses in order."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        status, body = response
        return httpx.Response(status, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def body(self, index: int = -1) -> Dict[str, Any]:
        return json.loads(self.requests[index].content)


class CaptureLogger:
    def __init__(self):
        self.events = []

    def _record(self, level):
        def log(event, **kwargs):
            self.events.append((level, event, kwargs))
        return log

    def __getattr__(self, level):
        return self._record(level)

    def named(self, event):
        return [kwargs for _, name, kwargs in self.events if name == event]


class EchoInput(BaseModel):
    """Echo a few fields back."""

    base_id: str = Field(description="Base id")
    table_id: str = Field(description="Table id")
    name: str = Field(min_length=1, description="Display name")
    count: Optional[int] = Field(default=None, ge=1, description="How many")


class EchoTool(ToolBase[Dict[str, str], Dict[str, Any]]):
    INPUT_MODEL = EchoInput

    def __init__(self, predefined_parameters=None, error: Exception | None = None):
        super().__init__(
            name="echo",
            description="Return the merged input",
            parameters=ToolSchema(self.INPUT_MODEL),
            service="test",
            auth={"token": "secret"},
            predefined_parameters=predefined_parameters,
        )
        self.error = error
        self.calls = []

    async def execute(self, input, config=None):
        self.calls.append((input, config))
        if self.error is not None:
            raise self.error
        return dict(input)


@pytest.fixture
def stub_service():
    def make(*responses):
        return StubService(responses)
    return make


@pytest.fixture
def capture_logger(monkeypatch):
    def install(module: str) -> CaptureLogger:
        capture = CaptureLogger()
        monkeypatch.setattr(f"{module}.logger", capture)
        return capture
    return install


@pytest.fixture
def echo_tool():
    return EchoTool


class GuardedInput(EchoInput):
    """Echo input whose base id must look like an Airtable base id."""

    @field_validator("base_id")
    @classmethod
    def _airtable_base_id(cls, value: str) -> str:
        if not value.startswith("app"):
            raise ValueError("base_id must start with 'app'")
        return value


class GuardedEchoTool(EchoTool):
    INPUT_MODEL = GuardedInput


@pytest.fixture
def guarded_tool():
    return GuardedEchoTool
