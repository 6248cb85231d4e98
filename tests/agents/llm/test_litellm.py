import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from agents.llm.litellm import LiteLLM


def _response(content=None, tool_calls=None):
    message = MagicMock()
    message.content = content
    message.tool_calls = tool_calls
    resp = MagicMock()
    resp.choices = [MagicMock(message=message)]
    return resp


class TestLiteLLM:
    # Tests that an empty model name is rejected
    def test_model_required(self):
        with pytest.raises(ValueError):
            LiteLLM(model="")

    @patch("agents.llm.litellm.litellm.acompletion", new_callable=AsyncMock)
    # Tests that tools and defaults are forwarded to litellm
    def test_completion_forwards_tools(self, mock_acompletion):
        mock_acompletion.return_value = _response(content="Hi")
        svc = LiteLLM(model="gpt-4o", temperature=0.2)
        messages = [{"role": "user", "content": "Hello"}]
        tools = [{"type": "function", "function": {"name": "echo", "description": "d", "parameters": {}}}]

        result = asyncio.run(svc.completion(messages, tools=tools))

        assert result == {"role": "assistant", "content": "Hi"}
        mock_acompletion.assert_awaited_once_with(
            model="gpt-4o", messages=messages, tools=tools, temperature=0.2
        )

    @patch("agents.llm.litellm.litellm.acompletion", new_callable=AsyncMock)
    # Tests that tool calls are converted to chat-format dicts
    def test_completion_returns_tool_calls(self, mock_acompletion):
        call = MagicMock()
        call.id = "call_1"
        call.function.name = "create-record"
        call.function.arguments = '{"fields": {}}'
        mock_acompletion.return_value = _response(tool_calls=[call])

        result = asyncio.run(LiteLLM(model="gpt-4o").completion([{"role": "user", "content": "x"}]))

        assert result == {
            "role": "assistant",
            "content": None,
            "tool_calls": [
                {
                    "id": "call_1",
                    "type": "function",
                    "function": {"name": "create-record", "arguments": '{"fields": {}}'},
                }
            ],
        }
        assert "tools" not in mock_acompletion.await_args.kwargs
