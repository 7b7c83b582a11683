"""Tests for the tool-call dispatcher and the tool registry."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from app.core.errors import MalformedArguments, TimedOut
from app.core.tool_dispatcher import ToolCallDispatcher, parse_arguments
from app.core.tool_registry import tool_registry
from tests.helpers import make_settings, tool_call


def _ok() -> httpx.Response:
    return httpx.Response(200, request=httpx.Request("POST", "https://hooks.example.com/notify"))


class TestParseArguments:
    """Tests for parse_arguments."""

    def test_parses_json(self):
        assert parse_arguments(tool_call(arguments={"foo": 1})) == {"foo": 1}

    def test_empty_arguments_are_an_empty_object(self):
        assert parse_arguments(tool_call(arguments="")) == {}

    def test_raises_on_invalid_json(self):
        with pytest.raises(MalformedArguments) as exc_info:
            parse_arguments(tool_call(arguments="{not json"))
        assert "send_summary_to_make" in str(exc_info.value)


class TestToolCallDispatcher:
    """Tests for ToolCallDispatcher.handle."""

    @pytest.mark.asyncio
    @patch("app.services.webhook.call_with_timeout", new_callable=AsyncMock)
    async def test_known_tool_posts_arguments(self, mock_call):
        """send_summary_to_make posts its arguments once and acknowledges with success."""
        mock_call.return_value = _ok()
        dispatcher = ToolCallDispatcher(make_settings())

        outputs = await dispatcher.handle("thread_1", [tool_call(arguments={"foo": 1}, call_id="call_a")])

        assert [o.model_dump() for o in outputs] == [{"tool_call_id": "call_a", "output": '{"success":true}'}]
        mock_call.assert_awaited_once()
        assert mock_call.call_args.kwargs["json"] == {"foo": 1}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "webhook_behaviour",
        [
            {"side_effect": TimedOut("too slow")},
            {"return_value": httpx.Response(503, request=httpx.Request("POST", "https://hooks.example.com/notify"))},
            {"side_effect": httpx.ConnectError("refused")},
        ],
    )
    @patch("app.services.webhook.call_with_timeout", new_callable=AsyncMock)
    async def test_webhook_failures_still_acknowledge_success(self, mock_call, webhook_behaviour):
        """The output reports the attempt, not the webhook result."""
        mock_call.configure_mock(**webhook_behaviour)
        dispatcher = ToolCallDispatcher(make_settings())

        outputs = await dispatcher.handle("thread_1", [tool_call(arguments={"foo": 1})])

        assert len(outputs) == 1
        assert json.loads(outputs[0].output) == {"success": True}

    @pytest.mark.asyncio
    @patch("app.services.webhook.call_with_timeout", new_callable=AsyncMock)
    async def test_unknown_function_is_acknowledged_without_side_effect(self, mock_call):
        dispatcher = ToolCallDispatcher(make_settings())

        outputs = await dispatcher.handle("thread_1", [tool_call(name="launch_rocket", call_id="call_x")])

        assert outputs[0].tool_call_id == "call_x"
        payload = json.loads(outputs[0].output)
        assert payload["success"] is False
        assert "launch_rocket" in payload["error"]
        mock_call.assert_not_awaited()

    @pytest.mark.asyncio
    @patch("app.services.webhook.call_with_timeout", new_callable=AsyncMock)
    async def test_malformed_arguments_produce_failure_output(self, mock_call):
        dispatcher = ToolCallDispatcher(make_settings())

        outputs = await dispatcher.handle("thread_1", [tool_call(arguments="{oops")])

        assert json.loads(outputs[0].output) == {"success": False, "error": "Malformed arguments"}
        mock_call.assert_not_awaited()

    @pytest.mark.asyncio
    @patch("app.services.webhook.call_with_timeout", new_callable=AsyncMock)
    async def test_one_output_per_call_in_order(self, mock_call):
        """Every call gets exactly one output, whatever happens to its neighbours."""
        mock_call.side_effect = [TimedOut("slow"), _ok()]
        calls = [
            tool_call(arguments={"a": 1}, call_id="call_1"),
            tool_call(name="unknown", call_id="call_2"),
            tool_call(arguments="nope", call_id="call_3"),
            tool_call(arguments={"b": 2}, call_id="call_4"),
        ]

        outputs = await ToolCallDispatcher(make_settings()).handle("thread_1", calls)

        assert [o.tool_call_id for o in outputs] == ["call_1", "call_2", "call_3", "call_4"]
        assert mock_call.await_count == 2

    @pytest.mark.asyncio
    async def test_tool_crash_is_acknowledged(self):
        """A tool raising unexpectedly must not leave the run without an output."""
        crashing_tool = MagicMock()
        crashing_tool.execute = AsyncMock(side_effect=RuntimeError("boom"))
        registry = MagicMock()
        registry.get.return_value = crashing_tool

        outputs = await ToolCallDispatcher(make_settings(), registry=registry).handle("thread_1", [tool_call()])

        assert json.loads(outputs[0].output) == {"success": True}


class TestToolRegistry:
    """Tests for the auto-discovered registry."""

    def test_discovers_send_summary_tool(self):
        assert tool_registry.get("send_summary_to_make") is not None

    def test_unknown_tool_is_none(self):
        assert tool_registry.get("does_not_exist") is None

    def test_definitions_use_function_calling_format(self):
        definitions = {d["function"]["name"]: d for d in tool_registry.get_definitions()}

        definition = definitions["send_summary_to_make"]
        assert definition["type"] == "function"
        assert "summary" in definition["function"]["parameters"]["properties"]
