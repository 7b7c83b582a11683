# app/core/tool_dispatcher.py
# Answers the tool calls of a run that is waiting in `requires_action`.
# Author: Shibo Li
# Date: 2025-06-14
# Version: 0.1.0

import json
from typing import Any, List
from app.core.config import Settings
from app.core.errors import MalformedArguments
from app.core.tool_registry import ToolRegistry, tool_registry
from app.models.common import ToolCall, ToolOutput
from app.tools.base_tool import ToolContext, acknowledge
from app.utils.logger import console


def parse_arguments(tool_call: ToolCall) -> Any:
    """
    Decodes the JSON arguments of a tool call.

    Raises:
        MalformedArguments: If the arguments are not valid JSON.
    """
    try:
        return json.loads(tool_call.arguments or "{}")
    except json.JSONDecodeError as e:
        raise MalformedArguments(f"Arguments of '{tool_call.name}' ({tool_call.id}) are not valid JSON: {e}") from e


class ToolCallDispatcher:
    """
    Runs each pending tool call and produces exactly one ToolOutput per call, in order.
    Nothing raised by a tool escapes: a run that never gets its outputs stays blocked.
    """

    def __init__(self, settings: Settings, registry: ToolRegistry = tool_registry):
        self._settings = settings
        self._registry = registry

    async def handle(self, conversation_id: str, tool_calls: List[ToolCall]) -> List[ToolOutput]:
        outputs = []
        for tool_call in tool_calls:
            output = await self._dispatch(conversation_id, tool_call)
            outputs.append(ToolOutput(tool_call_id=tool_call.id, output=output))
        return outputs

    async def _dispatch(self, conversation_id: str, tool_call: ToolCall) -> str:
        tool = self._registry.get(tool_call.name)
        if tool is None:
            console.warning(f"Run requested unknown function '{tool_call.name}' ({tool_call.id}); acknowledging without side effect.")
            return acknowledge(False, error=f"Unknown function '{tool_call.name}'")

        try:
            arguments = parse_arguments(tool_call)
        except MalformedArguments as e:
            console.error(str(e))
            return acknowledge(False, error="Malformed arguments")

        context = ToolContext(conversation_id=conversation_id, settings=self._settings)
        try:
            return await tool.execute(context, arguments)
        except Exception:
            # The call was attempted; the run must not stay blocked on it.
            console.exception(f"Tool '{tool_call.name}' ({tool_call.id}) raised an unexpected error.")
            return acknowledge(True)
