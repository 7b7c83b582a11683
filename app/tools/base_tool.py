# The module is to define the base class for all tools the assistant can call.
# Author: Shibo Li
# Date: 2025-06-11
# Version: 0.2.0

import json
from abc import ABC, abstractmethod
from pydantic import BaseModel
from typing import Dict, Any, Type
from app.core.config import Settings


def acknowledge(success: bool = True, **extra: Any) -> str:
    """Renders a tool output in compact JSON, e.g. '{"success":true}'."""
    return json.dumps({"success": success, **extra}, separators=(",", ":"))


class ToolContext(BaseModel):
    """
    What a tool knows about the call it is answering.
    Attributes:
        conversation_id (str): The thread whose run requested the call.
        settings (Settings): The settings of the current request.
    """
    conversation_id: str
    settings: Settings


class BaseTool(ABC):
    """
    Abstract Base Class for all tools.

    This class defines a standard interface that all tools must implement.
    Attributes:
        name (str): The function name the assistant uses to call the tool.
        description (str): A brief description of what the tool does.
        args_schema (Type[BaseModel]): A Pydantic model describing the arguments
            the assistant is expected to send.
    """
    name: str
    description: str
    args_schema: Type[BaseModel]

    @abstractmethod
    async def execute(self, context: ToolContext, arguments: Any) -> str:
        """
        The core logic of the tool. This method must be implemented by all subclasses.

        Args:
            context: The conversation and settings of the current request.
            arguments: The parsed JSON arguments of the tool call.

        Returns:
            The output string submitted back to the run.
        """
        pass

    def get_definition(self) -> Dict[str, Any]:
        """
        Returns the tool's definition in a format compliant with OpenAI's
        function-calling schema. This method is inherited by all tools.
        """
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.args_schema.model_json_schema()
            }
        }
