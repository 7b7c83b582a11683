# The module defines the tool that hands a conversation summary to the external automation webhook.
# Author: Shibo Li
# Date: 2025-06-14
# Version: 0.1.0

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Optional, Type
from .base_tool import BaseTool, ToolContext, acknowledge
from app.services.webhook import notify_quietly
from app.utils.logger import console


class SendSummaryInput(BaseModel):
    """
    Input model for the SendSummaryTool.
    Any additional field the assistant collects is forwarded unchanged.
    Attributes:
        summary (Optional[str]): A short summary of the conversation.
        name (Optional[str]): The name of the person the assistant talked to.
        email (Optional[str]): Their email address.
        phone (Optional[str]): Their phone number.
    """
    model_config = ConfigDict(extra="allow")

    summary: Optional[str] = Field(default=None, description="A short summary of the conversation so far.")
    name: Optional[str] = Field(default=None, description="The name of the person the assistant talked to.")
    email: Optional[str] = Field(default=None, description="The person's email address.")
    phone: Optional[str] = Field(default=None, description="The person's phone number.")


class SendSummaryTool(BaseTool):
    """
    Posts the tool call's arguments, as-is, to NOTIFY_WEBHOOK_URL.
    The webhook outcome is logged but never changes the output: the run only needs to know
    the call was handled.
    """
    name: str = "send_summary_to_make"
    description: str = "Sends a summary of the conversation and the collected contact details " \
    "to the external automation system."
    args_schema: Type[BaseModel] = SendSummaryInput

    async def execute(self, context: ToolContext, arguments: Any) -> str:
        console.info(f"Calling notification webhook for thread {context.conversation_id} with: {arguments}")
        await notify_quietly(arguments, context.settings)
        return acknowledge(True)
