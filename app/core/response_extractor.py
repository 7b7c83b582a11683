# app/core/response_extractor.py
# Reads the assistant's reply back from a conversation after a run.
# Author: Shibo Li
# Date: 2025-06-14
# Version: 0.1.0

from typing import Iterable, Optional
from app.models.common import ThreadMessage
from app.services.assistant_client import AssistantGateway
from app.utils.logger import console

DEFAULT_FALLBACK = "Sorry, I could not generate a response."


def select_reply(messages: Iterable[ThreadMessage]) -> Optional[str]:
    """Returns the first text block of the newest assistant message, or None."""
    for message in messages:
        if message.role != "assistant":
            continue
        for block in message.content:
            if block.type == "text":
                return block.text or None
        return None
    return None


class ResponseExtractor:

    def __init__(self, gateway: AssistantGateway, fallback: str = DEFAULT_FALLBACK):
        self._gateway = gateway
        self._fallback = fallback

    async def latest_reply(self, conversation_id: str) -> str:
        """
        Returns the latest assistant text of the conversation, or the fallback when there is none.
        Only a transport failure raises (RemoteError).
        """
        messages = await self._gateway.list_messages(conversation_id)
        reply = select_reply(messages)
        if reply is None:
            console.warning(f"No assistant text found in thread {conversation_id}; using fallback reply.")
            return self._fallback
        return reply
