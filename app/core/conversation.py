# app/core/conversation.py
# Creates or reuses remote conversation threads and appends user messages to them.
# Author: Shibo Li
# Date: 2025-06-14
# Version: 0.1.0

from typing import List, Optional
from app.services.assistant_client import AssistantGateway
from app.utils.logger import console


class ConversationStore:
    """
    The conversation side of the assistant service.
    The server keeps no reference to any thread: the caller passes its thread id back on every turn.
    """

    def __init__(self, gateway: AssistantGateway):
        self._gateway = gateway

    async def ensure_thread(self, existing: Optional[str] = None) -> str:
        """Returns `existing` unchanged when given, otherwise creates a new thread."""
        if existing:
            return existing
        thread_id = await self._gateway.create_thread()
        console.info(f"Created new conversation thread: {thread_id}")
        return thread_id

    async def append_message(self, conversation_id: str, text: str, attachments: Optional[List[str]] = None) -> None:
        """
        Appends a user message, attaching the given file IDs.

        Raises:
            ConversationLocked: If a run is still active on the thread.
            RemoteError: For any other failure. Not retried here.
        """
        await self._gateway.append_message(conversation_id, text, attachments)
        console.info(f"Appended user message to thread {conversation_id} ({len(attachments or [])} attachment(s)).")
