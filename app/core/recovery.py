# app/core/recovery.py
# Swaps a locked conversation for a fresh one and retries the append once.
# Author: Shibo Li
# Date: 2025-06-14
# Version: 0.1.0

from typing import List, Optional
from app.core.conversation import ConversationStore
from app.core.errors import ChatRelayError, ConversationLocked, RecoveryFailed
from app.utils.logger import console


async def append_with_recovery(
    store: ConversationStore,
    conversation_id: str,
    text: str,
    attachments: Optional[List[str]] = None,
) -> str:
    """
    Appends `text` to `conversation_id`. If the thread is locked by an active run, the thread is
    abandoned and the message goes to a brand new one instead. This happens at most once.

    Raises:
        RecoveryFailed: If the append to the new thread fails too.
        RemoteError: If the first append fails for a reason other than a lock.

    Returns:
        The ID of the thread the message was appended to.
    """
    try:
        await store.append_message(conversation_id, text, attachments)
        return conversation_id
    except ConversationLocked as e:
        console.warning(f"Thread {conversation_id} is locked by an active run ({e}). Creating new thread...")

    try:
        new_conversation_id = await store.ensure_thread(None)
        await store.append_message(new_conversation_id, text, attachments)
    except ChatRelayError as e:
        console.error(f"Retry on a new thread failed: {e}")
        raise RecoveryFailed(f"Could not recover from locked thread {conversation_id}: {e}") from e

    console.success(f"Recovered from locked thread {conversation_id}; continuing on {new_conversation_id}.")
    return new_conversation_id
