# app/core/orchestrator.py
# Runs one chat turn end to end against the hosted assistant.
# Author: Shibo Li
# Date: 2025-06-13
# Version: 4.0.0

from pydantic import BaseModel
from app.core.config import Settings
from app.core.conversation import ConversationStore
from app.core.errors import ConfigurationError, RunFailed, TimedOut
from app.core.recovery import append_with_recovery
from app.core.response_extractor import ResponseExtractor
from app.core.run_orchestrator import RunOrchestrator
from app.core.tool_dispatcher import ToolCallDispatcher
from app.models.api_models import ChatRequest
from app.services.assistant_client import build_assistant_gateway
from app.services.webhook import notify_quietly
from app.utils.logger import console


class ChatTurnResult(BaseModel):
    response: str
    thread_id: str


async def run_chat_turn(request: ChatRequest, settings: Settings) -> ChatTurnResult:
    """
    Handles one user message:
    1. Ensures a thread exists and appends the message, moving to a new thread if the old one is locked.
    2. Starts a run and polls it, answering tool calls while it waits.
    3. Forwards the caller's userData to the webhook on a summary request.
    4. Reads the assistant's reply back.

    The caller has already dealt with `resetThread` and a missing message.

    Raises:
        ConfigurationError: If the API key or assistant ID is missing. Nothing is contacted.
        RecoveryFailed: If the message could not be appended even on a fresh thread.
        RemoteError: For assistant service failures.
        TimedOut: If the run did not complete within the polling budget.
        RunFailed: If the run ended in any other non-completed state.
    """
    if not settings.OPENAI_ASSISTANT_ID:
        raise ConfigurationError("Server configuration error: Missing OpenAI assistant ID")

    async with build_assistant_gateway(settings) as gateway:
        store = ConversationStore(gateway)
        thread_id = await store.ensure_thread(request.thread_id)
        thread_id = await append_with_recovery(store, thread_id, request.message, request.file_ids)

        runner = RunOrchestrator(
            gateway,
            ToolCallDispatcher(settings),
            poll_interval=settings.RUN_POLL_INTERVAL_SECONDS,
            max_polls=settings.RUN_MAX_POLL_ATTEMPTS,
        )
        result = await runner.run_and_await(thread_id, settings.OPENAI_ASSISTANT_ID)
        if result.outcome == "timed_out":
            raise TimedOut(f"Run {result.run_id} did not complete after {result.polls} poll(s)")
        if not result.completed:
            raise RunFailed(f"Run {result.run_id} ended as '{result.outcome}' with status '{result.status}'")

        if request.user_data and request.message == settings.SUMMARY_TRIGGER_MESSAGE:
            console.info(f"Summary requested on thread {thread_id}; forwarding userData to the webhook.")
            await notify_quietly(request.user_data, settings)

        reply = await ResponseExtractor(gateway, fallback=settings.NO_REPLY_FALLBACK).latest_reply(thread_id)

    console.success(f"Chat turn on thread {thread_id} answered.")
    return ChatTurnResult(response=reply, thread_id=thread_id)
