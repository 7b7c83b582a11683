# app/services/assistant_client.py
# Thin async gateway over the hosted assistant API (threads, messages, runs, files).
# Author: Shibo Li
# Date: 2025-06-14
# Version: 0.1.0

from openai import AsyncOpenAI, APIError, APIStatusError
from typing import Any, Awaitable, Callable, List, Optional
from app.core.config import Settings
from app.core.errors import ConfigurationError, ConversationLocked, RemoteError
from app.models.common import ContentBlock, FileRef, RunSnapshot, ThreadMessage, ToolCall, ToolOutput
from app.utils.logger import console

# Tools enabled for every file attached to a user message.
ATTACHMENT_TOOLS = [{"type": "file_search"}, {"type": "code_interpreter"}]


def _is_locked_error(error: APIStatusError) -> bool:
    # e.g. "Can't add messages to thread_abc while a run run_xyz is active."
    message = str(error.message or "")
    return "while a run" in message and "is active" in message


def _error_message(error: APIError) -> str:
    if isinstance(error.body, dict):
        return error.body.get("message") or error.message
    return error.message or str(error)


def _to_snapshot(run: Any) -> RunSnapshot:
    tool_calls: List[ToolCall] = []
    required_action = getattr(run, "required_action", None)
    if run.status == "requires_action" and required_action is not None \
            and required_action.type == "submit_tool_outputs":
        for call in required_action.submit_tool_outputs.tool_calls:
            tool_calls.append(ToolCall(
                id=call.id,
                name=call.function.name,
                arguments=call.function.arguments or "{}",
            ))
    return RunSnapshot(id=run.id, status=run.status, tool_calls=tool_calls)


def _to_thread_message(message: Any) -> ThreadMessage:
    blocks = []
    for block in message.content or []:
        text = block.text.value if block.type == "text" else None
        blocks.append(ContentBlock(type=block.type, text=text))
    return ThreadMessage(id=message.id, role=message.role, content=blocks)


class AssistantGateway:
    """
    Wraps an `AsyncOpenAI` client and exposes the operations the chat relay needs.

    Every SDK failure is translated here, so nothing above this layer sees `openai` types:
    a message append rejected because a run is active raises `ConversationLocked`,
    anything else raises `RemoteError`.
    """

    def __init__(self, client: AsyncOpenAI):
        self._client = client

    async def __aenter__(self) -> "AssistantGateway":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self._client.close()

    async def _call(self, operation: str, fn: Callable[..., Awaitable[Any]], *args, **kwargs) -> Any:
        try:
            return await fn(*args, **kwargs)
        except APIStatusError as e:
            message = _error_message(e)
            console.error(f"Assistant API error during '{operation}' ({e.status_code}): {message}")
            raise RemoteError(f"{operation} failed: {message}", status_code=e.status_code) from e
        except APIError as e:
            console.error(f"Assistant API unreachable during '{operation}': {e}")
            raise RemoteError(f"{operation} failed: {e}") from e

    async def create_thread(self) -> str:
        thread = await self._call("create thread", self._client.beta.threads.create)
        return thread.id

    async def append_message(self, thread_id: str, text: str, file_ids: Optional[List[str]] = None) -> None:
        params: dict = {"role": "user", "content": text}
        if file_ids:
            params["attachments"] = [{"file_id": file_id, "tools": ATTACHMENT_TOOLS} for file_id in file_ids]
        try:
            await self._client.beta.threads.messages.create(thread_id, **params)
        except APIStatusError as e:
            if _is_locked_error(e):
                raise ConversationLocked(_error_message(e), status_code=e.status_code) from e
            console.error(f"Assistant API error during 'append message' ({e.status_code}): {_error_message(e)}")
            raise RemoteError(f"append message failed: {_error_message(e)}", status_code=e.status_code) from e
        except APIError as e:
            console.error(f"Assistant API unreachable during 'append message': {e}")
            raise RemoteError(f"append message failed: {e}") from e

    async def create_run(self, thread_id: str, assistant_id: str) -> RunSnapshot:
        run = await self._call("create run", self._client.beta.threads.runs.create,
                               thread_id=thread_id, assistant_id=assistant_id)
        return _to_snapshot(run)

    async def retrieve_run(self, thread_id: str, run_id: str) -> RunSnapshot:
        run = await self._call("retrieve run", self._client.beta.threads.runs.retrieve,
                               run_id, thread_id=thread_id)
        return _to_snapshot(run)

    async def submit_tool_outputs(self, thread_id: str, run_id: str, outputs: List[ToolOutput]) -> RunSnapshot:
        run = await self._call(
            "submit tool outputs",
            self._client.beta.threads.runs.submit_tool_outputs,
            run_id,
            thread_id=thread_id,
            tool_outputs=[output.model_dump() for output in outputs],
        )
        return _to_snapshot(run)

    async def list_messages(self, thread_id: str, limit: int = 20) -> List[ThreadMessage]:
        """Lists the most recent messages of a thread, newest first."""
        page = await self._call("list messages", self._client.beta.threads.messages.list,
                                thread_id, order="desc", limit=limit)
        return [_to_thread_message(message) for message in page.data]

    async def upload_file(self, file_bytes: bytes, filename: str) -> FileRef:
        uploaded = await self._call("upload file", self._client.files.create,
                                    file=(filename, file_bytes), purpose="assistants")
        return FileRef(id=uploaded.id, filename=filename)


def build_assistant_gateway(settings: Settings) -> AssistantGateway:
    """
    Builds a gateway from the current settings.
    The API key is read at call time; nothing is constructed when it is missing.

    Raises:
        ConfigurationError: If OPENAI_API_KEY is not set.
    """
    if not settings.OPENAI_API_KEY:
        raise ConfigurationError("Server configuration error: Missing OpenAI API key")
    client = AsyncOpenAI(api_key=settings.OPENAI_API_KEY, base_url=settings.OPENAI_BASE_URL)
    return AssistantGateway(client)
