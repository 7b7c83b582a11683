"""Shared test helpers: an in-memory assistant gateway and message/run builders."""

from __future__ import annotations

import json
from typing import Any, Iterable

from app.core.config import Settings
from app.core.errors import ConversationLocked, RemoteError
from app.models.common import ContentBlock, FileRef, RunSnapshot, ThreadMessage, ToolCall


def make_settings(**overrides: Any) -> Settings:
    """Settings that never read the environment's .env and never sleep between polls."""
    values = {
        "OPENAI_API_KEY": "sk-test",
        "OPENAI_ASSISTANT_ID": "asst_test",
        "NOTIFY_WEBHOOK_URL": "https://hooks.example.com/notify",
        "RUN_POLL_INTERVAL_SECONDS": 0,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def tool_call(name: str = "send_summary_to_make", arguments: Any = None, call_id: str = "call_1") -> ToolCall:
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, str):
        arguments = json.dumps(arguments)
    return ToolCall(id=call_id, name=name, arguments=arguments)


def run(status: str, tool_calls: Iterable[ToolCall] = (), run_id: str = "run_1") -> RunSnapshot:
    return RunSnapshot(id=run_id, status=status, tool_calls=list(tool_calls))


def assistant_message(*texts: str, message_id: str = "msg_a") -> ThreadMessage:
    return ThreadMessage(
        id=message_id,
        role="assistant",
        content=[ContentBlock(type="text", text=text) for text in texts],
    )


def user_message(text: str, message_id: str = "msg_u") -> ThreadMessage:
    return ThreadMessage(id=message_id, role="user", content=[ContentBlock(type="text", text=text)])


class FakeGateway:
    """In-memory stand-in for AssistantGateway that records every call.

    - `locked`: thread ids whose appends raise ConversationLocked.
    - `lock_all`: every append raises ConversationLocked.
    - `runs`: snapshots returned by successive retrieve_run calls; the last one repeats.
    - `messages`: what list_messages returns (newest first).
    """

    def __init__(
        self,
        runs: Iterable[RunSnapshot] | None = None,
        messages: Iterable[ThreadMessage] | None = None,
        locked: Iterable[str] = (),
        lock_all: bool = False,
        retrieve_error: Exception | None = None,
    ):
        self.calls: list[tuple[str, tuple]] = []
        self.runs = list(runs) if runs is not None else [run("completed")]
        self.messages = list(messages) if messages is not None else [assistant_message("Hi there!")]
        self.locked = set(locked)
        self.lock_all = lock_all
        self.retrieve_error = retrieve_error
        self.submitted: list[list[dict]] = []
        self.closed = False
        self._thread_counter = 0
        self._retrievals = 0

    async def __aenter__(self) -> "FakeGateway":
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.closed = True

    def operations(self) -> list[str]:
        return [name for name, _ in self.calls]

    async def create_thread(self) -> str:
        self._thread_counter += 1
        thread_id = f"thread_new_{self._thread_counter}"
        self.calls.append(("create_thread", ()))
        return thread_id

    async def append_message(self, thread_id, text, file_ids=None) -> None:
        self.calls.append(("append_message", (thread_id, text, file_ids)))
        if self.lock_all or thread_id in self.locked:
            raise ConversationLocked(f"Can't add messages to {thread_id} while a run run_x is active.", status_code=400)

    async def create_run(self, thread_id, assistant_id) -> RunSnapshot:
        self.calls.append(("create_run", (thread_id, assistant_id)))
        return run("queued")

    async def retrieve_run(self, thread_id, run_id) -> RunSnapshot:
        self.calls.append(("retrieve_run", (thread_id, run_id)))
        if self.retrieve_error is not None:
            raise self.retrieve_error
        index = min(self._retrievals, len(self.runs) - 1)
        self._retrievals += 1
        return self.runs[index]

    async def submit_tool_outputs(self, thread_id, run_id, outputs) -> RunSnapshot:
        self.calls.append(("submit_tool_outputs", (thread_id, run_id)))
        self.submitted.append([output.model_dump() for output in outputs])
        return run("queued", run_id=run_id)

    async def list_messages(self, thread_id, limit=20):
        self.calls.append(("list_messages", (thread_id,)))
        return self.messages

    async def upload_file(self, file_bytes, filename) -> FileRef:
        self.calls.append(("upload_file", (filename, len(file_bytes))))
        return FileRef(id="file_123", filename=filename)


class FailingGateway(FakeGateway):
    """A FakeGateway whose list_messages fails like a transport error."""

    async def list_messages(self, thread_id, limit=20):
        self.calls.append(("list_messages", (thread_id,)))
        raise RemoteError("list messages failed: connection reset")
