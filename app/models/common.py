# The module is to define the common models for the chat relay.
# Author: Shibo Li
# Date: 2025-06-11
# Version: 0.2.0


from pydantic import BaseModel, Field
from typing import List, Optional, Literal

Role = Literal["user", "assistant"]

RunStatus = Literal["queued", "in_progress", "requires_action", "cancelling",
                    "cancelled", "failed", "completed", "incomplete", "expired"]

RunOutcome = Literal["completed", "failed", "timed_out", "transport_error"]

# Statuses after which a run never moves again.
TERMINAL_RUN_STATUSES = ("completed", "failed", "cancelled", "expired", "incomplete")


class ToolCall(BaseModel):
    """
    A function invocation requested by a run in the `requires_action` state.
    Attributes:
        id (str): The unique ID for the tool call.
        name (str): The name of the function to invoke.
        arguments (str): The JSON-encoded arguments, exactly as produced by the assistant.
    """
    id: str = Field(..., description="The unique ID for the tool call.")
    name: str = Field(..., description="The name of the function to invoke.")
    arguments: str = Field(default="{}", description="The JSON-encoded function arguments.")


class ToolOutput(BaseModel):
    """The answer to a single ToolCall, submitted back to the run."""
    tool_call_id: str
    output: str


class RunSnapshot(BaseModel):
    """
    The state of a run as observed by one create or retrieve call.
    Attributes:
        id (str): The run ID.
        status (RunStatus): The status reported by the service.
        tool_calls (List[ToolCall]): Pending tool calls, only filled when status is `requires_action`.
    """
    id: str
    status: RunStatus
    tool_calls: List[ToolCall] = Field(default_factory=list)


class RunResult(BaseModel):
    """The outcome of a polled run, kept for diagnostics."""
    run_id: str
    status: RunStatus
    outcome: RunOutcome
    polls: int = 0

    @property
    def completed(self) -> bool:
        return self.outcome == "completed"


class ContentBlock(BaseModel):
    """A single content block of a thread message. `text` is only set for text blocks."""
    type: str
    text: Optional[str] = None


class ThreadMessage(BaseModel):
    """
    A message of a conversation thread.
    Attributes:
        id (str): The message ID.
        role (Role): The author of the message.
        content (List[ContentBlock]): The ordered content blocks of the message.
    """
    id: str
    role: Role
    content: List[ContentBlock] = Field(default_factory=list)


class FileRef(BaseModel):
    """The handle of a file stored by the assistant service."""
    id: str
    filename: str
