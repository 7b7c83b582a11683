# The module is to define the API models for the application.
# Author: Shibo Li
# Date: 2025-06-11
# Version: 0.2.0

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, List, Optional

class ChatRequest(BaseModel):
    """
    Defines the request body for the /v1/chat endpoint.
    The endpoint handles `resetThread` and a missing message on the raw body before this model is built.
    Attributes:
        message (Optional[str]): The user's text. Required unless `resetThread` is set.
        thread_id (Optional[str]): The conversation the caller is holding, if any.
        file_ids (List[str]): IDs of previously uploaded files to attach to the message. `null` means none.
        user_data (Any): Caller data forwarded to the webhook on a summary request.
        reset_thread (bool): When true, the caller only wants to drop its conversation.
    """
    model_config = ConfigDict(populate_by_name=True)

    message: Optional[str] = Field(default=None, description="The user's text input.")
    thread_id: Optional[str] = Field(default=None, alias="threadId", description="The conversation to continue.")
    file_ids: List[str] = Field(default_factory=list, alias="fileIds", description="Uploaded file IDs to attach.")
    user_data: Any = Field(default=None, alias="userData", description="Caller data for the summary webhook.")
    reset_thread: bool = Field(default=False, alias="resetThread", description="Discard the conversation and do nothing else.")

    @field_validator("file_ids", mode="before")
    @classmethod
    def _null_file_ids(cls, value: Any) -> Any:
        return [] if value is None else value

class ChatResponse(BaseModel):
    """
    Defines the successful response body for the /v1/chat endpoint.
    Attributes:
        response (str): The latest assistant reply.
        thread_id (str): The conversation the reply belongs to; may differ from the one sent.
    """
    model_config = ConfigDict(populate_by_name=True)

    response: str
    thread_id: str = Field(..., alias="threadId")

class ResetResponse(BaseModel):
    """Defines the response body for a `resetThread` request."""
    model_config = ConfigDict(populate_by_name=True)

    reset: bool = True
    thread_id: Optional[str] = Field(default=None, alias="threadId")

class ErrorResponse(BaseModel):
    """
    Defines the error body shared by all endpoints.
    Attributes:
        error (str): A human readable message.
        reset (Optional[bool]): Set when the caller must discard its held threadId.
    """
    error: str
    reset: Optional[bool] = None

class UploadResponse(BaseModel):
    """Defines the response body for the /v1/upload endpoint."""
    model_config = ConfigDict(populate_by_name=True)

    file_id: str = Field(..., alias="fileId")
    filename: str

class NotifyResponse(BaseModel):
    """Defines the response body for the /v1/notify endpoint."""
    ok: bool
    status: int
