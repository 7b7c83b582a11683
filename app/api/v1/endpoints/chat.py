# The module is to define the API endpoints for chat interactions.
# Author: Shibo Li
# Date: 2025-06-11
# Version: 0.2.0

from typing import Any
from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from app.core.config import Settings, get_settings
from app.core.errors import ChatRelayError, ConfigurationError
from app.core.orchestrator import run_chat_turn
from app.utils.logger import console
from app.models.api_models import ChatRequest, ChatResponse, ErrorResponse, ResetResponse

router = APIRouter()

GENERIC_FAILURE = "Failed to process message"


def _error(message: str, status_code: int, reset: bool = False) -> JSONResponse:
    body = ErrorResponse(error=message, reset=True if reset else None)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@router.post("/",
          response_model=ChatResponse,
          responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
async def chat_with_assistant(body: Any = Body(default=None), settings: Settings = Depends(get_settings)):
    """
    Handles a single turn in a conversation.
    The caller owns the thread ID and must drop it whenever a response carries `reset: true`.

    The body is checked by hand: `resetThread` wins whatever else is present,
    and a missing or non-string message is a 400, not a validation error.
    """
    if not isinstance(body, dict):
        body = {}

    if body.get("resetThread"):
        console.info("Thread reset requested.")
        return JSONResponse(content=ResetResponse().model_dump(by_alias=True))

    message = body.get("message")
    if not isinstance(message, str) or not message:
        return _error("No message provided", status.HTTP_400_BAD_REQUEST)

    try:
        request = ChatRequest.model_validate(body)
    except ValidationError as e:
        console.warning(f"Rejected chat request: {e.error_count()} invalid field(s).")
        return _error("Invalid request body", status.HTTP_400_BAD_REQUEST)

    console.info(f"Received chat request for thread: {request.thread_id or '<new>'}")
    try:
        result = await run_chat_turn(request, settings)
    except ConfigurationError as e:
        console.error(str(e))
        return _error(str(e), status.HTTP_500_INTERNAL_SERVER_ERROR, reset=True)
    except ChatRelayError as e:
        console.error(f"Chat turn failed ({type(e).__name__}): {e}")
        return _error(GENERIC_FAILURE, status.HTTP_500_INTERNAL_SERVER_ERROR, reset=True)
    except Exception:
        console.exception("Unexpected error in chat turn.")
        return _error(GENERIC_FAILURE, status.HTTP_500_INTERNAL_SERVER_ERROR, reset=True)

    return ChatResponse(response=result.response, thread_id=result.thread_id)
