# The module is to define the API endpoint that forwards caller data to the notification webhook.
# Author: Shibo Li
# Date: 2025-06-14
# Version: 0.1.0

from typing import Any
import httpx
from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse
from app.core.config import Settings, get_settings
from app.core.errors import ChatRelayError
from app.services.webhook import post_to_webhook
from app.utils.logger import console
from app.models.api_models import ErrorResponse, NotifyResponse

router = APIRouter()

@router.post("/",
          response_model=NotifyResponse,
          responses={500: {"model": ErrorResponse}})
async def send_to_webhook(user_data: Any = Body(...), settings: Settings = Depends(get_settings)):
    """
    Posts the request body to the webhook and reports the status it answered with.
    A non-2xx answer is still reported as delivered; only timeouts and transport errors fail.
    """
    try:
        status_code = await post_to_webhook(user_data, settings)
    except (ChatRelayError, httpx.HTTPError) as e:
        console.error(f"Error sending to webhook: {e}")
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                            content=ErrorResponse(error=str(e) or type(e).__name__).model_dump(exclude_none=True))

    return NotifyResponse(ok=True, status=status_code)
