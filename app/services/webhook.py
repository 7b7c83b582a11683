# app/services/webhook.py
# Posts notifications to the configured external webhook.
# Author: Shibo Li
# Date: 2025-06-14
# Version: 0.1.0

from typing import Any
import httpx
from app.core.config import Settings
from app.core.errors import ConfigurationError, TimedOut
from app.services.http_client import call_with_timeout
from app.utils.logger import console


async def post_to_webhook(payload: Any, settings: Settings) -> int:
    """
    Sends `payload` as a JSON body to NOTIFY_WEBHOOK_URL. No retry.

    Raises:
        ConfigurationError: If no webhook URL is configured.
        TimedOut: If the webhook did not answer within WEBHOOK_TIMEOUT_SECONDS.
        httpx.HTTPError: For transport failures.

    Returns:
        The status code returned by the webhook.
    """
    if not settings.NOTIFY_WEBHOOK_URL:
        raise ConfigurationError("NOTIFY_WEBHOOK_URL is not set in the environment.")

    response = await call_with_timeout(
        "POST",
        settings.NOTIFY_WEBHOOK_URL,
        timeout=settings.WEBHOOK_TIMEOUT_SECONDS,
        json=payload,
        headers={"Content-Type": "application/json"},
    )
    if response.is_success:
        console.success(f"Webhook accepted the notification with status {response.status_code}.")
    else:
        console.error(f"Webhook returned an error status: {response.status_code}")
    return response.status_code


async def notify_quietly(payload: Any, settings: Settings) -> None:
    """
    Like `post_to_webhook`, but the outcome is only logged.
    The chat must go on whether or not the notification was delivered.
    """
    try:
        await post_to_webhook(payload, settings)
    except ConfigurationError as e:
        console.warning(f"Skipping webhook notification: {e}")
    except TimedOut as e:
        console.error(f"Webhook call timed out: {e}")
    except httpx.HTTPError as e:
        console.error(f"Webhook call failed: {e}")
