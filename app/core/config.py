# The module is to define the configuration settings for the chat relay.
# Author: Shibo Li
# Date: 2025-06-11
# Version: 0.2.0

from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional

class Settings(BaseSettings):
    """
    The Settings class is used to define the configuration settings for the application.
    It inherits from BaseSettings, which allows it to load environment variables
    and provides type validation for the settings.
    Attributes:
        OPENAI_API_KEY (Optional[str]): Bearer credential for the hosted assistant API.
            Left optional so that a missing key fails the request, not the process.
        OPENAI_ASSISTANT_ID (Optional[str]): The assistant that runs are started against.
        OPENAI_BASE_URL (Optional[str]): Override for the assistant API base URL.
        NOTIFY_WEBHOOK_URL (Optional[str]): Webhook that receives tool-call notifications.
        WEBHOOK_TIMEOUT_SECONDS (float): Hard deadline for a single webhook call.
        RUN_POLL_INTERVAL_SECONDS (float): Fixed delay between two run status polls.
        RUN_MAX_POLL_ATTEMPTS (int): Total number of polls before a run is declared timed out.
        SUMMARY_TRIGGER_MESSAGE (str): Chat message that forwards the caller's userData to the webhook.
        NO_REPLY_FALLBACK (str): Reply used when a run leaves no assistant text behind.
    """
    # Hosted assistant
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_ASSISTANT_ID: Optional[str] = None
    OPENAI_BASE_URL: Optional[str] = None

    # Outbound notifications
    NOTIFY_WEBHOOK_URL: Optional[str] = None
    WEBHOOK_TIMEOUT_SECONDS: float = 10.0

    # Run polling
    RUN_POLL_INTERVAL_SECONDS: float = 1.0
    RUN_MAX_POLL_ATTEMPTS: int = 30

    SUMMARY_TRIGGER_MESSAGE: str = "send_summary"
    NO_REPLY_FALLBACK: str = "Sorry, I could not generate a response."


    class Config:
        #
        env_file = ".env"
        env_file_encoding = 'utf-8'
        extra = "ignore"

# lru_cache to cache the settings instance.
@lru_cache
def get_settings():
    return Settings()


if __name__ == "__main__":
    settings = get_settings()
    print(settings.model_dump_json(indent=4))
