# The module defines the error taxonomy of the chat relay.
# Author: Shibo Li
# Date: 2025-06-14
# Version: 0.1.0

from typing import Optional


class ChatRelayError(Exception):
    """Base class for every failure raised inside the chat relay."""


class ConfigurationError(ChatRelayError):
    """A required setting (API key, assistant id, webhook URL) is missing."""


class RemoteError(ChatRelayError):
    """
    The hosted assistant service answered with a non-2xx status or could not be reached.
    Attributes:
        status_code (Optional[int]): HTTP status returned by the service, if any.
    """
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ConversationLocked(RemoteError):
    """A message was appended to a thread that still has an active run."""


class TimedOut(ChatRelayError):
    """A deadline passed: an outbound call or the run polling budget."""


class RunFailed(ChatRelayError):
    """A run ended in a non-completed terminal state or its polling broke off."""


class MalformedArguments(ChatRelayError):
    """The JSON arguments of a tool call could not be parsed."""


class UploadFailed(ChatRelayError):
    """A file could not be forwarded to the assistant file store."""


class RecoveryFailed(ChatRelayError):
    """The single retry on a fresh conversation failed as well."""
