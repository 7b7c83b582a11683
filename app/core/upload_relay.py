# app/core/upload_relay.py
# Forwards an uploaded file to the assistant file store.
# Author: Shibo Li
# Date: 2025-06-14
# Version: 0.1.0

from app.core.config import Settings
from app.core.errors import ConfigurationError, RemoteError, UploadFailed
from app.models.common import FileRef
from app.services.assistant_client import build_assistant_gateway
from app.utils.logger import console


async def upload(file_bytes: bytes, filename: str, settings: Settings) -> FileRef:
    """
    Uploads a file once, without retry, and returns its handle for later attachment.

    Raises:
        UploadFailed: On a missing API key or any remote failure, carrying the original message.
    """
    console.info(f"Uploading '{filename}' ({len(file_bytes)} bytes) to the assistant file store.")
    try:
        async with build_assistant_gateway(settings) as gateway:
            file_ref = await gateway.upload_file(file_bytes, filename)
    except (ConfigurationError, RemoteError) as e:
        raise UploadFailed(str(e)) from e

    console.success(f"Uploaded '{filename}' as {file_ref.id}.")
    return file_ref
