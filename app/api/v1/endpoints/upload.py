# The module is to define the API endpoint for file uploads.
# Author: Shibo Li
# Date: 2025-06-14
# Version: 0.1.0

from typing import Optional
from fastapi import APIRouter, Depends, File, UploadFile, status
from fastapi.responses import JSONResponse
from app.core.config import Settings, get_settings
from app.core.errors import UploadFailed
from app.core.upload_relay import upload
from app.utils.logger import console
from app.models.api_models import ErrorResponse, UploadResponse

router = APIRouter()

@router.post("/",
          response_model=UploadResponse,
          responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
async def upload_file(file: Optional[UploadFile] = File(default=None), settings: Settings = Depends(get_settings)):
    """
    Forwards an uploaded file to the assistant file store.
    The returned `fileId` can be sent as part of `fileIds` on the next chat turn.
    """
    if file is None:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST,
                            content=ErrorResponse(error="No file provided").model_dump(exclude_none=True))

    filename = file.filename or "upload"
    try:
        file_ref = await upload(await file.read(), filename, settings)
    except UploadFailed as e:
        console.error(f"Error uploading file '{filename}': {e}")
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                            content=ErrorResponse(error=str(e)).model_dump(exclude_none=True))

    return UploadResponse(file_id=file_ref.id, filename=file_ref.filename)
