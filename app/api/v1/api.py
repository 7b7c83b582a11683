# The module is to define the API router for the application.
# Author: Shibo Li
# Date: 2025-06-11
# Version: 0.2.0

from fastapi import APIRouter
from app.api.v1.endpoints import chat, upload, notify, tools

api_router = APIRouter()

# Include the chat router with a '/chat' prefix
api_router.include_router(chat.router, prefix="/chat", tags=["Conversation"])

# Include the upload router with an '/upload' prefix
api_router.include_router(upload.router, prefix="/upload", tags=["Files"])

# Include the notify router with a '/notify' prefix
api_router.include_router(notify.router, prefix="/notify", tags=["Notifications"])

# Include the tools router with a '/tools' prefix
api_router.include_router(tools.router, prefix="/tools", tags=["Tools"])
