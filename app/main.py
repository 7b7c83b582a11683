# The module provides a FastAPI application that serves as the main entry point for the chat relay.
# Author: Shibo Li
# Date: 2025-06-11
# Version: 0.2.0

from contextlib import asynccontextmanager
from fastapi import FastAPI
from app.api.v1.api import api_router
from app.core.config import get_settings
from app.utils.logger import console, redact

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Prints the effective configuration with secrets masked."""
    console.display_data_as_table(redact(get_settings().model_dump()), title="Chat Relay Configuration")
    yield

app = FastAPI(
    title="Chat Relay",
    version="1.0.0",
    description="Relays chat turns to a hosted assistant, answering its tool calls along the way.",
    lifespan=lifespan,
)

@app.get("/", summary="Health Check", tags=["Status"])
def read_root():
    """Root endpoint to check if the service is alive."""
    console.info("Health check endpoint was hit.")
    return {"message": "Chat Relay is alive and running!"}

# Include the v1 router with a global '/v1' prefix
app.include_router(api_router, prefix="/v1")
