# This module exposes the functions the relay can answer when a run requires action.
# Author: Shibo Li
# Date: 2025-06-14
# Version: 0.1.0

from typing import Any, Dict, List
from fastapi import APIRouter
from app.core.tool_registry import tool_registry

router = APIRouter()

@router.get("/",
            summary="List Tool Definitions",
            tags=["Tools"])
def list_tools() -> List[Dict[str, Any]]:
    """
    Returns every registered tool in function-calling format, ready to be
    copied into the assistant's configuration.
    """
    return tool_registry.get_definitions()
