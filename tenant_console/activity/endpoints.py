# tenant_console/activity/endpoints.py
from fastapi import APIRouter, Depends, Query
from typing import Annotated, List, Optional

from .log import ActivityEntry, ActivityLevel, ActivityLog
from ..dependencies import get_activity_log

activity_router = APIRouter(prefix="/activity", tags=["Activity"])


@activity_router.get("/", response_model=List[ActivityEntry])
@activity_router.get("", response_model=List[ActivityEntry], include_in_schema=False)
async def list_activity_endpoint(
    log: Annotated[ActivityLog, Depends(get_activity_log)],
    level: Annotated[Optional[ActivityLevel], Query(description="Only return entries of this level.")] = None
):
    """Return the retained activity entries, oldest first."""
    return log.entries(level)
