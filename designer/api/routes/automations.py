"""
Automations API Routes.

Endpoints for the automation catalog that automated steps are bound to.
"""

from typing import List
from fastapi import APIRouter, HTTPException
import logging

from designer.api.schemas import ErrorResponse
from designer.automations import AutomationAction, automation_catalog


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/automations", tags=["Automations"])


@router.get(
    "",
    response_model=List[AutomationAction],
    response_model_exclude_none=True,
)
async def list_automations() -> List[AutomationAction]:
    """
    List all automation actions.
    
    An automated step references one of these by its `actionId`.
    """
    return automation_catalog.list_actions()


@router.get(
    "/{action_id}",
    response_model=AutomationAction,
    response_model_exclude_none=True,
    responses={404: {"model": ErrorResponse}},
)
async def get_automation(action_id: str) -> AutomationAction:
    """Get a specific automation action."""
    action = automation_catalog.get(action_id)
    if not action:
        raise HTTPException(
            status_code=404,
            detail=f"Automation action '{action_id}' not found"
        )
    return action
