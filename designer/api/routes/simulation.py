"""
Validation and Simulation API Routes.

Stateless endpoints: the caller sends a workflow and gets back either its
validation result or its simulated execution trace.
"""

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
import logging

from designer.api.schemas import (
    SimulationResponse,
    ValidationResponse,
    WorkflowRequest,
)
from designer.automations import automation_catalog
from designer.engine.simulator import SimulationResult, simulate
from designer.engine.validator import validate_workflow


logger = logging.getLogger(__name__)

router = APIRouter(tags=["Simulation"])


@router.post(
    "/validate",
    response_model=ValidationResponse,
)
async def validate_endpoint(request: WorkflowRequest) -> ValidationResponse:
    """
    Validate a workflow.
    
    Errors (missing Start node, cycles, dangling edges, approvals without
    an approver role) block simulation; warnings are advisory.
    """
    result = validate_workflow(request.workflow)
    return ValidationResponse(**result.to_dict())


@router.post(
    "/simulate",
    response_model=SimulationResponse,
    response_model_exclude_none=True,
    responses={
        400: {"model": SimulationResponse, "description": "Malformed workflow"},
    }
)
async def simulate_endpoint(request: Request):
    """
    Simulate a workflow's execution.
    
    Request body: `{"workflow": {"nodes": [...], "edges": [...]}}`.
    
    The workflow is not validated first; validate it with `POST /validate`.
    A malformed body yields HTTP 400 with
    `{"status": "error", "error": "...", "execution": []}`.
    """
    try:
        body = await request.json()
    except ValueError:
        result = SimulationResult.failure("Failed to parse workflow")
    else:
        workflow = body.get("workflow") if isinstance(body, dict) else None
        result = simulate(workflow, automation_catalog)
    
    if not result.ok:
        logger.info(f"Simulation request rejected: {result.error}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=result.to_dict(),
        )
    
    return SimulationResponse.model_validate(result.to_dict())
