"""
Workflow API Routes.

Endpoints for saving, fetching and checking workflows, plus the sandbox
run that validates a saved workflow and simulates it when it is valid.
"""

from fastapi import APIRouter, HTTPException, status
from uuid import uuid4
import logging

from designer.api.schemas import (
    ErrorResponse,
    SandboxRunResponse,
    SimulationResponse,
    ValidationResponse,
    WorkflowCreateRequest,
    WorkflowCreateResponse,
    WorkflowInfoResponse,
    WorkflowListResponse,
)
from designer.automations import automation_catalog
from designer.engine.simulator import simulate
from designer.engine.validator import validate_workflow
from designer.engine.workflow import export_workflow
from designer.storage.memory import StoredWorkflow, workflow_storage


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/workflows", tags=["Workflows"])


def _to_info(stored: StoredWorkflow, include_workflow: bool = True) -> WorkflowInfoResponse:
    """Convert a stored workflow to its API response."""
    workflow = stored.workflow
    return WorkflowInfoResponse(
        workflow_id=stored.workflow_id,
        name=stored.name,
        description=workflow.meta.description if workflow.meta else None,
        node_count=len(workflow.nodes),
        edge_count=len(workflow.edges),
        created_at=stored.created_at.isoformat(),
        updated_at=stored.updated_at.isoformat(),
        workflow=export_workflow(workflow) if include_workflow else None,
    )


async def _get_or_404(workflow_id: str) -> StoredWorkflow:
    stored = await workflow_storage.get(workflow_id)
    if not stored:
        raise HTTPException(status_code=404, detail=f"Workflow '{workflow_id}' not found")
    return stored


# ============================================================
# Workflow CRUD Endpoints
# ============================================================

@router.post(
    "",
    response_model=WorkflowCreateResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_workflow(request: WorkflowCreateRequest) -> WorkflowCreateResponse:
    """
    Save a workflow.

    Workflows are saved as-is, valid or not; validate them with
    `POST /workflows/{workflow_id}/validate`.
    """
    workflow_id = str(uuid4())
    name = request.name or request.workflow.name or "Untitled Workflow"

    await workflow_storage.save(
        workflow_id=workflow_id,
        name=name,
        workflow=request.workflow,
    )

    logger.info(f"Saved workflow: {workflow_id} ({name})")

    return WorkflowCreateResponse(
        workflow_id=workflow_id,
        name=name,
        message="Workflow saved successfully",
        node_count=len(request.workflow.nodes),
        edge_count=len(request.workflow.edges),
    )


@router.get(
    "",
    response_model=WorkflowListResponse,
)
async def list_workflows() -> WorkflowListResponse:
    """List all saved workflows."""
    workflows = await workflow_storage.list_all()
    infos = [_to_info(stored, include_workflow=False) for stored in workflows]
    return WorkflowListResponse(workflows=infos, total=len(infos))


@router.get(
    "/{workflow_id}",
    response_model=WorkflowInfoResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_workflow(workflow_id: str) -> WorkflowInfoResponse:
    """Get a saved workflow, including its exported graph."""
    stored = await _get_or_404(workflow_id)
    return _to_info(stored)


@router.put(
    "/{workflow_id}",
    response_model=WorkflowInfoResponse,
    responses={404: {"model": ErrorResponse}},
)
async def replace_workflow(workflow_id: str, request: WorkflowCreateRequest) -> WorkflowInfoResponse:
    """Replace a saved workflow's graph (and name, if given)."""
    stored = await workflow_storage.update(workflow_id, request.workflow, name=request.name)
    if not stored:
        raise HTTPException(status_code=404, detail=f"Workflow '{workflow_id}' not found")
    logger.info(f"Updated workflow: {workflow_id}")
    return _to_info(stored)


@router.delete(
    "/{workflow_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_workflow(workflow_id: str):
    """Delete a saved workflow."""
    deleted = await workflow_storage.delete(workflow_id)
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Workflow '{workflow_id}' not found")
    logger.info(f"Deleted workflow: {workflow_id}")


# ============================================================
# Checking Endpoints
# ============================================================

@router.post(
    "/{workflow_id}/validate",
    response_model=ValidationResponse,
    responses={404: {"model": ErrorResponse}},
)
async def validate_saved_workflow(workflow_id: str) -> ValidationResponse:
    """Validate a saved workflow."""
    stored = await _get_or_404(workflow_id)
    result = validate_workflow(stored.workflow)
    return ValidationResponse(**result.to_dict())


@router.post(
    "/{workflow_id}/test",
    response_model=SandboxRunResponse,
    response_model_exclude_none=True,
    responses={404: {"model": ErrorResponse}},
)
async def test_saved_workflow(workflow_id: str) -> SandboxRunResponse:
    """
    Sandbox run of a saved workflow.

    The workflow is validated first. It is simulated only when validation
    reports no errors; warnings do not prevent the run.
    """
    stored = await _get_or_404(workflow_id)

    validation = validate_workflow(stored.workflow)
    response = SandboxRunResponse(
        workflow_id=workflow_id,
        validation=ValidationResponse(**validation.to_dict()),
    )

    if not validation.ok:
        logger.info(
            f"Workflow {workflow_id} failed validation with "
            f"{len(validation.errors)} error(s); not simulated"
        )
        return response

    result = simulate(stored.workflow, automation_catalog)
    response.simulation = SimulationResponse.model_validate(result.to_dict())
    return response
