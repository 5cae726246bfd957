"""
Pydantic Schemas for API Request/Response Models.

These schemas define the structure of data flowing through the API,
providing automatic validation and documentation.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from designer.engine.node import CamelModel
from designer.engine.simulator import SimulationStatus, StepStatus
from designer.engine.workflow import Workflow


_EXAMPLE_WORKFLOW = {
    "nodes": [
        {"id": "start", "type": "start", "position": {"x": 0, "y": 0}, "data": {"title": "Start"}},
        {
            "id": "notify",
            "type": "automated",
            "position": {"x": 0, "y": 120},
            "data": {"title": "Notify Team", "actionId": "send_email"},
        },
        {"id": "end", "type": "end", "position": {"x": 0, "y": 240}, "data": {"title": "End", "message": "Done"}},
    ],
    "edges": [
        {"id": "e1", "source": "start", "target": "notify"},
        {"id": "e2", "source": "notify", "target": "end"},
    ],
}


# ============================================================
# Validation / Simulation Schemas
# ============================================================

class WorkflowRequest(BaseModel):
    """Request carrying a workflow to validate."""
    workflow: Workflow = Field(..., description="The workflow graph")

    class Config:
        json_schema_extra = {"example": {"workflow": _EXAMPLE_WORKFLOW}}


class ValidationResponse(BaseModel):
    """Errors and warnings for a workflow."""
    ok: bool = Field(..., description="True when there are no errors")
    errors: List[str] = Field(default_factory=list, description="Problems that block simulation")
    warnings: List[str] = Field(default_factory=list, description="Advisory findings")


class ExecutionStepEntry(CamelModel):
    """A single step in a simulation trace."""
    node_id: str
    node_type: str
    status: StepStatus
    message: str
    timestamp: Optional[str] = None


class SimulationResponse(BaseModel):
    """Result of simulating a workflow."""
    status: SimulationStatus
    execution: List[ExecutionStepEntry]
    error: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "status": "ok",
                "execution": [
                    {
                        "nodeId": "start",
                        "nodeType": "start",
                        "status": "completed",
                        "message": "Workflow started: \"Start\"",
                        "timestamp": "2024-01-01T12:00:00+00:00",
                    },
                    {
                        "nodeId": "notify",
                        "nodeType": "automated",
                        "status": "executed",
                        "message": "Executed \"Send Email\" for \"Notify Team\"",
                        "timestamp": "2024-01-01T12:00:00+00:00",
                    },
                    {
                        "nodeId": "end",
                        "nodeType": "end",
                        "status": "completed",
                        "message": "Done",
                        "timestamp": "2024-01-01T12:00:00+00:00",
                    },
                ],
            }
        }


class SandboxRunResponse(BaseModel):
    """Validation outcome plus the simulation trace when the workflow is valid."""
    workflow_id: str
    validation: ValidationResponse
    simulation: Optional[SimulationResponse] = Field(
        None,
        description="Present only when validation found no errors",
    )


# ============================================================
# Workflow Storage Schemas
# ============================================================

class WorkflowCreateRequest(BaseModel):
    """Request to save a workflow."""
    name: Optional[str] = Field(None, description="Name (defaults to the workflow's meta name)")
    workflow: Workflow = Field(..., description="The workflow graph")

    class Config:
        json_schema_extra = {
            "example": {"name": "Notify on start", "workflow": _EXAMPLE_WORKFLOW}
        }


class WorkflowCreateResponse(BaseModel):
    """Response after saving a workflow."""
    workflow_id: str = Field(..., description="Unique identifier for the saved workflow")
    name: str
    message: str = Field(default="Workflow saved successfully")
    node_count: int
    edge_count: int


class WorkflowInfoResponse(BaseModel):
    """A saved workflow."""
    workflow_id: str
    name: str
    description: Optional[str]
    node_count: int
    edge_count: int
    created_at: str
    updated_at: str
    workflow: Optional[Dict[str, Any]] = Field(None, description="Exported workflow graph")


class WorkflowListResponse(BaseModel):
    """Response listing all saved workflows."""
    workflows: List[WorkflowInfoResponse]
    total: int


# ============================================================
# Error Schemas
# ============================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    detail: Optional[str] = None
    status_code: int
