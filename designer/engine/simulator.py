"""
Execution Simulator.

Walks a workflow in execution order and describes what each step would
do. Nothing is executed: every step's status and message are derived
from the node's type and data alone, so the same workflow always yields
the same trace (timestamps aside).
"""

from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
import logging

from pydantic import ValidationError

from designer.automations.registry import AutomationCatalog
from designer.engine.graph import get_execution_order
from designer.engine.node import BaseNode, NodeType
from designer.engine.workflow import Workflow


logger = logging.getLogger(__name__)


class StepStatus(str, Enum):
    """Outcome of a simulated step."""
    PENDING = "pending"
    COMPLETED = "completed"
    APPROVED = "approved"
    AWAITING_MANUAL_APPROVAL = "awaiting_manual_approval"
    EXECUTED = "executed"
    FAILED = "failed"


class SimulationStatus(str, Enum):
    """Outcome of a whole simulation request."""
    OK = "ok"
    ERROR = "error"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ExecutionStep:
    """A single step in the simulation trace."""
    node_id: str
    node_type: str
    status: StepStatus
    message: str
    timestamp: Optional[datetime] = field(default_factory=_utcnow)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "nodeId": self.node_id,
            "nodeType": self.node_type,
            "status": self.status.value,
            "message": self.message,
        }
        if self.timestamp is not None:
            data["timestamp"] = self.timestamp.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ExecutionStep":
        """
        Create an ExecutionStep from its wire form.

        Raises:
            ValueError: If a field is missing or has the wrong shape
        """
        try:
            timestamp = data.get("timestamp")
            if timestamp is not None:
                timestamp = datetime.fromisoformat(str(timestamp).replace("Z", "+00:00"))
            return cls(
                node_id=str(data["nodeId"]),
                node_type=str(data["nodeType"]),
                status=StepStatus(data["status"]),
                message=str(data["message"]),
                timestamp=timestamp,
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise ValueError(f"Malformed execution step: {e!r}") from e


@dataclass
class SimulationResult:
    """Result of simulating a workflow."""
    status: SimulationStatus
    execution: List[ExecutionStep] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == SimulationStatus.OK

    @classmethod
    def failure(cls, error: str) -> "SimulationResult":
        """An error result with an empty trace."""
        return cls(status=SimulationStatus.ERROR, execution=[], error=error)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "status": self.status.value,
            "execution": [step.to_dict() for step in self.execution],
        }
        if self.error is not None:
            data["error"] = self.error
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "SimulationResult":
        """
        Create a SimulationResult from its wire form.

        Raises:
            ValueError: If the payload does not have the result shape
        """
        if not isinstance(data, Mapping):
            raise ValueError("Simulation result must be an object")
        execution = data.get("execution", [])
        if not isinstance(execution, list):
            raise ValueError("Simulation result 'execution' must be a list")

        status = SimulationStatus(data.get("status"))
        error = data.get("error")
        return cls(
            status=status,
            execution=[ExecutionStep.from_dict(step) for step in execution],
            error=str(error) if error is not None else None,
        )


# ============================================================
# Step Policies
# ============================================================

# A policy maps a node (plus its display title and the catalog) to a
# status and message.
StepPolicy = Callable[[Any, str, Optional[AutomationCatalog]], Tuple[StepStatus, str]]

_step_policies: Dict[str, StepPolicy] = {}


def step_policy(node_type: NodeType):
    """Decorator to register the policy for a node type."""
    def decorator(func: StepPolicy) -> StepPolicy:
        _step_policies[NodeType(node_type).value] = func
        return func
    return decorator


def get_step_policy(node_type: str) -> StepPolicy:
    """Get the policy for a node type, or the generic one."""
    return _step_policies.get(node_type, default_policy)


@step_policy(NodeType.START)
def start_policy(node, title, catalog):
    return StepStatus.COMPLETED, f'Workflow started: "{title}"'


@step_policy(NodeType.TASK)
def task_policy(node, title, catalog):
    assignee = node.data.assignee
    if assignee:
        return StepStatus.COMPLETED, f'Task "{title}" assigned to {assignee} - completed'
    return StepStatus.COMPLETED, f'Task "{title}" completed'


@step_policy(NodeType.APPROVAL)
def approval_policy(node, title, catalog):
    """Auto-approve only when a positive threshold is configured."""
    threshold = node.data.auto_approve_threshold
    if threshold is not None and threshold > 0:
        return StepStatus.APPROVED, f'"{title}" auto-approved (threshold: {threshold})'

    role = node.data.approver_role
    if not role or not role.strip():
        role = "approver"
    return (
        StepStatus.AWAITING_MANUAL_APPROVAL,
        f'"{title}" requires manual approval from {role}',
    )


@step_policy(NodeType.AUTOMATED)
def automated_policy(node, title, catalog):
    label = catalog.label_for(node.data.action_id) if catalog is not None else None
    if label:
        return StepStatus.EXECUTED, f'Executed "{label}" for "{title}"'
    return StepStatus.EXECUTED, f'Executed automated step "{title}"'


@step_policy(NodeType.END)
def end_policy(node, title, catalog):
    if node.data.message:
        return StepStatus.COMPLETED, node.data.message
    return StepStatus.COMPLETED, f'Workflow ended: "{title}"'


def default_policy(node, title, catalog):
    """Fallback for node types without a registered policy."""
    return StepStatus.COMPLETED, f'Processed node "{title}"'


# ============================================================
# Simulator
# ============================================================

class Simulator:
    """
    Dry-run simulator for workflows.

    The simulator does not validate the workflow; callers are expected to
    validate first. It only checks that the input looks like a workflow,
    and on a cyclic graph it still visits every node once, in input order.

    Usage:
        simulator = Simulator(automation_catalog)
        result = simulator.run(workflow)
    """

    def __init__(self, catalog: Optional[AutomationCatalog] = None):
        """
        Initialize the simulator.

        Args:
            catalog: Automation catalog used to name automated steps'
                actions (automated steps get a generic message without it)
        """
        self.catalog = catalog

    def run(self, workflow: Union[Workflow, Mapping[str, Any], None]) -> SimulationResult:
        """
        Simulate a workflow.

        Args:
            workflow: A Workflow, or its raw JSON-compatible form

        Returns:
            SimulationResult with one step per node, or an error result
            with an empty trace if the input is not a workflow
        """
        if not isinstance(workflow, Workflow):
            nodes = workflow.get("nodes") if isinstance(workflow, Mapping) else None
            if not isinstance(nodes, (list, tuple)):
                logger.warning("Rejected simulation request: invalid workflow structure")
                return SimulationResult.failure("Invalid workflow structure")

            try:
                workflow = Workflow.model_validate(workflow)
            except ValidationError as e:
                logger.warning(f"Rejected simulation request: {e.error_count()} invalid field(s)")
                return SimulationResult.failure(f"Failed to parse workflow: {e.errors()[0]['msg']}")

        order = get_execution_order(workflow.nodes, workflow.edges)
        execution = [self._simulate_node(node) for node in order]

        logger.info(f"Simulated workflow with {len(execution)} steps")
        return SimulationResult(status=SimulationStatus.OK, execution=execution)

    def _simulate_node(self, node: BaseNode) -> ExecutionStep:
        """Derive the step for a single node."""
        title = node.data.title
        if title is None:
            title = f"{node.type}-{node.id}"

        status, message = get_step_policy(node.type)(node, title, self.catalog)
        logger.debug(f"Simulated node {node.id} ({node.type}): {status.value}")

        return ExecutionStep(
            node_id=node.id,
            node_type=node.type,
            status=status,
            message=message,
        )


def simulate(
    workflow: Union[Workflow, Mapping[str, Any], None],
    catalog: Optional[AutomationCatalog] = None
) -> SimulationResult:
    """
    Convenience function to simulate a workflow.

    Args:
        workflow: A Workflow, or its raw JSON-compatible form
        catalog: Optional automation catalog

    Returns:
        SimulationResult
    """
    return Simulator(catalog).run(workflow)
