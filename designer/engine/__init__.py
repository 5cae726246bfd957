"""
Engine package - Workflow model, graph analysis, validation and simulation.
"""

from designer.engine.node import NodeType, WorkflowNode, create_node, default_node_data
from designer.engine.workflow import Edge, Workflow, export_workflow, import_workflow
from designer.engine.graph import (
    build_adjacency,
    detect_cycle,
    find_start_nodes,
    find_end_nodes,
    find_disconnected_nodes,
    topological_sort,
    get_execution_order,
)
from designer.engine.validator import ValidationResult, validate, validate_workflow
from designer.engine.simulator import (
    ExecutionStep,
    SimulationResult,
    SimulationStatus,
    Simulator,
    StepStatus,
    simulate,
)

__all__ = [
    "NodeType",
    "WorkflowNode",
    "create_node",
    "default_node_data",
    "Edge",
    "Workflow",
    "export_workflow",
    "import_workflow",
    "build_adjacency",
    "detect_cycle",
    "find_start_nodes",
    "find_end_nodes",
    "find_disconnected_nodes",
    "topological_sort",
    "get_execution_order",
    "ValidationResult",
    "validate",
    "validate_workflow",
    "ExecutionStep",
    "SimulationResult",
    "SimulationStatus",
    "Simulator",
    "StepStatus",
    "simulate",
]
