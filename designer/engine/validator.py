"""
Workflow Validator.

Decides whether a workflow graph is a well-formed executable process.
Structural problems are reported as errors and block simulation; advisory
findings are reported as warnings and never do.
"""

from typing import Any, Dict, List, Sequence
from collections import Counter
from dataclasses import dataclass, field
import logging

from designer.engine.graph import detect_cycle, find_disconnected_nodes
from designer.engine.node import BaseNode, DEFAULT_TASK_TITLE, NodeType
from designer.engine.workflow import Edge, Workflow


logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Errors and warnings found in a workflow."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when there are no errors; warnings never count."""
        return not self.errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ok": self.ok,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }


def _is_blank(value) -> bool:
    return not value or not str(value).strip()


def validate(nodes: Sequence[BaseNode], edges: Sequence[Edge]) -> ValidationResult:
    """
    Validate a workflow graph.

    Rules run in a fixed order, which only affects message order:
    empty graph (stops here), start/end counts, cycles, disconnected
    nodes, dead ends, per-type node settings, dangling edges and
    duplicate node ids.

    Args:
        nodes: Workflow nodes
        edges: Workflow edges

    Returns:
        ValidationResult with all errors and warnings
    """
    result = ValidationResult()
    errors = result.errors
    warnings = result.warnings

    if not nodes:
        errors.append("Workflow is empty. Add at least one node to create a workflow.")
        return result

    # Start and end nodes
    start_count = sum(1 for n in nodes if n.type == NodeType.START)
    if start_count == 0:
        errors.append("No Start node found. Every workflow must begin with a Start node.")
    elif start_count > 1:
        warnings.append(
            f"Multiple Start nodes found ({start_count}). "
            f"Consider using only one Start node."
        )

    if not any(n.type == NodeType.END for n in nodes):
        warnings.append(
            "No End node found. Consider adding an End node to mark workflow completion."
        )

    if detect_cycle(nodes, edges):
        errors.append("Cycle detected in workflow. Workflows must be acyclic (DAG).")

    by_id: Dict[str, BaseNode] = {}
    for node in nodes:
        by_id.setdefault(node.id, node)

    disconnected = find_disconnected_nodes(nodes, edges)
    if disconnected:
        names = ", ".join(by_id[node_id].display_name for node_id in disconnected)
        warnings.append(f"Disconnected nodes found: {names}. These nodes won't be executed.")

    # Dead ends: anything but an end node needs a way out
    sources = {edge.source for edge in edges}
    dead_ends = [n for n in nodes if n.type != NodeType.END and n.id not in sources]
    if dead_ends:
        names = ", ".join(n.display_name for n in dead_ends)
        warnings.append(f"Nodes without outgoing connections: {names}")

    for node in nodes:
        if node.type == NodeType.TASK:
            title = node.data.title
            if _is_blank(title) or title == DEFAULT_TASK_TITLE:
                warnings.append(f'Task node "{node.id}" has default/missing title.')

        elif node.type == NodeType.APPROVAL:
            # An approval cannot be routed to anyone without a role
            if _is_blank(node.data.approver_role):
                errors.append(
                    f'Approval node "{node.display_name}" is missing approver role.'
                )

        elif node.type == NodeType.AUTOMATED:
            if not node.data.action_id:
                warnings.append(
                    f'Automated node "{node.display_name}" has no action selected.'
                )

    for edge in edges:
        if edge.source not in by_id:
            errors.append(f"Edge {edge.id} has invalid source: {edge.source}")
        if edge.target not in by_id:
            errors.append(f"Edge {edge.id} has invalid target: {edge.target}")

    duplicates = [node_id for node_id, count in Counter(n.id for n in nodes).items() if count > 1]
    if duplicates:
        errors.append(f"Duplicate node ids found: {', '.join(duplicates)}.")

    logger.debug(
        f"Validated workflow with {len(nodes)} nodes and {len(edges)} edges: "
        f"{len(errors)} errors, {len(warnings)} warnings"
    )
    return result


def validate_workflow(workflow: Workflow) -> ValidationResult:
    """Validate a Workflow model."""
    return validate(workflow.nodes, workflow.edges)
