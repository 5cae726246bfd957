"""
Workflow Model for the Workflow Designer.

A workflow is an ordered list of nodes and an ordered list of edges. It is
immutable in practice: every editing operation below returns a new
workflow and leaves the one it was given untouched, so callers pass the
current graph explicitly instead of sharing a mutable one.
"""

from typing import Any, Dict, List, Mapping, Optional
from datetime import datetime, timezone
import json
import uuid

from pydantic import Field

from designer.engine.node import (
    BaseNode,
    CamelModel,
    NodeType,
    Position,
    WorkflowNode,
    create_node,
    data_field_names,
)


class Edge(CamelModel):
    """A directed connection from one node to another."""
    id: str
    source: str
    target: str
    source_handle: Optional[str] = None
    target_handle: Optional[str] = None


class WorkflowMeta(CamelModel):
    """Descriptive information about a workflow."""
    name: Optional[str] = None
    description: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class Workflow(CamelModel):
    """
    A workflow graph as exchanged with the editor.

    Attributes:
        nodes: Steps of the workflow, in insertion order
        edges: Connections between steps, in insertion order
        meta: Optional descriptive information
    """
    nodes: List[WorkflowNode]
    edges: List[Edge] = Field(default_factory=list)
    meta: Optional[WorkflowMeta] = None

    @property
    def name(self) -> Optional[str]:
        """The workflow name from its metadata."""
        return self.meta.name if self.meta else None

    def get_node(self, node_id: str) -> Optional[BaseNode]:
        """Get the first node with the given id."""
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def get_edge(self, edge_id: str) -> Optional[Edge]:
        """Get the first edge with the given id."""
        for edge in self.edges:
            if edge.id == edge_id:
                return edge
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the plain JSON-compatible wire form."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Workflow":
        """Create a Workflow from its wire form."""
        return cls.model_validate(data)

    def __repr__(self) -> str:
        return (
            f"Workflow(name={self.name!r}, nodes={[n.id for n in self.nodes]}, "
            f"edges={len(self.edges)})"
        )


def _short_id() -> str:
    return uuid.uuid4().hex[:6]


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# ============================================================
# Editing Operations
# ============================================================

def add_node(
    workflow: Workflow,
    node_type: NodeType,
    position: Optional[Position] = None,
    node_id: Optional[str] = None,
    **data: Any
) -> Workflow:
    """
    Add a node to the workflow.

    Args:
        workflow: Current workflow
        node_type: Type of the new node
        position: Canvas position (defaults to (100, 100))
        node_id: Node id (generated as ``<type>-<6 chars>`` if not provided)
        **data: Node data, merged over the type's default data

    Returns:
        A new workflow containing the node
    """
    node_type = NodeType(node_type)
    node_id = node_id or f"{node_type.value}-{_short_id()}"
    if workflow.get_node(node_id) is not None:
        raise ValueError(f"Node '{node_id}' already exists in the workflow")

    node = create_node(
        node_type,
        node_id,
        position=position or Position(x=100, y=100),
        **data,
    )
    return workflow.model_copy(update={"nodes": [*workflow.nodes, node]})


def update_node_data(workflow: Workflow, node_id: str, **changes: Any) -> Workflow:
    """
    Merge changes into a node's data.

    Keys may be snake_case field names or camelCase wire names.

    Raises:
        ValueError: If the node does not exist or a key is not a field
            of that node type
    """
    node = workflow.get_node(node_id)
    if node is None:
        raise ValueError(f"Node '{node_id}' not found in workflow")

    data_class = type(node.data)
    names = data_field_names(data_class)

    unknown = [key for key in changes if key not in names]
    if unknown:
        raise ValueError(
            f"Unknown field(s) for {node.type} node '{node_id}': {unknown}"
        )

    merged = node.data.model_dump()
    merged.update({names[key]: value for key, value in changes.items()})
    new_node = node.model_copy(update={"data": data_class.model_validate(merged)})

    return workflow.model_copy(update={
        "nodes": [new_node if n is node else n for n in workflow.nodes]
    })


def delete_node(workflow: Workflow, node_id: str) -> Workflow:
    """Remove a node and every edge attached to it."""
    if workflow.get_node(node_id) is None:
        raise ValueError(f"Node '{node_id}' not found in workflow")

    return workflow.model_copy(update={
        "nodes": [n for n in workflow.nodes if n.id != node_id],
        "edges": [
            e for e in workflow.edges
            if e.source != node_id and e.target != node_id
        ],
    })


def connect(
    workflow: Workflow,
    source: str,
    target: str,
    edge_id: Optional[str] = None,
    source_handle: Optional[str] = None,
    target_handle: Optional[str] = None,
) -> Workflow:
    """
    Add an edge from source to target.

    Args:
        workflow: Current workflow
        source: Source node id
        target: Target node id
        edge_id: Edge id (generated as ``edge-<6 chars>`` if not provided)

    Returns:
        A new workflow containing the edge
    """
    if workflow.get_node(source) is None:
        raise ValueError(f"Source node '{source}' not found in workflow")
    if workflow.get_node(target) is None:
        raise ValueError(f"Target node '{target}' not found in workflow")

    edge_id = edge_id or f"edge-{_short_id()}"
    if workflow.get_edge(edge_id) is not None:
        raise ValueError(f"Edge '{edge_id}' already exists in the workflow")

    edge = Edge(
        id=edge_id,
        source=source,
        target=target,
        source_handle=source_handle,
        target_handle=target_handle,
    )
    return workflow.model_copy(update={"edges": [*workflow.edges, edge]})


def delete_edge(workflow: Workflow, edge_id: str) -> Workflow:
    """Remove an edge."""
    if workflow.get_edge(edge_id) is None:
        raise ValueError(f"Edge '{edge_id}' not found in workflow")
    return workflow.model_copy(update={
        "edges": [e for e in workflow.edges if e.id != edge_id]
    })


def clear(workflow: Workflow) -> Workflow:
    """Remove all nodes and edges, keeping the metadata."""
    return workflow.model_copy(update={"nodes": [], "edges": []})


# ============================================================
# Export / Import
# ============================================================

def export_workflow(workflow: Workflow) -> Dict[str, Any]:
    """
    Export a workflow to its JSON-compatible form.

    Structural fields (ids, types, positions, data, edge handles) are
    copied verbatim; ``meta.updatedAt`` is stamped with the current time.
    """
    exported = workflow.to_dict()
    meta = dict(exported.get("meta", {}))
    meta["updatedAt"] = _now()
    exported["meta"] = meta
    return exported


def import_workflow(payload: Mapping[str, Any]) -> Workflow:
    """Import a workflow from its exported form."""
    return Workflow.from_dict(payload)


def workflow_to_json(workflow: Workflow, indent: Optional[int] = 2) -> str:
    """Export a workflow as a JSON document."""
    return json.dumps(export_workflow(workflow), indent=indent)


def workflow_from_json(text: str) -> Workflow:
    """Import a workflow from a JSON document."""
    return Workflow.model_validate_json(text)
