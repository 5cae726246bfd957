"""
Node Definitions for the Workflow Designer.

A workflow is built from typed steps. Every node type carries its own data
record, and the variants form a closed union keyed by the node's ``type``.
Node types the designer does not know about are still accepted, as a
generic node that keeps its data as-is, so newer editors never break
analysis or simulation.
"""

from typing import Annotated, Any, Dict, List, Literal, Optional, Type, Union
from enum import Enum

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag
from pydantic.alias_generators import to_camel


class NodeType(str, Enum):
    """Types of steps in a workflow."""
    START = "start"
    TASK = "task"
    APPROVAL = "approval"
    AUTOMATED = "automated"
    END = "end"


# Placeholder title given to freshly added task nodes
DEFAULT_TASK_TITLE = "New Task"


class CamelModel(BaseModel):
    """Base model using camelCase keys on the wire and snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Position(CamelModel):
    """Canvas coordinates of a node."""
    x: float = 0
    y: float = 0


class KeyValue(CamelModel):
    """A free-form key/value pair attached to a node."""
    key: str = ""
    value: str = ""


# ============================================================
# Node Data Variants
# ============================================================

class NodeData(CamelModel):
    """Data common to every node. Keys without a field are kept as extras."""

    model_config = ConfigDict(extra="allow")

    title: Optional[str] = None


class StartNodeData(NodeData):
    metadata: Optional[List[KeyValue]] = None


class TaskNodeData(NodeData):
    description: Optional[str] = None
    assignee: Optional[str] = None
    due_date: Optional[str] = None
    custom_fields: Optional[List[KeyValue]] = None


class ApprovalNodeData(NodeData):
    approver_role: Optional[str] = None
    auto_approve_threshold: Optional[Union[int, float]] = None


class AutomatedNodeData(NodeData):
    action_id: Optional[str] = None
    action_params: Optional[Dict[str, str]] = None


class EndNodeData(NodeData):
    message: Optional[str] = None
    summary: Optional[bool] = None


# ============================================================
# Node Variants
# ============================================================

class BaseNode(CamelModel):
    """
    Fields shared by every node variant.

    Attributes:
        id: Unique identifier of the node within its workflow
        position: Canvas position (kept only so exports are lossless)
    """
    id: str
    position: Optional[Position] = None

    @property
    def title(self) -> Optional[str]:
        """The node's configured title, if any."""
        return self.data.title

    @property
    def display_name(self) -> str:
        """Title for messages, falling back to the node id."""
        return self.data.title or self.id


class StartNode(BaseNode):
    type: Literal["start"] = "start"
    data: StartNodeData = Field(default_factory=StartNodeData)


class TaskNode(BaseNode):
    type: Literal["task"] = "task"
    data: TaskNodeData = Field(default_factory=TaskNodeData)


class ApprovalNode(BaseNode):
    type: Literal["approval"] = "approval"
    data: ApprovalNodeData = Field(default_factory=ApprovalNodeData)


class AutomatedNode(BaseNode):
    type: Literal["automated"] = "automated"
    data: AutomatedNodeData = Field(default_factory=AutomatedNodeData)


class EndNode(BaseNode):
    type: Literal["end"] = "end"
    data: EndNodeData = Field(default_factory=EndNodeData)


class GenericNode(BaseNode):
    """A node whose type is not one of the known ``NodeType`` values."""
    type: str
    data: NodeData = Field(default_factory=NodeData)


_KNOWN_TYPES = {t.value for t in NodeType}
_GENERIC_TAG = "generic"


def _node_tag(value: Any) -> str:
    """Pick the union variant for raw input or an already-built node."""
    if isinstance(value, dict):
        node_type = value.get("type")
    else:
        node_type = getattr(value, "type", None)
    if isinstance(node_type, NodeType):
        node_type = node_type.value
    if not isinstance(node_type, str):
        return _GENERIC_TAG
    return node_type if node_type in _KNOWN_TYPES else _GENERIC_TAG


WorkflowNode = Annotated[
    Union[
        Annotated[StartNode, Tag("start")],
        Annotated[TaskNode, Tag("task")],
        Annotated[ApprovalNode, Tag("approval")],
        Annotated[AutomatedNode, Tag("automated")],
        Annotated[EndNode, Tag("end")],
        Annotated[GenericNode, Tag(_GENERIC_TAG)],
    ],
    Discriminator(_node_tag),
]


NODE_CLASSES = {
    NodeType.START: StartNode,
    NodeType.TASK: TaskNode,
    NodeType.APPROVAL: ApprovalNode,
    NodeType.AUTOMATED: AutomatedNode,
    NodeType.END: EndNode,
}


def default_node_data(node_type: NodeType) -> NodeData:
    """
    Data a freshly added node of the given type starts with.

    Args:
        node_type: Type of the new node

    Returns:
        A data record for that node type
    """
    node_type = NodeType(node_type)
    if node_type == NodeType.START:
        return StartNodeData(title="Start", metadata=[])
    if node_type == NodeType.TASK:
        return TaskNodeData(
            title=DEFAULT_TASK_TITLE,
            description="",
            assignee="",
            due_date="",
            custom_fields=[],
        )
    if node_type == NodeType.APPROVAL:
        return ApprovalNodeData(
            title="Approval Step",
            approver_role="",
            auto_approve_threshold=0,
        )
    if node_type == NodeType.AUTOMATED:
        return AutomatedNodeData(
            title="Automated Action",
            action_id="",
            action_params={},
        )
    return EndNodeData(title="End", message="", summary=True)


def data_field_names(data_class: Type[NodeData]) -> Dict[str, str]:
    """Map both field names and camelCase wire names to field names."""
    names = {}
    for name, info in data_class.model_fields.items():
        names[name] = name
        names[info.alias or to_camel(name)] = name
    return names


def create_node(
    node_type: NodeType,
    node_id: str,
    position: Optional[Position] = None,
    **data: Any
) -> BaseNode:
    """
    Build a node of a known type.

    Data keys may use either snake_case field names or camelCase wire names.
    Given fields are merged over the type's default data.

    Args:
        node_type: Type of the node
        node_id: Unique id of the node
        position: Optional canvas position
        **data: Node data fields

    Returns:
        The node variant for ``node_type``
    """
    node_type = NodeType(node_type)
    node_class = NODE_CLASSES[node_type]
    defaults = default_node_data(node_type)
    data_class = type(defaults)

    names = data_field_names(data_class)
    merged = defaults.model_dump()
    merged.update({names.get(key, key): value for key, value in data.items()})
    node_data = data_class.model_validate(merged)
    return node_class(id=node_id, position=position, data=node_data)
