"""
Storage package - In-memory storage for saved workflows.
"""

from designer.storage.memory import (
    StoredWorkflow,
    WorkflowStorage,
    workflow_storage,
)

__all__ = [
    "StoredWorkflow",
    "WorkflowStorage",
    "workflow_storage",
]
