"""
In-Memory Storage for the Workflow Designer.

Keeps saved workflows in process memory behind an asyncio lock.
Can be easily replaced with a database implementation.
"""

from typing import Any, Dict, List, Optional
from datetime import datetime
import asyncio
from dataclasses import dataclass, field

from designer.engine.workflow import Workflow


@dataclass
class StoredWorkflow:
    """A saved workflow."""
    workflow_id: str
    name: str
    workflow: Workflow
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "workflow_id": self.workflow_id,
            "name": self.name,
            "workflow": self.workflow.to_dict(),
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }


class WorkflowStorage:
    """
    Lock-protected in-memory storage for workflows.
    
    Stores workflows by their ID, allowing creation,
    retrieval, update, and deletion operations.
    """
    
    def __init__(self):
        self._workflows: Dict[str, StoredWorkflow] = {}
        self._lock = asyncio.Lock()
    
    async def save(self, workflow_id: str, name: str, workflow: Workflow) -> StoredWorkflow:
        """
        Save a workflow, replacing any workflow with the same ID.
        
        Args:
            workflow_id: Unique workflow identifier
            name: Workflow name
            workflow: The workflow graph
            
        Returns:
            The stored workflow
        """
        async with self._lock:
            stored = StoredWorkflow(
                workflow_id=workflow_id,
                name=name,
                workflow=workflow,
            )
            self._workflows[workflow_id] = stored
            return stored
    
    async def get(self, workflow_id: str) -> Optional[StoredWorkflow]:
        """Get a workflow by ID."""
        async with self._lock:
            return self._workflows.get(workflow_id)
    
    async def update(
        self,
        workflow_id: str,
        workflow: Workflow,
        name: Optional[str] = None
    ) -> Optional[StoredWorkflow]:
        """Replace the graph (and optionally the name) of a stored workflow."""
        async with self._lock:
            if workflow_id not in self._workflows:
                return None
            stored = self._workflows[workflow_id]
            stored.workflow = workflow
            if name is not None:
                stored.name = name
            stored.updated_at = datetime.now()
            return stored
    
    async def delete(self, workflow_id: str) -> bool:
        """Delete a workflow."""
        async with self._lock:
            if workflow_id in self._workflows:
                del self._workflows[workflow_id]
                return True
            return False
    
    async def list_all(self) -> List[StoredWorkflow]:
        """List all stored workflows."""
        async with self._lock:
            return list(self._workflows.values())
    
    async def exists(self, workflow_id: str) -> bool:
        """Check if a workflow exists."""
        async with self._lock:
            return workflow_id in self._workflows
    
    def __len__(self) -> int:
        return len(self._workflows)


# Global storage instance
workflow_storage = WorkflowStorage()
