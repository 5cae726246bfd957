"""
Automation Catalog for the Workflow Designer.

The catalog lists the automation actions an automated step can be bound
to. Actions are descriptions only: the simulator reads an action's label
to describe what a step would do, nothing is ever executed.
"""

from typing import Any, Dict, Iterator, List, Literal, Optional
from pydantic import BaseModel, Field
import logging


logger = logging.getLogger(__name__)


class ActionParam(BaseModel):
    """A parameter an automation action accepts."""
    name: str
    type: Literal["string", "number", "boolean"] = "string"
    required: Optional[bool] = None


class AutomationAction(BaseModel):
    """
    An automation action available to automated steps.

    Attributes:
        id: Identifier referenced by an automated node's ``actionId``
        label: Human-readable name
        description: What the action does
        params: Parameters the action accepts
    """
    id: str
    label: str
    description: Optional[str] = None
    params: List[ActionParam] = Field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize action metadata."""
        return self.model_dump(exclude_none=True)


class AutomationCatalog:
    """
    Registry of automation actions, keyed by action id.
    
    Usage:
        catalog = AutomationCatalog()
        catalog.add(AutomationAction(id="send_email", label="Send Email"))
        
        # Later
        catalog.label_for("send_email")  # "Send Email"
    """
    
    def __init__(self, actions: Optional[List[AutomationAction]] = None):
        self._actions: Dict[str, AutomationAction] = {}
        for action in actions or []:
            self.add(action)
    
    def add(self, action: AutomationAction) -> None:
        """Add an action, replacing any action with the same id."""
        self._actions[action.id] = action
        logger.debug(f"Registered automation action: {action.id}")
    
    def get(self, action_id: str) -> Optional[AutomationAction]:
        """Get an action by id."""
        return self._actions.get(action_id)
    
    def label_for(self, action_id: Optional[str]) -> Optional[str]:
        """Label of the action with the given id, or None if unknown."""
        if not action_id:
            return None
        action = self.get(action_id)
        return action.label if action else None
    
    def remove(self, action_id: str) -> bool:
        """Remove an action from the catalog."""
        if action_id in self._actions:
            del self._actions[action_id]
            return True
        return False
    
    def list_actions(self) -> List[AutomationAction]:
        """All actions, in registration order."""
        return list(self._actions.values())
    
    def has(self, action_id: str) -> bool:
        """Check if an action is registered."""
        return action_id in self._actions
    
    def __contains__(self, action_id: str) -> bool:
        return self.has(action_id)
    
    def __len__(self) -> int:
        return len(self._actions)
    
    def __iter__(self) -> Iterator[AutomationAction]:
        return iter(self._actions.values())


# Global automation catalog instance
automation_catalog = AutomationCatalog()


def register_action(
    action_id: str,
    label: str,
    description: Optional[str] = None,
    params: Optional[List[Dict[str, Any]]] = None
) -> AutomationAction:
    """
    Register an action in the global catalog.
    
    Usage:
        register_action(
            "send_email",
            "Send Email",
            params=[{"name": "to", "type": "string", "required": True}],
        )
    """
    action = AutomationAction(
        id=action_id,
        label=label,
        description=description,
        params=[ActionParam(**p) for p in params or []],
    )
    automation_catalog.add(action)
    return action


def get_action(action_id: str) -> Optional[AutomationAction]:
    """Get an action from the global catalog."""
    return automation_catalog.get(action_id)
