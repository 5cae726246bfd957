"""
Automations package - Automation catalog and built-in actions.
"""

from designer.automations.registry import (
    ActionParam,
    AutomationAction,
    AutomationCatalog,
    automation_catalog,
    register_action,
    get_action,
)

# Import builtin actions to register them
import designer.automations.builtin  # noqa: F401

__all__ = [
    "ActionParam",
    "AutomationAction",
    "AutomationCatalog",
    "automation_catalog",
    "register_action",
    "get_action",
]
