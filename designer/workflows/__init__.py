"""
Workflows package - Sample workflows.
"""

from designer.workflows.onboarding import (
    DEMO_WORKFLOW_ID,
    create_onboarding_workflow,
    register_onboarding_workflow,
)

__all__ = [
    "DEMO_WORKFLOW_ID",
    "create_onboarding_workflow",
    "register_onboarding_workflow",
]
