"""
Employee Onboarding Workflow.

The sample workflow shipped with the designer:
1. Start the onboarding
2. Collect documents from the new hire
3. Manager approval
4. Send a welcome email
5. Update the HRIS record
6. End
"""

import logging

from designer.engine.node import NodeType, Position
from designer.engine.workflow import Workflow, WorkflowMeta, add_node, connect


logger = logging.getLogger(__name__)


DEMO_WORKFLOW_ID = "onboarding-demo"


def create_onboarding_workflow(auto_approve_threshold: int = 0) -> Workflow:
    """
    Create the Employee Onboarding workflow.
    
    Workflow flow:
    ```
    start → collect_documents → manager_approval → welcome_email → update_hris → end
    ```
    
    Args:
        auto_approve_threshold: Threshold for the manager approval step;
            0 keeps it a manual approval
        
    Returns:
        The onboarding Workflow
    """
    workflow = Workflow(
        nodes=[],
        meta=WorkflowMeta(
            name="Employee Onboarding",
            description="Collects documents, gets manager sign-off and notifies the new hire.",
        ),
    )
    
    workflow = add_node(
        workflow, NodeType.START, Position(x=250, y=0),
        node_id="start", title="Start Onboarding",
        metadata=[{"key": "department", "value": "Engineering"}],
    )
    workflow = add_node(
        workflow, NodeType.TASK, Position(x=250, y=120),
        node_id="collect_documents", title="Collect Documents",
        description="Gather ID, tax forms and signed contract",
        assignee="HR Coordinator",
    )
    workflow = add_node(
        workflow, NodeType.APPROVAL, Position(x=250, y=240),
        node_id="manager_approval", title="Manager Approval",
        approver_role="Manager",
        auto_approve_threshold=auto_approve_threshold,
    )
    workflow = add_node(
        workflow, NodeType.AUTOMATED, Position(x=250, y=360),
        node_id="welcome_email", title="Send Welcome Email",
        action_id="send_email",
        action_params={"to": "new.hire@example.com", "subject": "Welcome aboard"},
    )
    workflow = add_node(
        workflow, NodeType.AUTOMATED, Position(x=250, y=480),
        node_id="update_hris", title="Update HRIS",
        action_id="update_hris",
        action_params={"employeeId": "E-1001", "field": "status", "value": "active"},
    )
    workflow = add_node(
        workflow, NodeType.END, Position(x=250, y=600),
        node_id="end", title="Onboarding Complete",
        message="Onboarding complete", summary=True,
    )
    
    steps = ["start", "collect_documents", "manager_approval", "welcome_email", "update_hris", "end"]
    for source, target in zip(steps, steps[1:]):
        workflow = connect(workflow, source, target, edge_id=f"edge-{source}-{target}")
    
    return workflow


async def register_onboarding_workflow() -> Workflow:
    """
    Register the onboarding workflow in storage.
    
    This makes the workflow available immediately via the API
    without needing to create it first.
    """
    from designer.storage.memory import workflow_storage
    
    workflow = create_onboarding_workflow()
    
    await workflow_storage.save(
        workflow_id=DEMO_WORKFLOW_ID,
        name="Employee Onboarding Demo",
        workflow=workflow,
    )
    
    logger.info(f"Registered onboarding workflow with ID: {DEMO_WORKFLOW_ID}")
    return workflow
