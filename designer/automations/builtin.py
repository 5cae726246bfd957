"""
Built-in Automation Actions.

The default catalog served to the editor and used by the simulator.
"""

from designer.automations.registry import register_action


register_action(
    "send_email",
    "Send Email",
    description="Send an email notification to specified recipients",
    params=[
        {"name": "to", "type": "string", "required": True},
        {"name": "subject", "type": "string", "required": True},
        {"name": "body", "type": "string", "required": False},
    ],
)

register_action(
    "generate_doc",
    "Generate Document",
    description="Generate a document from a template",
    params=[
        {"name": "template", "type": "string", "required": True},
        {"name": "recipient", "type": "string", "required": True},
    ],
)

register_action(
    "send_slack",
    "Send Slack Message",
    description="Send a message to a Slack channel",
    params=[
        {"name": "channel", "type": "string", "required": True},
        {"name": "message", "type": "string", "required": True},
    ],
)

register_action(
    "create_ticket",
    "Create JIRA Ticket",
    description="Create a new JIRA ticket for tracking",
    params=[
        {"name": "project", "type": "string", "required": True},
        {"name": "summary", "type": "string", "required": True},
        {"name": "priority", "type": "string", "required": False},
    ],
)

register_action(
    "update_hris",
    "Update HRIS Record",
    description="Update employee record in HRIS system",
    params=[
        {"name": "employeeId", "type": "string", "required": True},
        {"name": "field", "type": "string", "required": True},
        {"name": "value", "type": "string", "required": True},
    ],
)
