"""
Tests for the FastAPI endpoints.
"""

import pytest
from httpx import AsyncClient, ASGITransport

from designer.main import app
from designer.workflows.onboarding import DEMO_WORKFLOW_ID


LINEAR_WORKFLOW = {
    "nodes": [
        {"id": "start", "type": "start", "data": {"title": "Start"}},
        {"id": "notify", "type": "automated", "data": {"title": "Notify", "actionId": "send_email"}},
        {"id": "end", "type": "end", "data": {"title": "End", "message": "Done"}},
    ],
    "edges": [
        {"id": "e1", "source": "start", "target": "notify"},
        {"id": "e2", "source": "notify", "target": "end"},
    ],
    "meta": {"name": "Notify flow"},
}

CYCLIC_WORKFLOW = {
    "nodes": [
        {"id": "a", "type": "task", "data": {"title": "A"}},
        {"id": "b", "type": "task", "data": {"title": "B"}},
    ],
    "edges": [
        {"id": "e1", "source": "a", "target": "b"},
        {"id": "e2", "source": "b", "target": "a"},
    ],
}


class TestRootEndpoints:
    """Tests for root endpoints."""

    def test_root(self, client):
        """Test root endpoint."""
        response = client.get("/")
        assert response.status_code == 200

        data = response.json()
        assert "name" in data
        assert "version" in data
        assert "endpoints" in data
        assert data["demo_workflow"] == DEMO_WORKFLOW_ID

    def test_health(self, client):
        """Test health endpoint."""
        response = client.get("/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert data["workflows_count"] >= 1


class TestAutomationEndpoints:
    """Tests for automation catalog endpoints."""

    def test_list_automations(self, client):
        """Test listing automation actions."""
        response = client.get("/automations")
        assert response.status_code == 200

        data = response.json()
        action_ids = [a["id"] for a in data]
        assert "send_email" in action_ids
        assert "update_hris" in action_ids

        send_email = data[action_ids.index("send_email")]
        assert send_email["label"] == "Send Email"
        assert {"name": "to", "type": "string", "required": True} in send_email["params"]

    def test_get_automation(self, client):
        """Test getting a specific action."""
        response = client.get("/automations/send_slack")
        assert response.status_code == 200
        assert response.json()["label"] == "Send Slack Message"

    def test_get_nonexistent_automation(self, client):
        """Test getting an action that doesn't exist."""
        response = client.get("/automations/nonexistent_action")
        assert response.status_code == 404


class TestValidationEndpoints:
    """Tests for the stateless validate/simulate endpoints."""

    def test_validate_ok(self, client):
        """Test validating a well-formed workflow."""
        response = client.post("/validate", json={"workflow": LINEAR_WORKFLOW})
        assert response.status_code == 200

        data = response.json()
        assert data == {"ok": True, "errors": [], "warnings": []}

    def test_validate_cycle(self, client):
        """Test validating a cyclic workflow."""
        response = client.post("/validate", json={"workflow": CYCLIC_WORKFLOW})
        assert response.status_code == 200

        data = response.json()
        assert data["ok"] is False
        assert "Cycle detected in workflow. Workflows must be acyclic (DAG)." in data["errors"]

    def test_validate_empty(self, client):
        """Test validating an empty workflow."""
        response = client.post("/validate", json={"workflow": {"nodes": [], "edges": []}})

        data = response.json()
        assert data["ok"] is False
        assert len(data["errors"]) == 1
        assert data["warnings"] == []

    def test_validate_rejects_bad_body(self, client):
        """Test that a body without a workflow is rejected."""
        response = client.post("/validate", json={"nodes": []})
        assert response.status_code == 422

    def test_simulate(self, client):
        """Test simulating a workflow."""
        response = client.post("/simulate", json={"workflow": LINEAR_WORKFLOW})
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "ok"
        assert "error" not in data
        assert [s["nodeId"] for s in data["execution"]] == ["start", "notify", "end"]
        assert data["execution"][1]["message"] == 'Executed "Send Email" for "Notify"'
        assert data["execution"][1]["status"] == "executed"
        assert data["execution"][2]["message"] == "Done"
        assert all("timestamp" in s for s in data["execution"])

    def test_simulate_cycle_is_best_effort(self, client):
        """Test that a cyclic workflow is still simulated in input order."""
        response = client.post("/simulate", json={"workflow": CYCLIC_WORKFLOW})
        assert response.status_code == 200
        assert [s["nodeId"] for s in response.json()["execution"]] == ["a", "b"]

    @pytest.mark.parametrize("body", [
        {"workflow": {"nodes": "oops"}},
        {"workflow": None},
        {},
        [1, 2, 3],
    ])
    def test_simulate_invalid_structure(self, client, body):
        """Test simulating something that isn't a workflow."""
        response = client.post("/simulate", json=body)
        assert response.status_code == 400
        assert response.json() == {
            "status": "error",
            "execution": [],
            "error": "Invalid workflow structure",
        }

    @pytest.mark.parametrize("bad_type", [["task"], {"k": 1}])
    def test_simulate_malformed_node_type(self, client, bad_type):
        """Test a node whose type is not a string."""
        workflow = {"nodes": [{"id": "a", "type": bad_type, "data": {}}], "edges": []}

        response = client.post("/simulate", json={"workflow": workflow})
        assert response.status_code == 400

        data = response.json()
        assert data["status"] == "error"
        assert data["execution"] == []
        assert data["error"].startswith("Failed to parse workflow")

        assert client.post("/validate", json={"workflow": workflow}).status_code == 422
        assert client.post("/workflows", json={"workflow": workflow}).status_code == 422

    def test_simulate_non_json(self, client):
        """Test simulating a body that isn't JSON."""
        response = client.post(
            "/simulate",
            content=b"not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400

        data = response.json()
        assert data["status"] == "error"
        assert data["execution"] == []
        assert data["error"].startswith("Failed to parse workflow")


class TestWorkflowEndpoints:
    """Tests for saved workflow endpoints."""

    def test_list_workflows(self, client):
        """Test listing workflows."""
        response = client.get("/workflows")
        assert response.status_code == 200

        data = response.json()
        assert "workflows" in data
        assert data["total"] == len(data["workflows"])

    def test_get_demo_workflow(self, client):
        """Test getting the demo workflow."""
        response = client.get(f"/workflows/{DEMO_WORKFLOW_ID}")
        assert response.status_code == 200

        data = response.json()
        assert data["workflow_id"] == DEMO_WORKFLOW_ID
        assert data["name"] == "Employee Onboarding Demo"
        assert data["node_count"] == 6
        assert data["workflow"]["nodes"][0]["id"] == "start"
        assert "updatedAt" in data["workflow"]["meta"]

    def test_create_and_fetch_workflow(self, client):
        """Test saving a workflow and reading it back."""
        response = client.post("/workflows", json={"workflow": LINEAR_WORKFLOW})
        assert response.status_code == 201

        data = response.json()
        assert data["name"] == "Notify flow"
        assert data["node_count"] == 3
        assert data["edge_count"] == 2

        fetched = client.get(f"/workflows/{data['workflow_id']}").json()
        assert fetched["workflow"]["nodes"] == LINEAR_WORKFLOW["nodes"]
        assert fetched["workflow"]["edges"] == LINEAR_WORKFLOW["edges"]

    def test_create_workflow_default_name(self, client):
        """Test the fallback name."""
        workflow = {"nodes": LINEAR_WORKFLOW["nodes"], "edges": []}
        response = client.post("/workflows", json={"workflow": workflow})
        assert response.json()["name"] == "Untitled Workflow"

    def test_replace_workflow(self, client):
        """Test replacing a saved workflow."""
        workflow_id = client.post("/workflows", json={"workflow": LINEAR_WORKFLOW}).json()["workflow_id"]

        response = client.put(
            f"/workflows/{workflow_id}",
            json={"name": "Loop", "workflow": CYCLIC_WORKFLOW},
        )
        assert response.status_code == 200

        data = response.json()
        assert data["name"] == "Loop"
        assert data["node_count"] == 2

    def test_delete_workflow(self, client):
        """Test deleting a saved workflow."""
        workflow_id = client.post("/workflows", json={"workflow": LINEAR_WORKFLOW}).json()["workflow_id"]

        assert client.delete(f"/workflows/{workflow_id}").status_code == 204
        assert client.get(f"/workflows/{workflow_id}").status_code == 404
        assert client.delete(f"/workflows/{workflow_id}").status_code == 404

    def test_unknown_workflow(self, client):
        """Test endpoints with an unknown workflow id."""
        assert client.get("/workflows/nope").status_code == 404
        assert client.put("/workflows/nope", json={"workflow": LINEAR_WORKFLOW}).status_code == 404
        assert client.post("/workflows/nope/validate").status_code == 404
        assert client.post("/workflows/nope/test").status_code == 404

    def test_validate_saved_workflow(self, client):
        """Test validating a saved workflow."""
        response = client.post(f"/workflows/{DEMO_WORKFLOW_ID}/validate")
        assert response.status_code == 200
        assert response.json()["ok"] is True

    def test_sandbox_run(self, client):
        """Test the sandbox run of a valid workflow."""
        response = client.post(f"/workflows/{DEMO_WORKFLOW_ID}/test")
        assert response.status_code == 200

        data = response.json()
        assert data["validation"]["ok"] is True
        steps = data["simulation"]["execution"]
        assert len(steps) == 6
        assert steps[2]["status"] == "awaiting_manual_approval"
        assert steps[-1]["message"] == "Onboarding complete"

    def test_sandbox_run_skips_invalid_workflow(self, client):
        """Test that an invalid workflow is not simulated."""
        workflow_id = client.post("/workflows", json={"workflow": CYCLIC_WORKFLOW}).json()["workflow_id"]

        response = client.post(f"/workflows/{workflow_id}/test")
        assert response.status_code == 200

        data = response.json()
        assert data["validation"]["ok"] is False
        assert "simulation" not in data


# ============================================================
# Async Tests
# ============================================================

@pytest.mark.asyncio
async def test_async_simulate():
    """Test simulating through an async client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        response = await ac.post("/simulate", json={"workflow": LINEAR_WORKFLOW})
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "ok"
        assert len(data["execution"]) == 3


@pytest.mark.asyncio
async def test_async_save_and_test():
    """Test saving then sandbox-running a workflow through an async client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        response = await ac.post("/workflows", json={"name": "Async", "workflow": LINEAR_WORKFLOW})
        assert response.status_code == 201
        workflow_id = response.json()["workflow_id"]

        response = await ac.post(f"/workflows/{workflow_id}/test")
        assert response.status_code == 200

        data = response.json()
        assert data["workflow_id"] == workflow_id
        assert [s["nodeId"] for s in data["simulation"]["execution"]] == ["start", "notify", "end"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
