"""
Tests for the async simulation client.
"""

import httpx
import pytest
from httpx import ASGITransport

from designer.client import SimulationClient
from designer.engine.simulator import SimulationStatus, StepStatus
from designer.main import app
from designer.workflows.onboarding import create_onboarding_workflow


def _mock_client(handler):
    return SimulationClient("http://test", transport=httpx.MockTransport(handler))


class TestSimulationClient:
    """Tests for SimulationClient against the app and mocked transports."""

    @pytest.mark.asyncio
    async def test_fetch_automations(self):
        """Test fetching the automation catalog."""
        async with SimulationClient("http://test", transport=ASGITransport(app=app)) as client:
            actions = await client.fetch_automations()

        labels = {a.id: a.label for a in actions}
        assert labels["send_email"] == "Send Email"
        assert labels["create_ticket"] == "Create JIRA Ticket"

    @pytest.mark.asyncio
    async def test_simulate_workflow(self):
        """Test simulating a Workflow through the service."""
        async with SimulationClient("http://test", transport=ASGITransport(app=app)) as client:
            result = await client.simulate(create_onboarding_workflow())

        assert result.status == SimulationStatus.OK
        assert len(result.execution) == 6
        assert result.execution[0].node_id == "start"
        assert result.execution[2].status == StepStatus.AWAITING_MANUAL_APPROVAL
        assert result.execution[3].message == 'Executed "Send Email" for "Send Welcome Email"'
        assert result.execution[0].timestamp is not None

    @pytest.mark.asyncio
    async def test_simulate_invalid_structure(self):
        """Test that the service's 400 error body is returned as a result."""
        async with SimulationClient("http://test", transport=ASGITransport(app=app)) as client:
            result = await client.simulate({"nodes": "oops"})

        assert result.status == SimulationStatus.ERROR
        assert result.execution == []
        assert result.error == "Invalid workflow structure"

    @pytest.mark.asyncio
    async def test_transport_error(self):
        """Test that a transport failure degrades to an error result."""
        calls = []

        def handler(request):
            calls.append(request)
            raise httpx.ConnectError("connection refused", request=request)

        async with _mock_client(handler) as client:
            result = await client.simulate({"nodes": [], "edges": []})

        assert result.status == SimulationStatus.ERROR
        assert result.execution == []
        assert "connection refused" in result.error
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_non_json_response(self):
        """Test that a non-JSON body degrades to an error result."""
        def handler(request):
            return httpx.Response(502, text="Bad Gateway")

        async with _mock_client(handler) as client:
            result = await client.simulate({"nodes": [], "edges": []})

        assert result.status == SimulationStatus.ERROR
        assert result.error == "Invalid response from server (HTTP 502)"

    @pytest.mark.asyncio
    async def test_malformed_response(self):
        """Test that a JSON body of the wrong shape degrades to an error result."""
        def handler(request):
            return httpx.Response(200, json={"status": "ok", "execution": [{"nodeId": "x"}]})

        async with _mock_client(handler) as client:
            result = await client.simulate({"nodes": [], "edges": []})

        assert result.status == SimulationStatus.ERROR
        assert result.execution == []

    @pytest.mark.asyncio
    async def test_request_body(self):
        """Test the request the client sends."""
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["body"] = request.content
            return httpx.Response(200, json={"status": "ok", "execution": []})

        workflow = create_onboarding_workflow()
        async with _mock_client(handler) as client:
            result = await client.simulate(workflow)

        assert result.ok
        assert seen["path"] == "/simulate"
        assert b'"actionId":"send_email"' in seen["body"].replace(b" ", b"")

    def test_defaults_from_settings(self):
        """Test base URL and timeout defaults."""
        from designer.config import settings

        client = SimulationClient()

        assert client.base_url == settings.SIMULATION_BASE_URL
        assert client.timeout == settings.CLIENT_TIMEOUT
