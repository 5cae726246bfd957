"""
Async HTTP client for the Workflow Designer API.

Used by editors and scripts that talk to a running designer service. Each
call makes exactly one request and never retries; simulation failures of
any kind come back as an error SimulationResult instead of raising.
"""

from typing import Any, List, Mapping, Optional, Union
import logging

import httpx

from designer.automations.registry import AutomationAction
from designer.config import settings
from designer.engine.simulator import SimulationResult
from designer.engine.workflow import Workflow


logger = logging.getLogger(__name__)


async def _log_request(request: httpx.Request) -> None:
    logger.debug(f"API request: {request.method} {request.url}")


async def _log_response(response: httpx.Response) -> None:
    request = response.request
    logger.debug(f"API response: {request.method} {request.url} -> {response.status_code}")


class SimulationClient:
    """
    Client for the validation/simulation service.

    Usage:
        async with SimulationClient("http://localhost:8000") as client:
            actions = await client.fetch_automations()
            result = await client.simulate(workflow)
            if result.ok:
                for step in result.execution:
                    print(step.message)
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Service URL (defaults to SIMULATION_BASE_URL)
            timeout: Request timeout in seconds (defaults to CLIENT_TIMEOUT)
            transport: Optional httpx transport, e.g. an ASGITransport
                wrapping the app in tests
        """
        self.base_url = base_url or settings.SIMULATION_BASE_URL
        self.timeout = timeout if timeout is not None else settings.CLIENT_TIMEOUT
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=transport,
            event_hooks={"request": [_log_request], "response": [_log_response]},
        )

    async def __aenter__(self) -> "SimulationClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._client.aclose()

    async def fetch_automations(self) -> List[AutomationAction]:
        """
        Fetch the automation catalog.

        Raises:
            httpx.HTTPError: If the request fails or returns an error status
        """
        response = await self._client.get("/automations")
        response.raise_for_status()
        return [AutomationAction.model_validate(item) for item in response.json()]

    async def simulate(
        self,
        workflow: Union[Workflow, Mapping[str, Any]]
    ) -> SimulationResult:
        """
        Simulate a workflow on the service.

        Args:
            workflow: A Workflow, or its raw JSON-compatible form

        Returns:
            The service's SimulationResult; an error result if the request
            fails or the response is not a simulation result
        """
        payload = workflow.to_dict() if isinstance(workflow, Workflow) else dict(workflow)

        try:
            response = await self._client.post("/simulate", json={"workflow": payload})
        except httpx.HTTPError as e:
            logger.warning(f"Simulation request failed: {e!r}")
            return SimulationResult.failure(f"Simulation request failed: {e}")

        try:
            body = response.json()
        except ValueError:
            logger.warning(f"Simulation response was not JSON (HTTP {response.status_code})")
            return SimulationResult.failure(
                f"Invalid response from server (HTTP {response.status_code})"
            )

        try:
            return SimulationResult.from_dict(body)
        except ValueError as e:
            logger.warning(f"Malformed simulation response: {e}")
            return SimulationResult.failure(
                f"Invalid response from server (HTTP {response.status_code})"
            )
