"""
Shared test fixtures.
"""

import pytest
from fastapi.testclient import TestClient

from designer.main import app


@pytest.fixture
def client():
    """Test client with the app lifespan running (registers the demo workflow)."""
    with TestClient(app) as test_client:
        yield test_client
