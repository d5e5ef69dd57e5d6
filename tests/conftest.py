import pytest
import uuid
from fastapi.testclient import TestClient

from pagination_api.main import app
from pagination_api.core.config import get_settings
from pagination_api.schemas.pagination import PaginationDefaults


@pytest.fixture
def test_client():
    """Create a test client for FastAPI app."""
    return TestClient(app)


@pytest.fixture
def default_pagination():
    return PaginationDefaults(page=1, limit=12)


@pytest.fixture
def override_settings():
    """Swap the cached settings for one test, restoring them afterwards."""
    def _apply(**values):
        settings = get_settings().model_copy(update=values)
        app.dependency_overrides[get_settings] = lambda: settings
        return settings

    yield _apply
    app.dependency_overrides.pop(get_settings, None)


@pytest.fixture
def headers_with_correlation():
    """HTTP headers with correlation ID."""
    return {"X-Request-ID": str(uuid.uuid4())}
