import os
import tempfile
import uuid

import pytest

# Settings are read at import time, so the throw-away database and fast
# hashing must be configured before budget_api is imported anywhere.
_DB_DIR = tempfile.mkdtemp(prefix="budget-api-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["AUTO_CREATE_TABLES"] = "true"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["VERSION"] = "test-version"


@pytest.fixture
def client():
    """TestClient with the app lifespan (table creation) running."""
    from fastapi.testclient import TestClient
    from budget_api.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def register(client):
    """Register a fresh user and return ``(profile, headers)``."""

    def _register(name="Test User", password="s3cret-pass"):
        email = f"user-{uuid.uuid4().hex[:12]}@example.com"
        response = client.post(
            "/api/v1/users",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return body, {"Authorization": f"Bearer {body['token']}"}

    return _register


@pytest.fixture
def auth_headers(register):
    _, headers = register()
    return headers
