"""Service test fixtures: seeded registry, mock generator, FastAPI test client.

Invariants:
    - Every test gets a fresh registry seeded with two users ("test", "test2")
    - get_registry dependency overridden to return that registry
    - registry singleton patched for code that reads it directly (health probe)

Design Decisions:
    - ASGITransport does not run the lifespan: the registry is injected instead,
      so no RandomUserClient (and no network) is ever created
"""

import pytest
from httpx import ASGITransport, AsyncClient

from user_registry.core.domain_types import Gender
from user_registry.core.user import User
from user_registry.main import app
from user_registry.services import registry as registry_module
from user_registry.services.registry import UserRegistry, get_registry

from tests.services.mock_generator import MockGenerator


@pytest.fixture
def generator():
    return MockGenerator()


@pytest.fixture
def seed_users():
    return [
        User("test", "Test", "test@gmail.com", Gender.MALE, "https://test.com/image.jpg"),
        User("test2", "Test 2", "test2@gmail.com", Gender.FEMALE, "https://test2.com/image.jpg"),
    ]


@pytest.fixture
def registry(generator, seed_users):
    return UserRegistry(generator, seed_users)


@pytest.fixture
async def client(registry):
    """FastAPI test client with the registry dependency overridden."""
    app.dependency_overrides[get_registry] = lambda: registry

    original = registry_module.registry
    registry_module.registry = registry

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    registry_module.registry = original
