import os

# Must be set before course_admin is imported: settings and the logger are
# built at import time and the test profile has no file sink.
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DASHBOARD_STATS_PATH", "")

from typing import AsyncGenerator, Dict, List

import httpx
import pytest
import pytest_asyncio

from course_admin.main import AdminApplication
from course_admin.schemas.auth_schemas import User
from course_admin.services.api_client import ApiClient
from course_admin.services.auth_context import AuthContext, InMemoryTokenStore
from course_admin.utils.notifications import RecordingNotifier

from fake_backend import TEST_BASE_URL, VALID_TOKEN, FakeStore, create_fake_backend


@pytest.fixture
def backend():
    """Fresh in-memory backend for each test."""
    return create_fake_backend()


@pytest.fixture
def store(backend) -> FakeStore:
    return backend.state.store


@pytest.fixture
def seeded(store: FakeStore) -> Dict[str, Dict]:
    """Two students, two courses, one registration and one result."""
    alice = store.add_student("S001", "Alice Smith", "alice@uni.edu")
    bob = store.add_student("S002", "Bob Jones", "bob@uni.edu")
    cs101 = store.add_course("Intro to Programming", "CS101", 3, "Dr. Turing")
    math201 = store.add_course("Linear Algebra", "MATH201", 4, "Dr. Noether")
    registration = store.add_registration(alice["id"], cs101["id"], "2024-01-15")
    result = store.add_result(alice["id"], cs101["id"], "A")
    return {
        "alice": alice,
        "bob": bob,
        "cs101": cs101,
        "math201": math201,
        "registration": registration,
        "result": result,
    }


@pytest.fixture
def transport(backend) -> httpx.ASGITransport:
    return httpx.ASGITransport(app=backend)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def redirects() -> List[str]:
    """Paths handed to the logout callback."""
    return []


@pytest.fixture
def token_store() -> InMemoryTokenStore:
    return InMemoryTokenStore(
        token=VALID_TOKEN, user=User(id=1, username="admin", role="ADMIN")
    )


@pytest.fixture
def auth(token_store, redirects) -> AuthContext:
    return AuthContext(store=token_store, on_logout=redirects.append)


@pytest_asyncio.fixture
async def api(auth, transport) -> AsyncGenerator[ApiClient, None]:
    client = ApiClient(auth, base_url=TEST_BASE_URL, transport=transport)
    yield client
    await client.aclose()


@pytest_asyncio.fixture
async def app(token_store, notifier, transport) -> AsyncGenerator[AdminApplication, None]:
    application = AdminApplication(
        token_store=token_store,
        notifier=notifier,
        base_url=TEST_BASE_URL,
        transport=transport,
    )
    async with application:
        yield application
