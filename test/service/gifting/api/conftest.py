"""
HTTP test fixtures.

The real app (routers, exception handlers, DI wiring) is built without the
database lifespan; repositories are swapped for the in-memory versions through
the container's provider overrides.
"""

from collections.abc import AsyncIterator, Generator
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock

from dependency_injector import providers
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import SecretStr
import pytest

from src.platform.app_factory import create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.service.gifting.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)
from test.service.gifting.factory import DEFAULT_PASSWORD, make_admin, make_rider, make_sender
from test.service.gifting.in_memory_repo import (
    InMemoryOrderRepo,
    InMemoryOtpRepo,
    InMemorySafetyAlertRepo,
    InMemorySecurityEventRepo,
    InMemoryUserReportRepo,
    InMemoryUserRepo,
)


@asynccontextmanager
async def _no_store_lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield


@pytest.fixture(scope='module')
def password_hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher()


@pytest.fixture
def repos(password_hasher: BcryptPasswordHasher) -> dict:
    hashed = password_hasher.hash_password(plain_password=SecretStr(DEFAULT_PASSWORD))
    users = InMemoryUserRepo()
    for user in (make_sender(), make_rider(), make_rider(id=3, email='rider2@test.com'), make_admin()):
        user.hashed_password = hashed
        users.add(user)
    return {
        'order': InMemoryOrderRepo(),
        'user': users,
        'otp': InMemoryOtpRepo(),
        'report': InMemoryUserReportRepo(),
        'safety_alert': InMemorySafetyAlertRepo(),
        'security_event': InMemorySecurityEventRepo(),
        'notification': AsyncMock(),
        'media': AsyncMock(
            store=AsyncMock(side_effect=lambda *, data, content_type, path: f'/static/media/{path}')
        ),
    }


@pytest.fixture
def app(repos: dict) -> Generator[FastAPI, None, None]:
    overrides = {
        container.order_command_repo: repos['order'],
        container.order_query_repo: repos['order'],
        container.user_command_repo: repos['user'],
        container.user_query_repo: repos['user'],
        container.otp_verification_repo: repos['otp'],
        container.user_report_repo: repos['report'],
        container.safety_alert_repo: repos['safety_alert'],
        container.security_event_repo: repos['security_event'],
        container.notification_sender: repos['notification'],
        container.media_storage: repos['media'],
    }
    for provider, fake in overrides.items():
        provider.override(providers.Object(fake))
    container.wire(modules=WIRE_MODULES)

    yield create_app(lifespan=_no_store_lifespan, title_suffix=' (Test)')

    container.unwire()
    for provider in overrides:
        provider.reset_override()


def login(client: TestClient, email: str, password: str = DEFAULT_PASSWORD) -> TestClient:
    response = client.post('/api/user/login', json={'email': email, 'password': password})
    assert response.status_code == 200, response.text
    return client


@pytest.fixture
def anonymous_client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture
def sender_client(app: FastAPI) -> TestClient:
    return login(TestClient(app), 'sender@test.com')


@pytest.fixture
def rider_client(app: FastAPI) -> TestClient:
    return login(TestClient(app), 'rider@test.com')


@pytest.fixture
def other_rider_client(app: FastAPI) -> TestClient:
    return login(TestClient(app), 'rider2@test.com')


@pytest.fixture
def admin_client(app: FastAPI) -> TestClient:
    return login(TestClient(app), 'admin@test.com')
