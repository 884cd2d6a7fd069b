"""
Conftest for pure unit tests - no external dependencies.

Repositories are the in-memory versions; outbound ports are AsyncMocks.
"""

from unittest.mock import AsyncMock, Mock

import pytest

from test.service.gifting.factory import OTHER_RIDER_ID, make_rider, make_sender
from test.service.gifting.in_memory_repo import (
    InMemoryOrderRepo,
    InMemoryOtpRepo,
    InMemorySafetyAlertRepo,
    InMemorySecurityEventRepo,
    InMemoryUserReportRepo,
    InMemoryUserRepo,
)


@pytest.fixture
def order_repo() -> InMemoryOrderRepo:
    return InMemoryOrderRepo()


@pytest.fixture
def user_repo() -> InMemoryUserRepo:
    repo = InMemoryUserRepo()
    repo.add(make_sender())
    repo.add(make_rider())
    repo.add(make_rider(id=OTHER_RIDER_ID, email='rider2@test.com'))
    return repo


@pytest.fixture
def otp_repo() -> InMemoryOtpRepo:
    return InMemoryOtpRepo()


@pytest.fixture
def report_repo() -> InMemoryUserReportRepo:
    return InMemoryUserReportRepo()


@pytest.fixture
def safety_alert_repo() -> InMemorySafetyAlertRepo:
    return InMemorySafetyAlertRepo()


@pytest.fixture
def security_event_repo() -> InMemorySecurityEventRepo:
    return InMemorySecurityEventRepo()


@pytest.fixture
def mock_media_storage() -> Mock:
    storage = AsyncMock()
    storage.store = AsyncMock(side_effect=lambda *, data, content_type, path: f'/static/media/{path}')
    return storage


@pytest.fixture
def mock_notification_sender() -> Mock:
    return AsyncMock()
