"""Pytest configuration and shared fixtures"""

import asyncio
from datetime import datetime, timezone
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from bot_dashboard.application.services.bootstrap_service import BootstrapService
from bot_dashboard.application.services.dashboard_service import DashboardService
from bot_dashboard.domain.exceptions import PlatformConnectionError
from bot_dashboard.domain.interfaces import IPlatformConnection, IPlatformGateway
from bot_dashboard.domain.models import PlatformGuild, PlatformUser
from bot_dashboard.infrastructure.http.dashboard_server import DashboardHttpServer
from bot_dashboard.infrastructure.storage.memory_repository import InMemoryDashboardRepository

FIXED_NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeConnection(IPlatformConnection):
    """Connection returning a prepared snapshot."""

    def __init__(self, user: PlatformUser, guilds: List[PlatformGuild]):
        self._user = user
        self._guilds = guilds
        self.disconnected = False

    @property
    def current_user(self) -> PlatformUser:
        return self._user

    @property
    def guilds(self) -> List[PlatformGuild]:
        return self._guilds

    async def disconnect(self) -> None:
        self.disconnected = True


class FakeGateway(IPlatformGateway):
    """Gateway that either returns a connection or raises a prepared error."""

    def __init__(self, connection: Optional[FakeConnection] = None, error: Optional[Exception] = None):
        self.connection = connection
        self.error = error
        self.connect_calls = 0
        self.tokens: List[Optional[str]] = []

    async def connect(self, token: Optional[str]) -> FakeConnection:
        self.connect_calls += 1
        self.tokens.append(token)
        if self.error is not None:
            raise self.error
        return self.connection


class FakeClock:
    """Monotonic clock advanced by hand."""

    def __init__(self, start: float = 1000.0):
        self.value = start

    def __call__(self) -> float:
        return self.value

    def advance(self, seconds: float) -> None:
        self.value += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def repository(clock) -> InMemoryDashboardRepository:
    """A fresh repository per test."""
    return InMemoryDashboardRepository(clock=clock)


@pytest.fixture
def failing_gateway() -> FakeGateway:
    return FakeGateway(error=PlatformConnectionError("gateway unreachable"))


@pytest.fixture
def dashboard_service(repository) -> DashboardService:
    return DashboardService(repository=repository)


@pytest.fixture
def client(dashboard_service) -> TestClient:
    """HTTP client over a repository that has not been bootstrapped."""
    server = DashboardHttpServer(dashboard_service=dashboard_service)
    return TestClient(server.app)


@pytest.fixture
def demo_client(repository, failing_gateway, dashboard_service) -> TestClient:
    """HTTP client over a repository seeded through the demo fallback."""
    bootstrap = BootstrapService(repository, failing_gateway, token="token", now=lambda: FIXED_NOW)
    asyncio.run(bootstrap.initialize())
    server = DashboardHttpServer(dashboard_service=dashboard_service)
    return TestClient(server.app)
