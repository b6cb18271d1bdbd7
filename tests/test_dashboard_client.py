"""Tests for DashboardClient with a stubbed HTTP session"""

import pytest
from unittest.mock import AsyncMock, patch

from bot_dashboard.presentation.dashboard_client import DashboardClient, DashboardClientError


class FakeResponse:
    def __init__(self, status, payload=None, text=""):
        self.status = status
        self._payload = payload
        self._text = text

    async def json(self):
        return self._payload

    async def text(self):
        return self._text

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    def __init__(self, response):
        self.response = response
        self.calls = []
        self.closed = False

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        return self.response


@pytest.fixture
def dashboard_client():
    return DashboardClient("http://dashboard.local/")


def stub_session(dashboard_client, response):
    session = FakeSession(response)
    return session, patch.object(dashboard_client, "_get_session", AsyncMock(return_value=session))


class TestDashboardClient:

    @pytest.mark.asyncio
    async def test_status_none_while_initializing(self, dashboard_client):
        session, stub = stub_session(dashboard_client, FakeResponse(503, text="not ready"))
        with stub:
            assert await dashboard_client.get_bot_status() is None
        assert session.calls[0][:2] == ("GET", "http://dashboard.local/api/bot/status")

    @pytest.mark.asyncio
    async def test_toggle_sends_enabled_flag(self, dashboard_client):
        command = {"id": "abc", "name": "help", "enabled": False}
        session, stub = stub_session(dashboard_client, FakeResponse(200, command))
        with stub:
            assert await dashboard_client.toggle_command("abc", False) == command
        method, url, kwargs = session.calls[0]
        assert (method, url) == ("PATCH", "http://dashboard.local/api/commands/abc")
        assert kwargs["json"] == {"enabled": False}

    @pytest.mark.asyncio
    async def test_toggle_unknown_command_returns_none(self, dashboard_client):
        _, stub = stub_session(dashboard_client, FakeResponse(404, text="Command not found"))
        with stub:
            assert await dashboard_client.toggle_command("missing", True) is None

    @pytest.mark.asyncio
    async def test_get_command_by_id(self, dashboard_client):
        command = {"id": "abc", "name": "help", "enabled": True}
        session, stub = stub_session(dashboard_client, FakeResponse(200, command))
        with stub:
            assert await dashboard_client.get_command("abc") == command
        assert session.calls[0][:2] == ("GET", "http://dashboard.local/api/commands/abc")

    @pytest.mark.asyncio
    async def test_get_unknown_command_returns_none(self, dashboard_client):
        _, stub = stub_session(dashboard_client, FakeResponse(404, text="Command not found"))
        with stub:
            assert await dashboard_client.get_command("missing") is None

    @pytest.mark.asyncio
    async def test_update_settings_uses_camel_case(self, dashboard_client):
        settings = {"prefix": "?", "statusMessage": "hi", "activityType": "WATCHING"}
        session, stub = stub_session(dashboard_client, FakeResponse(200, settings))
        with stub:
            assert await dashboard_client.update_settings("?", "hi", "WATCHING") == settings
        assert session.calls[0][2]["json"] == settings

    @pytest.mark.asyncio
    async def test_search_param_only_when_given(self, dashboard_client):
        session, stub = stub_session(dashboard_client, FakeResponse(200, []))
        with stub:
            await dashboard_client.get_commands()
            await dashboard_client.get_commands(search="mod")
        assert session.calls[0][2]["params"] is None
        assert session.calls[1][2]["params"] == {"search": "mod"}

    @pytest.mark.asyncio
    async def test_unexpected_status_raises(self, dashboard_client):
        _, stub = stub_session(dashboard_client, FakeResponse(400, text='{"detail": "Invalid request data"}'))
        with stub:
            with pytest.raises(DashboardClientError) as excinfo:
                await dashboard_client.update_settings("?", "hi", "INVALID")
        assert excinfo.value.status == 400
        assert "Invalid request data" in excinfo.value.body
