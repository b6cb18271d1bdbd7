"""Unit tests for DashboardService"""

import pytest

from bot_dashboard.domain.exceptions import (
    CommandNotFoundError, InvalidCommandToggleError, StatusUnavailableError
)
from bot_dashboard.domain.models import BotSettings


async def command_named(repository, name):
    return next(c for c in await repository.get_commands() if c.name == name)


class TestStatus:

    @pytest.mark.asyncio
    async def test_status_unavailable_before_bootstrap(self, dashboard_service):
        with pytest.raises(StatusUnavailableError):
            await dashboard_service.get_bot_status()


class TestCommandToggle:

    @pytest.mark.asyncio
    async def test_disable_records_activity(self, dashboard_service, repository):
        help_cmd = await command_named(repository, "help")

        updated = await dashboard_service.toggle_command(help_cmd.id, False)

        assert updated.enabled is False
        assert updated.usage_count == help_cmd.usage_count
        event = (await dashboard_service.get_activity())[0]
        assert event.type == "command"
        assert event.description == 'Command "help" disabled'

    @pytest.mark.asyncio
    async def test_enable_records_activity(self, dashboard_service, repository):
        ban = await command_named(repository, "ban")

        await dashboard_service.toggle_command(ban.id, True)

        assert (await dashboard_service.get_activity())[0].description == 'Command "ban" enabled'

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", ["false", 0, 1, None])
    async def test_non_boolean_rejected(self, dashboard_service, repository, value):
        help_cmd = await command_named(repository, "help")

        with pytest.raises(InvalidCommandToggleError):
            await dashboard_service.toggle_command(help_cmd.id, value)

        assert (await repository.get_command(help_cmd.id)).enabled is True
        assert await dashboard_service.get_activity() == []

    @pytest.mark.asyncio
    async def test_unknown_command(self, dashboard_service):
        with pytest.raises(CommandNotFoundError):
            await dashboard_service.toggle_command("missing", True)
        assert await dashboard_service.get_activity() == []


class TestCommandLookup:

    @pytest.mark.asyncio
    async def test_get_command_by_id(self, dashboard_service, repository):
        ping = await command_named(repository, "ping")
        assert await dashboard_service.get_command(ping.id) == ping

    @pytest.mark.asyncio
    async def test_get_unknown_command(self, dashboard_service):
        with pytest.raises(CommandNotFoundError):
            await dashboard_service.get_command("missing")


class TestCommandSearch:

    @pytest.mark.asyncio
    async def test_search_matches_name_category_and_description(self, dashboard_service):
        by_category = await dashboard_service.get_commands(search="MODERATION")
        assert {c.name for c in by_category} == {"kick", "ban", "clear"}

        by_description = await dashboard_service.get_commands(search="reactions")
        assert [c.name for c in by_description] == ["poll"]

        by_name = await dashboard_service.get_commands(search="info")
        assert {c.name for c in by_name} == {"userinfo", "serverinfo"}

    @pytest.mark.asyncio
    async def test_empty_search_returns_all(self, dashboard_service):
        assert len(await dashboard_service.get_commands(search="")) == 9


class TestSettings:

    @pytest.mark.asyncio
    async def test_update_settings_records_activity(self, dashboard_service):
        new = BotSettings(prefix="?", status_message="hi", activity_type="WATCHING")

        assert await dashboard_service.update_settings(new) == new
        assert await dashboard_service.get_settings() == new

        event = (await dashboard_service.get_activity())[0]
        assert event.type == "command"
        assert event.description == 'Bot settings updated: prefix="?", activity="WATCHING"'
