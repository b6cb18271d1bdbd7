# bot_dashboard/application/services/dashboard_service.py
import logging
from datetime import datetime, timezone
from typing import List, Optional

from ...domain.exceptions import (
    CommandNotFoundError, InvalidCommandToggleError, StatusUnavailableError
)
from ...domain.interfaces import IDashboardRepository, IDashboardService
from ...domain.models import (
    ActivityEvent, BotSettings, BotStatus, Channel, Command, NewActivityEvent, Server
)

logger = logging.getLogger(__name__)


class DashboardService(IDashboardService):
    """Service behind the dashboard endpoints."""

    def __init__(self, repository: IDashboardRepository):
        self._repository = repository

    async def get_bot_status(self) -> BotStatus:
        status = await self._repository.get_bot_status()
        if status is None:
            raise StatusUnavailableError("Bot status not available yet")
        return status

    async def get_servers(self) -> List[Server]:
        return await self._repository.get_servers()

    async def get_server_channels(self, server_id: str) -> List[Channel]:
        return await self._repository.get_server_channels(server_id)

    async def get_commands(self, search: Optional[str] = None) -> List[Command]:
        """Lists commands, optionally filtered by a case-insensitive substring."""
        commands = await self._repository.get_commands()
        if not search:
            return commands

        needle = search.lower()
        return [
            command for command in commands
            if needle in command.name.lower()
            or needle in command.category.lower()
            or needle in command.description.lower()
        ]

    async def get_command(self, command_id: str) -> Command:
        command = await self._repository.get_command(command_id)
        if command is None:
            raise CommandNotFoundError(command_id)
        return command

    async def toggle_command(self, command_id: str, enabled: bool) -> Command:
        if not isinstance(enabled, bool):
            raise InvalidCommandToggleError()

        updated = await self._repository.update_command(command_id, enabled=enabled)
        if updated is None:
            raise CommandNotFoundError(command_id)

        state = "enabled" if enabled else "disabled"
        await self._record("command", f'Command "{updated.name}" {state}')
        logger.info(f"Command {updated.name} ({command_id}) {state}.")
        return updated

    async def get_activity(self) -> List[ActivityEvent]:
        return await self._repository.get_activity_events()

    async def get_settings(self) -> BotSettings:
        return await self._repository.get_settings()

    async def update_settings(self, settings: BotSettings) -> BotSettings:
        updated = await self._repository.update_settings(settings)
        await self._record(
            "command",
            f'Bot settings updated: prefix="{updated.prefix}", activity="{updated.activity_type}"'
        )
        logger.info("Bot settings updated.")
        return updated

    async def _record(self, event_type: str, description: str) -> ActivityEvent:
        return await self._repository.add_activity_event(
            NewActivityEvent(
                type=event_type,
                description=description,
                timestamp=datetime.now(timezone.utc).isoformat(),
            )
        )
