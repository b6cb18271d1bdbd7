# bot_dashboard/domain/interfaces.py
from abc import ABC, abstractmethod
from typing import List, Optional

from .models import (
    ActivityEvent, BotSettings, BotStatus, Channel, Command, NewActivityEvent,
    PlatformGuild, PlatformUser, Server
)


class IDashboardRepository(ABC):
    """Repository interface for the dashboard's state."""

    @abstractmethod
    async def get_bot_status(self) -> Optional[BotStatus]:
        """Return the bot status with uptime recomputed, or None if never set."""
        pass

    @abstractmethod
    async def set_bot_status(self, status: BotStatus) -> None:
        pass

    @abstractmethod
    async def get_servers(self) -> List[Server]:
        pass

    @abstractmethod
    async def set_servers(self, servers: List[Server]) -> None:
        """Replace the whole server list."""
        pass

    @abstractmethod
    async def get_server_channels(self, server_id: str) -> List[Channel]:
        """Return the channels of a server, empty for an unknown server."""
        pass

    @abstractmethod
    async def set_server_channels(self, server_id: str, channels: List[Channel]) -> None:
        """Replace the channel list of one server."""
        pass

    @abstractmethod
    async def get_commands(self) -> List[Command]:
        pass

    @abstractmethod
    async def get_command(self, command_id: str) -> Optional[Command]:
        pass

    @abstractmethod
    async def update_command(self, command_id: str, **changes) -> Optional[Command]:
        """Merge the given fields into a command. Returns None if the id is unknown."""
        pass

    @abstractmethod
    async def get_activity_events(self) -> List[ActivityEvent]:
        """Return the most recent events, newest first."""
        pass

    @abstractmethod
    async def add_activity_event(self, event: NewActivityEvent) -> ActivityEvent:
        """Append an event, assigning it a unique id."""
        pass

    @abstractmethod
    async def get_settings(self) -> BotSettings:
        pass

    @abstractmethod
    async def update_settings(self, settings: BotSettings) -> BotSettings:
        """Replace the settings wholesale."""
        pass


class IPlatformConnection(ABC):
    """An open connection to the chat platform."""

    @property
    @abstractmethod
    def current_user(self) -> PlatformUser:
        pass

    @property
    @abstractmethod
    def guilds(self) -> List[PlatformGuild]:
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        pass


class IPlatformGateway(ABC):
    """Gateway to the chat platform."""

    @abstractmethod
    async def connect(self, token: Optional[str]) -> IPlatformConnection:
        """
        Open a connection and wait until the platform snapshot is ready.
        Raises PlatformConnectionError (or a subclass) on failure.
        """
        pass


class IDashboardService(ABC):
    """Service interface for dashboard operations."""

    @abstractmethod
    async def get_bot_status(self) -> BotStatus:
        pass

    @abstractmethod
    async def get_servers(self) -> List[Server]:
        pass

    @abstractmethod
    async def get_server_channels(self, server_id: str) -> List[Channel]:
        pass

    @abstractmethod
    async def get_commands(self, search: Optional[str] = None) -> List[Command]:
        pass

    @abstractmethod
    async def get_command(self, command_id: str) -> Command:
        pass

    @abstractmethod
    async def toggle_command(self, command_id: str, enabled: bool) -> Command:
        pass

    @abstractmethod
    async def get_activity(self) -> List[ActivityEvent]:
        pass

    @abstractmethod
    async def get_settings(self) -> BotSettings:
        pass

    @abstractmethod
    async def update_settings(self, settings: BotSettings) -> BotSettings:
        pass
