# bot_dashboard/infrastructure/storage/memory_repository.py
import logging
import time
import uuid
from collections import deque
from itertools import islice
from dataclasses import asdict, replace
from typing import Callable, Deque, Dict, List, Optional

from ...domain.interfaces import IDashboardRepository
from ...domain.models import (
    ActivityEvent, BotSettings, BotStatus, Channel, Command, NewActivityEvent, Server
)

logger = logging.getLogger(__name__)

MAX_STORED_EVENTS = 100
MAX_RETURNED_EVENTS = 50

MUTABLE_COMMAND_FIELDS = frozenset({"enabled", "usage_count"})

DEFAULT_SETTINGS = BotSettings(
    prefix="!",
    status_message="Use !help for commands",
    activity_type="PLAYING",
)

# (name, description, category, usage_count, enabled)
DEFAULT_COMMANDS = [
    ("help", "Shows all available commands", "Utility", 127, True),
    ("ping", "Check bot latency and response time", "Utility", 89, True),
    ("userinfo", "Display information about a user", "Info", 56, True),
    ("serverinfo", "Display information about the server", "Info", 43, True),
    ("kick", "Kick a member from the server", "Moderation", 12, True),
    ("ban", "Ban a member from the server", "Moderation", 8, False),
    ("clear", "Clear messages from a channel", "Moderation", 34, True),
    ("poll", "Create a poll with reactions", "Fun", 67, True),
    ("meme", "Get a random meme", "Fun", 145, True),
]


def _new_id() -> str:
    return str(uuid.uuid4())


class InMemoryDashboardRepository(IDashboardRepository):
    """
    In-memory implementation of the dashboard repository.

    All state lives for the lifetime of the instance. Methods never await,
    so a coroutine's read or write completes without yielding to another.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._started_at = clock()
        self._bot_status: Optional[BotStatus] = None
        self._servers: List[Server] = []
        self._server_channels: Dict[str, List[Channel]] = {}
        self._commands: Dict[str, Command] = {}
        self._activity_events: Deque[ActivityEvent] = deque(maxlen=MAX_STORED_EVENTS)
        self._settings: BotSettings = DEFAULT_SETTINGS
        self._seed_default_commands()

    def _seed_default_commands(self) -> None:
        for name, description, category, usage_count, enabled in DEFAULT_COMMANDS:
            command = Command(
                id=_new_id(), name=name, description=description,
                category=category, usage_count=usage_count, enabled=enabled
            )
            self._commands[command.id] = command
        logger.debug(f"Seeded {len(self._commands)} default commands.")

    async def get_bot_status(self) -> Optional[BotStatus]:
        if self._bot_status is None:
            return None
        uptime = int(self._clock() - self._started_at)
        return replace(self._bot_status, uptime=uptime)

    async def set_bot_status(self, status: BotStatus) -> None:
        self._bot_status = status

    async def get_servers(self) -> List[Server]:
        return list(self._servers)

    async def set_servers(self, servers: List[Server]) -> None:
        self._servers = list(servers)

    async def get_server_channels(self, server_id: str) -> List[Channel]:
        return list(self._server_channels.get(server_id, []))

    async def set_server_channels(self, server_id: str, channels: List[Channel]) -> None:
        self._server_channels[server_id] = list(channels)

    async def get_commands(self) -> List[Command]:
        return list(self._commands.values())

    async def get_command(self, command_id: str) -> Optional[Command]:
        return self._commands.get(command_id)

    async def update_command(self, command_id: str, **changes) -> Optional[Command]:
        unknown = set(changes) - MUTABLE_COMMAND_FIELDS
        if unknown:
            raise ValueError(f"Cannot update command fields: {', '.join(sorted(unknown))}")

        command = self._commands.get(command_id)
        if command is None:
            return None

        updated = replace(command, **changes)
        self._commands[command_id] = updated
        return updated

    async def get_activity_events(self) -> List[ActivityEvent]:
        return list(islice(reversed(self._activity_events), MAX_RETURNED_EVENTS))

    async def add_activity_event(self, event: NewActivityEvent) -> ActivityEvent:
        stored = ActivityEvent(id=_new_id(), **asdict(event))
        # deque(maxlen) drops the oldest entry on overflow
        self._activity_events.append(stored)
        return stored

    async def get_settings(self) -> BotSettings:
        return self._settings

    async def update_settings(self, settings: BotSettings) -> BotSettings:
        self._settings = settings
        return self._settings
