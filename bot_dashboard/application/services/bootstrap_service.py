# bot_dashboard/application/services/bootstrap_service.py
import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from ...domain.interfaces import IDashboardRepository, IPlatformConnection, IPlatformGateway
from ...domain.models import (
    BotStatus, Channel, ChannelPermissions, NewActivityEvent, PlatformGuild, Server
)
from . import demo_data

logger = logging.getLogger(__name__)

CONNECTED_NOTICE = "Bot successfully connected to Discord"

# Platform channel kinds shown on the dashboard and their local names.
CHANNEL_KINDS = {
    "text": "text",
    "voice": "voice",
    "category": "category",
    "news": "announcement",
}

LIVE_CHANNEL_PERMISSIONS = ChannelPermissions(can_read=True, can_write=True, can_manage=False)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class LiveSnapshot:
    """Platform data mapped to dashboard entities, not yet stored."""
    status: BotStatus
    servers: List[Server]
    channels: Dict[str, List[Channel]]
    connected_event: NewActivityEvent


class BootstrapService:
    """
    Seeds the repository once at startup.

    Tries to snapshot the bot's guilds from the chat platform. Any failure on
    that path is logged and replaced by the fixed demo dataset, so
    initialize() never raises.
    """

    def __init__(
            self,
            repository: IDashboardRepository,
            gateway: IPlatformGateway,
            token: Optional[str],
            now: Callable[[], datetime] = _utcnow
    ):
        self._repository = repository
        self._gateway = gateway
        self._token = token
        self._now = now
        self._lock = asyncio.Lock()
        self._task: Optional[asyncio.Task] = None
        self.data_source: Optional[str] = None  # "live" or "demo" once initialized
        self.init_error: Optional[str] = None

    @property
    def is_initialized(self) -> bool:
        return self.data_source is not None

    def start_background(self) -> asyncio.Task:
        """Schedules initialize() as a detached task on the running loop."""
        if self._task is None:
            self._task = asyncio.create_task(self.initialize())
        return self._task

    async def initialize(self) -> str:
        """Runs the live or demo path exactly once and returns which one ran."""
        async with self._lock:
            if self.data_source is not None:
                return self.data_source

            try:
                await self._load_live_data()
                self.data_source = "live"
            except Exception as e:
                logger.error(f"Discord connection unavailable, using demo data: {e}", exc_info=True)
                self.init_error = str(e) or type(e).__name__
                await self._load_demo_data()
                self.data_source = "demo"

            logger.info(f"Dashboard data initialized from {self.data_source} source.")
            return self.data_source

    async def _load_live_data(self) -> None:
        connection = await self._gateway.connect(self._token)
        try:
            snapshot = self._map_snapshot(connection)
        finally:
            await connection.disconnect()

        # Stored only after a clean disconnect
        await self._store_snapshot(snapshot)

    def _map_snapshot(self, connection: IPlatformConnection) -> LiveSnapshot:
        now = self._now()
        user = connection.current_user
        guilds = connection.guilds

        status = BotStatus(
            id=user.id,
            username=user.username,
            discriminator=user.discriminator,
            avatar=user.avatar,
            status="online",
            uptime=0,
            last_restart=now.isoformat(),
            total_servers=len(guilds),
            total_users=sum(guild.member_count for guild in guilds),
            commands_today=0,
            active_channels=sum(
                1 for guild in guilds for channel in guild.channels if channel.text_based
            ),
        )

        servers = [
            Server(
                id=guild.id,
                name=guild.name,
                icon=guild.icon_url,
                member_count=guild.member_count,
                joined_at=(guild.joined_at or now).isoformat(),
                owner=guild.owner_id == user.id,
            )
            for guild in guilds
        ]

        return LiveSnapshot(
            status=status,
            servers=servers,
            channels={guild.id: self._map_channels(guild) for guild in guilds},
            connected_event=NewActivityEvent(
                type="message", description=CONNECTED_NOTICE, timestamp=now.isoformat()
            ),
        )

    async def _store_snapshot(self, snapshot: LiveSnapshot) -> None:
        await self._repository.set_bot_status(snapshot.status)
        await self._repository.set_servers(snapshot.servers)
        for server_id, channels in snapshot.channels.items():
            await self._repository.set_server_channels(server_id, channels)
        await self._repository.add_activity_event(snapshot.connected_event)
        logger.info(f"Loaded {len(snapshot.servers)} servers from Discord as {snapshot.status.username}.")

    @staticmethod
    def _map_channels(guild: PlatformGuild) -> List[Channel]:
        return [
            Channel(
                id=channel.id,
                name=channel.name,
                type=CHANNEL_KINDS[channel.kind],
                permissions=LIVE_CHANNEL_PERMISSIONS,
            )
            for channel in guild.channels
            if channel.kind in CHANNEL_KINDS
        ]

    async def _load_demo_data(self) -> None:
        now = self._now()
        await self._repository.set_bot_status(demo_data.demo_bot_status(now))

        servers = demo_data.demo_servers(now)
        await self._repository.set_servers(servers)
        for server in servers:
            await self._repository.set_server_channels(server.id, demo_data.demo_channels())

        for event in demo_data.demo_activity_events(now):
            await self._repository.add_activity_event(event)
        logger.info(f"Loaded demo data with {len(servers)} servers.")
