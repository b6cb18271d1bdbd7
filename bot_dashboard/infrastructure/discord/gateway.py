# bot_dashboard/infrastructure/discord/gateway.py
import asyncio
import logging
from typing import Callable, List, Optional

import discord

from ...domain.exceptions import (
    MissingTokenError, PlatformAuthError, PlatformConnectionError, PlatformTimeoutError
)
from ...domain.interfaces import IPlatformConnection, IPlatformGateway
from ...domain.models import PlatformChannel, PlatformGuild, PlatformUser

logger = logging.getLogger(__name__)

DISCORD_CDN_URL = "https://cdn.discordapp.com"
DEFAULT_CONNECT_TIMEOUT = 10.0


def build_client() -> discord.Client:
    """Creates a client with the intents needed to read guilds and channels."""
    intents = discord.Intents.none()
    intents.guilds = True
    intents.guild_messages = True
    return discord.Client(intents=intents)


def _map_user(user: discord.ClientUser) -> PlatformUser:
    return PlatformUser(
        id=str(user.id),
        username=user.name,
        discriminator=user.discriminator,
        avatar=user.avatar.key if user.avatar else None,
    )


def _map_channel(channel: discord.abc.GuildChannel) -> PlatformChannel:
    return PlatformChannel(
        id=str(channel.id),
        name=channel.name,
        kind=channel.type.name,
        text_based=isinstance(channel, discord.abc.Messageable),
    )


def _map_guild(guild: discord.Guild) -> PlatformGuild:
    icon_url = f"{DISCORD_CDN_URL}/icons/{guild.id}/{guild.icon.key}.png" if guild.icon else None
    return PlatformGuild(
        id=str(guild.id),
        name=guild.name,
        icon_url=icon_url,
        member_count=guild.member_count or 0,
        joined_at=guild.me.joined_at if guild.me else None,
        owner_id=str(guild.owner_id) if guild.owner_id is not None else None,
        channels=[_map_channel(channel) for channel in guild.channels],
    )


class DiscordConnection(IPlatformConnection):
    """A ready Discord client whose cache can be read as a platform snapshot."""

    def __init__(self, client: discord.Client, connect_task: asyncio.Task):
        self._client = client
        self._connect_task = connect_task

    @property
    def current_user(self) -> PlatformUser:
        if self._client.user is None:
            raise PlatformConnectionError("Discord client user not available")
        return _map_user(self._client.user)

    @property
    def guilds(self) -> List[PlatformGuild]:
        return [_map_guild(guild) for guild in self._client.guilds]

    async def disconnect(self) -> None:
        await self._client.close()
        await asyncio.gather(self._connect_task, return_exceptions=True)
        logger.info("Discord client disconnected.")


class DiscordGateway(IPlatformGateway):
    """Opens short-lived Discord connections used to snapshot guild data."""

    def __init__(
            self,
            timeout: float = DEFAULT_CONNECT_TIMEOUT,
            client_factory: Callable[[], discord.Client] = build_client
    ):
        self.timeout = timeout
        self._client_factory = client_factory

    async def connect(self, token: Optional[str]) -> DiscordConnection:
        """Logs in and waits for the ready event, all within one timeout."""
        if not token:
            raise MissingTokenError("DISCORD_BOT_TOKEN not found in environment variables")

        logger.info("Attempting to connect to Discord...")
        client = self._client_factory()
        connection: Optional[DiscordConnection] = None

        try:
            connection = await asyncio.wait_for(self._open(client, token), timeout=self.timeout)
            return connection
        except asyncio.TimeoutError as e:
            raise PlatformTimeoutError(
                f"Discord connection timeout after {self.timeout:g} seconds"
            ) from e
        finally:
            # Covers login errors, timeouts and cancellation of the caller
            if connection is None:
                await client.close()

    async def _open(self, client: discord.Client, token: str) -> DiscordConnection:
        try:
            await client.login(token)
        except discord.LoginFailure as e:
            raise PlatformAuthError(f"Discord rejected the bot token: {e}") from e
        logger.info("Discord login accepted, waiting for ready event...")

        connect_task = asyncio.create_task(client.connect(reconnect=False))
        ready_task = asyncio.create_task(client.wait_until_ready())
        ready = False
        try:
            await asyncio.wait({connect_task, ready_task}, return_when=asyncio.FIRST_COMPLETED)
            ready = ready_task.done() and not ready_task.cancelled()
        finally:
            if not ready:
                ready_task.cancel()
                connect_task.cancel()
                await asyncio.gather(ready_task, connect_task, return_exceptions=True)

        if not ready:
            error = connect_task.exception()
            raise PlatformConnectionError(
                f"Discord gateway closed before the client was ready: {error}"
            ) from error

        logger.info(f"Discord bot connected successfully as {client.user}")
        return DiscordConnection(client, connect_task)
