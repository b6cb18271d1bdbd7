# bot_dashboard/domain/models.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Literal, Optional

PresenceStatus = Literal["online", "offline", "idle", "dnd"]
ChannelType = Literal["text", "voice", "category", "announcement"]
ActivityEventType = Literal["command", "join", "leave", "error", "message"]
ActivityType = Literal["PLAYING", "STREAMING", "LISTENING", "WATCHING", "COMPETING"]


@dataclass(frozen=True)
class BotStatus:
    """Identity, presence and aggregate counters of the bot."""
    id: str
    username: str
    discriminator: str
    avatar: Optional[str]
    status: PresenceStatus
    uptime: int  # seconds, recomputed on every read
    last_restart: str
    total_servers: int
    total_users: int
    commands_today: int
    active_channels: int


@dataclass(frozen=True)
class Server:
    """A guild the bot is a member of."""
    id: str
    name: str
    icon: Optional[str]
    member_count: int
    joined_at: str
    owner: bool


@dataclass(frozen=True)
class ChannelPermissions:
    can_read: bool
    can_write: bool
    can_manage: bool


@dataclass(frozen=True)
class Channel:
    """A guild channel of one of the four recognized kinds."""
    id: str
    name: str
    type: ChannelType
    permissions: ChannelPermissions


@dataclass(frozen=True)
class Command:
    """Entry of the bot's command registry."""
    id: str
    name: str
    description: str
    category: str
    usage_count: int
    enabled: bool


@dataclass(frozen=True)
class NewActivityEvent:
    """Activity event before the store assigns it an id."""
    type: ActivityEventType
    description: str
    timestamp: str
    server_id: Optional[str] = None
    server_name: Optional[str] = None
    user_id: Optional[str] = None
    username: Optional[str] = None


@dataclass(frozen=True)
class ActivityEvent:
    """Domain model for an entry in the activity log."""
    id: str
    type: ActivityEventType
    description: str
    timestamp: str
    server_id: Optional[str] = None
    server_name: Optional[str] = None
    user_id: Optional[str] = None
    username: Optional[str] = None


@dataclass(frozen=True)
class BotSettings:
    """Operator-editable bot configuration."""
    prefix: str
    status_message: str
    activity_type: ActivityType


# Snapshot shapes read from the chat platform during bootstrap.

@dataclass(frozen=True)
class PlatformUser:
    id: str
    username: str
    discriminator: str
    avatar: Optional[str]


@dataclass(frozen=True)
class PlatformChannel:
    id: str
    name: str
    kind: str  # platform channel type name, e.g. "text", "news", "forum"
    text_based: bool


@dataclass(frozen=True)
class PlatformGuild:
    id: str
    name: str
    icon_url: Optional[str]
    member_count: int
    joined_at: Optional[datetime]
    owner_id: Optional[str]
    channels: List[PlatformChannel] = field(default_factory=list)
