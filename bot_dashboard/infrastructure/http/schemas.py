# bot_dashboard/infrastructure/http/schemas.py
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ...domain.models import BotSettings


class CamelModel(BaseModel):
    """Response model serialized with camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class BotStatusResponse(CamelModel):
    id: str
    username: str
    discriminator: str
    avatar: Optional[str]
    status: Literal["online", "offline", "idle", "dnd"]
    uptime: int
    last_restart: str
    total_servers: int
    total_users: int
    commands_today: int
    active_channels: int


class ServerResponse(CamelModel):
    id: str
    name: str
    icon: Optional[str]
    member_count: int
    joined_at: str
    owner: bool


class ChannelPermissionsResponse(CamelModel):
    can_read: bool
    can_write: bool
    can_manage: bool


class ChannelResponse(CamelModel):
    id: str
    name: str
    type: Literal["text", "voice", "category", "announcement"]
    permissions: ChannelPermissionsResponse


class CommandResponse(CamelModel):
    id: str
    name: str
    description: str
    category: str
    usage_count: int
    enabled: bool


class ActivityEventResponse(CamelModel):
    id: str
    type: Literal["command", "join", "leave", "error", "message"]
    description: str
    timestamp: str
    server_id: Optional[str] = None
    server_name: Optional[str] = None
    user_id: Optional[str] = None
    username: Optional[str] = None


class BotSettingsResponse(CamelModel):
    prefix: str
    status_message: str
    activity_type: Literal["PLAYING", "STREAMING", "LISTENING", "WATCHING", "COMPETING"]


class BotSettingsPayload(BaseModel):
    """Request model for replacing the bot settings. Unknown keys are rejected."""
    model_config = ConfigDict(alias_generator=to_camel, extra="forbid", strict=True)

    prefix: str
    status_message: str
    activity_type: Literal["PLAYING", "STREAMING", "LISTENING", "WATCHING", "COMPETING"]

    def to_domain(self) -> BotSettings:
        return BotSettings(
            prefix=self.prefix,
            status_message=self.status_message,
            activity_type=self.activity_type,
        )


class HealthResponse(BaseModel):
    status: str
    timestamp: str


class ErrorResponse(BaseModel):
    detail: str
    errors: Optional[List[dict]] = None
