# bot_dashboard/application/services/demo_data.py
"""Fixed dataset shown when the bot cannot connect to Discord."""
from datetime import datetime, timedelta
from typing import List

from ...domain.models import BotStatus, Channel, ChannelPermissions, NewActivityEvent, Server

DEMO_MODE_NOTICE = "Running in demo mode - Connect your Discord bot for live data"

# (id, name, member_count, joined days ago, owner)
_DEMO_SERVERS = [
    ("1", "Gaming Community", 523, 90, False),
    ("2", "Developer Hub", 187, 45, True),
    ("3", "Music Lovers", 342, 120, False),
    ("4", "Study Group", 95, 30, False),
    ("5", "Art & Design", 100, 60, False),
]

# (type, description, age)
_DEMO_EVENTS = [
    ("command", "User @alex used command !help in Gaming Community", timedelta(minutes=5)),
    ("join", "Bot joined server 'New Server'", timedelta(minutes=30)),
    ("command", "User @sarah used command !ping in Developer Hub", timedelta(minutes=45)),
    ("message", "Bot status updated successfully", timedelta(minutes=60)),
    ("command", "User @mike used command !serverinfo in Music Lovers", timedelta(minutes=90)),
    ("command", "User @emma used command !poll in Gaming Community", timedelta(hours=2)),
    ("leave", "Bot left server 'Inactive Server'", timedelta(hours=3)),
    ("command", "User @john used command !meme in Developer Hub", timedelta(hours=4)),
]


def demo_bot_status(now: datetime) -> BotStatus:
    return BotStatus(
        id="123456789012345678",
        username="MyDiscordBot",
        discriminator="0001",
        avatar=None,
        status="online",
        uptime=0,
        last_restart=now.isoformat(),
        total_servers=len(_DEMO_SERVERS),
        total_users=1247,
        commands_today=342,
        active_channels=23,
    )


def demo_servers(now: datetime) -> List[Server]:
    return [
        Server(
            id=server_id,
            name=name,
            icon=None,
            member_count=member_count,
            joined_at=(now - timedelta(days=days_ago)).isoformat(),
            owner=owner,
        )
        for server_id, name, member_count, days_ago, owner in _DEMO_SERVERS
    ]


def demo_channels() -> List[Channel]:
    """Channel templates assigned to every demo server."""
    return [
        Channel(id="ch1", name="general", type="text",
                permissions=ChannelPermissions(can_read=True, can_write=True, can_manage=False)),
        Channel(id="ch2", name="announcements", type="announcement",
                permissions=ChannelPermissions(can_read=True, can_write=False, can_manage=False)),
        Channel(id="ch3", name="voice-chat", type="voice",
                permissions=ChannelPermissions(can_read=True, can_write=True, can_manage=False)),
    ]


def demo_activity_events(now: datetime) -> List[NewActivityEvent]:
    """Seeded history followed by the demo mode notice, in insertion order."""
    events = [
        NewActivityEvent(type=event_type, description=description, timestamp=(now - age).isoformat())
        for event_type, description, age in _DEMO_EVENTS
    ]
    events.append(NewActivityEvent(type="message", description=DEMO_MODE_NOTICE, timestamp=now.isoformat()))
    return events
