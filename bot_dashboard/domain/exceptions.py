# bot_dashboard/domain/exceptions.py


class DashboardError(Exception):
    """Base class for dashboard errors."""


class PlatformConnectionError(DashboardError):
    """The chat platform could not be reached or did not become ready."""


class MissingTokenError(PlatformConnectionError):
    """No bot token is configured."""


class PlatformAuthError(PlatformConnectionError):
    """The chat platform rejected the bot token."""


class PlatformTimeoutError(PlatformConnectionError):
    """The chat platform did not become ready in time."""


class StatusUnavailableError(DashboardError):
    """Bot status has not been populated yet."""


class CommandNotFoundError(DashboardError, LookupError):
    def __init__(self, command_id: str):
        super().__init__(f"Command {command_id} not found")
        self.command_id = command_id


class InvalidCommandToggleError(DashboardError, ValueError):
    def __init__(self):
        super().__init__("enabled must be a boolean")
