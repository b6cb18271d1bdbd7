# bot_dashboard/infrastructure/http/dashboard_server.py
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import Body, FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ...domain.exceptions import (
    CommandNotFoundError, InvalidCommandToggleError, StatusUnavailableError
)
from ...domain.interfaces import IDashboardService
from .schemas import (
    ActivityEventResponse, BotSettingsPayload, BotSettingsResponse, BotStatusResponse,
    ChannelResponse, CommandResponse, ErrorResponse, HealthResponse, ServerResponse
)

logger = logging.getLogger(__name__)


class DashboardHttpServer:
    """HTTP API serving the bot dashboard."""

    def __init__(self, dashboard_service: IDashboardService, lifespan=None):
        self.dashboard_service = dashboard_service
        self.app = FastAPI(title="Bot Dashboard API", version="1.0.0", lifespan=lifespan)
        self._setup_exception_handlers()
        self._setup_routes()

    def _setup_exception_handlers(self) -> None:
        @self.app.exception_handler(RequestValidationError)
        async def validation_exception_handler(request: Request, exc: RequestValidationError):
            logger.warning(f"Rejected invalid request to {request.url.path}: {exc.errors()}")
            return JSONResponse(
                status_code=400,
                content={"detail": "Invalid request data", "errors": jsonable_encoder(exc.errors())},
            )

    def _setup_routes(self) -> None:
        """Setup HTTP routes."""
        service = self.dashboard_service

        @self.app.get("/health", response_model=HealthResponse)
        async def health_check():
            """Health check endpoint."""
            return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}

        @self.app.get(
            "/api/bot/status",
            response_model=BotStatusResponse,
            responses={503: {"model": ErrorResponse}}
        )
        async def get_bot_status():
            try:
                return await service.get_bot_status()
            except StatusUnavailableError:
                raise HTTPException(status_code=503, detail="Bot status not available yet")
            except Exception as e:
                logger.error(f"Error fetching bot status: {e}", exc_info=True)
                raise HTTPException(status_code=500, detail="Failed to fetch bot status")

        @self.app.get("/api/servers", response_model=List[ServerResponse])
        async def get_servers():
            try:
                return await service.get_servers()
            except Exception as e:
                logger.error(f"Error fetching servers: {e}", exc_info=True)
                raise HTTPException(status_code=500, detail="Failed to fetch servers")

        @self.app.get("/api/servers/{server_id}/channels", response_model=List[ChannelResponse])
        async def get_server_channels(server_id: str):
            try:
                return await service.get_server_channels(server_id)
            except Exception as e:
                logger.error(f"Error fetching channels for server {server_id}: {e}", exc_info=True)
                raise HTTPException(status_code=500, detail="Failed to fetch channels")

        @self.app.get("/api/commands", response_model=List[CommandResponse])
        async def get_commands(search: Optional[str] = None):
            try:
                return await service.get_commands(search=search)
            except Exception as e:
                logger.error(f"Error fetching commands: {e}", exc_info=True)
                raise HTTPException(status_code=500, detail="Failed to fetch commands")

        @self.app.get(
            "/api/commands/{command_id}",
            response_model=CommandResponse,
            responses={404: {"model": ErrorResponse}}
        )
        async def get_command(command_id: str):
            try:
                return await service.get_command(command_id)
            except CommandNotFoundError:
                raise HTTPException(status_code=404, detail="Command not found")
            except Exception as e:
                logger.error(f"Error fetching command {command_id}: {e}", exc_info=True)
                raise HTTPException(status_code=500, detail="Failed to fetch command")

        @self.app.patch(
            "/api/commands/{command_id}",
            response_model=CommandResponse,
            responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}
        )
        async def toggle_command(command_id: str, payload: Dict[str, Any] = Body(...)):
            """Enable or disable a command. Only the boolean `enabled` key is read."""
            try:
                return await service.toggle_command(command_id, payload.get("enabled"))
            except InvalidCommandToggleError:
                raise HTTPException(status_code=400, detail="enabled must be a boolean")
            except CommandNotFoundError:
                raise HTTPException(status_code=404, detail="Command not found")
            except Exception as e:
                logger.error(f"Error updating command {command_id}: {e}", exc_info=True)
                raise HTTPException(status_code=500, detail="Failed to update command")

        @self.app.get(
            "/api/activity",
            response_model=List[ActivityEventResponse],
            response_model_exclude_none=True
        )
        async def get_activity():
            try:
                return await service.get_activity()
            except Exception as e:
                logger.error(f"Error fetching activity: {e}", exc_info=True)
                raise HTTPException(status_code=500, detail="Failed to fetch activity")

        @self.app.get("/api/settings", response_model=BotSettingsResponse)
        async def get_settings():
            try:
                return await service.get_settings()
            except Exception as e:
                logger.error(f"Error fetching settings: {e}", exc_info=True)
                raise HTTPException(status_code=500, detail="Failed to fetch settings")

        @self.app.put(
            "/api/settings",
            response_model=BotSettingsResponse,
            responses={400: {"model": ErrorResponse}}
        )
        async def update_settings(payload: BotSettingsPayload):
            try:
                return await service.update_settings(payload.to_domain())
            except Exception as e:
                logger.error(f"Error updating settings: {e}", exc_info=True)
                raise HTTPException(status_code=500, detail="Failed to update settings")
