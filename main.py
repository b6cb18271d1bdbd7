# main.py - Bot dashboard HTTP server
import asyncio
import contextlib
import logging
import uvicorn
from contextlib import asynccontextmanager

from fastapi import FastAPI

from bot_dashboard.config.settings import Settings, settings
from bot_dashboard.domain.interfaces import IDashboardRepository, IDashboardService
from bot_dashboard.infrastructure.storage.memory_repository import InMemoryDashboardRepository
from bot_dashboard.infrastructure.discord.gateway import DiscordGateway
from bot_dashboard.application.services.bootstrap_service import BootstrapService
from bot_dashboard.application.services.dashboard_service import DashboardService
from bot_dashboard.infrastructure.http.dashboard_server import DashboardHttpServer


def configure_logging():
    """Configures application-wide logging."""
    logging.basicConfig(
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        level=settings.LOG_LEVEL
    )
    logging.getLogger("discord").setLevel(logging.WARNING)
    logging.getLogger("discord.gateway").setLevel(logging.INFO)
    logging.getLogger("uvicorn").setLevel(logging.INFO)


def build_application(app_settings: Settings = settings) -> FastAPI:
    """Wires repository, services and HTTP server into a FastAPI app."""
    logger = logging.getLogger(__name__)
    logger.info("Initializing application components...")

    # 1. Repository, constructed once for the process lifetime
    repository: IDashboardRepository = InMemoryDashboardRepository()
    logger.info("Repository initialized.")

    # 2. Services
    bootstrap_service = BootstrapService(
        repository=repository,
        gateway=DiscordGateway(timeout=app_settings.DISCORD_CONNECT_TIMEOUT),
        token=app_settings.DISCORD_BOT_TOKEN
    )
    dashboard_service: IDashboardService = DashboardService(repository=repository)
    logger.info("Services initialized.")

    @asynccontextmanager
    async def lifespan(app):
        """Seeds the dashboard in the background while requests are served."""
        task = bootstrap_service.start_background()

        yield

        if not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task

    # 3. HTTP Server
    http_server = DashboardHttpServer(dashboard_service=dashboard_service, lifespan=lifespan)
    logger.info("HTTP Dashboard Server initialized.")
    return http_server.app


async def main_async():
    """Main async function."""
    configure_logging()
    logger = logging.getLogger(__name__)

    try:
        app = build_application()

        config = uvicorn.Config(
            app=app,
            host=settings.HTTP_HOST,
            port=settings.HTTP_PORT,
            log_level="info"
        )
        server = uvicorn.Server(config)

        logger.info(f"Starting HTTP server on http://{settings.HTTP_HOST}:{settings.HTTP_PORT}")
        await server.serve()

    except KeyboardInterrupt:
        logger.info("Application shutting down due to KeyboardInterrupt...")
    except Exception as e:
        logger.critical(f"Unhandled exception in main: {e}", exc_info=True)
    finally:
        logger.info("Application finished.")


if __name__ == "__main__":
    asyncio.run(main_async())
