"""Litestar application factory."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from advanced_alchemy.config.asyncio import AsyncSessionConfig
from litestar import Litestar
from litestar.openapi import OpenAPIConfig
from litestar.plugins.sqlalchemy import SQLAlchemyAsyncConfig, SQLAlchemyPlugin

from sleep_cycle_server import __version__
from sleep_cycle_server.api import api_routers
from sleep_cycle_server.core.config import settings
from sleep_cycle_server.core.database import close_database, engine, init_database
from sleep_cycle_server.routes import root_redirect
from sleep_cycle_server.services.alarms import AlarmScheduler

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: Litestar) -> AsyncIterator[None]:
    """Application lifespan manager.

    Handles startup and shutdown tasks:
    - Create database tables on startup
    - Start the wake alarm scheduler
    - Stop the scheduler on shutdown
    - Close database connections on shutdown
    """
    logger.info(
        "Starting sleep-cycle-server",
        version=__version__,
        alarms_enabled=settings.alarms_enabled,
    )

    await init_database()

    alarm_scheduler = AlarmScheduler()
    app.state.alarm_scheduler = alarm_scheduler
    await alarm_scheduler.start()

    yield

    await alarm_scheduler.stop()

    await close_database()
    logger.info("Shutdown complete")


def create_app() -> Litestar:
    """Create Litestar application.

    Returns:
        Configured Litestar app instance
    """
    return Litestar(
        route_handlers=[root_redirect, *api_routers],
        lifespan=[lifespan],
        openapi_config=OpenAPIConfig(
            title="sleep-cycle-server API",
            version=__version__,
            description="Sleep-cycle based bedtime and wake time recommendations",
        ),
        plugins=[
            SQLAlchemyPlugin(
                config=SQLAlchemyAsyncConfig(
                    engine_instance=engine,
                    session_dependency_key="session",
                    session_config=AsyncSessionConfig(expire_on_commit=False),
                ),
            ),
        ],
        debug=settings.log_level == "DEBUG",
    )


# Application instance
app = create_app()
