"""
Vehicle ownership API entry point.

The application is built by create_app(); serve it with
`uvicorn main:create_app --factory` or `python main.py`.
"""
from typing import Optional
import logging

from fastapi import FastAPI

from api import ownerships
from config.database_config import DatabaseSettings
from database import settings as default_settings
from utils.logging_utils import configure_logging

logger = logging.getLogger(__name__)


def create_app(settings: Optional[DatabaseSettings] = None, configure_logs: bool = True) -> FastAPI:
    """
    Build the API application.

    Args:
        settings: Settings used for the logging setup (defaults to the environment)
        configure_logs: Install the rotating file and console handlers

    Returns:
        FastAPI application with the ownership routes under /api
    """
    settings = settings or default_settings

    if configure_logs:
        configure_logging(settings.log_dir, settings.log_level)

    application = FastAPI(
        title="Vehicle Ownership API",
        description="Ownership records linking people to vehicles over time",
        version="1.0.0",
    )
    application.include_router(ownerships.router, prefix="/api", tags=["ownerships"])

    logger.info("Vehicle ownership API initialized")
    return application


if __name__ == "__main__":
    import uvicorn
    from constants import ServerConfig

    app = create_app()
    logger.info(f"Starting Vehicle Ownership API on http://{ServerConfig.HOST}:{ServerConfig.PORT}...")
    uvicorn.run(app, host=ServerConfig.HOST, port=ServerConfig.PORT)
