"""Entry point for the Space Ships API.

Starts the FastAPI application with Uvicorn.  Host, port and log level
are taken from the application settings (``HOST``, ``PORT`` and
``LOG_LEVEL`` environment variables).

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from space_api.app.core.config import settings
from space_api.app.main import app


async def run_api() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        logging.getLogger(__name__).info("Shutting down")
