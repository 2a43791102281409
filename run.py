"""Entry point for the Neuromkt API.

Launches the FastAPI application with Uvicorn.  Host and port are read
from the environment variables ``HOST`` and ``PORT`` (defaults
``0.0.0.0`` and ``8000``); database and token settings are read by
``neuromkt_api.app.core.config``.

Usage:
    python run.py
"""
import asyncio
import logging
import os

from uvicorn import Config, Server

from neuromkt_api.app.core.config import settings
from neuromkt_api.app.main import app


async def run_api() -> None:
    """Serve the API until interrupted."""
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    config = Config(app=app, host=host, port=port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        logging.getLogger(__name__).info("Stopped")
