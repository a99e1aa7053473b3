"""Entry point for the Party Planner admin page.

Starts the FastAPI application with Uvicorn.  Host and port are read
from the ``HOST`` and ``PORT`` environment variables (defaults
``0.0.0.0`` and ``8000``); the data service location comes from
``PARTY_API_BASE`` and ``PARTY_API_COHORT``.

Usage:
    python run.py
"""
import asyncio

from uvicorn import Config, Server

from party_planner.app.core.config import settings
from party_planner.app.main import app


async def main() -> None:
    """Serve the admin page until interrupted."""
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
