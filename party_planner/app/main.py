"""
Main entrypoint for the Party Planner admin page.

This module assembles the FastAPI application: it sets up logging,
creates the single :class:`PlannerState` for the process, wires it to
the data service client, the page mount and the controller, and
includes the page routes.  The initial load runs on startup.  Run it
with uvicorn, e.g.::

    uvicorn party_planner.app.main:app --reload
"""

from typing import Optional

from fastapi import FastAPI

from party_planner.service_api import PartyServiceAPI

from .api.router import router
from .core.config import Settings, settings as default_settings
from .core.logging_config import setup_logging
from .services.planner_service import PlannerController
from .services.state_store import PlannerState
from .views.render import PageMount


def create_app(settings: Optional[Settings] = None, api: Optional[PartyServiceAPI] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Settings to use instead of the module-level ``settings``.
    api : Optional[PartyServiceAPI]
        Data service client to use.  Built from ``settings`` when
        omitted; tests pass a fake here.

    Returns
    -------
    FastAPI
        A configured application whose ``state.controller`` owns the
        page state for the lifetime of the app.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file)

    if api is None:
        api = PartyServiceAPI(base_url=settings.api_url, timeout=settings.request_timeout)
    state = PlannerState()
    mount = PageMount(state, title=settings.project_name)

    app = FastAPI(title=settings.project_name)
    app.state.controller = PlannerController(api, state, mount)
    app.include_router(router)

    @app.on_event("startup")
    async def startup_event() -> None:
        await app.state.controller.load()

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
