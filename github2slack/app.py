"""the beautiful world start from here."""

from __future__ import annotations

from fastapi import FastAPI

from github2slack import __version__
from github2slack.config import Settings, settings as default_settings
from github2slack.logging import configure_logging
from github2slack.routers import gh, info
from github2slack.services.notifier import Notifier


def create_app(
    settings: Settings | None = None, notifier: Notifier | None = None
) -> FastAPI:
    """
    Build the application.

    Both tables are read here, once; a ``notifier`` may be passed to run
    against fixture tables or a fake delivery.
    """
    settings = settings or default_settings
    configure_logging(settings)

    app = FastAPI(title="GitHub → Slack", version=__version__)
    app.state.settings = settings
    app.state.notifier = notifier or Notifier.from_settings(settings)

    app.include_router(info.router)
    app.include_router(gh.router)
    return app


app = create_app()
