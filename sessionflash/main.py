"""Application entrypoint and composition."""

from fastapi import FastAPI

from sessionflash.config import get_settings
from sessionflash.errors import register_exception_handlers
from sessionflash.logging import configure_logging
from sessionflash.middleware import install_middlewares
from sessionflash.routes import home
from sessionflash.routes import infra as infra_routes

configure_logging(get_settings().log_level)


def create_app() -> FastAPI:
    """Create and configure a FastAPI application instance."""
    # Fresh settings per app so tests can monkeypatch the environment
    get_settings.cache_clear()
    settings = get_settings()

    app = FastAPI(title=settings.app_name, debug=settings.debug)

    install_middlewares(app)

    app.include_router(home.router)
    app.include_router(infra_routes.router)

    register_exception_handlers(app)

    return app


app = create_app()
