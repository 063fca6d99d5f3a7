"""FastAPI application factory."""

from fastapi import FastAPI

from resultmatch import __version__
from resultmatch.api.routes import matching


def create_app() -> FastAPI:
    """Create the API app with all routers mounted."""
    app = FastAPI(title="resultmatch", version=__version__)
    app.include_router(matching.router, tags=["Matching"])
    return app
