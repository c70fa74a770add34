"""FastAPI application for the DeafSim web API."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from deafsim import __version__
from deafsim.api.routes import chat, config, models, simulate


def create_app(dev: bool = False) -> FastAPI:
    """Create the FastAPI application."""
    app = FastAPI(
        title="DeafSim",
        version=__version__,
        docs_url="/api/docs",
        openapi_url="/api/openapi.json",
    )

    # CORS for a separately served frontend during development
    if dev:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_methods=["*"],
            allow_headers=["*"],
        )

    prefix = "/api/v1"
    app.include_router(config.router, prefix=prefix, tags=["config"])
    app.include_router(simulate.router, prefix=prefix, tags=["simulate"])
    app.include_router(chat.router, prefix=prefix, tags=["chat"])
    app.include_router(models.router, prefix=prefix, tags=["models"])

    @app.get("/health")
    def health():
        return {"ok": True}

    return app


def create_dev_app() -> FastAPI:
    """Factory for the reloading dev server."""
    return create_app(dev=True)
