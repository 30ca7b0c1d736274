"""FastAPI app entrypoint."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.errors import register_error_handlers
from src.api.routes import router
from src.config import Settings, load_settings
from src.logging_config import setup_logging
from src.scrape import build_client

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the app; configuration is validated here, once, before serving."""
    if settings is None:
        setup_logging()
        settings = load_settings()

    # Initialize logging FIRST so all subsequent operations produce JSON logs
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("starting scrape service")

        client = build_client(settings)

        # Attach to app state for dependency injection
        app.state.settings = settings
        app.state.client = client

        logger.info(
            "scrape service ready",
            extra={
                "agentql_api_url": settings.agentql_api_url,
                "scrape_concurrency": settings.scrape_concurrency,
                "cors_origins": settings.cors_origin_list,
            },
        )

        yield

        logger.info("shutting down scrape service")
        await client.aclose()

    app = FastAPI(title="Scrape Service", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["POST", "GET"],
        allow_headers=["*"],
        allow_credentials=True,
    )
    register_error_handlers(app)
    app.include_router(router)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
