import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskboard.api.errors import register_exception_handlers
from taskboard.api.v1.routers import router as api_router
from taskboard.core.config import settings
from taskboard.core.database import init_db, seed_db
from taskboard.core.logging_setup import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # configured here, not at import, so importers keep their own handlers
    setup_logging(settings.LOG_LEVEL)
    logger.info("Starting up %s", settings.APP_NAME)
    # create tables unless alembic manages the schema
    if not settings.SKIP_DB_INIT:
        init_db()

    # seed_data.json is loaded only into an empty table
    if settings.SEED_DB:
        seed_db()

    yield
    logger.info("Shutting down %s", settings.APP_NAME)


def create_app() -> FastAPI:
    app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    @app.get("/")
    def health_check():
        return {"status": "ok"}

    app.include_router(api_router, prefix="/api")
    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run(
        "taskboard.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    run()
