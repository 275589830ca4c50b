"""Application entry point"""

from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv

# load .env before any settings are read
try:
    load_dotenv()
except Exception as e:  # noqa: BLE001
    print(f"Warning: Failed to load .env file: {e}. Continuing with environment variables...")

from fastapi import FastAPI
from loguru import logger

from . import __version__
from .infrastructure import setup_logging
from .services import DAILY_JOB_ID
from .state import AppState


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the scheduler on startup, stop it on shutdown"""
    state: AppState = app.state.news

    setup_logging(state.settings.log_dir)
    logger.info("=" * 80)
    logger.info("Application starting, initializing scheduler...")

    scheduler_manager = state.scheduler_manager
    scheduler_manager.create_scheduler()

    config = state.config_service.current()
    scheduler_manager.add_cron_job(
        state.pipeline.run_scheduled,
        hour=config.hour,
        minute=0,
        job_id=DAILY_JOB_ID,
        max_instances=1,
        coalesce=True,
    )

    job = scheduler_manager.get_job(DAILY_JOB_ID)
    if job is None:
        logger.error("[Scheduler] Warning: daily job was not registered!")

    scheduler_manager.start()
    logger.info(f"Server running on port {state.settings.port}")

    yield

    scheduler_manager.shutdown(wait=True)


def create_app(state: Optional[AppState] = None) -> FastAPI:
    """Create the FastAPI app; ``state`` defaults to one built from the environment."""
    app = FastAPI(
        title="Folha Digest API",
        description="Daily Folha de S.Paulo headlines by email",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.news = state or AppState.build()

    @app.get("/health")
    async def health_check():
        return {"status": "ok", "service": "folha-digest"}

    from .presentation.routes import api
    app.include_router(api.router, tags=["news"])

    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = app.state.news.settings
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
