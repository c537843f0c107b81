import asyncio
import logging
from typing import List, Optional
from fastapi import FastAPI
import uvicorn
from contextlib import asynccontextmanager

from app.core.config import settings
from app.api.api import api_router
from app.middlewares.request_counter import RequestCounterMiddleware
from app.services.counter_service import IPCounterStore
from app.services.report_service import run_reporter

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# App startup and shutdown events
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: start the periodic IP report
    logger.info("Starting up application")
    stop_event = asyncio.Event()
    reporter = asyncio.create_task(
        run_reporter(
            app.state.ip_counts,
            interval=app.state.report_interval,
            stop_event=stop_event,
        )
    )

    # Yield control back to FastAPI
    yield

    # Shutdown: stop the reporter
    logger.info("Shutting down application")
    stop_event.set()
    try:
        await asyncio.wait_for(reporter, timeout=app.state.report_interval + 1)
    except asyncio.TimeoutError:
        logger.warning("Reporter did not stop in time")
    except Exception as e:
        logger.error(f"Reporter failed: {e}")


def create_app(
        store: Optional[IPCounterStore] = None,
        report_interval: Optional[float] = None,
        counted_paths: Optional[List[str]] = None
) -> FastAPI:
    """
    Build the application around one counter store

    Parameters:
    - store: Counter store shared by the middleware and the reporter
    - report_interval: Seconds between reporter ticks
    - counted_paths: Paths whose requests are counted

    Returns:
    - FastAPI application
    """
    if store is None:
        store = IPCounterStore()

    # Create FastAPI app
    app = FastAPI(
        title=settings.SERVER_NAME,
        lifespan=lifespan,
    )
    app.state.ip_counts = store
    app.state.report_interval = settings.REPORT_INTERVAL if report_interval is None else report_interval

    # Add request counter middleware
    app.add_middleware(
        RequestCounterMiddleware,
        store=store,
        counted_paths=settings.COUNTED_PATHS if counted_paths is None else counted_paths,
    )

    # Include API router
    app.include_router(api_router)

    return app


app = create_app()


def run():
    print(f"Listening on {settings.SERVER_HOST}:{settings.SERVER_PORT}", flush=True)
    uvicorn.run(
        app,
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        log_level=settings.LOG_LEVEL.lower(),
        # stdout carries only the startup line and the IP reports
        access_log=False,
    )


if __name__ == "__main__":
    run()
