import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError

from app.api.middleware.error_handler import (
    handle_api_error,
    handle_generic_error,
    handle_integrity_error,
    handle_validation_error,
)
from app.api.middleware.logging import RequestLoggingMiddleware, setup_logging
from app.api.v1 import router as v1_router
from app.api.v1.health import router as health_router
from app.config import settings
from app.core.exceptions import TransactionApiError
from app.db.session import AsyncSessionLocal, create_schema
from app.repositories.transaction import TransactionRepository
from app.services.ingestion import TransactionLoader

logger = logging.getLogger(__name__)


async def load_initial_data() -> None:
    """Populate the store from the configured CSV file, once."""
    if not settings.data_file.exists():
        logger.warning(f"Data file {settings.data_file} not found, skipping ingestion")
        return

    async with AsyncSessionLocal() as session:
        if await TransactionRepository(session).count() > 0:
            logger.info("Transactions already loaded, skipping ingestion")
            return
        await TransactionLoader(session).load_file(settings.data_file)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: ingestion completes before any request is served.
    if settings.create_schema_on_startup:
        await create_schema()
    if settings.load_data_on_startup:
        await load_initial_data()
    yield
    # Shutdown


def create_app() -> FastAPI:
    setup_logging(settings.log_level)

    app = FastAPI(
        title="Transaction Insights API",
        description="Categorized transaction ingestion & spend aggregation",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Add request logging middleware
    app.add_middleware(RequestLoggingMiddleware)

    # Register exception handlers (order matters - most specific first)
    app.add_exception_handler(TransactionApiError, handle_api_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(IntegrityError, handle_integrity_error)
    app.add_exception_handler(Exception, handle_generic_error)

    # Register routers
    app.include_router(health_router)
    app.include_router(v1_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
