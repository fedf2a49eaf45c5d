from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware

from budget_api.config import settings
from budget_api.db import check_database_connection, connect_with_retry, engine, init_models
from budget_api.exceptions import AppException, InvalidAmountError, InvalidPeriodError
from budget_api.routes import api_router
from budget_api.logging_config import setup_logging, get_logger
from budget_api.middleware.logging_middleware import LoggingMiddleware

# Setup logging
setup_logging(settings.LOG_LEVEL)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        logger.info("Starting up...")
        await connect_with_retry()
        if settings.AUTO_CREATE_TABLES:
            await init_models()
        yield
    finally:
        logger.info("Shutting down...")
        await engine.dispose()


app = FastAPI(
    title="Budget API",
    description="Personal budgeting API",
    version=settings.VERSION,
    lifespan=lifespan
)

# Logging middleware
app.add_middleware(LoggingMiddleware)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["DELETE", "GET", "POST", "PUT"],
    allow_headers=["*"],
)


# Global exception handlers
@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=exc.headers
    )


@app.exception_handler(InvalidPeriodError)
async def invalid_period_handler(request: Request, exc: InvalidPeriodError):
    logger.info(f"Rejected report period: {exc}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": exc.message}
    )


@app.exception_handler(InvalidAmountError)
async def invalid_amount_handler(request: Request, exc: InvalidAmountError):
    logger.error(f"Aggregation aborted: {exc}")
    return JSONResponse(
        status_code=422,
        content={"detail": exc.message}
    )


# Include routers
app.include_router(api_router, prefix="/api/v1")


@app.get("/health")
async def health():
    db_status = await check_database_connection()
    return {
        "status": "ok" if db_status else "degraded",
        "database": "connected" if db_status else "disconnected"
    }
