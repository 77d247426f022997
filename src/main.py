"""FastAPI application entry point."""

import structlog
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.api.v1.catalog import router as catalog_router
from src.api.v1.estimator import router as estimator_router
from src.api.v1.leads import router as leads_router
from src.api.v1.portal import router as portal_router
from src.api.v1.quotes import router as quotes_router
from src.api.v1.shipping import router as shipping_router
from src.config import settings
from src.database import close_db, get_db_session, init_db
from src.etl.seed import seed_if_needed
from src.llm.client import close_llm_client
from src.logging_config import configure_logging
from src.redis_client import close_redis

configure_logging()

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown."""
    logger.info("app_starting", environment=settings.environment)
    await init_db()

    if settings.seed_on_startup:
        try:
            async with get_db_session() as session:
                await seed_if_needed(session)
        except Exception as e:
            logger.error("startup_seed_failed", error=str(e))

    yield

    logger.info("app_shutting_down")
    await close_llm_client()
    await close_redis()
    await close_db()


app = FastAPI(
    title="American Iron API",
    description="Heavy equipment, parts and power unit catalog with quoting and estimating",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Request bodies and query strings that fail validation are a 400."""
    return JSONResponse(
        status_code=400,
        content={"error": "Validation error", "details": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error(
        "unhandled_exception",
        error_type=type(exc).__name__,
        error=str(exc),
        path=request.url.path,
    )
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# Include routers
app.include_router(catalog_router)
app.include_router(leads_router)
app.include_router(quotes_router)
app.include_router(estimator_router)
app.include_router(shipping_router)
app.include_router(portal_router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "American Iron API",
        "version": "0.1.0",
        "status": "running",
    }
