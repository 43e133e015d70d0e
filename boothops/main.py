"""Main FastAPI application."""
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from boothops.api.v1.router import build_api_router
from boothops.api.deps import get_db
from boothops.core.config import settings
from boothops.core.errors import BoothOpsError
from boothops.core.rate_limit import limiter
from boothops.core.logging_config import setup_logging, get_logger
from boothops.core.sessions import InMemorySessionStore
from boothops.middleware import LoggingMiddleware

# Initialize structured logging
setup_logging(level=settings.LOG_LEVEL, json_logs=settings.ENVIRONMENT == "production")
logger = get_logger(__name__)

if settings.ENVIRONMENT == "production":
    settings.validate_production_config()

HTTP_ERROR_CODES = {
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and seed on startup when AUTO_INIT_DB is set."""
    if settings.AUTO_INIT_DB:
        from boothops.db.seed import init_db
        from boothops.db.session import engine, SessionLocal

        init_db(engine, SessionLocal, settings.SEED_MODE, settings)
        logger.info("database_initialized", seed_mode=settings.SEED_MODE)
    yield
    purged = app.state.session_store.purge_expired()
    logger.info("application_stopping", purged_sessions=purged)


logger.info(
    "application_starting",
    app_title=settings.APP_TITLE,
    app_version=settings.APP_VERSION,
    environment=settings.ENVIRONMENT,
)

app = FastAPI(
    title=settings.APP_TITLE,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

# Admin tokens live here; handlers reach it through get_session_store
app.state.session_store = InMemorySessionStore()

app.state.limiter = limiter


@app.exception_handler(BoothOpsError)
async def booth_ops_error_handler(request: Request, exc: BoothOpsError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies and parameters are reported as INVALID_REQUEST."""
    details = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
            "message": error.get("msg", ""),
        }
        for error in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"error": "INVALID_REQUEST", "detail": details})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    code = HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR")
    return JSONResponse(status_code=exc.status_code, content={"error": code})


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    logger.warning("rate_limit_exceeded", limit=str(exc.detail))
    return JSONResponse(status_code=429, content={"error": "RATE_LIMITED", "limit": str(exc.detail)})


# Add logging middleware (must be added before other middleware for proper request tracking)
app.add_middleware(LoggingMiddleware)


@app.middleware("http")
async def add_api_version_header(request: Request, call_next):
    """Add X-API-Version header to all responses for version tracking."""
    response = await call_next(request)
    response.headers["X-API-Version"] = settings.APP_VERSION
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,  # Bearer token in a header, no cookies
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-API-Version", "X-Request-ID"],
)

# The same routes are served under the primary prefix and every mirror
for index, prefix in enumerate(settings.get_api_prefixes()):
    app.include_router(build_api_router(prefix, include_in_schema=index == 0))


@app.get("/health")
async def health_check(db: Session = Depends(get_db)):
    """
    Health check endpoint.

    Returns:
        - status: "healthy" or "unhealthy"
        - environment: Current environment setting
        - database: Connection status

    Returns 503 if database is unreachable.
    """
    health_status = {
        "status": "healthy",
        "environment": settings.ENVIRONMENT,
        "database": {"status": "connected"},
    }

    try:
        db.execute(text("SELECT 1"))
    except Exception as e:
        health_status["status"] = "unhealthy"
        health_status["database"]["status"] = f"error: {str(e)}"
        logger.error("health_check_failed", error=str(e))
        return JSONResponse(status_code=503, content=health_status)

    return health_status
