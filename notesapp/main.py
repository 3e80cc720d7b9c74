"""
Main FastAPI Application

Entry point for the multi-tenant notes service.
Configures middleware, routes, error handlers, and startup/shutdown events.
"""
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import time
from contextlib import asynccontextmanager

from notesapp import __version__
from notesapp.config import get_settings
from notesapp.database import engine, init_db, SessionLocal
from notesapp.middleware.cors import CORSHeadersMiddleware
from notesapp.seed import seed_demo_data
from notesapp.utils.logging import setup_logging, get_logger

from notesapp.api.endpoints import auth, notes, tenants

settings = get_settings()

setup_logging(
    log_level=settings.LOG_LEVEL,
    json_format=(settings.ENVIRONMENT == "production")
)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events.
    """
    logger.info(f"Starting application in {settings.ENVIRONMENT} mode")

    if settings.ENVIRONMENT == "development":
        logger.warning("Initializing database tables (dev mode)")
        init_db()
        if settings.SEED_ON_STARTUP:
            db = SessionLocal()
            try:
                seed_demo_data(db)
            finally:
                db.close()

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application")
    engine.dispose()
    logger.info("Application shutdown complete")


app = FastAPI(
    title="Multi-Tenant Notes",
    description="Tenant-isolated notes with token auth, admin plan upgrades and free-plan quotas",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)


# ============================================================================
# MIDDLEWARE CONFIGURATION
# Registered innermost first: the last one added wraps all the others.
# ============================================================================

@app.middleware("http")
async def catch_unhandled_exceptions(request: Request, call_next):
    """
    Turn any unexpected exception into a generic 500.

    SECURITY: Full details go to the log only; the client sees a fixed message.
    """
    try:
        return await call_next(request)
    except Exception as exc:
        logger.error(
            f"Unhandled exception: {type(exc).__name__}: {str(exc)}",
            exc_info=True,
            extra={"path": request.url.path, "method": request.method}
        )
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    """Add X-Process-Time header to track request duration."""
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    return response


app.add_middleware(CORSHeadersMiddleware)


# ============================================================================
# EXCEPTION HANDLERS
# All error bodies have the shape {"error": message}.
# ============================================================================

@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors (ours and the framework's) as {"error": detail}."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None) or {}
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are a 400, reported by their first problem."""
    errors = exc.errors()
    message = "Invalid input"
    if errors:
        first = errors[0]
        if first.get("type") == "json_invalid":
            return JSONResponse(status_code=400, content={"error": "Invalid JSON body"})
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    return JSONResponse(status_code=400, content={"error": message})


# ============================================================================
# ROUTES
# ============================================================================

@app.get("/health", tags=["health"])
async def health_check():
    """Health check endpoint for load balancers."""
    return {"status": "ok"}


app.include_router(auth.router)
app.include_router(notes.router)
app.include_router(tenants.router)


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Debug: {settings.DEBUG}")

    uvicorn.run(
        "notesapp.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
