# Main application file

import logging
import time
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from stocktrack.core.config import Settings, get_settings
from stocktrack.core.error_handlers import setup_exception_handlers
from stocktrack.core.rate_limiter import limiter
from stocktrack.database import Database
from stocktrack.routers import activity, alerts, inventory
from stocktrack.seed import seed

logger = logging.getLogger("stocktrack")


def configure_logging(settings: Settings):
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(message)s",
    )


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    settings = settings or get_settings()
    database = database or Database(settings.DATABASE_URL, echo=settings.DEBUG)

    configure_logging(settings)

    # LIFECYCLE

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.started_at = time.monotonic()
        database.init()

        if settings.SEED_ON_STARTUP:
            with database.session() as db:
                seed(db)

        logger.info("Inventory service started (%s)", settings.ENV)
        yield

        database.dispose()
        logger.info("Inventory service stopped")

    # APP INIT

    app = FastAPI(
        title="Inventory Tracker API",
        description="Inventory tracking with low stock alerts",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database
    app.state.started_at = time.monotonic()

    # CORS

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["Content-Type"],
    )

    # RATE LIMITING

    app.state.limiter = limiter
    app.state.rate_limit_scope = uuid.uuid4().hex
    app.add_exception_handler(
        RateLimitExceeded,
        _rate_limit_exceeded_handler
    )

    # ERROR HANDLING

    setup_exception_handlers(app, settings)

    # REQUEST LOGGING MIDDLEWARE

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()

        try:
            response = await call_next(request)
        except Exception:
            # The 500 response is built by the outer error handler, which
            # copies this timing onto it
            duration = round((time.time() - start_time) * 1000, 2)
            request.state.response_time = f"{duration}ms"

            if settings.ENABLE_LOGGING:
                logger.error(f"{request.method} {request.url.path} Failed Time: {duration}ms")
            raise

        duration = round((time.time() - start_time) * 1000, 2)
        response.headers["X-Response-Time"] = f"{duration}ms"

        if settings.ENABLE_LOGGING:
            logger.info(
                f"{request.method} {request.url.path} "
                f"Status: {response.status_code} "
                f"Time: {duration}ms"
            )

        return response

    # ROUTERS

    app.include_router(inventory.router)
    app.include_router(alerts.router)
    app.include_router(activity.router)

    # HEALTH

    @app.get("/api/health")
    def health(request: Request):
        return {
            "status": "OK",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime": round(time.monotonic() - request.app.state.started_at, 3),
            "environment": settings.ENV,
        }

    @app.get("/")
    def root():
        logger.info("Health check endpoint called")
        return {"message": "Inventory Tracker API is running"}

    return app
