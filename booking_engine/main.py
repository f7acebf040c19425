import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from booking_engine.api.deps import get_engine
from booking_engine.api.errors import domain_error_handler
from booking_engine.api.middleware import AllowListCORSMiddleware
from booking_engine.api.routers.health import router as health_router
from booking_engine.api.routers.reservations import router as reservations_router
from booking_engine.config import get_settings
from booking_engine.domain.errors import DomainError
from booking_engine.infrastructure.db.engine import create_tables

# Configure structured logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.use_in_memory:
        logger.info("Starting with in-memory store")
        yield
        return

    # Create tables for dev/demo databases; production schemas are migrated separately
    engine = get_engine()
    await create_tables(engine)
    yield
    await engine.dispose()


app = FastAPI(
    title="Booking Engine API",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(AllowListCORSMiddleware, allowed_origins=settings.cors_origins())
# Rewrites the client address from forwarded headers only when the peer is a trusted proxy
app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=settings.trusted_proxies())
app.add_exception_handler(DomainError, domain_error_handler)


# Global Exception Handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler to prevent stack trace exposure to clients.
    All unhandled exceptions are logged internally and return a generic error message.
    """
    error_id = str(uuid.uuid4())

    logger.error(
        "Unhandled exception occurred",
        exc_info=exc,
        extra={
            "error_id": error_id,
            "path": request.url.path,
            "method": request.method,
            "client_host": request.client.host if request.client else None,
        },
    )

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "error_id": error_id,
            "message": "An unexpected error occurred. Please contact support with the error_id if the issue persists.",
        },
    )


app.include_router(health_router, tags=["Health"])
app.include_router(reservations_router, prefix="/api/v1", tags=["Reservations"])
