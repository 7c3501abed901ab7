import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.api.deps import engine
from app.api.errors import domain_error_handler, request_validation_handler
from app.api.routers.health import router as health_router
from app.api.routers.pricing import router as pricing_router
from app.api.routers.reservations import router as reservations_router
from app.api.routers.vehicles import router as vehicles_router
from app.config import get_settings
from app.domain.errors import DomainError
from app.infrastructure.db.tables import metadata
from app.infrastructure.seed import seed_sql

settings = get_settings()

# Configure structured logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not settings.use_in_memory:
        async with engine.begin() as conn:
            await conn.run_sync(metadata.create_all)
            if settings.seed_demo_data:
                inserted = await seed_sql(conn)
                logger.info("Demo fleet seeded", extra={"inserted": inserted})
    yield
    await engine.dispose()

app = FastAPI(
    title="Vehicle Reservations API",
    version="0.1.0",
    lifespan=lifespan
)

app.add_exception_handler(DomainError, domain_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_handler)


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
        }
    )

    return JSONResponse(
        status_code=500,
        content={
            "error": "INTERNAL_ERROR",
            "error_id": error_id,
            "message": "An unexpected error occurred. Please contact support with the error_id if the issue persists."
        }
    )


app.include_router(health_router, tags=["Health"])
app.include_router(reservations_router, prefix="/api/v1", tags=["Reservations"])
app.include_router(vehicles_router, prefix="/api/v1", tags=["Vehicles"])
app.include_router(pricing_router, prefix="/api/v1", tags=["Pricing"])
