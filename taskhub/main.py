from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import InterfaceError, OperationalError

from taskhub.api.v1.api import api_router
from taskhub.core.config import settings
from taskhub.core.errors import UpstreamUnavailableError
from taskhub.core.logging import get_logger, setup_logging
from taskhub.db.session import init_db

setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting %s %s", settings.PROJECT_NAME, settings.VERSION)
    init_db()
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan,
)

# Set up CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(OperationalError)
@app.exception_handler(InterfaceError)
async def database_unavailable_handler(request: Request, exc: Exception):
    """Report an unreachable database as a retryable 503 instead of a generic 500."""
    logger.exception("Database unavailable during %s %s", request.method, request.url.path)
    error = UpstreamUnavailableError()
    return JSONResponse(status_code=error.status_code, content={"detail": error.detail})


# Include API routes
app.include_router(api_router, prefix=settings.API_V1_STR)
