import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.common.database import create_database_engine
from src.common.exceptions import (
    ResourceNotFoundException,
    TaskStorageException,
    http_exception_handler,
    resource_not_found_handler,
    task_storage_exception_handler,
    unexpected_exception_handler,
    validation_exception_handler,
)
from src.common.redis import create_redis_client
from src.common.request_logging import request_logging_middleware
from src.config import get_settings
from src.healthcheck.router import router as health_router
from src.tasks.router import router as tasks_router

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.redis_client = None
    app.state.database_engine = None

    if settings.TASK_STORE_BACKEND == "redis":
        app.state.redis_client = create_redis_client(settings.REDIS_URL)
    elif settings.TASK_STORE_BACKEND == "postgres":
        app.state.database_engine = create_database_engine(settings.POSTGRES_URL)

    logger.info(
        "Started %s (environment=%s, task store=%s)",
        settings.API_NAME,
        settings.ENVIRONMENT,
        settings.TASK_STORE_BACKEND,
    )
    yield

    if app.state.redis_client is not None:
        app.state.redis_client.close()
    if app.state.database_engine is not None:
        app.state.database_engine.dispose()


app = FastAPI(
    title=settings.API_NAME,
    summary=settings.API_SUMMARY,
    lifespan=lifespan,
    version=settings.API_VERSION,
)

if settings.CORS_ENABLED:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.middleware("http")(request_logging_middleware)

app.exception_handler(RequestValidationError)(validation_exception_handler)
app.exception_handler(ResourceNotFoundException)(resource_not_found_handler)
app.exception_handler(TaskStorageException)(task_storage_exception_handler)
app.exception_handler(StarletteHTTPException)(http_exception_handler)
app.exception_handler(Exception)(unexpected_exception_handler)


app.include_router(health_router)
app.include_router(tasks_router)
