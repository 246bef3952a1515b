from fastapi import Depends
from sqlalchemy import Engine

from src.common.database import get_database_engine
from src.common.redis import get_redis_client, RedisClient
from src.config import Settings, get_settings
from src.tasks.store.base import TaskStore
from src.tasks.store.backend import get_task_store_backend


def get_task_store(
    redis_client: RedisClient | None = Depends(get_redis_client),
    database_engine: Engine | None = Depends(get_database_engine),
    settings: Settings = Depends(get_settings),
) -> TaskStore:
    return get_task_store_backend(redis_client, database_engine, settings)
