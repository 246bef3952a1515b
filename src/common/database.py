from fastapi import Request
from sqlalchemy import Engine, create_engine

from src.tasks.store.postgres.model import Base


def create_database_engine(database_url: str) -> Engine:
    engine = create_engine(database_url, pool_pre_ping=True)
    Base.metadata.create_all(engine)
    return engine


def get_database_engine(request: Request) -> Engine | None:
    return getattr(request.app.state, "database_engine", None)
