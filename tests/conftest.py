from datetime import datetime, timezone
from typing import Generator
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.config import Settings, get_settings
from src.main import app as main_app
from src.tasks.schemas import Task
from src.tasks.store.base import TaskStore
from src.tasks.store.dependencies import get_task_store
from tests.fakes import InMemoryTaskStore

TEST_TIMESTAMP = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(ENVIRONMENT="test", TASK_STORE_BACKEND="redis")


@pytest.fixture
def task_store() -> TaskStore:
    return InMemoryTaskStore()


@pytest.fixture
def sample_task() -> Task:
    return Task(
        id="task-1",
        title="Buy milk",
        description="Two litres",
        due_date="2024-01-31",
        completed=False,
        created_at=TEST_TIMESTAMP,
        updated_at=TEST_TIMESTAMP,
    )


@pytest.fixture
def test_app(
    test_settings: Settings, task_store: TaskStore
) -> Generator[FastAPI, None, None]:
    main_app.dependency_overrides[get_settings] = lambda: test_settings
    main_app.dependency_overrides[get_task_store] = lambda: task_store
    yield main_app
    main_app.dependency_overrides.clear()


@pytest.fixture
def test_client(test_app: FastAPI) -> Generator[TestClient, None, None]:
    with TestClient(test_app) as client:
        yield client
