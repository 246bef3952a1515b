from contextlib import contextmanager
from datetime import timedelta
import logging
from typing import Iterator
from uuid import uuid4
from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError

from src.common.current_datetime import get_current_datetime
from src.common.exceptions import StorageOperation, TaskStorageException
from src.tasks.schemas import (
    CreateTaskRequest,
    Task,
    TaskUpdate,
    UpdateTaskRequest,
)
from src.tasks.store.base import TaskStore

logger = logging.getLogger(__name__)

STORAGE_ERRORS = (RedisError, SQLAlchemyError)


@contextmanager
def storage_operation(
    operation: StorageOperation, task_id: str | None = None, resource: str = "task"
) -> Iterator[None]:
    try:
        yield
    except STORAGE_ERRORS as e:
        logger.exception(
            "Failed to %s %s (task_id=%s)", operation.value, resource, task_id
        )
        raise TaskStorageException(operation, resource) from e


def strip_or_none(value: str | None) -> str | None:
    return value.strip() if value is not None else None


class TaskService:
    def __init__(self, task_store: TaskStore):
        self.task_store = task_store

    def list_tasks(self) -> list[Task]:
        with storage_operation(StorageOperation.FETCH, resource="tasks"):
            tasks = self.task_store.list_tasks()

        tasks.sort(key=lambda task: task.created_at, reverse=True)
        logger.info("Fetched %d tasks", len(tasks))
        return tasks

    def get_task(self, task_id: str) -> Task | None:
        with storage_operation(StorageOperation.FETCH, task_id):
            task = self.task_store.get_task(task_id)

        if task is None:
            logger.info("Task '%s' not found", task_id)
        return task

    def create_task(self, task_input: CreateTaskRequest) -> Task:
        timestamp = get_current_datetime()
        task = Task(
            id=str(uuid4()),
            title=task_input.title.strip(),
            description=strip_or_none(task_input.description),
            due_date=strip_or_none(task_input.due_date),
            completed=False,
            created_at=timestamp,
            updated_at=timestamp,
        )

        with storage_operation(StorageOperation.CREATE, task.id):
            created_task = self.task_store.create_task(task)

        logger.info("Created task '%s'", created_task.id)
        return created_task

    def update_task(self, task_id: str, task_input: UpdateTaskRequest) -> Task | None:
        with storage_operation(StorageOperation.UPDATE, task_id):
            existing_task = self.task_store.get_task(task_id)
            if existing_task is None:
                logger.info("Task '%s' not found, skipping update", task_id)
                return None

            timestamp = get_current_datetime()
            if timestamp <= existing_task.updated_at:
                timestamp = existing_task.updated_at + timedelta(microseconds=1)

            updates = TaskUpdate(
                updated_at=timestamp,
                title=strip_or_none(task_input.title),
                description=strip_or_none(task_input.description),
                due_date=strip_or_none(task_input.due_date),
                completed=task_input.completed,
            )

            updated_task = self.task_store.update_task(task_id, updates)

        if updated_task is None:
            # Deleted between the existence check and the conditional write
            logger.warning("Task '%s' disappeared before it could be updated", task_id)
            return None

        logger.info(
            "Updated task '%s' fields: %s",
            task_id,
            sorted(task_input.model_fields_set),
        )
        return updated_task

    def delete_task(self, task_id: str) -> bool:
        with storage_operation(StorageOperation.DELETE, task_id):
            if not self.task_store.task_exists(task_id):
                logger.info("Task '%s' not found, skipping delete", task_id)
                return False

            deleted = self.task_store.delete_task(task_id)

        if deleted:
            logger.info("Deleted task '%s'", task_id)
        return deleted
