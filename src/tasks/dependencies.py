from fastapi import Depends

from src.tasks.service import TaskService
from src.tasks.store.base import TaskStore
from src.tasks.store.dependencies import get_task_store


def get_task_service(
    task_store: TaskStore = Depends(get_task_store),
) -> TaskService:
    return TaskService(task_store=task_store)
