from abc import ABC, abstractmethod

from src.tasks.schemas import Task, TaskUpdate


class TaskStore(ABC):
    @abstractmethod
    def task_exists(self, task_id: str) -> bool:
        pass

    @abstractmethod
    def create_task(self, task: Task) -> Task:
        pass

    @abstractmethod
    def get_task(self, task_id: str) -> Task | None:
        pass

    @abstractmethod
    def update_task(self, task_id: str, updates: TaskUpdate) -> Task | None:
        """Apply the non-null fields of ``updates`` only if the task still exists.

        Returns the merged task, or None when there was nothing to update.
        """
        pass

    @abstractmethod
    def delete_task(self, task_id: str) -> bool:
        pass

    @abstractmethod
    def list_tasks(self) -> list[Task]:
        pass
