from datetime import datetime, timezone
from typing import Any
from sqlalchemy import Engine, delete, select, update
from sqlalchemy.orm import sessionmaker

from src.tasks.schemas import Task, TaskUpdate
from src.tasks.store.base import TaskStore
from src.tasks.store.postgres.model import TaskModel


def as_utc(value: datetime) -> datetime:
    # SQLite drops the offset, Postgres returns values in the session time zone
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_task(row: TaskModel) -> Task:
    return Task(
        id=row.id,
        title=row.title,
        description=row.description,
        due_date=row.due_date,
        completed=row.completed,
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
    )


class PostgresTaskStore(TaskStore):
    def __init__(self, engine: Engine):
        self.engine = engine
        self.Session = sessionmaker(bind=self.engine)

    def task_exists(self, task_id: str) -> bool:
        with self.Session() as session:
            return session.get(TaskModel, task_id) is not None

    def create_task(self, task: Task) -> Task:
        with self.Session() as session:
            session.add(
                TaskModel(
                    id=task.id,
                    title=task.title,
                    description=task.description,
                    due_date=task.due_date,
                    completed=task.completed,
                    created_at=task.created_at,
                    updated_at=task.updated_at,
                )
            )
            session.commit()
        return task

    def get_task(self, task_id: str) -> Task | None:
        with self.Session() as session:
            row = session.get(TaskModel, task_id)
            if row is None:
                return None
            return to_task(row)

    def update_task(self, task_id: str, updates: TaskUpdate) -> Task | None:
        values: dict[str, Any] = updates.model_dump(exclude_none=True)

        with self.Session() as session:
            # Single conditional statement, the row count tells whether the task still exists
            result = session.execute(
                update(TaskModel).where(TaskModel.id == task_id).values(**values)
            )
            if result.rowcount == 0:
                session.rollback()
                return None
            session.commit()

            row = session.get(TaskModel, task_id)
            if row is None:
                return None
            return to_task(row)

    def delete_task(self, task_id: str) -> bool:
        with self.Session() as session:
            result = session.execute(delete(TaskModel).where(TaskModel.id == task_id))
            session.commit()
            return result.rowcount == 1

    def list_tasks(self) -> list[Task]:
        with self.Session() as session:
            rows = session.scalars(select(TaskModel)).all()
            return [to_task(row) for row in rows]
