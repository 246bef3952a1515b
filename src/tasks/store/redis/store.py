from datetime import datetime
from typing import TypedDict

from src.common.redis import RedisClient
from src.tasks.schemas import Task, TaskUpdate
from src.tasks.store.base import TaskStore

# HSET only when the hash still exists, so a concurrent delete is never resurrected
# as a partial record. Returns the merged hash as a flat field/value list, or nil.
UPDATE_IF_EXISTS_SCRIPT = """
if redis.call('EXISTS', KEYS[1]) == 0 then
    return nil
end
redis.call('HSET', KEYS[1], unpack(ARGV))
return redis.call('HGETALL', KEYS[1])
"""


class TaskMapping(TypedDict, total=False):
    id: str
    title: str
    description: str
    dueDate: str
    completed: str
    createdAt: str
    updatedAt: str


def serialize_bool(value: bool) -> str:
    return "true" if value else "false"


def serialize_task(task: Task) -> TaskMapping:
    mapping: TaskMapping = {
        "id": task.id,
        "title": task.title,
        "completed": serialize_bool(task.completed),
        "createdAt": task.created_at.isoformat(),
        "updatedAt": task.updated_at.isoformat(),
    }

    if task.description is not None:
        mapping["description"] = task.description

    if task.due_date is not None:
        mapping["dueDate"] = task.due_date

    return mapping


def deserialize_task(data: dict[str, str]) -> Task:
    return Task(
        id=data["id"],
        title=data["title"],
        description=data.get("description"),
        due_date=data.get("dueDate"),
        completed=data["completed"] == "true",
        created_at=datetime.fromisoformat(data["createdAt"]),
        updated_at=datetime.fromisoformat(data["updatedAt"]),
    )


class RedisTaskStore(TaskStore):
    def __init__(self, *, redis_client: RedisClient, key_prefix: str):
        self.client = redis_client
        self.key_prefix = key_prefix
        self.update_script = self.client.register_script(UPDATE_IF_EXISTS_SCRIPT)

    def _get_task_key(self, task_id: str) -> str:
        return f"{self.key_prefix}:{task_id}"

    def task_exists(self, task_id: str) -> bool:
        return self.client.exists(self._get_task_key(task_id)) == 1

    def create_task(self, task: Task) -> Task:
        self.client.hset(
            self._get_task_key(task.id),
            mapping=serialize_task(task),  # type: ignore
        )
        return task

    def get_task(self, task_id: str) -> Task | None:
        data = self.client.hgetall(self._get_task_key(task_id))
        if not data:
            return None
        return deserialize_task(data)

    def update_task(self, task_id: str, updates: TaskUpdate) -> Task | None:
        update_mapping: TaskMapping = {"updatedAt": updates.updated_at.isoformat()}

        if updates.title is not None:
            update_mapping["title"] = updates.title

        if updates.description is not None:
            update_mapping["description"] = updates.description

        if updates.due_date is not None:
            update_mapping["dueDate"] = updates.due_date

        if updates.completed is not None:
            update_mapping["completed"] = serialize_bool(updates.completed)

        args = [item for pair in update_mapping.items() for item in pair]
        result = self.update_script(keys=[self._get_task_key(task_id)], args=args)

        if not result:
            return None

        return deserialize_task(dict(zip(result[::2], result[1::2])))

    def delete_task(self, task_id: str) -> bool:
        return self.client.delete(self._get_task_key(task_id)) == 1

    def list_tasks(self) -> list[Task]:
        tasks: list[Task] = []
        for key in self.client.scan_iter(match=f"{self.key_prefix}:*"):
            data = self.client.hgetall(key)
            # Deleted between SCAN and HGETALL
            if data:
                tasks.append(deserialize_task(data))
        return tasks
