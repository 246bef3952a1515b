from datetime import datetime
from typing import Any
from pydantic import (
    BaseModel,
    ConfigDict,
    StrictBool,
    StrictStr,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def accepted_keys(cls) -> set[str]:
        keys: set[str] = set()
        for name, field in cls.model_fields.items():
            keys.add(name)
            if field.alias:
                keys.add(field.alias)
        return keys


class Task(CamelModel):
    id: str
    title: str
    description: str | None = None
    due_date: str | None = None
    completed: bool = False
    created_at: datetime
    updated_at: datetime


class TaskInput(CamelModel):
    @model_validator(mode="before")
    @classmethod
    def reject_null_fields(cls, data: Any) -> Any:
        if isinstance(data, dict):
            accepted = cls.accepted_keys()
            for key, value in data.items():
                if key in accepted and value is None:
                    raise ValueError(f"'{key}' must not be null")
        return data

    @field_validator("title", check_fields=False)
    @classmethod
    def validate_title(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            raise ValueError("title must be a non-empty string")
        return value


class CreateTaskRequest(TaskInput):
    title: StrictStr
    description: StrictStr | None = None
    due_date: StrictStr | None = None


class UpdateTaskRequest(TaskInput):
    title: StrictStr | None = None
    description: StrictStr | None = None
    due_date: StrictStr | None = None
    completed: StrictBool | None = None

    @model_validator(mode="after")
    def require_one_field(self):
        if not self.model_fields_set:
            raise ValueError(
                "Provide at least one field to update (title, description, dueDate, or completed)"
            )
        return self


class TaskUpdate(BaseModel):
    updated_at: datetime
    title: str | None = None
    description: str | None = None
    due_date: str | None = None
    completed: bool | None = None


class TaskResponse(BaseModel):
    success: bool = True
    data: Task


class TaskListResponse(BaseModel):
    success: bool = True
    data: list[Task]
    count: int


class MessageResponse(BaseModel):
    success: bool = True
    message: str
