from typing import Any
import pytest

from src.common.exceptions import TaskValidationException
from src.tasks.schemas import CreateTaskRequest, UpdateTaskRequest
from src.tasks.validation import (
    is_valid_create_task_input,
    is_valid_update_task_input,
    parse_create_task_input,
    parse_update_task_input,
)


@pytest.mark.parametrize(
    "data",
    [
        {"title": "Buy groceries"},
        {"title": "Buy groceries", "description": "Milk, eggs, bread"},
        {"title": "Buy groceries", "dueDate": "2024-01-31"},
        {"title": "  padded  ", "description": "", "dueDate": "2024-01-31"},
        {"title": "Buy groceries", "unknown": 1},
    ],
)
def test_create_input_valid(data: dict[str, Any]) -> None:
    assert is_valid_create_task_input(data) is True


@pytest.mark.parametrize(
    "data",
    [
        None,
        [],
        "Buy groceries",
        {},
        {"description": "Some description"},
        {"title": ""},
        {"title": "   "},
        {"title": 123},
        {"title": None},
        {"title": "Valid title", "description": 123},
        {"title": "Valid title", "description": None},
        {"title": "Valid title", "dueDate": 20240131},
    ],
)
def test_create_input_invalid(data: Any) -> None:
    assert is_valid_create_task_input(data) is False


def test_parse_create_input_returns_model() -> None:
    result = parse_create_task_input(
        {"title": " Buy milk ", "description": "Two litres", "dueDate": "2024-01-31"}
    )

    assert isinstance(result, CreateTaskRequest)
    # Trimming is the service's job
    assert result.title == " Buy milk "
    assert result.description == "Two litres"
    assert result.due_date == "2024-01-31"


def test_parse_create_input_reports_field_errors() -> None:
    with pytest.raises(TaskValidationException) as exc:
        parse_create_task_input({"title": "   ", "description": 5})

    assert str(exc.value) == "Invalid input"
    locs = {error["loc"] for error in exc.value.errors}
    assert locs == {"title", "description"}
    assert all(set(error) == {"loc", "msg", "type"} for error in exc.value.errors)


@pytest.mark.parametrize(
    "data",
    [
        {"title": "Updated title"},
        {"description": "Updated description"},
        {"description": ""},
        {"dueDate": "2024-02-01"},
        {"completed": True},
        {"completed": False},
        {"title": "Updated title", "description": "Updated", "completed": True},
    ],
)
def test_update_input_valid(data: dict[str, Any]) -> None:
    assert is_valid_update_task_input(data) is True


@pytest.mark.parametrize(
    "data",
    [
        None,
        [],
        {},
        {"unknown": "field"},
        {"title": ""},
        {"title": "  "},
        {"title": 1},
        {"title": None},
        {"description": 1},
        {"dueDate": False},
        {"completed": "true"},
        {"completed": 1},
        {"completed": None},
    ],
)
def test_update_input_invalid(data: Any) -> None:
    assert is_valid_update_task_input(data) is False


def test_parse_update_input_tracks_provided_fields() -> None:
    result = parse_update_task_input({"completed": True})

    assert isinstance(result, UpdateTaskRequest)
    assert result.model_fields_set == {"completed"}
    assert result.title is None
    assert result.completed is True


def test_parse_update_input_empty_reports_error() -> None:
    with pytest.raises(TaskValidationException) as exc:
        parse_update_task_input({})

    assert len(exc.value.errors) == 1
    assert "at least one field" in exc.value.errors[0]["msg"]
