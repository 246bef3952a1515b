import json
import logging
import pytest
from fastapi import Request

from src.common.exceptions import (
    ResourceNotFoundException,
    ResourceType,
    StorageOperation,
    TaskStorageException,
    loc_to_dot_sep,
    resource_not_found_handler,
    task_storage_exception_handler,
    unexpected_exception_handler,
)


def make_request() -> Request:
    return Request({"type": "http", "method": "GET", "path": "/tasks", "headers": []})


def test_resource_not_found_exception() -> None:
    exc = ResourceNotFoundException(ResourceType.TASK, "task-1")

    assert exc.resource_type == "Task"
    assert exc.identifier == "task-1"
    assert str(exc) == "Task 'task-1' not found"


def test_resource_not_found_handler_hides_identifier() -> None:
    response = resource_not_found_handler(
        make_request(), ResourceNotFoundException(ResourceType.TASK, "task-1")
    )

    assert response.status_code == 404
    assert json.loads(response.body) == {"success": False, "error": "Task not found"}


def test_task_storage_exception_messages() -> None:
    assert str(TaskStorageException(StorageOperation.FETCH, "tasks")) == (
        "Failed to fetch tasks"
    )
    assert str(TaskStorageException(StorageOperation.UPDATE)) == "Failed to update task"


def test_task_storage_exception_handler() -> None:
    response = task_storage_exception_handler(
        make_request(), TaskStorageException(StorageOperation.DELETE)
    )

    assert response.status_code == 500
    assert json.loads(response.body) == {
        "success": False,
        "error": "Failed to delete task",
    }


def test_loc_to_dot_sep() -> None:
    assert loc_to_dot_sep(("body", "title")) == "body.title"
    assert loc_to_dot_sep(("body", "items", 0, "name")) == "body.items[0].name"
    assert loc_to_dot_sep(()) == ""


def test_unexpected_exception_handler_logs_traceback(
    caplog: pytest.LogCaptureFixture,
) -> None:
    request = make_request()
    request.state.request_id = "req-abc"
    exc = RuntimeError("boom")

    with caplog.at_level(logging.ERROR):
        response = unexpected_exception_handler(request, exc)

    assert response.status_code == 500
    assert json.loads(response.body) == {
        "success": False,
        "error": "Internal server error",
    }
    assert "req-abc" in caplog.records[0].getMessage()
    assert caplog.records[0].exc_info is not None
    assert caplog.records[0].exc_info[1] is exc
