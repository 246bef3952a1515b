"""Parsing of untyped task payloads.

``parse_*`` functions turn arbitrary input (usually a decoded JSON body) into a
``CreateTaskRequest`` or ``UpdateTaskRequest``, raising ``TaskValidationException``
with field-level errors on rejection. The ``is_valid_*`` predicates answer the
membership question only.
"""

from typing import Any
from pydantic import ValidationError

from src.common.exceptions import TaskValidationException, format_validation_errors
from src.tasks.schemas import CreateTaskRequest, UpdateTaskRequest


def parse_create_task_input(data: Any) -> CreateTaskRequest:
    try:
        return CreateTaskRequest.model_validate(data)
    except ValidationError as e:
        raise TaskValidationException(format_validation_errors(e.errors())) from e


def parse_update_task_input(data: Any) -> UpdateTaskRequest:
    try:
        return UpdateTaskRequest.model_validate(data)
    except ValidationError as e:
        raise TaskValidationException(format_validation_errors(e.errors())) from e


def is_valid_create_task_input(data: Any) -> bool:
    try:
        parse_create_task_input(data)
    except TaskValidationException:
        return False
    return True


def is_valid_update_task_input(data: Any) -> bool:
    try:
        parse_update_task_input(data)
    except TaskValidationException:
        return False
    return True
