from enum import Enum
import logging
from typing import Any, Sequence
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

INVALID_INPUT_MESSAGE = "Invalid input"


class ResourceType(str, Enum):
    TASK = "Task"


class StorageOperation(str, Enum):
    FETCH = "fetch"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


# Exceptions
class ResourceNotFoundException(Exception):
    def __init__(self, resource_type: ResourceType, identifier: str):
        self.resource_type = resource_type.value
        self.identifier = identifier
        super().__init__(f"{self.resource_type} '{identifier}' not found")


class TaskStorageException(Exception):
    def __init__(self, operation: StorageOperation, resource: str = "task"):
        self.operation = operation
        super().__init__(f"Failed to {operation.value} {resource}")


class TaskValidationException(Exception):
    def __init__(self, errors: list[dict[str, Any]], message: str = INVALID_INPUT_MESSAGE):
        self.errors = errors
        super().__init__(message)


def loc_to_dot_sep(loc: Sequence[Any]) -> str:
    """Convert a tuple of location parts to a dot-separated string"""
    path = ""
    for i, x in enumerate(loc):
        if isinstance(x, str):
            if i > 0:
                path += "."
            path += x
        elif isinstance(x, int):
            path += f"[{x}]"
        else:
            raise TypeError("Unexpected type")
    return path


def format_validation_errors(errors: Sequence[Any]) -> list[dict[str, Any]]:
    # ctx and input are dropped, they can hold values that are not JSON serializable
    return [
        {
            "loc": loc_to_dot_sep(error["loc"]),
            "msg": error["msg"],
            "type": error["type"],
        }
        for error in errors
    ]


# Exception handlers
def error_content(message: str, **extra: Any) -> dict[str, Any]:
    return {"success": False, "error": message, **extra}


def resource_not_found_handler(request: Request, exc: ResourceNotFoundException):
    logger.info(exc)
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=error_content(f"{exc.resource_type} not found"),
    )


def task_storage_exception_handler(request: Request, exc: TaskStorageException):
    # The underlying driver error was already logged by the service
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_content(str(exc)),
    )


def http_exception_handler(request: Request, exc: StarletteHTTPException):
    message = (
        "Endpoint not found"
        if exc.status_code == status.HTTP_404_NOT_FOUND
        else str(exc.detail)
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_content(message),
        headers=getattr(exc, "headers", None),
    )


def unexpected_exception_handler(request: Request, exc: Exception):
    # sys.exc_info() is empty here when the error came from a threadpool endpoint
    logger.error(
        "Unhandled error on %s %s (request_id=%s)",
        request.method,
        request.url.path,
        getattr(request.state, "request_id", None),
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_content("Internal server error"),
    )


def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = format_validation_errors(exc.errors())
    logger.info(
        "Rejected invalid input on %s %s: %s",
        request.method,
        request.url.path,
        errors,
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_content(INVALID_INPUT_MESSAGE, errors=errors),
    )


# Response definitions for OpenAPI documentation
ResponseDict = dict[int | str, dict[str, Any]]


def resource_not_found_response(
    resource_type: ResourceType,
) -> ResponseDict:
    return {
        404: {
            "description": f"{resource_type.value} not found",
            "content": {
                "application/json": {
                    "example": error_content(f"{resource_type.value} not found")
                }
            },
        }
    }


def storage_error_response(operation: StorageOperation) -> ResponseDict:
    return {
        500: {
            "description": f"Storage failure during {operation.value}",
            "content": {
                "application/json": {
                    "example": error_content(f"Failed to {operation.value} task")
                }
            },
        }
    }


invalid_input_response: ResponseDict = {
    400: {
        "description": "Invalid input",
        "content": {
            "application/json": {
                "example": error_content(
                    INVALID_INPUT_MESSAGE,
                    errors=[
                        {
                            "loc": "title",
                            "msg": "Value error, title must be a non-empty string",
                            "type": "value_error",
                        }
                    ],
                )
            }
        },
    }
}
