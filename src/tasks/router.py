from fastapi import APIRouter, Depends, status

from src.common.exceptions import (
    ResourceNotFoundException,
    ResourceType,
    StorageOperation,
    invalid_input_response,
    resource_not_found_response,
    storage_error_response,
)
from src.tasks.dependencies import get_task_service
from src.tasks.schemas import (
    CreateTaskRequest,
    MessageResponse,
    TaskListResponse,
    TaskResponse,
    UpdateTaskRequest,
)
from src.tasks.service import TaskService


router = APIRouter(
    prefix="/tasks",
    tags=["Tasks"],
)


@router.get(
    "",
    response_model_exclude_none=True,
    responses={**storage_error_response(StorageOperation.FETCH)},
)
def list_tasks(
    task_service: TaskService = Depends(get_task_service),
) -> TaskListResponse:
    tasks = task_service.list_tasks()
    return TaskListResponse(data=tasks, count=len(tasks))


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model_exclude_none=True,
    responses={
        **invalid_input_response,
        **storage_error_response(StorageOperation.CREATE),
    },
)
def create_task(
    task_input: CreateTaskRequest,
    task_service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    return TaskResponse(data=task_service.create_task(task_input))


@router.get(
    "/{task_id}",
    response_model_exclude_none=True,
    responses={
        **resource_not_found_response(ResourceType.TASK),
        **storage_error_response(StorageOperation.FETCH),
    },
)
def get_task(
    task_id: str, task_service: TaskService = Depends(get_task_service)
) -> TaskResponse:
    task = task_service.get_task(task_id)
    if task is None:
        raise ResourceNotFoundException(ResourceType.TASK, task_id)
    return TaskResponse(data=task)


@router.patch(
    "/{task_id}",
    response_model_exclude_none=True,
    responses={
        **invalid_input_response,
        **resource_not_found_response(ResourceType.TASK),
        **storage_error_response(StorageOperation.UPDATE),
    },
)
def update_task(
    task_id: str,
    task_input: UpdateTaskRequest,
    task_service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    task = task_service.update_task(task_id, task_input)
    if task is None:
        raise ResourceNotFoundException(ResourceType.TASK, task_id)
    return TaskResponse(data=task)


@router.delete(
    "/{task_id}",
    responses={
        **resource_not_found_response(ResourceType.TASK),
        **storage_error_response(StorageOperation.DELETE),
    },
)
def delete_task(
    task_id: str, task_service: TaskService = Depends(get_task_service)
) -> MessageResponse:
    if not task_service.delete_task(task_id):
        raise ResourceNotFoundException(ResourceType.TASK, task_id)
    return MessageResponse(message="Task deleted successfully")
