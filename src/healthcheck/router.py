from typing import Any
from fastapi import APIRouter, Depends, status

from src.common.current_datetime import get_current_datetime
from src.config import Settings, get_settings

router = APIRouter()


@router.get(
    "/health",
    tags=["Healthcheck"],
    status_code=status.HTTP_200_OK,
    responses={
        200: {
            "description": "Healthcheck status",
            "content": {
                "application/json": {
                    "example": {
                        "status": "healthy",
                        "timestamp": "2024-01-01T12:00:00+00:00",
                        "environment": "development",
                    }
                }
            },
        },
    },
)
def healthcheck(settings: Settings = Depends(get_settings)) -> dict[str, Any]:
    return {
        "status": "healthy",
        "timestamp": get_current_datetime().isoformat(),
        "environment": settings.ENVIRONMENT,
    }
