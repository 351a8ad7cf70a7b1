from typing import Any

from fastapi import Request

from app.models import ErrorResponse
from services.pipeline import Pipeline

# Documented failure bodies; see the PipelineError handler in app.main.
ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    404: {"model": ErrorResponse, "description": "Upstream returned no usable result"},
    422: {"model": ErrorResponse, "description": "Unsupported input"},
    500: {"model": ErrorResponse, "description": "Video encoding failed"},
    502: {"model": ErrorResponse, "description": "Upstream provider failed"},
    504: {"model": ErrorResponse, "description": "Upstream or encoder timeout"},
}


def get_pipeline(request: Request) -> Pipeline:
    """Pipeline built in the app lifespan; tests override this dependency."""
    return request.app.state.pipeline
