from .errors import (
    EncodingFailure,
    NoResultFailure,
    PipelineError,
    TimeoutFailure,
    TransportFailure,
    ValidationFailure,
)
from .pipeline import Pipeline

__all__ = [
    "Pipeline",
    "PipelineError",
    "TransportFailure",
    "NoResultFailure",
    "ValidationFailure",
    "EncodingFailure",
    "TimeoutFailure",
]
