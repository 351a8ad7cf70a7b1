"""Failure kinds surfaced by adapters, the compositor and the pipeline."""

from __future__ import annotations


class PipelineError(Exception):
    kind = "error"

    def __init__(self, message: str, *, provider: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.provider = provider

    def __str__(self) -> str:
        if self.provider:
            return f"[{self.provider}] {self.message}"
        return self.message

    def to_payload(self) -> dict[str, str | None]:
        return {"detail": self.message, "kind": self.kind, "provider": self.provider}


class TransportFailure(PipelineError):
    """Provider unreachable or answered with a non-success status."""

    kind = "transport"


class NoResultFailure(PipelineError):
    """Call succeeded but the response had no usable data."""

    kind = "no_result"


class ValidationFailure(PipelineError):
    """Caller input violates a precondition; no outbound call was made."""

    kind = "validation"


class EncodingFailure(PipelineError):
    kind = "encoding"


class TimeoutFailure(PipelineError):
    kind = "timeout"
