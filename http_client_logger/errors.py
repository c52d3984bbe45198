"""
Error types for the HTTP client logging pipeline.

The logging stages are transparent to transport faults: anything raised by
the downstream send propagates unchanged. Only misuse of the stages or the
pipeline (missing request, bad options, non-callable stage) raises one of
the errors below.
"""

from typing import Any, Optional


class HttpLoggingError(Exception):
    """Base class for errors raised by the logging pipeline itself."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequestError(HttpLoggingError, ValueError):
    """A stage was invoked without a request."""

    def __init__(self, stage: Optional[str] = None):
        message = "request must not be None"
        if stage:
            message = f"{stage}: {message}"
        super().__init__(message)
        self.stage = stage


class InvalidOptionsError(HttpLoggingError, ValueError):
    """Logging options failed validation."""

    def __init__(self, field: str, value: Any, reason: str):
        super().__init__(f"Invalid logging option {field}={value!r}: {reason}")
        self.field = field
        self.value = value


class InvalidStageError(HttpLoggingError, TypeError):
    """Something that is not an async stage was added to a pipeline."""

    def __init__(self, stage: Any):
        super().__init__(f"Pipeline stage must be callable, got {type(stage).__name__}")
        self.stage = stage
