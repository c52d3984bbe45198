"""
Logging Options

Configuration snapshot shared by both logging stages of a pipeline.
Built once when the pipeline is assembled and only read afterwards.
"""

from dataclasses import dataclass, replace
from typing import Callable, Optional

from .config import Settings, get_settings
from .errors import InvalidOptionsError

DEFAULT_SLOW_REQUEST_THRESHOLD_MS = 2000


@dataclass
class LoggingOptions:
    """Which optional artifacts are logged and when a request counts as slow."""

    log_request_header: bool = False
    log_request_body: bool = False
    log_response_header: bool = False
    log_response_body: bool = False

    # Milliseconds; elapsed >= threshold is logged as too slow
    slow_request_logging_threshold: int = DEFAULT_SLOW_REQUEST_THRESHOLD_MS

    @classmethod
    def from_settings(cls, settings: Settings) -> "LoggingOptions":
        return cls(
            log_request_header=settings.http_log_request_header,
            log_request_body=settings.http_log_request_body,
            log_response_header=settings.http_log_response_header,
            log_response_body=settings.http_log_response_body,
            slow_request_logging_threshold=settings.http_slow_request_threshold_ms,
        )

    def validate(self) -> "LoggingOptions":
        threshold = self.slow_request_logging_threshold
        if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
            raise InvalidOptionsError(
                "slow_request_logging_threshold", threshold, "must be a number of milliseconds"
            )
        if threshold < 0:
            raise InvalidOptionsError(
                "slow_request_logging_threshold", threshold, "must not be negative"
            )
        return self

    def is_slow(self, elapsed_ms: float) -> bool:
        return elapsed_ms >= self.slow_request_logging_threshold


# Callback invoked with the ambient settings and the options to mutate
ConfigureOptions = Callable[[Settings, LoggingOptions], None]


def resolve_options(
    options: Optional[LoggingOptions] = None,
    configure: Optional[ConfigureOptions] = None,
    settings: Optional[Settings] = None,
) -> LoggingOptions:
    """Build the options for one pipeline.

    Explicit ``options`` win over settings; ``configure`` runs last and may
    adjust either. The result is a private copy, so later changes to the
    caller's instance do not reach a built pipeline.
    """
    if settings is None:
        settings = get_settings()

    if options is not None:
        resolved = replace(options)
    else:
        resolved = LoggingOptions.from_settings(settings)
    if configure is not None:
        configure(settings, resolved)
    return resolved.validate()
