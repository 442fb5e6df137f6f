# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Telemetry infrastructure for the Bubble Data API client.

Provides request logging with an extensible hook system for custom
telemetry providers.
"""

from __future__ import annotations

import logging
import time
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import (
    Any,
    Dict,
    Generator,
    List,
    Optional,
    Protocol,
    Union,
    runtime_checkable,
)


@dataclass(frozen=True)
class TelemetryConfig:
    """Configuration for client telemetry.

    Telemetry is opt-in. When enabled, every Data API round trip is logged
    through the standard :mod:`logging` module and dispatched to any hooks.

    Example:
        Request logging::

            config = BubbleConfig(
                telemetry=TelemetryConfig(enable_logging=True, log_level="DEBUG")
            )

        Custom hook::

            config = BubbleConfig(
                telemetry=TelemetryConfig(hooks=[MyCustomTelemetryHook()])
            )
    """

    enable_logging: bool = False

    # Logging configuration
    log_level: str = "WARNING"
    logger_name: str = "bubble_data"

    # Custom hooks
    hooks: List["TelemetryHook"] = field(default_factory=list)


@dataclass
class RequestContext:
    """Context passed to telemetry hooks for each HTTP request."""

    client_request_id: str

    # Request details
    method: str  # GET, POST, PUT
    url: str
    operation: str  # e.g., "things.list", "things.create_bulk"
    thing_type: Optional[str] = None

    start_time: float = field(default_factory=time.perf_counter)

    # Custom data bag for hooks to share state
    custom_data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ResponseContext:
    """Response information passed to telemetry hooks."""

    status_code: int
    duration_ms: float
    response_size: Optional[int] = None
    error: Optional[Exception] = None


@runtime_checkable
class TelemetryHook(Protocol):
    """Protocol for custom telemetry hooks.

    All methods are optional - implement only what you need.

    Example:
        class StatsdHook:
            def __init__(self, statsd):
                self.statsd = statsd

            def on_request_end(self, request: RequestContext, response: ResponseContext):
                self.statsd.timing(
                    f"bubble.{request.operation}.duration",
                    response.duration_ms
                )
    """

    def on_request_start(self, context: RequestContext) -> None:
        """Called before each HTTP request is sent."""
        ...

    def on_request_end(self, request: RequestContext, response: ResponseContext) -> None:
        """Called after each HTTP request completes."""
        ...

    def on_request_error(self, request: RequestContext, error: Exception) -> None:
        """Called when the request raises."""
        ...


class TelemetryManager:
    """Manages telemetry instrumentation for the client.

    This class is internal and not part of the public API.
    """

    def __init__(self, config: Optional[TelemetryConfig] = None) -> None:
        self._config = config or TelemetryConfig()
        self._logger: Optional[logging.Logger] = None
        self._hooks = list(self._config.hooks)

        if self._config.enable_logging:
            self._logger = logging.getLogger(self._config.logger_name)
            self._logger.setLevel(self._config.log_level.upper())

    @contextmanager
    def trace_request(
        self,
        operation: str,
        method: str,
        url: str,
        thing_type: Optional[str] = None,
    ) -> Generator[RequestContext, None, None]:
        """Create a request context.

        Usage:
            with telemetry.trace_request("things.create", "POST", url, "Article") as ctx:
                response = self._http._request(...)
                telemetry.record_response(ctx, response.status_code)
        """
        ctx = RequestContext(
            client_request_id=str(uuid.uuid4()),
            method=method,
            url=url,
            operation=operation,
            thing_type=thing_type,
        )
        self._dispatch_request_start(ctx)
        try:
            yield ctx
        except Exception as e:
            if self._logger:
                self._logger.warning(
                    f"{operation} {method} failed: {e}",
                    extra={"client_request_id": ctx.client_request_id},
                )
            self._dispatch_request_error(ctx, e)
            raise

    def record_response(
        self,
        ctx: RequestContext,
        status_code: int,
        response_size: Optional[int] = None,
        error: Optional[Exception] = None,
    ) -> None:
        """Log the response and dispatch to hooks.

        ``error`` is the exception the caller is about to raise for this
        response, if any (for example an :class:`~bubble_data.core.errors.HttpError`).
        """
        duration_ms = (time.perf_counter() - ctx.start_time) * 1000

        response = ResponseContext(
            status_code=status_code,
            duration_ms=duration_ms,
            response_size=response_size,
            error=error,
        )

        if self._logger:
            level = logging.WARNING if status_code >= 400 else logging.DEBUG
            self._logger.log(
                level,
                f"{ctx.operation} {ctx.method} {status_code} {duration_ms:.1f}ms",
                extra={
                    "client_request_id": ctx.client_request_id,
                    "thing_type": ctx.thing_type,
                },
            )

        self._dispatch_request_end(ctx, response)

    def _dispatch_request_start(self, ctx: RequestContext) -> None:
        for hook in self._hooks:
            if hasattr(hook, "on_request_start"):
                try:
                    hook.on_request_start(ctx)
                except Exception:
                    self._log_hook_failure(hook, "on_request_start")

    def _dispatch_request_end(self, request: RequestContext, response: ResponseContext) -> None:
        for hook in self._hooks:
            if hasattr(hook, "on_request_end"):
                try:
                    hook.on_request_end(request, response)
                except Exception:
                    self._log_hook_failure(hook, "on_request_end")

    def _dispatch_request_error(self, request: RequestContext, error: Exception) -> None:
        for hook in self._hooks:
            if hasattr(hook, "on_request_error"):
                try:
                    hook.on_request_error(request, error)
                except Exception:
                    self._log_hook_failure(hook, "on_request_error")

    def _log_hook_failure(self, hook: Any, method: str) -> None:
        # Hooks must never break requests
        if self._logger:
            self._logger.debug(f"Telemetry hook {type(hook).__name__}.{method} raised", exc_info=True)


class NoOpTelemetryManager:
    """No-op telemetry manager when telemetry is disabled."""

    @contextmanager
    def trace_request(
        self,
        operation: str,
        method: str,
        url: str,
        thing_type: Optional[str] = None,
    ) -> Generator[RequestContext, None, None]:
        yield RequestContext(
            client_request_id=str(uuid.uuid4()),
            method=method,
            url=url,
            operation=operation,
            thing_type=thing_type,
        )

    def record_response(self, *args: Any, **kwargs: Any) -> None:
        pass


def create_telemetry_manager(
    config: Optional[TelemetryConfig],
) -> Union[TelemetryManager, NoOpTelemetryManager]:
    """Factory to create appropriate telemetry manager."""
    if config is None:
        return NoOpTelemetryManager()

    if not (config.enable_logging or config.hooks):
        return NoOpTelemetryManager()

    return TelemetryManager(config)


__all__ = [
    "TelemetryConfig",
    "TelemetryHook",
    "TelemetryManager",
    "NoOpTelemetryManager",
    "RequestContext",
    "ResponseContext",
    "create_telemetry_manager",
]
