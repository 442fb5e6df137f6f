# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Optional

from .telemetry import TelemetryConfig


def _env_int(name: str) -> Optional[int]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"Environment variable '{name}' must be an integer, got {raw!r}.") from None


def _env_float(name: str) -> Optional[float]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"Environment variable '{name}' must be a number, got {raw!r}.") from None


def _env_log_level(name: str) -> Optional[str]:
    raw = os.getenv(name, "").strip().upper()
    if not raw:
        return None
    if not isinstance(logging.getLevelName(raw), int):
        raise ValueError(f"Environment variable '{name}' must be a logging level name, got {raw!r}.")
    return raw


@dataclass(frozen=True)
class BubbleConfig:
    """
    Configuration settings for Bubble Data API client operations.

    :param base_url: Data API root, e.g. ``"https://yourapp.bubbleapps.io/api/1.1"``.
    :type base_url: str or None
    :param api_key: API token sent as ``Authorization: Bearer <api_key>``.
    :type api_key: str or None
    :param http_retries: Maximum number of attempts for network-level failures (default: 1, no retry).
    :type http_retries: int or None
    :param http_backoff: Base delay in seconds for exponential backoff between attempts (default: 0.5).
    :type http_backoff: float or None
    :param http_timeout: Request timeout in seconds (default: method-dependent).
    :type http_timeout: float or None
    :param max_pages: Upper bound on pages fetched by ``fetch_all`` listing (default: unbounded).
    :type max_pages: int or None
    :param telemetry: Request logging and hook configuration.
    :type telemetry: ~bubble_data.core.telemetry.TelemetryConfig
    """

    base_url: Optional[str] = None
    api_key: Optional[str] = None

    # HTTP configuration
    http_retries: Optional[int] = None
    http_backoff: Optional[float] = None
    http_timeout: Optional[float] = None

    max_pages: Optional[int] = None

    telemetry: TelemetryConfig = field(default_factory=TelemetryConfig)

    @classmethod
    def from_env(cls) -> "BubbleConfig":
        """
        Create a configuration instance from ``BUBBLE_*`` environment variables.

        Reads ``BUBBLE_DATA_URL``, ``BUBBLE_API_KEY``, ``BUBBLE_HTTP_TIMEOUT``,
        ``BUBBLE_HTTP_RETRIES``, ``BUBBLE_MAX_PAGES`` and ``BUBBLE_LOG_LEVEL``.
        Unset variables leave the corresponding default in place.

        :return: Configuration instance.
        :rtype: ~bubble_data.core.config.BubbleConfig
        :raises ValueError: If a numeric variable cannot be parsed or the log level is unknown.
        """
        log_level = _env_log_level("BUBBLE_LOG_LEVEL")
        telemetry = (
            TelemetryConfig(enable_logging=True, log_level=log_level)
            if log_level
            else TelemetryConfig()
        )
        return cls(
            base_url=os.getenv("BUBBLE_DATA_URL") or None,
            api_key=os.getenv("BUBBLE_API_KEY") or None,
            http_retries=_env_int("BUBBLE_HTTP_RETRIES"),
            http_backoff=None,  # Will default to 0.5 in _HttpClient
            http_timeout=_env_float("BUBBLE_HTTP_TIMEOUT"),
            max_pages=_env_int("BUBBLE_MAX_PAGES"),
            telemetry=telemetry,
        )
