# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Core infrastructure components for the Bubble Data API client.

This module contains configuration, error types, and telemetry.
"""

from .config import BubbleConfig
from .errors import BubbleError, HttpError, UnsupportedContentTypeError, ValidationError
from .telemetry import TelemetryConfig, TelemetryHook

__all__ = [
    "BubbleConfig",
    "BubbleError",
    "HttpError",
    "UnsupportedContentTypeError",
    "ValidationError",
    "TelemetryConfig",
    "TelemetryHook",
]
