# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Python client for the Bubble Data API.

Provides :class:`BubbleDataClient` for listing, creating, bulk-creating and
updating things, and :class:`ConstraintsBuilder` for search constraints.
"""

from .client import BubbleDataClient
from .core.config import BubbleConfig
from .core.errors import BubbleError, HttpError, UnsupportedContentTypeError, ValidationError
from .core.telemetry import TelemetryConfig
from .models.constraints import ConstraintType, ConstraintsBuilder, FieldConstraint, SortConstraint
from .models.page import PageResult

__version__ = "0.1.0"

__all__ = [
    "BubbleDataClient",
    "BubbleConfig",
    "BubbleError",
    "HttpError",
    "UnsupportedContentTypeError",
    "ValidationError",
    "TelemetryConfig",
    "ConstraintType",
    "ConstraintsBuilder",
    "FieldConstraint",
    "SortConstraint",
    "PageResult",
]
