# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Data models for the Bubble Data API client.

This module contains the constraint builder and list result types.
"""

from .constraints import (
    Constraint,
    ConstraintType,
    ConstraintsBuilder,
    FieldConstraint,
    SortConstraint,
)
from .page import PageResult

__all__ = [
    "Constraint",
    "ConstraintType",
    "ConstraintsBuilder",
    "FieldConstraint",
    "SortConstraint",
    "PageResult",
]
