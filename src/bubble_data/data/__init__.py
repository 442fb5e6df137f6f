# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Data access layer for the Bubble Data API client.

This module contains request dispatch, response decoding and pagination.
"""

__all__ = []
