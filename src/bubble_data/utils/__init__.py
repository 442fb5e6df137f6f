# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Utilities and adapters for the Bubble Data API client.

This module contains the pandas helpers used by the DataFrame conveniences.
"""

__all__ = []
