# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
HTTP host exposing :class:`~bubble_data.client.BubbleDataClient` operations.

Run with ``python -m bubble_data.host`` or ``uvicorn bubble_data.host.app:app``.
"""

__all__ = []
