# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class _TokenPair:
    scheme: str
    access_token: str

    @property
    def header_value(self) -> str:
        return f"{self.scheme} {self.access_token}"


class _AuthManager:
    """API-key authentication helper for the Data API.

    The key is stored as given; an invalid key surfaces as a 401 from the server.
    """

    def __init__(self, api_key: str) -> None:
        self._api_key = api_key

    def _acquire_token(self) -> _TokenPair:
        return _TokenPair(scheme="Bearer", access_token=self._api_key)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(api_key=***)"
