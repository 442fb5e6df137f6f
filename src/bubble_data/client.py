# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence

import pandas as pd
import requests

from .core._auth import _AuthManager
from .core.config import BubbleConfig
from .data._data_api import _DataApiClient
from .models.constraints import Constraint
from .models.page import PageResult
from .utils._pandas import dataframe_to_records


class BubbleDataClient:
    """
    High-level client for a Bubble app's Data API.

    Every request targets ``{base_url}/obj/{type}[...]`` and carries
    ``Authorization: Bearer {api_key}``. HTTP calls are delegated to an internal
    :class:`~bubble_data.data._data_api._DataApiClient`, created lazily on first use.

    **Context Manager Support (Recommended)**:
        Using the client as a context manager enables connection pooling and
        releases the session on exit::

            with BubbleDataClient(base_url, api_key) as client:
                page = client.list_things("Article", fetch_all=True)

    **Without Context Manager**::

            client = BubbleDataClient(base_url, api_key)
            try:
                client.create_thing("Article", {"title": "Hello"})
            finally:
                client.close()

    :param base_url: Data API root, for example ``"https://yourapp.bubbleapps.io/api/1.1"``.
        Stored as given and not validated; trailing slashes are ignored when joining paths.
    :type base_url: :class:`str`
    :param api_key: API token of the Bubble app.
    :type api_key: :class:`str`
    :param config: Optional configuration for timeouts, retries, page budget and logging.
    :type config: ~bubble_data.core.config.BubbleConfig or None

    Example:
        Filter, then update::

            from bubble_data import BubbleDataClient, ConstraintsBuilder

            client = BubbleDataClient("https://yourapp.bubbleapps.io/api/1.1", "your_api_key")
            constraints = ConstraintsBuilder().add_constraint("title", "equals", "Article 1").build()
            page = client.list_things("Article", constraints, fetch_all=True)
            client.update_thing("Article", page[0]["_id"], {"title": "Updated Title"})
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        config: Optional[BubbleConfig] = None,
    ) -> None:
        self.auth = _AuthManager(api_key)
        self._base_url = base_url
        self._config = config or BubbleConfig()
        self._api: Optional[_DataApiClient] = None
        self._session: Optional[requests.Session] = None
        self._owns_session: bool = False

    @classmethod
    def from_env(cls) -> "BubbleDataClient":
        """
        Build a client from ``BUBBLE_DATA_URL`` / ``BUBBLE_API_KEY`` and related variables.

        :rtype: BubbleDataClient
        """
        config = BubbleConfig.from_env()
        return cls(config.base_url, config.api_key, config)

    def __enter__(self) -> "BubbleDataClient":
        """
        Enter the context manager.

        Creates an HTTP session for connection pooling. All operations within
        the context reuse this session.

        :return: The client instance.
        :rtype: BubbleDataClient
        """
        if self._session is None:
            self._session = requests.Session()
            self._owns_session = True
            # An API client built before entering holds no session; rebuild it on next use.
            if self._api is not None:
                self._api.close()
                self._api = None
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """
        Close the client and release resources.

        Safe to call multiple times.
        """
        if self._api is not None:
            self._api.close()
            self._api = None
        if self._session is not None and self._owns_session:
            self._session.close()
            self._session = None
            self._owns_session = False

    def _get_api(self) -> _DataApiClient:
        """
        Get or create the internal Data API client.

        When a session exists (from the context manager) it is passed down for
        connection pooling.

        :rtype: ~bubble_data.data._data_api._DataApiClient
        """
        if self._api is None:
            self._api = _DataApiClient(
                self.auth,
                self._base_url,
                self._config,
                session=self._session,
            )
        return self._api

    # ------------------------------- list -------------------------------
    def list_things(
        self,
        type: str,
        constraints: Sequence[Constraint] = (),
        limit: Optional[int] = 100,
        cursor: Optional[int] = 0,
        fetch_all: bool = False,
    ) -> PageResult:
        """
        List things of a type, optionally following every page.

        :param type: Data type name, e.g. ``"Article"``.
        :type type: :class:`str`
        :param constraints: Constraints from :class:`~bubble_data.models.constraints.ConstraintsBuilder`
            (or raw constraint dicts), applied in order.
        :param limit: Page size, at least 1. ``None`` means 100.
        :type limit: :class:`int` or None
        :param cursor: Zero-based offset of the first record. ``None`` means 0.
        :type cursor: :class:`int` or None
        :param fetch_all: Keep fetching at ``cursor + limit`` until ``remaining`` reaches 0.
        :type fetch_all: :class:`bool`
        :return: One page, or all pages merged in order. ``remaining`` is the
            last page's value.
        :rtype: ~bubble_data.models.page.PageResult

        :raises ~bubble_data.core.errors.ValidationError: If ``type`` is empty, or ``limit``/``cursor``
            cannot advance through pages; no request is sent.
        :raises ~bubble_data.core.errors.HttpError: If any page request fails. Pages
            already fetched are discarded.
        """
        return self._get_api()._list(type, constraints, limit=limit, cursor=cursor, fetch_all=fetch_all)

    def iter_pages(
        self,
        type: str,
        constraints: Sequence[Constraint] = (),
        limit: Optional[int] = 100,
        cursor: Optional[int] = 0,
    ) -> Iterator[PageResult]:
        """
        Lazily yield one :class:`~bubble_data.models.page.PageResult` per request.

        Iteration ends after the page whose ``remaining`` is 0.

        Example::

            for page in client.iter_pages("Article", limit=50):
                for thing in page:
                    print(thing["_id"])
        """
        api = self._get_api()
        api._require_type(type)
        api._page_window(limit, cursor)
        return api._iter_pages(type, constraints, limit=limit, cursor=cursor)

    def list_things_dataframe(
        self,
        type: str,
        constraints: Sequence[Constraint] = (),
        limit: Optional[int] = 100,
        cursor: Optional[int] = 0,
        fetch_all: bool = True,
    ) -> pd.DataFrame:
        """
        List things into a :class:`pandas.DataFrame`, one row per thing.

        Columns are the union of field names; missing fields are NaN.
        """
        page = self.list_things(type, constraints, limit=limit, cursor=cursor, fetch_all=fetch_all)
        return pd.DataFrame.from_records(page.results)

    # ----------------------------- mutations ----------------------------
    def create_thing(self, type: str, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Create one thing.

        :return: Decoded response, e.g. ``{"status": "success", "id": "..."}``.
        :rtype: :class:`dict`
        """
        return self._get_api()._create(type, data)

    def create_bulk_things(self, type: str, things: Sequence[Mapping[str, Any]]) -> List[Dict[str, Any]]:
        """
        Create many things in one request.

        The request body is newline-delimited JSON (``text/plain``), one line per
        thing. The response carries one JSON line per input, in input order.

        :return: One result per input thing, index for index.
        :rtype: :class:`list` of :class:`dict`

        :raises ~bubble_data.core.errors.ValidationError: If a response line is not valid JSON.
        """
        return self._get_api()._create_bulk(type, things)

    def create_bulk_things_dataframe(
        self,
        type: str,
        df: pd.DataFrame,
        na_as_null: bool = False,
    ) -> List[Dict[str, Any]]:
        """
        Bulk-create one thing per DataFrame row.

        :param na_as_null: When False (default), missing values are omitted from
            each record; when True they are sent as null.
        """
        if not isinstance(df, pd.DataFrame):
            raise TypeError("df must be a pandas DataFrame")
        return self.create_bulk_things(type, dataframe_to_records(df, na_as_null=na_as_null))

    def update_thing(self, type: str, id: str, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Modify fields of one thing.

        :return: Decoded response, or ``{}`` when the server answers 204 No Content.
        :rtype: :class:`dict`
        """
        return self._get_api()._update(type, id, data)


__all__ = ["BubbleDataClient"]
