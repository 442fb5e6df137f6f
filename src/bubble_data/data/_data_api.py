# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Low-level Data API client: URL shaping, request dispatch, response decoding.

This module is internal. Use :class:`~bubble_data.client.BubbleDataClient`.
"""

from __future__ import annotations

import json
import logging
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union
from urllib.parse import quote

import requests

from ..core._auth import _AuthManager
from ..core._error_codes import (
    VALIDATION_BULK_LINE_INVALID,
    VALIDATION_ID_REQUIRED,
    VALIDATION_LIMIT_INVALID,
    VALIDATION_RESPONSE_ENVELOPE,
    VALIDATION_TYPE_REQUIRED,
)
from ..core._http import _HttpClient
from ..core.config import BubbleConfig
from ..core.errors import HttpError, UnsupportedContentTypeError, ValidationError
from ..core.telemetry import create_telemetry_manager
from ..models.constraints import Constraint, to_wire
from ..models.page import PageResult

logger = logging.getLogger(__name__)

_BODY_EXCERPT_LIMIT = 200
_DEFAULT_LIMIT = 100


class ContentType(str, Enum):
    """Request/response encodings understood by the Data API."""

    JSON = "application/json"
    TEXT = "text/plain"


class _DataApiClient:
    """Data API client: things CRUD and cursor pagination."""

    def __init__(
        self,
        auth: _AuthManager,
        base_url: str,
        config: Optional[BubbleConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.auth = auth
        self.base_url = base_url
        self.config = config or BubbleConfig()
        self._http = _HttpClient(
            retries=self.config.http_retries,
            backoff=self.config.http_backoff,
            timeout=self.config.http_timeout,
            session=session,
        )
        self._telemetry = create_telemetry_manager(self.config.telemetry)

    def close(self) -> None:
        self._http.close()

    # ----------------------------- plumbing -----------------------------
    def _headers(self, content_type: ContentType) -> Dict[str, str]:
        """Build request headers with bearer auth."""
        return {
            "Content-Type": content_type.value,
            "Authorization": self.auth._acquire_token().header_value,
        }

    def _thing_url(self, thing_type: str, *segments: str) -> str:
        parts = ["obj", thing_type, *segments]
        return (self.base_url or "").rstrip("/") + "/" + "/".join(quote(str(p), safe="") for p in parts)

    @staticmethod
    def _require_type(thing_type: Optional[str]) -> str:
        if not thing_type or not isinstance(thing_type, str) or not thing_type.strip():
            raise ValidationError("type is required", subcode=VALIDATION_TYPE_REQUIRED)
        return thing_type

    @staticmethod
    def _page_window(limit: Optional[int], cursor: Optional[int]) -> Tuple[int, int]:
        """Apply list defaults and reject windows that cannot advance."""
        limit = _DEFAULT_LIMIT if limit is None else limit
        cursor = 0 if cursor is None else cursor
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise ValidationError(
                f"limit must be a positive integer, got {limit!r}",
                subcode=VALIDATION_LIMIT_INVALID,
                details={"limit": limit},
            )
        if isinstance(cursor, bool) or not isinstance(cursor, int) or cursor < 0:
            raise ValidationError(
                f"cursor must be a non-negative integer, got {cursor!r}",
                subcode=VALIDATION_LIMIT_INVALID,
                details={"cursor": cursor},
            )
        return limit, cursor

    @staticmethod
    def _coerce_content_type(content_type: Union[ContentType, str]) -> ContentType:
        try:
            return ContentType(content_type)
        except ValueError:
            raise UnsupportedContentTypeError(content_type) from None

    def _request(
        self,
        method: str,
        url: str,
        *,
        content_type: Union[ContentType, str] = ContentType.JSON,
        data: Any = None,
        operation: str = "request",
        thing_type: Optional[str] = None,
    ) -> Any:
        """
        Send one request and decode the response.

        JSON requests serialize ``data`` with :func:`json.dumps`; TEXT requests
        send ``data`` as-is. JSON responses decode to a dict (``{}`` for 204 or an
        empty body), TEXT responses to the raw string.

        :raises UnsupportedContentTypeError: If ``content_type`` is neither JSON nor TEXT.
        :raises HttpError: On any non-2xx status.
        """
        ctype = self._coerce_content_type(content_type)
        body: Optional[str] = None
        if data is not None:
            body = json.dumps(data) if ctype is ContentType.JSON else str(data)

        with self._telemetry.trace_request(operation, method.upper(), url, thing_type) as ctx:
            r = self._http._request(method, url, headers=self._headers(ctype), data=body)
            error = None if 200 <= r.status_code < 300 else self._http_error(r, url)
            self._telemetry.record_response(
                ctx, r.status_code, len(getattr(r, "content", None) or b""), error=error
            )

        if error is not None:
            raise error

        if ctype is ContentType.TEXT:
            return r.text
        if r.status_code == 204 or not r.text:
            return {}
        try:
            return r.json()
        except ValueError as exc:
            raise ValidationError(
                "Response body is not valid JSON",
                subcode=VALIDATION_RESPONSE_ENVELOPE,
                details={"url": url, "body_excerpt": r.text[:_BODY_EXCERPT_LIMIT]},
            ) from exc

    @staticmethod
    def _http_error(r: requests.Response, url: str) -> HttpError:
        status_text = getattr(r, "reason", None) or None
        final_url = getattr(r, "url", None) or url
        retry_after: Optional[int] = None
        ra = (r.headers or {}).get("Retry-After")
        if ra is not None:
            try:
                retry_after = int(ra)
            except (TypeError, ValueError):
                retry_after = None
        excerpt = (r.text or "")[:_BODY_EXCERPT_LIMIT] or None
        return HttpError(
            f"HTTP error: {r.status_code}, {status_text}, {final_url}",
            status_code=r.status_code,
            status_text=status_text,
            url=final_url,
            body_excerpt=excerpt,
            retry_after=retry_after,
        )

    # ------------------------------ list --------------------------------
    def _list_page(
        self,
        thing_type: str,
        constraints: Iterable[Constraint],
        limit: int,
        cursor: int,
    ) -> PageResult:
        """Fetch one page: ``GET /obj/{type}?limit=&cursor=&constraints=``."""
        encoded = quote(json.dumps(to_wire(constraints)), safe="")
        url = f"{self._thing_url(thing_type)}?limit={limit}&cursor={cursor}&constraints={encoded}"
        body = self._request("get", url, operation="things.list", thing_type=thing_type)
        inner = body.get("response") if isinstance(body, dict) else None
        if not isinstance(inner, dict):
            raise ValidationError(
                "List response is missing the 'response' envelope",
                subcode=VALIDATION_RESPONSE_ENVELOPE,
                details={"url": url},
            )
        return PageResult.from_response(inner)

    def _iter_pages(
        self,
        thing_type: str,
        constraints: Sequence[Constraint] = (),
        limit: Optional[int] = 100,
        cursor: Optional[int] = 0,
    ) -> Iterator[PageResult]:
        """Yield pages until the server reports nothing remaining.

        Each next cursor is ``cursor + limit``. Pages are fetched lazily, one
        round trip per ``next()``.
        """
        thing_type = self._require_type(thing_type)
        limit, cursor = self._page_window(limit, cursor)
        constraints = list(constraints or ())
        while True:
            page = self._list_page(thing_type, constraints, limit, cursor)
            yield page
            if page.remaining <= 0:
                return
            cursor += limit

    def _list(
        self,
        thing_type: str,
        constraints: Sequence[Constraint] = (),
        limit: Optional[int] = 100,
        cursor: Optional[int] = 0,
        fetch_all: bool = False,
    ) -> PageResult:
        thing_type = self._require_type(thing_type)
        limit, cursor = self._page_window(limit, cursor)
        merged: Optional[PageResult] = None
        max_pages = self.config.max_pages
        for page_number, page in enumerate(self._iter_pages(thing_type, constraints, limit, cursor), start=1):
            if merged is None:
                merged = page
            else:
                merged.extend(page)
            if not fetch_all:
                break
            if max_pages is not None and page_number >= max_pages and page.remaining > 0:
                logger.warning(
                    "Stopped listing %s after %d pages with %d records remaining",
                    thing_type,
                    page_number,
                    page.remaining,
                )
                break
        return merged if merged is not None else PageResult(cursor=cursor)

    # ---------------------------- mutations -----------------------------
    def _create(self, thing_type: str, data: Mapping[str, Any]) -> Dict[str, Any]:
        thing_type = self._require_type(thing_type)
        url = self._thing_url(thing_type)
        return self._request("post", url, data=dict(data), operation="things.create", thing_type=thing_type)

    def _create_bulk(self, thing_type: str, things: Sequence[Mapping[str, Any]]) -> List[Dict[str, Any]]:
        """Bulk-create from newline-delimited JSON; one result line per input line."""
        thing_type = self._require_type(thing_type)
        things = list(things)
        if not things:
            return []
        url = self._thing_url(thing_type, "bulk")
        payload = "\n".join(json.dumps(dict(t)) for t in things)
        text = self._request(
            "post",
            url,
            content_type=ContentType.TEXT,
            data=payload,
            operation="things.create_bulk",
            thing_type=thing_type,
        )
        results: List[Dict[str, Any]] = []
        for index, line in enumerate(text.rstrip("\r\n").split("\n")):
            try:
                results.append(json.loads(line))
            except ValueError as exc:
                raise ValidationError(
                    f"Bulk response line {index} is not valid JSON",
                    subcode=VALIDATION_BULK_LINE_INVALID,
                    details={"line": index, "body_excerpt": line[:_BODY_EXCERPT_LIMIT]},
                ) from exc
        return results

    def _update(self, thing_type: str, thing_id: str, data: Mapping[str, Any]) -> Dict[str, Any]:
        thing_type = self._require_type(thing_type)
        if not thing_id:
            raise ValidationError("id is required", subcode=VALIDATION_ID_REQUIRED)
        url = self._thing_url(thing_type, thing_id)
        return self._request("put", url, data=dict(data), operation="things.update", thing_type=thing_type)
