# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Structured error types for the Bubble Data API client.

Every error raised by the client derives from :class:`BubbleError` and can be
serialized with :meth:`BubbleError.to_dict` for transport across service
boundaries (for example by the host application).
"""

from __future__ import annotations

import datetime as _dt
from typing import Any, Dict, Optional

from ._error_codes import TRANSIENT_STATUS_CODES, http_subcode


class BubbleError(Exception):
    """Base structured error for the Bubble Data API client."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        subcode: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        source: Optional[str] = None,
        is_transient: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.subcode = subcode
        self.status_code = status_code
        self.details = details or {}
        self.source = source or "client"
        self.is_transient = is_transient
        self.timestamp = _dt.datetime.now(_dt.timezone.utc).isoformat().replace("+00:00", "Z")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "subcode": self.subcode,
            "status_code": self.status_code,
            "details": self.details,
            "source": self.source,
            "is_transient": self.is_transient,
            "timestamp": self.timestamp,
        }

    def __repr__(self) -> str:  # pragma: no cover
        return f"{self.__class__.__name__}(code={self.code!r}, subcode={self.subcode!r}, message={self.message!r})"


class ValidationError(BubbleError):
    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="validation_error", subcode=subcode, details=details, source="client")


class UnsupportedContentTypeError(BubbleError):
    """Raised when a request is dispatched with a content type the client cannot encode."""

    def __init__(self, content_type: Any):
        super().__init__(
            f"Unsupported content type: {content_type}",
            code="unsupported_content_type",
            details={"content_type": str(content_type)},
            source="client",
        )
        self.content_type = content_type


class HttpError(BubbleError):
    """
    Non-success HTTP response from the Data API.

    :param status_code: HTTP status code of the response.
    :type status_code: :class:`int`
    :param status_text: Reason phrase returned with the status line.
    :type status_text: :class:`str` | None
    :param url: Final URL of the failed request.
    :type url: :class:`str` | None
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        status_text: Optional[str] = None,
        url: Optional[str] = None,
        is_transient: Optional[bool] = None,
        body_excerpt: Optional[str] = None,
        retry_after: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        d = details or {}
        d["status_text"] = status_text
        d["url"] = url
        if body_excerpt is not None:
            d["body_excerpt"] = body_excerpt
        if retry_after is not None:
            d["retry_after"] = retry_after
        if is_transient is None:
            is_transient = status_code in TRANSIENT_STATUS_CODES
        super().__init__(
            message,
            code="http_error",
            subcode=http_subcode(status_code),
            status_code=status_code,
            details=d,
            source="server",
            is_transient=is_transient,
        )
        self.status_text = status_text
        self.url = url


__all__ = ["BubbleError", "HttpError", "ValidationError", "UnsupportedContentTypeError"]
