# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Result type for list operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping


@dataclass
class PageResult:
    """
    One page, or several merged pages, of things returned by the list endpoint.

    :param results: Records in server order.
    :type results: :class:`list` of :class:`dict`
    :param remaining: Records left beyond this page at the given cursor/limit.
    :type remaining: :class:`int`
    :param cursor: Cursor of the first page included in ``results``.
    :type cursor: :class:`int`

    Example:
        Iterate the merged result::

            page = client.list_things("Article", fetch_all=True)
            for thing in page:
                print(thing["_id"])
    """

    results: List[Dict[str, Any]] = field(default_factory=list)
    remaining: int = 0
    cursor: int = 0

    @property
    def count(self) -> int:
        return len(self.results)

    @property
    def has_more(self) -> bool:
        return self.remaining > 0

    @classmethod
    def from_response(cls, body: Mapping[str, Any]) -> "PageResult":
        """Build a page from the unwrapped ``response`` object of a list call."""
        results = body.get("results") or []
        return cls(
            results=list(results),
            remaining=max(0, int(body.get("remaining") or 0)),
            cursor=int(body.get("cursor") or 0),
        )

    def extend(self, other: "PageResult") -> None:
        """Append the next page's results and adopt its ``remaining``."""
        self.results.extend(other.results)
        self.remaining = other.remaining

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cursor": self.cursor,
            "results": list(self.results),
            "count": self.count,
            "remaining": self.remaining,
        }

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        return iter(self.results)

    def __len__(self) -> int:
        return len(self.results)

    def __getitem__(self, index: int) -> Dict[str, Any]:
        return self.results[index]


__all__ = ["PageResult"]
