"""
Cursor pagination envelope returned by Zoom list endpoints
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any

PAGINATION_FIELDS = (
    "page_count",
    "page_number",
    "page_size",
    "total_records",
    "next_page_token",
)


@dataclass(frozen=True)
class PaginationEnvelope:
    """Page position and continuation cursor of one server page"""

    page_count: int | None = None
    page_number: int | None = None
    page_size: int | None = None
    total_records: int | None = None
    next_page_token: str | None = None

    @classmethod
    def from_body(cls, body: Any) -> PaginationEnvelope | None:
        """
        Read the envelope off the top level of a response body.

        Returns None when the body is not an object or carries none of
        the pagination fields. Fields that are present but null count
        as absent.
        """
        if not isinstance(body, dict):
            return None
        values = {name: body[name] for name in PAGINATION_FIELDS if body.get(name) is not None}
        if not values:
            return None
        return cls(**values)

    @property
    def has_more_pages(self) -> bool:
        return bool(self.next_page_token)

    def to_dict(self) -> dict[str, Any]:
        """Return only the fields that were present"""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }
