"""
Paginated collections of typed records

A collection holds one server page. Filtering returns a new collection that
keeps the original page's pagination metadata unchanged; it describes the
server page, not the filtered subset.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping
from typing import Any, ClassVar, Generic, TypeVar, overload

from zoomkit.enums import MeetingType, ParticipantStatus
from zoomkit.models import Meeting, Participant, Registrant, User
from zoomkit.pagination import PaginationEnvelope

T = TypeVar("T")
R = TypeVar("R")

logger = logging.getLogger(__name__)


class PagedCollection(Generic[T]):
    """Ordered, immutable page of records plus its pagination envelope"""

    # Key under which list endpoints nest the records, e.g. "meetings"
    items_key: ClassVar[str] = "items"
    record_type: ClassVar[Any] = None

    def __init__(self, items: Any = (), pagination: PaginationEnvelope | None = None):
        self._items: tuple[T, ...] = tuple(items)
        self.pagination = pagination

    @classmethod
    def from_api(
        cls,
        payload: Any,
        pagination: PaginationEnvelope | None = None,
    ) -> Any:
        """
        Build a collection from a list response.

        Args:
            payload: Either a bare list of records or an object holding the
                list under ``items_key``
            pagination: Envelope extracted from the same response

        Entries that are not JSON objects are skipped.
        """
        if isinstance(payload, Mapping) and cls.items_key in payload:
            raw_items = payload[cls.items_key]
        else:
            raw_items = payload

        items = []
        if isinstance(raw_items, list):
            record_type = cls.record_type
            for entry in raw_items:
                if not isinstance(entry, Mapping):
                    logger.debug("Skipping malformed %s entry: %r", cls.items_key, entry)
                    continue
                items.append(record_type.from_api(entry) if record_type is not None else entry)
        return cls(items, pagination)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(count={len(self._items)}, pagination={self.pagination!r})"

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> PagedCollection[T]: ...

    def __getitem__(self, index: int | slice) -> Any:
        if isinstance(index, slice):
            return self._derive(self._items[index])
        return self._items[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PagedCollection):
            return NotImplemented
        return self._items == other._items and self.pagination == other.pagination

    __hash__ = None  # type: ignore[assignment]

    def _derive(self, items: Any) -> Any:
        return type(self)(items, self.pagination)

    def all(self) -> list[T]:
        return list(self._items)

    def first(self) -> T | None:
        return self._items[0] if self._items else None

    def last(self) -> T | None:
        return self._items[-1] if self._items else None

    def is_empty(self) -> bool:
        return not self._items

    def is_not_empty(self) -> bool:
        return bool(self._items)

    def count(self) -> int:
        return len(self._items)

    def filter(self, predicate: Callable[[T], bool]) -> Any:
        """Return a new collection of matching items, same pagination"""
        return self._derive(item for item in self._items if predicate(item))

    def map(self, fn: Callable[[T], R]) -> list[R]:
        return [fn(item) for item in self._items]

    @property
    def next_page_token(self) -> str | None:
        return self.pagination.next_page_token if self.pagination is not None else None

    def has_more_pages(self) -> bool:
        return bool(self.next_page_token)

    def pagination_info(self) -> dict[str, Any]:
        """All five pagination fields, None where the server omitted them"""
        envelope = self.pagination or PaginationEnvelope()
        return {
            "page_count": envelope.page_count,
            "page_number": envelope.page_number,
            "page_size": envelope.page_size,
            "total_records": envelope.total_records,
            "next_page_token": envelope.next_page_token,
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            self.items_key: [
                item.to_dict() if hasattr(item, "to_dict") else item for item in self._items
            ],
            "pagination": self.pagination_info(),
        }


class MeetingCollection(PagedCollection[Meeting]):
    items_key = "meetings"
    record_type = Meeting

    def by_type(self, meeting_type: MeetingType) -> MeetingCollection:
        return self.filter(lambda m: m.type is meeting_type)

    def scheduled(self) -> MeetingCollection:
        return self.filter(lambda m: m.is_scheduled)

    def recurring(self) -> MeetingCollection:
        return self.filter(lambda m: m.is_recurring)

    def upcoming(self) -> MeetingCollection:
        return self.filter(lambda m: not m.has_started())

    def past(self) -> MeetingCollection:
        return self.filter(lambda m: m.has_ended())

    def in_progress(self) -> MeetingCollection:
        return self.filter(lambda m: m.is_in_progress())


class UserCollection(PagedCollection[User]):
    items_key = "users"
    record_type = User


class ParticipantCollection(PagedCollection[Participant]):
    items_key = "participants"
    record_type = Participant

    def still_in_meeting(self) -> ParticipantCollection:
        return self.filter(lambda p: p.is_in_meeting)

    def left(self) -> ParticipantCollection:
        return self.filter(lambda p: p.has_left)

    def with_in_meeting_status(self) -> ParticipantCollection:
        return self.filter(lambda p: p.has_in_meeting_status)

    def in_waiting_room(self) -> ParticipantCollection:
        return self.filter(lambda p: p.is_in_waiting_room)

    def by_status(self, status: ParticipantStatus) -> ParticipantCollection:
        return self.filter(lambda p: p.status is status)

    def in_breakout_rooms(self) -> ParticipantCollection:
        return self.filter(lambda p: p.is_in_breakout_room)

    def with_failover(self) -> ParticipantCollection:
        return self.filter(lambda p: p.failover is True)

    def total_duration(self) -> int:
        """Sum of participant durations in seconds"""
        return sum(p.duration or 0 for p in self)

    def average_duration(self) -> float:
        if self.is_empty():
            return 0.0
        return self.total_duration() / len(self)

    def longest_duration(self) -> Participant | None:
        if self.is_empty():
            return None
        return max(self, key=lambda p: p.duration or 0)

    def shortest_duration(self) -> Participant | None:
        if self.is_empty():
            return None
        # Unknown durations sort last
        return min(self, key=lambda p: p.duration if p.duration is not None else float("inf"))


class RegistrantCollection(PagedCollection[Registrant]):
    items_key = "registrants"
    record_type = Registrant

    def approved(self) -> RegistrantCollection:
        return self.filter(lambda r: r.is_approved)

    def denied(self) -> RegistrantCollection:
        return self.filter(lambda r: r.is_denied)

    def pending(self) -> RegistrantCollection:
        return self.filter(lambda r: r.is_pending)


def iter_pages(
    fetch: Callable[[str | None], PagedCollection[T]],
    max_pages: int | None = None,
) -> Iterator[PagedCollection[T]]:
    """
    Yield successive pages until the server stops returning a cursor.

    Args:
        fetch: Called with the previous page's ``next_page_token`` (None for
            the first page) and returns the next page
        max_pages: Optional upper bound on the number of pages fetched
    """
    token: str | None = None
    fetched = 0
    seen: set[str] = set()
    while max_pages is None or fetched < max_pages:
        page = fetch(token)
        fetched += 1
        yield page
        token = page.next_page_token
        if not token:
            return
        if token in seen:
            logger.warning("Zoom returned a repeated next_page_token; stopping pagination")
            return
        seen.add(token)
