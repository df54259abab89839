"""
Enumerations for coded Zoom API fields
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class MeetingType(int, Enum):
    INSTANT = 1
    SCHEDULED = 2
    RECURRING_NO_FIXED_TIME = 3
    RECURRING_FIXED_TIME = 8

    @property
    def label(self) -> str:
        return {
            MeetingType.INSTANT: "Instant Meeting",
            MeetingType.SCHEDULED: "Scheduled Meeting",
            MeetingType.RECURRING_NO_FIXED_TIME: "Recurring Meeting with no fixed time",
            MeetingType.RECURRING_FIXED_TIME: "Recurring Meeting with fixed time",
        }[self]

    @property
    def is_recurring(self) -> bool:
        return self in (MeetingType.RECURRING_NO_FIXED_TIME, MeetingType.RECURRING_FIXED_TIME)

    @property
    def is_scheduled(self) -> bool:
        return self is MeetingType.SCHEDULED

    @property
    def is_instant(self) -> bool:
        return self is MeetingType.INSTANT

    @classmethod
    def parse(cls, value: Any) -> MeetingType | None:
        """Return the member for ``value``, or None if unknown"""
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            return None


class UserType(int, Enum):
    BASIC = 1
    LICENSED = 2
    ON_PREM = 3
    NONE = 99

    @property
    def label(self) -> str:
        return {
            UserType.BASIC: "Basic",
            UserType.LICENSED: "Licensed",
            UserType.ON_PREM: "On-Prem",
            UserType.NONE: "None",
        }[self]

    @classmethod
    def parse(cls, value: Any) -> UserType | None:
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            return None


class ParticipantStatus(str, Enum):
    IN_MEETING = "in_meeting"
    IN_WAITING_ROOM = "in_waiting_room"

    @property
    def label(self) -> str:
        if self is ParticipantStatus.IN_MEETING:
            return "In Meeting"
        return "In Waiting Room"

    @classmethod
    def parse(cls, value: Any) -> ParticipantStatus | None:
        if value is None:
            return None
        try:
            return cls(str(value))
        except ValueError:
            return None
