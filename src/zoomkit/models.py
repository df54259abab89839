"""Typed records mapped from Zoom API payloads.

Every record keeps the payload it was built from in ``raw`` so fields the
mapper does not model remain available.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any

from zoomkit.enums import MeetingType, ParticipantStatus, UserType

JsonMapping = Mapping[str, Any]


def _parse_datetime(value: Any) -> datetime | None:
    """Parse an ISO 8601 timestamp into a UTC datetime.

    Zoom emits ``YYYY-MM-DDTHH:MM:SSZ``; offsets are also accepted. Naive
    values are taken as UTC. Empty or unparseable values yield None.
    """
    if not value or not isinstance(value, str):
        return None
    normalised = value[:-1] + "+00:00" if value.endswith("Z") else value
    try:
        parsed = datetime.fromisoformat(normalised)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def _format_datetime(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _optional_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


def _now(now: datetime | None) -> datetime:
    return now if now is not None else datetime.now(UTC)


def _full_name(first_name: str | None, last_name: str | None, fallback: str) -> str:
    parts = [p for p in (first_name, last_name) if p]
    return " ".join(parts) or fallback


@dataclass(frozen=True)
class Meeting:
    """A scheduled, instant or recurring meeting"""

    id: int
    uuid: str
    host_id: str
    topic: str | None = None
    type: MeetingType | None = None
    agenda: str | None = None
    created_at: datetime | None = None
    duration: int | None = None
    start_time: datetime | None = None
    timezone: str | None = None
    join_url: str | None = None
    pmi: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_api(cls, payload: JsonMapping) -> Meeting:
        return cls(
            id=_optional_int(payload.get("id")) or 0,
            uuid=str(payload.get("uuid") or ""),
            host_id=str(payload.get("host_id") or ""),
            topic=_optional_str(payload.get("topic")),
            type=MeetingType.parse(payload.get("type")),
            agenda=_optional_str(payload.get("agenda")),
            created_at=_parse_datetime(payload.get("created_at")),
            duration=_optional_int(payload.get("duration")),
            start_time=_parse_datetime(payload.get("start_time")),
            timezone=_optional_str(payload.get("timezone")),
            join_url=_optional_str(payload.get("join_url")),
            pmi=_optional_str(payload.get("pmi")),
            raw=dict(payload),
        )

    @property
    def type_name(self) -> str:
        return self.type.label if self.type is not None else "Unknown"

    @property
    def is_recurring(self) -> bool:
        return self.type is not None and self.type.is_recurring

    @property
    def is_scheduled(self) -> bool:
        return self.type is not None and self.type.is_scheduled

    @property
    def is_instant(self) -> bool:
        return self.type is not None and self.type.is_instant

    @property
    def is_pmi(self) -> bool:
        return bool(self.pmi)

    @property
    def end_time(self) -> datetime | None:
        """Start time plus duration; None when either is unknown"""
        if self.start_time is None or not self.duration:
            return None
        try:
            return self.start_time + timedelta(minutes=self.duration)
        except OverflowError:
            return None

    def has_started(self, now: datetime | None = None) -> bool:
        if self.start_time is None:
            return False
        return self.start_time <= _now(now)

    def has_ended(self, now: datetime | None = None) -> bool:
        end_time = self.end_time
        if end_time is None:
            return False
        return end_time <= _now(now)

    def is_in_progress(self, now: datetime | None = None) -> bool:
        current = _now(now)
        return self.has_started(current) and not self.has_ended(current)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "uuid": self.uuid,
            "host_id": self.host_id,
            "topic": self.topic,
            "type": self.type.value if self.type is not None else None,
            "agenda": self.agenda,
            "created_at": _format_datetime(self.created_at),
            "duration": self.duration,
            "start_time": _format_datetime(self.start_time),
            "timezone": self.timezone,
            "join_url": self.join_url,
            "pmi": self.pmi,
        }


@dataclass(frozen=True)
class User:
    """A Zoom account user"""

    id: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    display_name: str | None = None
    type: UserType | None = None
    status: str | None = None
    pmi: int | None = None
    timezone: str | None = None
    verified: int | None = None
    user_created_at: datetime | None = None
    last_login_time: datetime | None = None
    language: str | None = None
    phone_number: str | None = None
    phone_country: str | None = None
    vanity_url: str | None = None
    personal_meeting_url: str | None = None
    pic_url: str | None = None
    host_key: str | None = None
    jid: str | None = None
    group_ids: tuple[str, ...] = ()
    division_ids: tuple[str, ...] = ()
    im_group_ids: tuple[str, ...] = ()
    account_id: str | None = None
    cmr_user_id: int | None = None
    dept: str | None = None
    job_title: str | None = None
    location: str | None = None
    role_id: str | None = None
    company: str | None = None
    use_pmi: bool | None = None
    cluster: str | None = None
    plan_united_type: str | None = None
    employee_unique_id: str | None = None
    last_client_version: str | None = None
    custom_attributes: tuple[dict[str, Any], ...] = ()
    license_info_list: tuple[dict[str, Any], ...] = ()
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_api(cls, payload: JsonMapping) -> User:
        created = payload.get("user_created_at") or payload.get("created_at")
        return cls(
            id=str(payload.get("id") or ""),
            email=str(payload.get("email") or ""),
            first_name=_optional_str(payload.get("first_name")),
            last_name=_optional_str(payload.get("last_name")),
            display_name=_optional_str(payload.get("display_name")),
            type=UserType.parse(payload.get("type")),
            status=_optional_str(payload.get("status")),
            pmi=_optional_int(payload.get("pmi")),
            timezone=_optional_str(payload.get("timezone")),
            verified=_optional_int(payload.get("verified")),
            user_created_at=_parse_datetime(created),
            last_login_time=_parse_datetime(payload.get("last_login_time")),
            language=_optional_str(payload.get("language")),
            phone_number=_optional_str(payload.get("phone_number")),
            phone_country=_optional_str(payload.get("phone_country")),
            vanity_url=_optional_str(payload.get("vanity_url")),
            personal_meeting_url=_optional_str(payload.get("personal_meeting_url")),
            pic_url=_optional_str(payload.get("pic_url")),
            host_key=_optional_str(payload.get("host_key")),
            jid=_optional_str(payload.get("jid")),
            group_ids=tuple(str(g) for g in payload.get("group_ids") or ()),
            division_ids=tuple(str(d) for d in payload.get("division_ids") or ()),
            im_group_ids=tuple(str(g) for g in payload.get("im_group_ids") or ()),
            account_id=_optional_str(payload.get("account_id")),
            cmr_user_id=_optional_int(payload.get("cmr_user_id")),
            dept=_optional_str(payload.get("dept")),
            job_title=_optional_str(payload.get("job_title")),
            location=_optional_str(payload.get("location")),
            role_id=_optional_str(payload.get("role_id")),
            company=_optional_str(payload.get("company")),
            use_pmi=payload.get("use_pmi"),
            cluster=_optional_str(payload.get("cluster")),
            plan_united_type=_optional_str(payload.get("plan_united_type")),
            employee_unique_id=_optional_str(payload.get("employee_unique_id")),
            last_client_version=_optional_str(payload.get("last_client_version")),
            custom_attributes=tuple(
                a for a in payload.get("custom_attributes") or () if isinstance(a, dict)
            ),
            license_info_list=tuple(
                lic for lic in payload.get("license_info_list") or () if isinstance(lic, dict)
            ),
            raw=dict(payload),
        )

    @property
    def full_name(self) -> str:
        """First and last name, falling back to the email address"""
        return _full_name(self.first_name, self.last_name, self.email)

    @property
    def type_name(self) -> str:
        return self.type.label if self.type is not None else "Unknown"

    @property
    def is_verified(self) -> bool:
        return self.verified == 1

    @property
    def is_active(self) -> bool:
        return self.status == "active"

    @property
    def is_licensed(self) -> bool:
        return self.type is UserType.LICENSED

    def custom_attribute(self, key_or_name: str) -> dict[str, Any] | None:
        for attribute in self.custom_attributes:
            if attribute.get("key") == key_or_name or attribute.get("name") == key_or_name:
                return attribute
        return None

    def custom_attribute_value(self, key_or_name: str) -> str | None:
        attribute = self.custom_attribute(key_or_name)
        if attribute is None:
            return None
        return _optional_str(attribute.get("value"))

    def has_license_type(self, license_type: str) -> bool:
        return license_type in self.license_types

    @property
    def license_types(self) -> list[str]:
        return [str(lic.get("license_type", "")) for lic in self.license_info_list]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "display_name": self.display_name,
            "type": self.type.value if self.type is not None else None,
            "status": self.status,
            "pmi": self.pmi,
            "timezone": self.timezone,
            "verified": self.verified,
            "user_created_at": _format_datetime(self.user_created_at),
            "last_login_time": _format_datetime(self.last_login_time),
            "language": self.language,
            "phone_number": self.phone_number,
            "phone_country": self.phone_country,
            "vanity_url": self.vanity_url,
            "personal_meeting_url": self.personal_meeting_url,
            "pic_url": self.pic_url,
            "host_key": self.host_key,
            "jid": self.jid,
            "group_ids": list(self.group_ids),
            "division_ids": list(self.division_ids),
            "im_group_ids": list(self.im_group_ids),
            "account_id": self.account_id,
            "cmr_user_id": self.cmr_user_id,
            "dept": self.dept,
            "job_title": self.job_title,
            "location": self.location,
            "role_id": self.role_id,
            "company": self.company,
            "use_pmi": self.use_pmi,
            "cluster": self.cluster,
            "plan_united_type": self.plan_united_type,
            "employee_unique_id": self.employee_unique_id,
            "last_client_version": self.last_client_version,
            "custom_attributes": list(self.custom_attributes),
            "license_info_list": list(self.license_info_list),
        }


@dataclass(frozen=True)
class Participant:
    """A meeting participant from a report or past-meeting listing.

    ``duration`` is in seconds, as reported by Zoom.
    """

    id: str
    user_id: str | None = None
    participant_user_id: str | None = None
    name: str | None = None
    user_email: str | None = None
    join_time: datetime | None = None
    leave_time: datetime | None = None
    duration: int | None = None
    status: ParticipantStatus | None = None
    customer_key: str | None = None
    registrant_id: str | None = None
    bo_mtg_id: str | None = None
    failover: bool | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_api(cls, payload: JsonMapping) -> Participant:
        failover = payload.get("failover")
        return cls(
            id=str(payload.get("id") or ""),
            user_id=_optional_str(payload.get("user_id")),
            participant_user_id=_optional_str(payload.get("participant_user_id")),
            name=_optional_str(payload.get("name")),
            user_email=_optional_str(payload.get("user_email")),
            join_time=_parse_datetime(payload.get("join_time")),
            leave_time=_parse_datetime(payload.get("leave_time")),
            duration=_optional_int(payload.get("duration")),
            status=ParticipantStatus.parse(payload.get("status")),
            customer_key=_optional_str(payload.get("customer_key")),
            registrant_id=_optional_str(payload.get("registrant_id")),
            bo_mtg_id=_optional_str(payload.get("bo_mtg_id")),
            failover=failover if isinstance(failover, bool) else None,
            raw=dict(payload),
        )

    @property
    def duration_minutes(self) -> int | None:
        if self.duration is None:
            return None
        return math.ceil(self.duration / 60)

    @property
    def duration_hours(self) -> float | None:
        if self.duration is None:
            return None
        return round(self.duration / 3600, 2)

    @property
    def is_in_meeting(self) -> bool:
        return self.leave_time is None

    @property
    def has_left(self) -> bool:
        return self.leave_time is not None

    @property
    def has_in_meeting_status(self) -> bool:
        return self.status is ParticipantStatus.IN_MEETING

    @property
    def is_in_waiting_room(self) -> bool:
        return self.status is ParticipantStatus.IN_WAITING_ROOM

    @property
    def status_name(self) -> str:
        return self.status.label if self.status is not None else "Unknown"

    @property
    def is_in_breakout_room(self) -> bool:
        return bool(self.bo_mtg_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "participant_user_id": self.participant_user_id,
            "name": self.name,
            "user_email": self.user_email,
            "join_time": _format_datetime(self.join_time),
            "leave_time": _format_datetime(self.leave_time),
            "duration": self.duration,
            "status": self.status.value if self.status is not None else None,
            "customer_key": self.customer_key,
            "registrant_id": self.registrant_id,
            "bo_mtg_id": self.bo_mtg_id,
            "failover": self.failover,
        }


@dataclass(frozen=True)
class Registrant:
    """A meeting registrant"""

    id: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    address: str | None = None
    city: str | None = None
    country: str | None = None
    zip: str | None = None
    state: str | None = None
    phone: str | None = None
    industry: str | None = None
    org: str | None = None
    job_title: str | None = None
    purchasing_time_frame: str | None = None
    role_in_purchase_process: str | None = None
    no_of_employees: int | None = None
    comments: str | None = None
    custom_questions: tuple[dict[str, Any], ...] | None = None
    status: str | None = None
    create_time: datetime | None = None
    join_url: str | None = None
    registrant_id: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_api(cls, payload: JsonMapping) -> Registrant:
        questions = payload.get("custom_questions")
        return cls(
            id=str(payload.get("id") or ""),
            email=str(payload.get("email") or ""),
            first_name=_optional_str(payload.get("first_name")),
            last_name=_optional_str(payload.get("last_name")),
            address=_optional_str(payload.get("address")),
            city=_optional_str(payload.get("city")),
            country=_optional_str(payload.get("country")),
            zip=_optional_str(payload.get("zip")),
            state=_optional_str(payload.get("state")),
            phone=_optional_str(payload.get("phone")),
            industry=_optional_str(payload.get("industry")),
            org=_optional_str(payload.get("org")),
            job_title=_optional_str(payload.get("job_title")),
            purchasing_time_frame=_optional_str(payload.get("purchasing_time_frame")),
            role_in_purchase_process=_optional_str(payload.get("role_in_purchase_process")),
            # Zoom sends this as a range string such as "1-20"; keep only exact counts
            no_of_employees=_optional_int(payload.get("no_of_employees")),
            comments=_optional_str(payload.get("comments")),
            custom_questions=(
                tuple(q for q in questions if isinstance(q, dict))
                if isinstance(questions, list)
                else None
            ),
            status=_optional_str(payload.get("status")),
            create_time=_parse_datetime(payload.get("create_time")),
            join_url=_optional_str(payload.get("join_url")),
            registrant_id=_optional_str(payload.get("registrant_id")),
            raw=dict(payload),
        )

    @property
    def full_name(self) -> str:
        return _full_name(self.first_name, self.last_name, self.email)

    @property
    def is_approved(self) -> bool:
        return self.status == "approved"

    @property
    def is_denied(self) -> bool:
        return self.status == "denied"

    @property
    def is_pending(self) -> bool:
        return self.status == "pending"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "address": self.address,
            "city": self.city,
            "country": self.country,
            "zip": self.zip,
            "state": self.state,
            "phone": self.phone,
            "industry": self.industry,
            "org": self.org,
            "job_title": self.job_title,
            "purchasing_time_frame": self.purchasing_time_frame,
            "role_in_purchase_process": self.role_in_purchase_process,
            "no_of_employees": self.no_of_employees,
            "comments": self.comments,
            "custom_questions": (
                list(self.custom_questions) if self.custom_questions is not None else None
            ),
            "status": self.status,
            "create_time": _format_datetime(self.create_time),
            "join_url": self.join_url,
            "registrant_id": self.registrant_id,
        }


_SETTING_GROUPS = (
    "schedule_meeting",
    "in_meeting",
    "email_notification",
    "recording",
    "telephony",
    "feature",
    "tsp",
    "audio_conferencing",
)


@dataclass(frozen=True)
class UserSettings:
    """Settings groups of a user; each group is the raw mapping Zoom returns"""

    schedule_meeting: dict[str, Any] | None = None
    in_meeting: dict[str, Any] | None = None
    email_notification: dict[str, Any] | None = None
    recording: dict[str, Any] | None = None
    telephony: dict[str, Any] | None = None
    feature: dict[str, Any] | None = None
    tsp: dict[str, Any] | None = None
    audio_conferencing: dict[str, Any] | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_api(cls, payload: JsonMapping) -> UserSettings:
        groups = {
            name: dict(payload[name]) if isinstance(payload.get(name), dict) else None
            for name in _SETTING_GROUPS
        }
        return cls(**groups, raw=dict(payload))

    def setting(self, path: str, default: Any = None) -> Any:
        """Look up a dotted path such as ``"recording.cloud_recording"``"""
        value: Any = self.raw
        for key in path.split("."):
            if not isinstance(value, dict) or value.get(key) is None:
                return default
            value = value[key]
        return value

    @property
    def host_video_enabled(self) -> bool | None:
        return (self.schedule_meeting or {}).get("host_video")

    @property
    def participant_video_enabled(self) -> bool | None:
        return (self.schedule_meeting or {}).get("participants_video")

    @property
    def cloud_recording_enabled(self) -> bool | None:
        return (self.recording or {}).get("cloud_recording")

    @property
    def local_recording_enabled(self) -> bool | None:
        return (self.recording or {}).get("local_recording")

    def to_dict(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in _SETTING_GROUPS}
