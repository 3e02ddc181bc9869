from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from datetime import datetime
from typing import Any

__all__ = [
    "User",
    "SchoolClass",
    "SessionCredentials",
    "HostDescriptor",
    "Principal",
    "Event",
    "Message",
    "Bookmark",
    "Group",
    "Task",
]


def _parse_timestamp(value: str | None) -> datetime | None:
    """Firefly sends ISO-8601 timestamps, sometimes with a trailing Z."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


@dataclass(frozen=True)
class User:
    username: str = ""
    fullname: str = ""
    email: str = ""
    role: str = ""
    guid: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> User:
        return cls(**{f.name: str(data.get(f.name) or "") for f in fields(cls)})

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class SchoolClass:
    guid: str = ""
    name: str = ""
    subject: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> SchoolClass:
        return cls(**{f.name: str(data.get(f.name) or "") for f in fields(cls)})

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass
class SessionCredentials:
    """
    Everything needed to talk to the portal on behalf of one user.

    `secret` and `user` are only ever set together, `authenticated` is derived from them.
    """

    device_id: str | None = None
    secret: str | None = None
    user: User | None = None
    classes: list[SchoolClass] = field(default_factory=list)

    @property
    def authenticated(self) -> bool:
        return bool(self.secret) and self.user is not None

    def copy(self) -> SessionCredentials:
        return replace(self, classes=list(self.classes))


@dataclass(frozen=True)
class HostDescriptor:
    host: str
    url: str
    name: str = ""
    enabled: bool = True
    ssl: bool = True
    installation_id: str = ""


@dataclass(frozen=True)
class Principal:
    guid: str = ""
    name: str = ""

    @classmethod
    def from_dict(cls, data: dict | None) -> Principal | None:
        if not data:
            return None
        return cls(guid=data.get("guid") or "", name=data.get("name") or "")


@dataclass
class Event:
    guid: str
    subject: str
    start: datetime | None
    end: datetime | None
    location: str = ""
    description: str = ""
    attendees: list[Principal] = field(default_factory=list)
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: dict) -> Event:
        attendees = [Principal.from_dict(a.get("principal")) for a in data.get("attendees") or []]
        return cls(
            guid=data.get("guid") or "",
            subject=data.get("subject") or "",
            start=_parse_timestamp(data.get("start")),
            end=_parse_timestamp(data.get("end")),
            location=data.get("location") or "",
            description=data.get("description") or "",
            attendees=[a for a in attendees if a is not None],
            raw=data,
        )


@dataclass
class Message:
    id: int | str
    body: str
    sender: Principal | None
    sent: datetime | None
    read: bool = False
    archived: bool = False
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: dict) -> Message:
        return cls(
            id=data.get("id"),
            body=data.get("body") or "",
            sender=Principal.from_dict(data.get("from")),
            sent=_parse_timestamp(data.get("sent")),
            read=bool(data.get("read")),
            archived=bool(data.get("archived")),
            raw=data,
        )


@dataclass
class Bookmark:
    guid: str
    title: str
    url: str
    type: str = ""
    position: int | None = None
    read: bool = False
    created: datetime | None = None
    sender: Principal | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: dict) -> Bookmark:
        return cls(
            guid=data.get("guid") or "",
            title=data.get("title") or "",
            url=data.get("simple_url") or "",
            type=data.get("type") or "",
            position=data.get("position"),
            read=bool(data.get("read")),
            created=_parse_timestamp(data.get("created")),
            sender=Principal.from_dict(data.get("from")),
            raw=data,
        )


@dataclass
class Group:
    guid: str
    name: str
    sort_key: str = ""
    personal_colour: str = ""
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: dict) -> Group:
        return cls(
            guid=data.get("guid") or "",
            name=data.get("name") or "",
            sort_key=data.get("sort_key") or "",
            personal_colour=data.get("personal_colour") or "",
            raw=data,
        )


@dataclass
class Task:
    id: int | str | None
    guid: str
    title: str
    set_date: datetime | None = None
    due_date: datetime | None = None
    setter: Principal | None = None
    is_done: bool = False
    archived: bool = False
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: dict) -> Task:
        return cls(
            id=data.get("id"),
            guid=data.get("guid") or "",
            title=data.get("title") or "",
            set_date=_parse_timestamp(data.get("setDate")),
            due_date=_parse_timestamp(data.get("dueDate")),
            setter=Principal.from_dict(data.get("setter")),
            is_done=bool(data.get("isDone")),
            archived=bool(data.get("archived")),
            raw=data,
        )
