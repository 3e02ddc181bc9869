from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING, Iterator

from .graphql import literal, timestamp
from .objects import Event

if TYPE_CHECKING:  # pragma: no cover
    from .session import Firefly

__all__ = ["Events"]

EVENTS_QUERY = """query Query {{
    events(start: {start}, for_guid: {guid}, end: {end}) {{
        end, location, start, subject, description, guid,
        attendees {{ role, principal {{ guid, name }} }}
    }}
}}"""


class Events:
    """
    Timetable entries of the logged in user between two moments.

    Example:
    -------
    >>> for event in Events(firefly, datetime(2024, 9, 2), datetime(2024, 9, 9)):
    >>>     print(event.subject, event.start)
    Mathematics 2024-09-02 08:45:00+00:00

    """

    def __init__(self, firefly: Firefly, start: date | datetime, end: date | datetime):
        firefly.ensure_authenticated()
        firefly.ensure_device_id()

        self.firefly = firefly
        self.start = timestamp(start)
        self.end = timestamp(end)
        if self.start > self.end:
            raise ValueError("start must not be after end")

    def __iter__(self) -> Iterator[Event]:
        query = EVENTS_QUERY.format(start=literal(self.start), end=literal(self.end), guid=literal(self.firefly.user.guid))
        for event in self.firefly.graphql(query).get("events") or []:
            yield Event.from_dict(event)
