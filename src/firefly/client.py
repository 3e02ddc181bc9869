from __future__ import annotations

import logging
from datetime import date, datetime
from typing import TYPE_CHECKING

from .bookmarks import Bookmarks
from .events import Events
from .groups import Groups
from .messages import Messages
from .tasks import Tasks

if TYPE_CHECKING:  # pragma: no cover
    from .objects import Bookmark, Event, Group, Message, SchoolClass, Task
    from .session import Firefly

__all__ = ["PortalClient"]

logger = logging.getLogger(__name__)


class PortalClient:
    """
    Resource calls on top of an authenticated `Firefly` session.

    Every call checks authentication, then the device id, before any request is sent.
    Transport errors from `requests` reach the caller unchanged.

    Example:
    -------
    >>> client = PortalClient(firefly)
    >>> for task in client.get_tasks():
    >>>     print(task.title)

    """

    def __init__(self, firefly: Firefly):
        self.firefly = firefly

    def _ready(self) -> None:
        self.firefly.ensure_authenticated()
        self.firefly.ensure_device_id()

    def get_events(self, start: date | datetime, end: date | datetime) -> list[Event]:
        events = list(Events(self.firefly, start, end))
        logger.debug(f"Fetched {len(events)} events")
        return events

    @property
    def messages(self) -> list[Message]:
        return list(Messages(self.firefly))

    @property
    def bookmarks(self) -> list[Bookmark]:
        return list(Bookmarks(self.firefly))

    @property
    def groups(self) -> list[Group]:
        return list(Groups(self.firefly))

    @property
    def classes(self) -> list[SchoolClass]:
        self._ready()
        return self.firefly.classes

    def get_tasks(self) -> list[Task]:
        tasks = list(Tasks(self.firefly))
        logger.debug(f"Fetched {len(tasks)} tasks")
        return tasks

    def verify_credentials(self) -> bool:
        return self.firefly.verify_credentials()

    @property
    def api_version(self) -> str:
        return self.firefly.api_version
