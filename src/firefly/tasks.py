from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator

from .objects import Task

if TYPE_CHECKING:  # pragma: no cover
    from .session import Firefly

__all__ = ["Tasks"]

logger = logging.getLogger(__name__)

TASKS_PATH = "/api/v2/taskListing/view/student/tasks/all/filterBy"
TASKS_PER_PAGE = 100


class Tasks:
    """
    Tasks set for the logged in student that are still to do.

    The portal returns the whole listing in one reply, no paging is done here.

    Example:
    -------
    >>> for task in Tasks(firefly):
    >>>     print(task.title, task.due_date)
    Algebra worksheet 2024-09-09 00:00:00+00:00

    """

    def __init__(self, firefly: Firefly):
        firefly.ensure_authenticated()
        firefly.ensure_device_id()
        self.firefly = firefly

    @property
    def filter(self) -> dict:
        return {
            "ownerType": "OnlySetters",
            "page": 0,
            "pageSize": TASKS_PER_PAGE,
            "archiveStatus": "All",
            "completionStatus": "Todo",
            "readStatus": "All",
            "markingStatus": "All",
            "sortingCriteria": [{"column": "DueDate", "order": "Descending"}],
        }

    def __iter__(self) -> Iterator[Task]:
        result = self.firefly.json(TASKS_PATH, method="post", json=self.filter)
        items = result.get("items") if isinstance(result, dict) else None
        if items is None:
            logger.debug("Task listing reply has no items")
            return
        for task in items:
            yield Task.from_dict(task)
