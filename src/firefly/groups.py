from __future__ import annotations

from typing import TYPE_CHECKING, Iterator

from .graphql import user_field
from .objects import Group

if TYPE_CHECKING:  # pragma: no cover
    from .session import Firefly

__all__ = ["Groups"]

GROUP_FIELDS = "guid, sort_key, name, personal_colour"


class Groups:
    def __init__(self, firefly: Firefly):
        firefly.ensure_authenticated()
        firefly.ensure_device_id()
        self.firefly = firefly

    def __iter__(self) -> Iterator[Group]:
        for group in user_field(self.firefly, "participating_in", GROUP_FIELDS):
            yield Group.from_dict(group)
