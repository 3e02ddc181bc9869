from __future__ import annotations

from typing import TYPE_CHECKING, Iterator

from .graphql import user_field
from .objects import Message

if TYPE_CHECKING:  # pragma: no cover
    from .session import Firefly

__all__ = ["Messages"]

MESSAGE_FIELDS = "from { guid, name }, sent, archived, id, single_to { guid, name }, all_recipients, read, body"


class Messages:
    """
    The logged in user's Firefly messages, newest first as the portal returns them.

    Example:
    -------
    >>> for message in Messages(firefly):
    >>>     print(message.sender.name, message.sent)
    Mr Smith 2024-09-02 08:45:00+00:00

    """

    def __init__(self, firefly: Firefly):
        firefly.ensure_authenticated()
        firefly.ensure_device_id()
        self.firefly = firefly

    def __iter__(self) -> Iterator[Message]:
        for message in user_field(self.firefly, "messages", MESSAGE_FIELDS):
            yield Message.from_dict(message)
