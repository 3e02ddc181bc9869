from __future__ import annotations

import json
from datetime import date, datetime, time, timezone
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .session import Firefly

__all__ = ["literal", "timestamp", "user_field"]

USER_QUERY = """query Query {{
    users(guid: {guid}) {{
        {field} {{ {selection} }}
    }}
}}"""


def literal(value: str) -> str:
    """Quote a value for use inside a GraphQL query."""
    return json.dumps(str(value))


def timestamp(value: date | datetime) -> str:
    """UTC ISO-8601 with milliseconds, the form the portal itself sends."""
    if not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def user_field(firefly: Firefly, field: str, selection: str) -> list[dict]:
    """Fetch one list-valued field of the logged in user, e.g. their messages."""
    query = USER_QUERY.format(guid=literal(firefly.user.guid), field=field, selection=selection)
    users = firefly.graphql(query).get("users") or []
    if not users:
        return []
    return users[0].get(field) or []
